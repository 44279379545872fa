"""FastAPI server for Starlane.

Provides the HTTP API the browser client plays a board through.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..engine.combat import CombatActionError
from ..engine.placement import PlacementError
from ..engine.session import GameStateError
from .schemas.requests import AttackRequest, CreateGameRequest, MoveRequest
from .schemas.responses import (
    CombatActionResponse,
    CreateGameResponse,
    GameStateResponse,
    MoveResponse,
    RollResponse,
)
from .session import GameSessionManager, ManagedGame, serialize_attack, serialize_path

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Starlane server starting...")
    yield
    logger.info("Starlane server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Starlane API",
    description="Web API for playing Starlane hex boards",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_game(game_id: str) -> ManagedGame:
    game = sessions.get(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def _action_error(game_id: str, error: Exception) -> HTTPException:
    """Map a refused action to an HTTP error (409 wrong state, 400 bad input)."""
    logger.warning(f"Game {game_id}: action refused: {error}")
    if isinstance(error, (GameStateError, CombatActionError)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Starlane",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new board.

    Args:
        request: Game creation parameters

    Returns:
        Game ID, seed and initial state

    Example:
        POST /api/games
        {"size": "small", "difficulty": 5, "seed": 42}
    """
    try:
        game = await sessions.create_session(
            size=request.size, difficulty=request.difficulty, seed=request.seed
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PlacementError as e:
        logger.error(f"Failed to create game: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create game: {str(e)}")

    return CreateGameResponse(gameId=game.id, seed=game.seed, state=game.get_state())


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state.

    Example:
        GET /api/games/game-abc123/state
    """
    game = _get_game(game_id)
    return GameStateResponse(
        gameId=game_id, phase=game.session.phase.value, state=game.get_state()
    )


@app.post("/api/games/{game_id}/roll", response_model=RollResponse)
async def roll_dice(game_id: str):
    """Roll the movement die.

    A trapped player loses instead; diceValue is then null.
    """
    game = _get_game(game_id)
    try:
        value = game.session.roll_dice()
    except GameStateError as e:
        raise _action_error(game_id, e)

    return RollResponse(
        gameId=game_id, diceValue=value, phase=game.session.phase.value, state=game.get_state()
    )


@app.post("/api/games/{game_id}/move", response_model=MoveResponse)
async def move(game_id: str, request: MoveRequest):
    """Move in a direction for the current roll.

    Example:
        POST /api/games/game-abc123/move
        {"direction": 2}
    """
    game = _get_game(game_id)
    try:
        result = game.session.move(request.direction)
    except (GameStateError, ValueError) as e:
        raise _action_error(game_id, e)

    logger.info(f"Game {game_id}: moved {len(result.path)} steps, phase {game.session.phase.value}")
    return MoveResponse(
        gameId=game_id,
        path=serialize_path(result),
        phase=game.session.phase.value,
        state=game.get_state(),
    )


@app.post("/api/games/{game_id}/combat/attack", response_model=CombatActionResponse)
async def combat_attack(game_id: str, request: AttackRequest):
    """Fire at an enemy component.

    Example:
        POST /api/games/game-abc123/combat/attack
        {"target": "Bridge"}
    """
    game = _get_game(game_id)
    try:
        attack = game.session.combat_attack(request.target)
    except (GameStateError, CombatActionError) as e:
        raise _action_error(game_id, e)
    return _combat_response(game, attack)


@app.post("/api/games/{game_id}/combat/enemy-turn", response_model=CombatActionResponse)
async def combat_enemy_turn(game_id: str):
    """Resolve the enemy's attack."""
    game = _get_game(game_id)
    try:
        attack = game.session.combat_enemy_turn()
    except (GameStateError, CombatActionError) as e:
        raise _action_error(game_id, e)
    return _combat_response(game, attack)


@app.post("/api/games/{game_id}/combat/escape", response_model=CombatActionResponse)
async def combat_escape(game_id: str):
    """Disengage and return to where the move started."""
    game = _get_game(game_id)
    try:
        attack = game.session.combat_escape()
    except (GameStateError, CombatActionError) as e:
        raise _action_error(game_id, e)
    return _combat_response(game, attack)


def _combat_response(game: ManagedGame, attack) -> CombatActionResponse:
    return CombatActionResponse(
        gameId=game.id,
        attack=serialize_attack(attack),
        phase=game.session.phase.value,
        state=game.get_state(),
    )


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session.

    Args:
        game_id: Game session ID

    Returns:
        Success status
    """
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
