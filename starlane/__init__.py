"""Starlane: a hex-lattice voyage board game engine."""

__version__ = "1.0.0"
