"""PokeArena - a turn-based creature battle engine."""

__version__ = "0.1.0"
