"""alpha-chess: FEN-backed chess position engine."""

__version__ = "0.1.0"
