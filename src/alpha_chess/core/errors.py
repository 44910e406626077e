"""Errors raised while decoding FEN text into a position."""

from __future__ import annotations


class FenError(ValueError):
    """Base class for FEN decode failures."""


class MalformedFen(FenError):
    """The FEN text is not well formed (field count, characters, rank widths)."""


class OutOfCapacity(FenError):
    """A piece kind appears more often than its side has slots for."""
