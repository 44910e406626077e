"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from alpha_chess.core import Position

EMPTY_BOARD = "8/8/8/8/8/8/8/8"


@pytest.fixture
def start_position() -> Position:
    """Fresh standard starting position."""
    return Position()


@pytest.fixture
def make_position():
    """Factory building a position from a placement field and optional fields."""

    def _make(placement: str = EMPTY_BOARD, rest: str = "w - - 0 1") -> Position:
        return Position(f"{placement} {rest}")

    return _make
