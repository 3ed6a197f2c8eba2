"""
Pytest fixtures for Morris tests.
"""

import pytest

from ..config import MatchSettings
from ..engine_core.state import BoardState, StoneColor, Phase


@pytest.fixture
def empty_board() -> BoardState:
    """Fresh board, white to place the first stone."""
    return BoardState()


@pytest.fixture
def moving_board() -> BoardState:
    """
    Mid-game board in the moving phase, white to move.

    White can shuttle 0 <-> 1 and black 6 <-> 7 without closing a mill.
    """
    return BoardState.from_snapshot(
        black={6, 8, 16, 19},
        white={0, 2, 22, 10},
        current_player=StoneColor.WHITE,
        turn=18,
        phase=Phase.MOVING,
    )


@pytest.fixture
def winning_board() -> BoardState:
    """
    White to move; sliding 14 -> 2 closes 0-1-2 while black has
    only three stones left.
    """
    return BoardState.from_snapshot(
        black={6, 7, 16},
        white={0, 1, 14, 22, 12},
        current_player=StoneColor.WHITE,
        turn=30,
        phase=Phase.MOVING,
    )


@pytest.fixture
def blocked_board() -> BoardState:
    """Black to move with all four stones on corners hemmed in by white."""
    return BoardState.from_snapshot(
        black={0, 2, 21, 23},
        white={1, 9, 14, 22, 5},
        current_player=StoneColor.BLACK,
        turn=40,
        phase=Phase.MOVING,
    )


@pytest.fixture
def flying_board() -> BoardState:
    """Black to move with three stones, so black may fly."""
    return BoardState.from_snapshot(
        black={0, 5, 16},
        white={3, 4, 10, 20},
        current_player=StoneColor.BLACK,
        turn=25,
        phase=Phase.MOVING,
    )


@pytest.fixture
def settings() -> MatchSettings:
    """Settings with a short decision time and a shallow search."""
    return MatchSettings(decision_time_ms=50, search_depth=2)
