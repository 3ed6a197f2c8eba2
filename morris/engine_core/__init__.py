"""
Engine Core - Board topology, rules state machine and move generation.

The engine is the runtime that:
1. Holds the fixed 24-position board topology
2. Manages BoardState (occupancy, player, turn, phase)
3. Generates legal moves
4. Applies and reverts moves in place
"""

from .state import BoardState, StoneColor, Phase
from .action import Move, MoveType, MoveResult, parse_move
from .action_generator import MoveGenerator, legal_moves, is_legal
from .topology import NEIGHBORS, MILL_LINES, neighbors

__all__ = [
    "BoardState",
    "StoneColor",
    "Phase",
    "Move",
    "MoveType",
    "MoveResult",
    "parse_move",
    "MoveGenerator",
    "legal_moves",
    "is_legal",
    "NEIGHBORS",
    "MILL_LINES",
    "neighbors",
]
