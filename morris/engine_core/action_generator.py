"""
Move Generator - Generates all legal moves from a board state.

The move generator is used by:
1. Bots to enumerate possible moves
2. The match controller to validate human input
3. The CLI to list available moves

Design: Generates Move objects, not just positions.
Every generated move is accepted by BoardState.perform_move.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .state import Phase
from .action import Move
from .topology import NUM_POSITIONS, NEIGHBORS

if TYPE_CHECKING:
    from .state import BoardState


@dataclass
class MoveGenerator:
    """
    Generates legal moves for the side to move.

    Stateless; the board holds everything needed.
    """

    def generate(self, state: BoardState) -> list[Move]:
        """
        Generate all legal moves for the current player.

        Returns an empty list once the game is decided.
        """
        if state.get_winner() is not None:
            return []

        if state.phase == Phase.PLACING:
            return self._generate_place_moves(state)
        if state.phase == Phase.MOVING:
            return self._generate_slide_moves(state)
        return self._generate_remove_moves(state)

    def _generate_place_moves(self, state: BoardState) -> list[Move]:
        """One placement per empty position."""
        return [Move.place(pos) for pos in range(NUM_POSITIONS) if not state.is_occupied(pos)]

    def _generate_slide_moves(self, state: BoardState) -> list[Move]:
        """Slides to empty neighbors, or flights anywhere with 3 stones left."""
        player = state.current_player
        flying = state.can_fly(player)
        empty = state.empty_positions()

        moves = []
        for pos in range(NUM_POSITIONS):
            if pos not in state.occupancy[player]:
                continue
            targets = empty if flying else [n for n in NEIGHBORS[pos] if not state.is_occupied(n)]
            for target in targets:
                moves.append(Move.slide(pos, target))
        return moves

    def _generate_remove_moves(self, state: BoardState) -> list[Move]:
        """One removal per opponent stone outside closed mills."""
        opponent = state.occupancy[state.current_player.opponent]
        return [
            Move.remove(pos)
            for pos in range(NUM_POSITIONS)
            if pos in opponent and not state.check_mill(pos)
        ]


_GENERATOR = MoveGenerator()


def legal_moves(state: BoardState) -> list[Move]:
    """Convenience function to get legal moves."""
    return _GENERATOR.generate(state)


def is_legal(state: BoardState, move: Move) -> bool:
    """Check if a specific move is legal."""
    return move in legal_moves(state)
