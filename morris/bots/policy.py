"""
Bot Policy - Interface for computer opponents.

A BotPolicy takes a board snapshot and returns a decision.
Decisions include:
- Which move to make
- Explanation (for logging and the CLI)
- Search statistics where applicable
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping
import random

if TYPE_CHECKING:
    from ..engine_core.state import BoardState, StoneColor
    from ..engine_core.action import Move, MoveResult
    from ..session.game_loop import GameLoop


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    The move was generated for the phase of the snapshot the bot saw;
    the match controller drops it if the live phase has moved on.
    """
    move: Move
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_moves: int = 0
    best_score: float = 0.0
    elapsed_ms: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects moves.
    Implementations range from random play to alpha-beta search.
    """

    color: StoneColor

    @abstractmethod
    def select_move(
        self,
        state: BoardState,
        draw_table: Mapping[int, int] | None = None,
    ) -> BotDecision:
        """
        Select a move for the side to move.

        Args:
            state: Snapshot of the live board; policies must not keep it
            draw_table: Occurrence counts of past positions, keyed by
                state hash (read-only)

        Returns:
            BotDecision with the selected move
        """
        pass

    def make_move(self, loop: GameLoop) -> MoveResult:
        """
        Decide on the live match and apply the move through it.

        The bot only sees a snapshot; the move goes through the same
        path as human input.
        """
        state = loop.snapshot()
        if state.current_player != self.color:
            raise ValueError(f"Not {self.color.name}'s turn")
        decision = self.select_move(state, loop.draw_table)
        return loop.apply_decision(decision)

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Used for:
    - The weakest difficulty
    - Testing
    - Baseline comparison
    """

    def __init__(self, color: StoneColor, seed: int | None = None, rng: random.Random | None = None):
        self.color = color
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        state: BoardState,
        draw_table: Mapping[int, int] | None = None,
    ) -> BotDecision:
        moves = state.get_possible_moves()
        if not moves:
            raise ValueError("No legal moves available")

        move = self.rng.choice(moves)
        return BotDecision(
            move=move,
            explanation="Selected randomly",
            confidence=1.0 / len(moves),
            evaluated_moves=len(moves),
        )
