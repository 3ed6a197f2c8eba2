"""
Move System - Moves and move results.

A move is interpreted only relative to the phase it was generated in:
- PLACING: put a new stone on an empty position (to_pos)
- MOVING: slide or fly an own stone (from_pos -> to_pos)
- REMOVING: take an opponent stone off the board (from_pos)

Moves are plain values; they never reference the board they came from.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Phase


class MoveType(Enum):
    """Kinds of moves, one per phase."""
    PLACE = "place"
    SLIDE = "slide"
    REMOVE = "remove"


@dataclass(frozen=True)
class Move:
    """
    A complete move as produced by move generation.

    Use the factories rather than the constructor so the
    from/to fields always match the phase.
    """
    phase: Phase
    from_pos: int | None = None
    to_pos: int | None = None

    @classmethod
    def place(cls, to_pos: int) -> Move:
        """Factory for placing a stone."""
        return cls(phase=Phase.PLACING, to_pos=to_pos)

    @classmethod
    def slide(cls, from_pos: int, to_pos: int) -> Move:
        """Factory for sliding (or flying) a stone."""
        return cls(phase=Phase.MOVING, from_pos=from_pos, to_pos=to_pos)

    @classmethod
    def remove(cls, from_pos: int) -> Move:
        """Factory for removing an opponent stone."""
        return cls(phase=Phase.REMOVING, from_pos=from_pos)

    @property
    def kind(self) -> MoveType:
        return {
            Phase.PLACING: MoveType.PLACE,
            Phase.MOVING: MoveType.SLIDE,
            Phase.REMOVING: MoveType.REMOVE,
        }[self.phase]

    def __str__(self) -> str:
        if self.phase == Phase.PLACING:
            return f"{self.to_pos}"
        if self.phase == Phase.MOVING:
            return f"{self.from_pos}-{self.to_pos}"
        return f"x{self.from_pos}"


@dataclass
class MoveResult:
    """
    Result of applying a move through the match controller.

    Contains:
    - Whether the move was performed
    - Errors (if failed)
    - Human-readable changes (for the host UI)
    """
    success: bool
    move: Move | None = None
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, move: Move | None = None) -> MoveResult:
        """Create a failure result."""
        return cls(success=False, move=move, error=error, error_code=error_code)

    @classmethod
    def ok(cls, move: Move, changes: list[str] | None = None) -> MoveResult:
        """Create a success result."""
        return cls(success=True, move=move, state_changes=changes or [])


def parse_move(text: str, phase: Phase) -> Move:
    """
    Parse a move typed by a human player.

    Formats: "12" (place), "12-13" (slide), "x12" (remove).
    Raises ValueError on malformed input or a format that
    does not fit the phase.
    """
    text = text.strip().lower()
    if phase == Phase.REMOVING:
        if not text.startswith("x"):
            raise ValueError("Remove a stone with x<position>, e.g. x12")
        return Move.remove(_parse_position(text[1:]))
    if phase == Phase.MOVING:
        parts = text.split("-")
        if len(parts) != 2:
            raise ValueError("Move a stone with <from>-<to>, e.g. 12-13")
        return Move.slide(_parse_position(parts[0]), _parse_position(parts[1]))
    return Move.place(_parse_position(text))


def _parse_position(text: str) -> int:
    try:
        pos = int(text)
    except ValueError:
        raise ValueError(f"Not a position: {text!r}") from None
    if not 0 <= pos < 24:
        raise ValueError(f"Position out of range: {pos}")
    return pos
