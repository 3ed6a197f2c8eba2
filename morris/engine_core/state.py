"""
Board State - The rules engine for nine men's morris.

Design principles:
- Value type: per-color occupancy sets plus three scalars
- Mutated in place: perform_move / undo_move are exact inverses,
  so a search can walk one shared board instead of cloning per node
- Defensive: malformed moves are rejected without touching the state

Phase machine:
- PLACING for turns 0..17 (9 stones each, White first)
- MOVING afterwards; a color with 3 stones or fewer may fly
- REMOVING is entered right after a move closes a mill; no turn
  increment or player switch happens until the stone is taken
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING
import logging

from .topology import NUM_POSITIONS, LEFT, RIGHT, TOP, BOTTOM, NEIGHBORS

if TYPE_CHECKING:
    from .action import Move


logger = logging.getLogger(__name__)

STONES_PER_PLAYER = 9
# Turn index at which the last stone is placed; later turns are moves.
LAST_PLACING_TURN = 17
FLYING_THRESHOLD = 3


class StoneColor(IntEnum):
    """The two player colors. Values index BoardState.occupancy."""
    BLACK = 0
    WHITE = 1

    @property
    def opponent(self) -> StoneColor:
        return StoneColor(1 - self)

    @property
    def hash_code(self) -> int:
        """Base-3 digit used by the state hash (0 is an empty position)."""
        return 1 if self == StoneColor.BLACK else 2


class Phase(Enum):
    """Move phases. REMOVING interrupts PLACING or MOVING."""
    PLACING = "placing"
    MOVING = "moving"
    REMOVING = "removing"


@dataclass
class BoardState:
    """
    Complete rules state at a point in time.

    occupancy[color] holds the positions of that color's stones;
    the two sets are always disjoint.
    """
    occupancy: tuple[set[int], set[int]] = field(default_factory=lambda: (set(), set()))
    current_player: StoneColor = StoneColor.WHITE
    turn: int = 0
    phase: Phase = Phase.PLACING

    @classmethod
    def from_snapshot(
        cls,
        black: set[int] | list[int],
        white: set[int] | list[int],
        current_player: StoneColor,
        turn: int,
        phase: Phase,
    ) -> BoardState:
        """Build a state from live board information."""
        black_set, white_set = set(black), set(white)
        if black_set & white_set:
            raise ValueError(f"Positions occupied twice: {sorted(black_set & white_set)}")
        return cls(
            occupancy=(black_set, white_set),
            current_player=StoneColor(current_player),
            turn=turn,
            phase=phase,
        )

    def clone(self) -> BoardState:
        """Copy the state (occupancy sets are copied, not shared)."""
        return BoardState(
            occupancy=(set(self.occupancy[0]), set(self.occupancy[1])),
            current_player=self.current_player,
            turn=self.turn,
            phase=self.phase,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_occupied(self, pos: int) -> bool:
        return pos in self.occupancy[0] or pos in self.occupancy[1]

    def owner(self, pos: int) -> StoneColor | None:
        """Get the color on a position, None if empty."""
        if pos in self.occupancy[StoneColor.BLACK]:
            return StoneColor.BLACK
        if pos in self.occupancy[StoneColor.WHITE]:
            return StoneColor.WHITE
        return None

    def stone_count(self, color: StoneColor) -> int:
        return len(self.occupancy[color])

    def can_fly(self, color: StoneColor) -> bool:
        return len(self.occupancy[color]) <= FLYING_THRESHOLD

    def empty_positions(self) -> list[int]:
        return [pos for pos in range(NUM_POSITIONS) if not self.is_occupied(pos)]

    def check_mill_horizontal(self, pos: int) -> bool:
        """Check if the stone on pos is part of a closed horizontal mill."""
        return self._check_line(pos, LEFT, RIGHT)

    def check_mill_vertical(self, pos: int) -> bool:
        """Check if the stone on pos is part of a closed vertical mill."""
        return self._check_line(pos, TOP, BOTTOM)

    def check_mill(self, pos: int) -> bool:
        return self.check_mill_horizontal(pos) or self.check_mill_vertical(pos)

    def _check_line(self, pos: int, before: tuple, after: tuple) -> bool:
        color = self.owner(pos)
        if color is None:
            return False
        own = self.occupancy[color]
        prev, nxt = before[pos], after[pos]
        if prev is not None and nxt is not None:
            # pos in the middle of the line
            return prev in own and nxt in own
        if prev is not None and before[prev] is not None:
            # pos at the end
            return prev in own and before[prev] in own
        if nxt is not None and after[nxt] is not None:
            # pos at the start
            return nxt in own and after[nxt] in own
        return False

    def has_removable_stone(self, color: StoneColor) -> bool:
        """Check if color has a stone outside every closed mill."""
        return any(not self.check_mill(pos) for pos in self.occupancy[color])

    def has_free_slide(self, color: StoneColor) -> bool:
        """Check if any stone of color has an empty neighbor."""
        return any(
            not self.is_occupied(n)
            for pos in self.occupancy[color]
            for n in NEIGHBORS[pos]
        )

    def get_winner(self) -> StoneColor | None:
        """
        Get the winner of the position, if decided.

        - A mill closed while moving, opponent down to 3 stones
          (or fewer): the mover wins.
        - The side to move cannot slide any stone and cannot fly:
          the opponent wins.
        """
        opponent = self.current_player.opponent
        if (
            self.phase == Phase.REMOVING
            and self.turn > LAST_PLACING_TURN
            and self.stone_count(opponent) <= FLYING_THRESHOLD
        ):
            return self.current_player

        if self.phase == Phase.MOVING:
            if self.can_fly(self.current_player):
                return None
            if self.has_free_slide(self.current_player):
                return None
            return opponent

        return None

    def get_possible_moves(self) -> list[Move]:
        """Get all legal moves for the side to move."""
        from .action_generator import legal_moves
        return legal_moves(self)

    def get_rating(self, for_color: StoneColor) -> float:
        """Heuristic value of the position from for_color's perspective."""
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.rate(self, for_color)

    # Feature counters of the heuristic, by color

    def number_of_two_piece_confs(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_two_piece_confs(self, color)

    def number_of_three_piece_confs(self, color: StoneColor) -> float:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_three_piece_confs(self, color)

    def number_of_mills(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_mills(self, color)

    def number_of_open_mills(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_open_mills(self, color)

    def number_of_double_mills(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_double_mills(self, color)

    def number_of_open_double_mills(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_open_double_mills(self, color)

    def number_of_blocked_stones(self, color: StoneColor) -> int:
        from ..bots.evaluator import DEFAULT_EVALUATOR
        return DEFAULT_EVALUATOR.number_of_blocked_stones(self, color)

    def current_state_to_number(self) -> int:
        """
        Encode the stone placement as an integer.

        Position p contributes 3**p times 0 (empty), 1 (black) or
        2 (white), so distinct placements give distinct numbers.
        """
        total = 0
        for color in StoneColor:
            code = color.hash_code
            for pos in self.occupancy[color]:
                total += code * 3 ** pos
        return total

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def perform_move(self, move: Move) -> bool:
        """
        Apply a move and advance the turn.

        Returns False, leaving the state untouched, if the move does not
        fit the current phase or position, or the game is already decided.
        """
        if move.phase != self.phase:
            logger.debug("Move %s does not fit phase %s", move, self.phase.value)
            return False
        if self.get_winner() is not None:
            logger.debug("Game already decided, rejecting %s", move)
            return False

        own = self.occupancy[self.current_player]
        opponent = self.occupancy[self.current_player.opponent]

        if self.phase == Phase.PLACING:
            if move.from_pos is not None or not self._is_free(move.to_pos):
                logger.debug("Malformed place move %s", move)
                return False
            own.add(move.to_pos)
            self._advance_turn(move.to_pos)
            return True

        if self.phase == Phase.MOVING:
            if (
                move.from_pos not in own
                or not self._is_free(move.to_pos)
                or not (self.can_fly(self.current_player) or move.to_pos in NEIGHBORS[move.from_pos])
            ):
                logger.debug("Malformed slide move %s", move)
                return False
            own.discard(move.from_pos)
            own.add(move.to_pos)
            self._advance_turn(move.to_pos)
            return True

        # REMOVING
        if move.to_pos is not None or move.from_pos not in opponent or self.check_mill(move.from_pos):
            logger.debug("Malformed remove move %s", move)
            return False
        opponent.discard(move.from_pos)
        self._advance_turn(move.from_pos)
        return True

    def undo_move(self, move: Move) -> bool:
        """
        Revert a move previously applied with perform_move.

        The last mover is the side to move while REMOVING (no switch
        happened yet), otherwise the opponent of the side to move.
        """
        removing = self.phase == Phase.REMOVING
        last_player = self.current_player if removing else self.current_player.opponent
        own = self.occupancy[last_player]

        if move.phase == Phase.PLACING:
            if move.from_pos is not None or move.to_pos not in own:
                logger.debug("Cannot undo place move %s", move)
                return False
            own.discard(move.to_pos)
        elif move.phase == Phase.MOVING:
            if move.to_pos not in own or not self._is_free(move.from_pos):
                logger.debug("Cannot undo slide move %s", move)
                return False
            own.discard(move.to_pos)
            own.add(move.from_pos)
        else:
            if move.to_pos is not None or not self._is_free(move.from_pos):
                logger.debug("Cannot undo remove move %s", move)
                return False
            self.occupancy[last_player.opponent].add(move.from_pos)

        # Entering REMOVING did not count a turn, so leaving it back does not either.
        if not removing:
            self.turn -= 1
        self.current_player = last_player
        self.phase = move.phase
        return True

    def _is_free(self, pos: int | None) -> bool:
        return pos is not None and 0 <= pos < NUM_POSITIONS and not self.is_occupied(pos)

    def _advance_turn(self, pos: int) -> None:
        opponent = self.current_player.opponent
        if self.phase != Phase.REMOVING and self.check_mill(pos) and (
            self.has_removable_stone(opponent)
            or (self.turn > LAST_PLACING_TURN and self.stone_count(opponent) <= FLYING_THRESHOLD)
        ):
            self.phase = Phase.REMOVING
            return

        self.phase = Phase.PLACING if self.turn < LAST_PLACING_TURN else Phase.MOVING
        self.turn += 1
        self.current_player = opponent
