"""
Game Loop - The match controller.

The loop owns the live board and:
1. Accepts moves from humans (place / slide / remove primitives)
2. Asks bots for moves on computer turns and applies them the same way
3. Tracks closed mills and repeated positions for draw detection
4. Decides when the match is over

Usage:
    loop = GameLoop(players={StoneColor.BLACK: AlphaBetaBot(StoneColor.BLACK)})

    result = loop.place_on_field(4)      # human (white) move
    turn = loop.run_computer_turns()     # black answers
    print(turn.computer_moves, loop.outcome)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable
import logging
import time

from ..config import MatchSettings
from ..engine_core.state import BoardState, StoneColor, Phase
from ..engine_core.action import Move, MoveResult

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy, BotDecision


logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN = "waiting_human"
    RUNNING_COMPUTER = "running_computer"
    GAME_OVER = "game_over"


@dataclass
class MatchOutcome:
    """How a match ended. winner is None for draws."""
    winner: StoneColor | None
    reason: str

    @property
    def is_draw(self) -> bool:
        return self.winner is None


@dataclass
class TurnResult:
    """
    Result of running computer turns.

    Contains the moves played and why the run stopped.
    """
    success: bool
    loop_state: LoopState

    # Computer moves taken, e.g. "WHITE: 12-13"
    computer_moves: list[str] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)

    outcome: MatchOutcome | None = None


class GameLoop:
    """
    The match driver.

    Bots never touch the live board: they get a snapshot and the
    draw table, and their decision comes back through apply_decision.
    """

    def __init__(
        self,
        settings: MatchSettings | None = None,
        players: dict[StoneColor, BotPolicy | None] | None = None,
        board: BoardState | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or MatchSettings()
        self.players: dict[StoneColor, BotPolicy | None] = dict(players or {})
        self.board = board or BoardState()
        self.sleep = sleep

        # Position hash -> number of times it occurred after a completed turn
        self.draw_table: dict[int, int] = {}
        # Turns are counted from the board handed in, fresh or mid-game.
        self.last_mill_turn = self.board.turn - 1
        self.history: list[Move] = []
        self.outcome: MatchOutcome | None = None
        self.state = LoopState.WAITING_HUMAN

        # A board handed in mid-game may already be decided.
        self._check_decided([])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> BoardState:
        """Copy of the live board for bots and renderers."""
        return self.board.clone()

    def is_over(self) -> bool:
        return self.outcome is not None

    def is_computer_turn(self) -> bool:
        return not self.is_over() and self.players.get(self.board.current_player) is not None

    def legal_moves(self) -> list[Move]:
        if self.is_over():
            return []
        return self.board.get_possible_moves()

    # ------------------------------------------------------------------
    # Move application
    # ------------------------------------------------------------------

    def place_on_field(self, pos: int) -> MoveResult:
        """Place a new stone of the side to move."""
        return self.apply_move(Move.place(pos))

    def slide_to_field(self, from_pos: int, to_pos: int) -> MoveResult:
        """Move a stone of the side to move (slide, or fly with 3 stones)."""
        return self.apply_move(Move.slide(from_pos, to_pos))

    def remove_from_field(self, pos: int) -> MoveResult:
        """Remove an opponent stone after closing a mill."""
        return self.apply_move(Move.remove(pos))

    def apply_move(self, move: Move) -> MoveResult:
        """
        Apply a move to the live board.

        Returns a failure result, leaving the board untouched, when the
        match is over or the move is not legal here.
        """
        if self.outcome is not None:
            return MoveResult.failure("Match is over - no moves allowed", error_code="GAME_OVER", move=move)

        mover = self.board.current_player
        turn_before = self.board.turn
        if not self.board.perform_move(move):
            return MoveResult.failure(
                f"Move {move} is not legal in phase {self.board.phase.value}",
                error_code="INVALID_MOVE",
                move=move,
            )

        self.history.append(move)
        changes = [f"{mover.name}: {move}"]
        if move.phase != Phase.REMOVING and self.board.check_mill(move.to_pos):
            self.last_mill_turn = turn_before
            changes.append(f"{mover.name} closed a mill")

        self._after_move(move, turn_before, changes)
        return MoveResult.ok(move, changes)

    def apply_decision(self, decision: BotDecision) -> MoveResult:
        """
        Apply a bot decision, pacing it to the decision time if enabled.

        A decision made for another phase than the live one is stale and
        is dropped; no move is performed.
        """
        if decision.move.phase != self.board.phase:
            logger.error(
                "Phase %s of decided move does not fit live phase %s, dropping it",
                decision.move.phase.value, self.board.phase.value,
            )
            return MoveResult.failure(
                "Decision is stale", error_code="STALE_DECISION", move=decision.move
            )

        if self.settings.pace_moves:
            remaining_ms = self.settings.decision_time_ms - decision.elapsed_ms
            if remaining_ms > 10:
                self.sleep(remaining_ms / 1000)

        move = decision.move
        if move.phase == Phase.PLACING:
            return self.place_on_field(move.to_pos)
        if move.phase == Phase.MOVING:
            return self.slide_to_field(move.from_pos, move.to_pos)
        return self.remove_from_field(move.from_pos)

    def run_computer_turns(self, max_moves: int = 500) -> TurnResult:
        """
        Let bots move until a human is to move or the match ends.
        """
        moves: list[str] = []
        errors: list[str] = []

        while self.is_computer_turn() and len(moves) < max_moves:
            self.state = LoopState.RUNNING_COMPUTER
            color = self.board.current_player
            bot = self.players[color]

            result = bot.make_move(self)
            if not result.success:
                # Shouldn't happen with moves from a fresh snapshot
                errors.append(result.error or "Bot move failed")
                break
            moves.append(f"{color.name}: {result.move}")

        self.state = LoopState.GAME_OVER if self.is_over() else LoopState.WAITING_HUMAN
        return TurnResult(
            success=not errors,
            loop_state=self.state,
            computer_moves=moves,
            errors=errors,
            outcome=self.outcome,
        )

    # ------------------------------------------------------------------
    # Match end detection
    # ------------------------------------------------------------------

    def _check_decided(self, changes: list[str]) -> bool:
        """Finish the match if the board is won or the side to move is stuck."""
        board = self.board

        winner = board.get_winner()
        if winner is not None:
            reason = "mill against three stones" if board.phase == Phase.REMOVING else "opponent is blocked"
            self._finish(MatchOutcome(winner=winner, reason=reason), changes)
            return True

        if board.phase != Phase.REMOVING and not board.get_possible_moves():
            self._finish(MatchOutcome(winner=board.current_player.opponent, reason="no legal moves"), changes)
            return True
        return False

    def _after_move(self, move: Move, turn_before: int, changes: list[str]) -> None:
        """
        Detect the end of the match after a move.

        Positions reached by a removal are not entered into the draw
        table; only placing and moving turns count towards repetition.
        """
        board = self.board

        if self._check_decided(changes):
            return

        if board.phase == Phase.REMOVING:
            # Turn continues with the removal.
            return

        if turn_before - self.last_mill_turn >= self.settings.draw_turns_without_mill:
            self._finish(MatchOutcome(winner=None, reason="no mill for too long"), changes)
            return

        if move.phase == Phase.REMOVING:
            return

        key = board.current_state_to_number()
        self.draw_table[key] = self.draw_table.get(key, 0) + 1
        if self.draw_table[key] >= self.settings.draw_repetitions:
            self._finish(MatchOutcome(winner=None, reason="position repeated"), changes)

    def _finish(self, outcome: MatchOutcome, changes: list[str]) -> None:
        self.outcome = outcome
        self.state = LoopState.GAME_OVER
        if outcome.is_draw:
            changes.append(f"Match drawn ({outcome.reason})")
        else:
            changes.append(f"{outcome.winner.name} wins ({outcome.reason})")
        logger.info("Match over after %d turns: %s", self.board.turn, changes[-1])
