"""
Greedy Bot - Rule-of-thumb opponent without lookahead.

Tries, in order:
1. Close an own mill
2. Occupy a cell where the opponent could close a mill next move
3. While placing, start a line that still has two empty cells
4. Anything legal, at random

Removals are always random.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Mapping
import logging
import random

from .policy import BotPolicy, BotDecision
from ..engine_core.state import Phase, LAST_PLACING_TURN
from ..engine_core.topology import MILL_LINES, NEIGHBORS

if TYPE_CHECKING:
    from ..engine_core.state import BoardState, StoneColor
    from ..engine_core.action import Move


logger = logging.getLogger(__name__)


class GreedyPolicy(BotPolicy):
    """
    Greedy policy - one-move rules on top of random play.

    Usage:
        bot = GreedyPolicy(StoneColor.BLACK)
        decision = bot.select_move(state)
        print(decision.move, decision.explanation)
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

        if state.phase != Phase.REMOVING:
            board = state.clone()

            for move in moves:
                if self._closes_mill(board, move):
                    return self._decision(move, "Closing a mill", len(moves))

            threats = self._opponent_threats(board)
            for pos in threats:
                for move in moves:
                    if move.to_pos == pos:
                        return self._decision(move, f"Blocking a mill at {pos}", len(moves))

            if state.phase == Phase.PLACING:
                candidates = self._line_starters(board)
                if len(candidates) > 1:
                    pos = self.rng.choice(candidates)
                    return self._decision(next(m for m in moves if m.to_pos == pos), "Building a line", len(moves))

        return self._decision(self.rng.choice(moves), "Selected randomly", len(moves))

    def _closes_mill(self, board: BoardState, move: Move) -> bool:
        board.perform_move(move)
        mill = board.check_mill(move.to_pos)
        board.undo_move(move)
        return mill

    def _opponent_threats(self, board: BoardState) -> list[int]:
        """Empty cells where the opponent could close a mill on its next move."""
        opponent = board.current_player.opponent
        enemy = board.occupancy[opponent]
        # The opponent still places if its next turn is a placing turn.
        placing = board.turn + 1 <= LAST_PLACING_TURN
        flying = board.can_fly(opponent)

        threats = []
        for pos in board.empty_positions():
            if placing or flying:
                sources = [None]
            else:
                sources = [n for n in NEIGHBORS[pos] if n in enemy]
            for source in sources:
                if source is not None:
                    enemy.discard(source)
                enemy.add(pos)
                mill = board.check_mill(pos)
                enemy.discard(pos)
                if source is not None:
                    enemy.add(source)
                if mill:
                    threats.append(pos)
                    break
        return threats

    def _line_starters(self, board: BoardState) -> list[int]:
        """Empty cells on lines holding one own stone and two empty cells."""
        own = board.occupancy[self.color]
        candidates = []
        for line in MILL_LINES:
            mine = [pos for pos in line if pos in own]
            empty = [pos for pos in line if not board.is_occupied(pos)]
            if len(mine) == 1 and len(empty) == 2:
                candidates.extend(empty)
        return candidates

    def _decision(self, move: Move, explanation: str, num_moves: int) -> BotDecision:
        logger.debug("%s (%s): %s", self.get_name(), explanation, move)
        return BotDecision(move=move, explanation=explanation, evaluated_moves=num_moves)
