"""
Alpha-Beta Bot - Minimax search with alpha-beta pruning.

This is the strongest opponent. Per decision it:
- Clones the live board once and searches it in place
  (every perform_move on the path is paired with one undo_move)
- Looks a fixed number of plies ahead (default 4)
- Optionally stops expanding nodes once its decision time is used up
- Takes an immediate win at the root without searching
- Shuffles root moves so equally rated moves vary between games
- Skips positions already seen in the match or on the current path

Algorithm overview:

    def alpha_beta(node, depth, alpha, beta):
        if decided(node) or depth <= 0 or out_of_time:
            return rating(node) - imminent_loss_penalty
        if node.player == bot:
            value = alpha
            for move in moves:
                apply(move)
                value = max(value, alpha_beta(node, depth-1, value, beta))
                undo(move)
                if value >= beta: break
            return value
        else:
            value = beta
            for move in moves:
                apply(move)
                value = min(value, alpha_beta(node, depth-1, alpha, value))
                undo(move)
                if value <= alpha: break
            return value
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Optional
import logging
import math
import random
import time

from .policy import BotPolicy, BotDecision

if TYPE_CHECKING:
    from ..engine_core.state import BoardState, StoneColor
    from ..engine_core.action import Move


logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DEPTH = 4
DEFAULT_DECISION_TIME_MS = 500
# Subtracted when a line lets the opponent win right after our next move.
IMMINENT_LOSS_PENALTY = 500000


@dataclass
class SearchContext:
    """
    Transient state of one search.

    A fresh context is created for every decision, so two searches
    never share a stored move or a visited set.
    """
    start_depth: int
    start_time: float = field(default_factory=time.monotonic)
    draw_table: Mapping[int, int] = field(default_factory=dict)
    stored_move: Optional[Move] = None
    visited: set[int] = field(default_factory=set)
    nodes: int = 0
    shortcut: bool = False

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.start_time) * 1000


class AlphaBetaBot(BotPolicy):
    """
    Alpha-beta search over the heuristic evaluator.

    Two configurations are used in practice:
    - respect_time_limit=True: cuts the search off after
      decision_time_ms, trading strength for latency
    - respect_time_limit=False: always completes search_depth plies
    """

    def __init__(
        self,
        color: StoneColor,
        respect_time_limit: bool = True,
        search_depth: int = DEFAULT_SEARCH_DEPTH,
        decision_time_ms: float = DEFAULT_DECISION_TIME_MS,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the search bot.

        Args:
            color: Color the bot plays
            respect_time_limit: Stop expanding nodes once the decision
                time is used up
            search_depth: Plies to look ahead (removals count as plies)
            decision_time_ms: Time budget per decision
            seed: Seed for tie-breaking among equally rated moves
            rng: Random generator (overrides seed)
        """
        if search_depth < 1:
            raise ValueError(f"search_depth must be at least 1, got {search_depth}")
        self.color = color
        self.respect_time_limit = respect_time_limit
        self.search_depth = search_depth
        self.decision_time_ms = decision_time_ms
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        state: BoardState,
        draw_table: Mapping[int, int] | None = None,
    ) -> BotDecision:
        """
        Search the position and pick a move.

        Falls back to a random legal move when the search stored none
        (out of time before the first root move finished, or every
        root move repeats a position).
        """
        if state.current_player != self.color:
            raise ValueError(f"Not {self.color.name}'s turn")
        moves = state.get_possible_moves()
        if not moves:
            raise ValueError("No legal moves available")

        node = state.clone()
        ctx = SearchContext(start_depth=self.search_depth, draw_table=draw_table or {})
        rating = self.alpha_beta(node, self.search_depth, -math.inf, math.inf, ctx)
        logger.debug(
            "[%s] Found move with rating %s after %d nodes in %.0fms",
            self.color.name, rating, ctx.nodes, ctx.elapsed_ms(),
        )

        move = ctx.stored_move
        explanation = "Alpha-beta search"
        if ctx.shortcut:
            explanation = "Winning move"
        if move is None:
            logger.warning("[%s] No move could be calculated, making a random decision", self.color.name)
            move = self.rng.choice(moves)
            explanation = "Random fallback"

        return BotDecision(
            move=move,
            explanation=explanation,
            evaluated_moves=ctx.nodes,
            best_score=rating,
            elapsed_ms=ctx.elapsed_ms(),
            evaluation_details={
                "depth": self.search_depth,
                "respect_time_limit": self.respect_time_limit,
                "fallback": ctx.stored_move is None,
            },
        )

    def alpha_beta(
        self,
        node: BoardState,
        depth: int,
        alpha: float,
        beta: float,
        ctx: SearchContext,
    ) -> float:
        """
        Rate node by searching depth plies ahead.

        node is mutated during the call and restored before returning.

        Args:
            node: Shared search board
            depth: Remaining plies
            alpha: Best rating the bot can already force
            beta: Lowest rating the opponent can already force
            ctx: Context of the running search

        Returns:
            Rating from the bot's perspective
        """
        ctx.nodes += 1
        winner = node.get_winner()
        if winner is not None or depth <= 0 or self._time_up(ctx):
            # Losing is bad, losing right after our next move is worse.
            # When we get a removal first, the opponent wins one ply later.
            imminent = winner == self.color.opponent and (
                depth == ctx.start_depth - 2
                or (depth == ctx.start_depth - 3 and node.current_player != self.color)
            )
            return node.get_rating(self.color) - (IMMINENT_LOSS_PENALTY if imminent else 0)

        moves = node.get_possible_moves()

        if depth == ctx.start_depth:
            for move in moves:
                node.perform_move(move)
                won = node.get_winner() == self.color
                rating = node.get_rating(self.color) if won else 0.0
                node.undo_move(move)
                if won:
                    logger.debug("[%s] Taking shortcut to win", self.color.name)
                    ctx.stored_move = move
                    ctx.shortcut = True
                    return rating
            # random.shuffle is a Fisher-Yates shuffle
            self.rng.shuffle(moves)

        if node.current_player == self.color:
            max_value = alpha
            for move in moves:
                node.perform_move(move)
                key = node.current_state_to_number()
                if not ctx.draw_table.get(key) and key not in ctx.visited:
                    ctx.visited.add(key)
                    value = self.alpha_beta(node, depth - 1, max_value, beta, ctx)
                    ctx.visited.discard(key)
                else:
                    value = max_value
                    logger.debug("[%s] Skipping repeating move %s", self.color.name, move)
                node.undo_move(move)

                if value > max_value:
                    max_value = value
                    if max_value >= beta:
                        break
                    if depth == ctx.start_depth:
                        ctx.stored_move = move
            return max_value

        min_value = beta
        for move in moves:
            node.perform_move(move)
            value = self.alpha_beta(node, depth - 1, alpha, min_value, ctx)
            node.undo_move(move)

            if value < min_value:
                min_value = value
                if min_value <= alpha:
                    break
        return min_value

    def _time_up(self, ctx: SearchContext) -> bool:
        return self.respect_time_limit and ctx.elapsed_ms() > self.decision_time_ms
