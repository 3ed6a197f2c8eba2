"""
Heuristic Evaluator - Scores board states for the search.

The evaluator assigns a zero-sum score based on:
- Mill features (closed mills, mill just closed, open and double mills)
- Mobility features (blocked stones)
- Material (stone count difference)
- Shape features (two- and three-piece configurations)
- Terminal features (winner)

Weights differ between the placing and the moving phase.
All feature counters scan the 24 positions and may place a
hypothetical stone on an empty cell; it is always taken back
before returning.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.state import StoneColor, Phase, LAST_PLACING_TURN, FLYING_THRESHOLD
from ..engine_core.topology import NUM_POSITIONS, LEFT, RIGHT, TOP, BOTTOM, NEIGHBORS

if TYPE_CHECKING:
    from ..engine_core.state import BoardState


@dataclass(frozen=True)
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    The search is tuned against these exact magnitudes.
    """
    # Placing phase (and removals during it)
    placing_mill_closed: float = 100
    placing_mills: float = 26
    placing_blocked: float = 30
    placing_stones: float = 9
    placing_two_piece: float = 10
    placing_three_piece: float = 7

    # Moving phase (and removals during it)
    moving_mill_closed: float = 500
    moving_mills: float = 43
    moving_blocked: float = 30
    moving_stones: float = 11
    moving_open_double_mills: float = 1000
    moving_open_mills: float = 500
    moving_winner: float = 500000

    # Added once either side is down to flying
    endgame_two_piece: float = 100
    endgame_three_piece: float = 500


@dataclass
class StateEvaluation:
    """
    Result of evaluating a board state.
    """
    total_score: float
    feature_breakdown: dict[str, float]


class HeuristicEvaluator:
    """
    Evaluates board states using weighted heuristics.

    Scores are computed for the side to move and negated for the
    other color, so rate(s, WHITE) == -rate(s, BLACK).
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def rate(self, state: BoardState, for_color: StoneColor) -> float:
        """Score the state from for_color's perspective."""
        return self.evaluate(state, for_color).total_score

    def evaluate(self, state: BoardState, for_color: StoneColor) -> StateEvaluation:
        """Score the state and keep the per-criterion breakdown."""
        w = self.weights
        me = state.current_player
        other = me.opponent

        features = {
            "mill_closed": 1 if state.phase == Phase.REMOVING else 0,
            "mills": self.number_of_mills(state, me) - self.number_of_mills(state, other),
            "blocked": self.number_of_blocked_stones(state, other) - self.number_of_blocked_stones(state, me),
            "stones": state.stone_count(me) - state.stone_count(other),
            "two_piece": self.number_of_two_piece_confs(state, me) - self.number_of_two_piece_confs(state, other),
            "three_piece": self.number_of_three_piece_confs(state, me) - self.number_of_three_piece_confs(state, other),
            "open_double_mills": (
                self.number_of_open_double_mills(state, me) - self.number_of_open_double_mills(state, other)
            ),
            "open_mills": self.number_of_open_mills(state, me) - self.number_of_open_mills(state, other),
        }
        winner = state.get_winner()
        features["winner"] = 0 if winner is None else (1 if winner == me else -1)

        placing = state.phase == Phase.PLACING or (
            state.phase == Phase.REMOVING and state.turn <= LAST_PLACING_TURN
        )
        if placing:
            rating = (
                w.placing_mill_closed * features["mill_closed"]
                + w.placing_mills * features["mills"]
                + w.placing_blocked * features["blocked"]
                + w.placing_stones * features["stones"]
                + w.placing_two_piece * features["two_piece"]
                + w.placing_three_piece * features["three_piece"]
            )
        else:
            rating = (
                w.moving_mill_closed * features["mill_closed"]
                + w.moving_mills * features["mills"]
                + w.moving_blocked * features["blocked"]
                + w.moving_stones * features["stones"]
                + w.moving_open_double_mills * features["open_double_mills"]
                + w.moving_open_mills * features["open_mills"]
                + w.moving_winner * features["winner"]
            )

        if state.turn > LAST_PLACING_TURN and any(
            state.stone_count(color) <= FLYING_THRESHOLD for color in StoneColor
        ):
            rating += w.endgame_two_piece * features["two_piece"] + w.endgame_three_piece * features["three_piece"]

        if for_color != me:
            rating = -rating
        return StateEvaluation(total_score=rating, feature_breakdown=features)

    # ------------------------------------------------------------------
    # Feature counters
    # ------------------------------------------------------------------

    def number_of_two_piece_confs(self, state: BoardState, color: StoneColor) -> int:
        """Count empty cells where a stone of color would close a mill (per axis)."""
        own = state.occupancy[color]
        count = 0
        for pos in range(NUM_POSITIONS):
            if state.is_occupied(pos):
                continue
            own.add(pos)
            if state.check_mill_horizontal(pos):
                count += 1
            if state.check_mill_vertical(pos):
                count += 1
            own.discard(pos)
        return count

    def number_of_three_piece_confs(self, state: BoardState, color: StoneColor) -> float:
        """
        Count configurations with two ways of closing a mill.

        A cell qualifies when a stone there closes a mill and one of that
        mill's partner stones is one stone away from a second mill on the
        other axis. Every configuration is found from both of its empty
        cells, hence the halving; the result can be fractional.
        """
        own = state.occupancy[color]
        count = 0
        for pos in range(NUM_POSITIONS):
            if state.is_occupied(pos):
                continue
            own.add(pos)
            if state.check_mill_horizontal(pos):
                partners = _line_partners(pos, LEFT, RIGHT)
                if any(self._one_stone_away(state, color, j, TOP, BOTTOM) for j in partners):
                    count += 1
            if state.check_mill_vertical(pos):
                partners = _line_partners(pos, TOP, BOTTOM)
                if any(self._one_stone_away(state, color, j, LEFT, RIGHT) for j in partners):
                    count += 1
            own.discard(pos)
        return count / 2

    def number_of_mills(self, state: BoardState, color: StoneColor) -> int:
        """
        Count closed mills of color.

        Stones are marked per axis once their mill is counted, so two
        mills sharing a stone count as two, not as five stones' worth.
        """
        own = state.occupancy[color]
        horizontal_done = [False] * NUM_POSITIONS
        vertical_done = [False] * NUM_POSITIONS

        count = 0
        for pos in range(NUM_POSITIONS):
            if pos not in own:
                continue
            if state.check_mill_horizontal(pos) and not horizontal_done[pos]:
                _mark_line(horizontal_done, pos, LEFT, RIGHT)
                count += 1
            if state.check_mill_vertical(pos) and not vertical_done[pos]:
                _mark_line(vertical_done, pos, TOP, BOTTOM)
                count += 1
        return count

    def number_of_open_mills(self, state: BoardState, color: StoneColor) -> int:
        """Count mills closable next move by a neighbor no enemy stone can block."""
        own = state.occupancy[color]
        enemy = state.occupancy[color.opponent]
        count = 0
        for pos in range(NUM_POSITIONS):
            if state.is_occupied(pos):
                continue
            own.add(pos)
            if state.check_mill_horizontal(pos) and _closable_across(pos, own, enemy, TOP, BOTTOM):
                count += 1
            if state.check_mill_vertical(pos) and _closable_across(pos, own, enemy, LEFT, RIGHT):
                count += 1
            own.discard(pos)
        return count

    def number_of_double_mills(self, state: BoardState, color: StoneColor) -> int:
        """Count stones of color sitting in a horizontal and a vertical mill."""
        return sum(
            1 for pos in state.occupancy[color]
            if state.check_mill_horizontal(pos) and state.check_mill_vertical(pos)
        )

    def number_of_open_double_mills(self, state: BoardState, color: StoneColor) -> int:
        """Count empty cells closing a mill next to an own stone already in a mill."""
        own = state.occupancy[color]
        count = 0
        for pos in range(NUM_POSITIONS):
            if state.is_occupied(pos):
                continue
            own.add(pos)
            mill = state.check_mill(pos)
            own.discard(pos)
            if mill and any(n in own and state.check_mill(n) for n in NEIGHBORS[pos]):
                count += 1
        return count

    def number_of_blocked_stones(self, state: BoardState, color: StoneColor) -> int:
        """Count stones of color whose neighbors are all occupied."""
        return sum(
            1 for pos in state.occupancy[color]
            if all(state.is_occupied(n) for n in NEIGHBORS[pos])
        )

    def _one_stone_away(
        self,
        state: BoardState,
        color: StoneColor,
        pos: int,
        before: tuple,
        after: tuple,
    ) -> bool:
        """Check if pos's line on the given axis has one own stone and one empty cell."""
        own = state.occupancy[color]
        prev = before[pos]
        if prev is not None:
            if before[prev] is not None:
                # pos at the end of the line
                far = before[prev]
                return (far in own and not state.is_occupied(prev)) or (
                    not state.is_occupied(far) and prev in own
                )
            nxt = after[pos]
            if nxt is not None:
                # pos in the middle
                return (prev in own and not state.is_occupied(nxt)) or (
                    not state.is_occupied(prev) and nxt in own
                )
            return False
        nxt = after[pos]
        if nxt is not None and after[nxt] is not None:
            # pos at the start
            far = after[nxt]
            return (far in own and not state.is_occupied(nxt)) or (
                not state.is_occupied(far) and nxt in own
            )
        return False


def _line_partners(pos: int, before: tuple, after: tuple) -> list[int]:
    """The two other cells of pos's line on one axis."""
    partners = []
    prev = before[pos]
    if prev is not None:
        partners.append(prev)
        if before[prev] is not None:
            partners.append(before[prev])
        elif after[pos] is not None:
            partners.append(after[pos])
    elif after[pos] is not None:
        nxt = after[pos]
        partners.append(nxt)
        if after[nxt] is not None:
            partners.append(after[nxt])
    return partners


def _mark_line(done: list[bool], pos: int, before: tuple, after: tuple) -> None:
    done[pos] = True
    for table in (before, after):
        step = table[pos]
        if step is not None:
            done[step] = True
            if table[step] is not None:
                done[table[step]] = True


def _closable_across(pos: int, own: set[int], enemy: set[int], before: tuple, after: tuple) -> bool:
    # No enemy neighbor on the crossing axis may step in first.
    prev, nxt = before[pos], after[pos]
    if (prev is not None and prev in enemy) or (nxt is not None and nxt in enemy):
        return False
    return (prev is not None and prev in own) or (nxt is not None and nxt in own)


DEFAULT_EVALUATOR = HeuristicEvaluator()
