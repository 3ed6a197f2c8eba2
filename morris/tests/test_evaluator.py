"""
Tests for the heuristic evaluator.

Tests:
- Feature counters on hand-built positions
- Zero-sum ratings
- Phase-dependent weights
"""

import pytest

from ..bots.evaluator import HeuristicEvaluator, EvaluationWeights, DEFAULT_EVALUATOR
from ..engine_core.state import BoardState, StoneColor, Phase
from ..engine_core.action import Move


WHITE = StoneColor.WHITE
BLACK = StoneColor.BLACK


def board(white, black, player=WHITE, turn=10, phase=Phase.PLACING) -> BoardState:
    return BoardState.from_snapshot(
        black=set(black), white=set(white), current_player=player, turn=turn, phase=phase,
    )


@pytest.fixture
def evaluator() -> HeuristicEvaluator:
    return HeuristicEvaluator()


class TestFeatureCounters:
    """Tests for the individual counters."""

    def test_single_mill(self, evaluator):
        state = board(white={0, 1, 2}, black={9})
        assert evaluator.number_of_mills(state, WHITE) == 1
        assert evaluator.number_of_mills(state, BLACK) == 0

    def test_mills_sharing_a_stone(self, evaluator):
        state = board(white={0, 1, 2, 9, 21}, black={4})
        assert evaluator.number_of_mills(state, WHITE) == 2
        assert evaluator.number_of_double_mills(state, WHITE) == 1

    def test_two_piece_configuration(self, evaluator):
        state = board(white={0, 1}, black=set())
        assert evaluator.number_of_two_piece_confs(state, WHITE) == 1

    def test_two_piece_blocked_by_enemy(self, evaluator):
        state = board(white={0, 1}, black={2})
        assert evaluator.number_of_two_piece_confs(state, WHITE) == 0

    def test_three_piece_configuration(self, evaluator):
        # 2 closes 0-1-2 with 1 one stone away from 1-4-7, and 7 closes
        # 1-4-7 with 1 one stone away from 0-1-2: one configuration.
        state = board(white={0, 1, 4}, black=set())
        assert evaluator.number_of_three_piece_confs(state, WHITE) == 1

    def test_three_piece_can_be_fractional(self, evaluator):
        # 2 counts once although both partners qualify.
        state = board(white={0, 1, 4, 9}, black=set())
        assert evaluator.number_of_three_piece_confs(state, WHITE) == 1.5

    def test_blocked_stones(self, evaluator, blocked_board):
        assert evaluator.number_of_blocked_stones(blocked_board, BLACK) == 4
        assert evaluator.number_of_blocked_stones(blocked_board, WHITE) == 0
        assert blocked_board.number_of_blocked_stones(BLACK) == 4

    def test_open_mill(self, evaluator):
        # 9 can slide up into 0 to close 0-1-2.
        state = board(white={1, 2, 9}, black={20}, turn=20, phase=Phase.MOVING)
        assert evaluator.number_of_open_mills(state, WHITE) == 1

    def test_open_mill_guarded_by_enemy(self, evaluator):
        state = board(white={1, 2}, black={9}, turn=20, phase=Phase.MOVING)
        assert evaluator.number_of_open_mills(state, WHITE) == 0

    def test_counters_leave_state_untouched(self, evaluator, moving_board):
        before = moving_board.clone()
        evaluator.evaluate(moving_board, WHITE)
        assert moving_board == before


class TestRating:
    """Tests for the combined rating."""

    def test_empty_board_is_even(self, empty_board):
        assert DEFAULT_EVALUATOR.rate(empty_board, WHITE) == 0

    @pytest.mark.parametrize("fixture_name", [
        "empty_board", "moving_board", "winning_board", "blocked_board", "flying_board",
    ])
    def test_zero_sum(self, request, fixture_name):
        state = request.getfixturevalue(fixture_name)
        assert state.get_rating(WHITE) == -state.get_rating(BLACK)

    def test_mill_closed_bonus_while_placing(self):
        state = board(white={0, 1, 2}, black={3, 4}, turn=4, phase=Phase.REMOVING)
        evaluation = DEFAULT_EVALUATOR.evaluate(state, WHITE)
        assert evaluation.feature_breakdown["mill_closed"] == 1
        assert evaluation.total_score > 0

    def test_winner_dominates(self, winning_board):
        winning_board.perform_move(Move.slide(14, 2))
        assert winning_board.get_rating(WHITE) > 400000
        assert winning_board.get_rating(BLACK) < -400000

    def test_blocked_side_rated_lost(self, blocked_board):
        assert blocked_board.get_rating(WHITE) > 400000

    def test_placing_weights(self):
        weights = EvaluationWeights(placing_stones=1, placing_mills=0, placing_two_piece=0,
                                    placing_three_piece=0, placing_blocked=0, placing_mill_closed=0)
        state = board(white={0, 5, 10}, black={20})
        assert HeuristicEvaluator(weights).rate(state, WHITE) == 2

    def test_default_weights(self):
        weights = EvaluationWeights()
        assert (weights.placing_mill_closed, weights.placing_mills, weights.placing_blocked) == (100, 26, 30)
        assert (weights.placing_stones, weights.placing_two_piece, weights.placing_three_piece) == (9, 10, 7)
        assert (weights.moving_mill_closed, weights.moving_mills, weights.moving_blocked) == (500, 43, 30)
        assert weights.moving_stones == 11
        assert (weights.moving_open_double_mills, weights.moving_open_mills) == (1000, 500)
        assert weights.moving_winner == 500000


class TestOpenDoubleMills:
    """Tests for mills that can be reopened next to a closed one."""

    def test_cell_next_to_closed_mill(self, evaluator):
        # 9 closes 0-9-21 and borders 0, which sits in 0-1-2.
        state = board(white={0, 1, 2, 21}, black={5, 13}, turn=24, phase=Phase.MOVING)
        assert evaluator.number_of_open_double_mills(state, WHITE) == 1
        assert state.number_of_open_double_mills(WHITE) == 1

    def test_no_closed_mill_nearby(self, evaluator):
        state = board(white={0, 1, 21}, black={5, 13}, turn=24, phase=Phase.MOVING)
        assert evaluator.number_of_open_double_mills(state, WHITE) == 0

    def test_feature_in_moving_rating(self):
        state = board(white={0, 1, 2, 21}, black={5, 13, 20}, turn=24, phase=Phase.MOVING)
        evaluation = DEFAULT_EVALUATOR.evaluate(state, WHITE)
        assert evaluation.feature_breakdown["open_double_mills"] == 1
