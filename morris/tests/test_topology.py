"""
Tests for the board topology tables.
"""

from ..engine_core.topology import (
    NUM_POSITIONS, LEFT, RIGHT, TOP, BOTTOM, NEIGHBORS, MILL_LINES,
    neighbors, mill_lines_through,
)


class TestNeighborTables:
    """Tests for the four neighbor tables."""

    def test_left_right_are_mirrors(self):
        for pos in range(NUM_POSITIONS):
            if LEFT[pos] is not None:
                assert RIGHT[LEFT[pos]] == pos
            if RIGHT[pos] is not None:
                assert LEFT[RIGHT[pos]] == pos

    def test_top_bottom_are_mirrors(self):
        for pos in range(NUM_POSITIONS):
            if TOP[pos] is not None:
                assert BOTTOM[TOP[pos]] == pos
            if BOTTOM[pos] is not None:
                assert TOP[BOTTOM[pos]] == pos

    def test_corner_and_cross_degrees(self):
        """Corners have two neighbors, midpoints of the middle ring four."""
        assert neighbors(0) == (1, 9)
        assert len(neighbors(23)) == 2
        assert sorted(neighbors(4)) == [1, 3, 5, 7]
        assert sorted(neighbors(19)) == [16, 18, 20, 22]

    def test_adjacency_is_symmetric(self):
        for pos in range(NUM_POSITIONS):
            for other in NEIGHBORS[pos]:
                assert pos in NEIGHBORS[other]

    def test_total_edge_count(self):
        assert sum(len(n) for n in NEIGHBORS) == 2 * 32


class TestMillLines:
    """Tests for the derived mill lines."""

    def test_sixteen_lines(self):
        assert len(MILL_LINES) == 16
        assert len(set(MILL_LINES)) == 16

    def test_known_lines(self):
        assert (0, 1, 2) in MILL_LINES
        assert (9, 10, 11) in MILL_LINES
        assert (0, 9, 21) in MILL_LINES
        assert (16, 19, 22) in MILL_LINES
        assert (1, 4, 7) in MILL_LINES

    def test_no_line_through_center(self):
        """7 and 16 sit on the inner ring; no line crosses the middle."""
        assert (7, 16, 19) not in MILL_LINES
        assert (11, 12, 13) not in MILL_LINES

    def test_every_position_on_two_lines(self):
        for pos in range(NUM_POSITIONS):
            assert len(mill_lines_through(pos)) == 2
