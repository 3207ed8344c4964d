"""Tests for the Manhattan distance heuristic."""

import pytest

from puzzle_board import GOAL, successors
from puzzle_heuristic import goal_positions, manhattan_distance

ZERO_FIRST_GOAL = (0, 1, 2, 3, 4, 5, 6, 7, 8)


class TestManhattanDistance:

    def test_goal_is_zero(self):
        assert manhattan_distance(GOAL, GOAL) == 0

    def test_one_tile_off(self):
        assert manhattan_distance((1, 2, 3, 4, 0, 6, 7, 5, 8), GOAL) == 1

    def test_blank_is_ignored(self):
        # only the blank and tile 8 swapped; tile 8 is one step away
        assert manhattan_distance((1, 2, 3, 4, 5, 6, 7, 0, 8)) == 1

    def test_custom_goal(self):
        assert manhattan_distance(GOAL, ZERO_FIRST_GOAL) == 12

    def test_goal_positions(self):
        pos = goal_positions(GOAL)
        assert 0 not in pos
        assert pos[1] == (0, 0)
        assert pos[8] == (2, 1)

    def test_goal_positions_read_only(self):
        pos = goal_positions(GOAL)
        with pytest.raises(TypeError):
            pos[1] = (2, 2)
        assert manhattan_distance(GOAL, GOAL) == 0

    def test_admissible(self, bfs_distances, sample_boards):
        for board in sample_boards:
            assert manhattan_distance(board, GOAL) <= bfs_distances[board]

    def test_consistent(self, sample_boards):
        for board in sample_boards:
            h = manhattan_distance(board, GOAL)
            for nxt in successors(board):
                assert abs(h - manhattan_distance(nxt, GOAL)) == 1
