# puzzle_heuristic.py: Manhattan distance for the 8-puzzle
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Tuple

from puzzle_board import GOAL, SIZE, Grid


@lru_cache(maxsize=32)
def goal_positions(goal: Grid) -> Mapping[int, Tuple[int, int]]:
    """Map each tile to its (row, col) in `goal` (read-only, shared by the cache)."""
    return MappingProxyType({tile: divmod(i, SIZE) for i, tile in enumerate(goal) if tile != 0})


def manhattan_distance(state: Grid, goal: Grid = GOAL) -> int:
    """Calculate Manhattan distance heuristic."""
    targets = goal_positions(tuple(goal))
    total_distance = 0
    for i, tile in enumerate(state):
        if tile != 0:
            target_row, target_col = targets[tile]
            current_row, current_col = divmod(i, SIZE)
            total_distance += abs(target_row - current_row) + abs(target_col - current_col)
    return total_distance
