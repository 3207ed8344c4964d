"""Shared fixtures for the 8-puzzle tests."""

from collections import deque
from typing import Dict, Tuple

import pytest

GOAL = (1, 2, 3, 4, 5, 6, 7, 8, 0)


def _grid_neighbors(board: Tuple[int, ...]):
    # Row/column arithmetic, independent of puzzle_board's index deltas
    z = board.index(0)
    r, c = divmod(z, 3)
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        nr, nc = r + dr, c + dc
        if 0 <= nr < 3 and 0 <= nc < 3:
            arr = list(board)
            j = nr * 3 + nc
            arr[z], arr[j] = arr[j], arr[z]
            yield tuple(arr)


@pytest.fixture(scope="session")
def bfs_distances() -> Dict[Tuple[int, ...], int]:
    """Exact move distance to GOAL for every solvable board."""
    dist = {GOAL: 0}
    queue = deque([GOAL])
    while queue:
        cur = queue.popleft()
        for nxt in _grid_neighbors(cur):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist


@pytest.fixture(scope="session")
def sample_boards(bfs_distances):
    """Every 97th solvable board, in BFS order."""
    boards = list(bfs_distances)
    return boards[::97]
