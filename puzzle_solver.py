# puzzle_solver.py: A* search for the 8-puzzle
import argparse
import heapq
import logging
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from puzzle_board import GOAL, Grid, encode, equals, move_between, pretty, successors, validate_board
from puzzle_config import MAX_EXPANSIONS, configure_logging
from puzzle_heuristic import manhattan_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchNode:
    board: Grid
    g: int
    f: int
    parent: Optional[int]  # index into the node arena, None for the start


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one `solve` call.

    `path` runs from the initial board to the goal inclusive, or is None
    when no path was found. `truncated` is set only when a step budget
    stopped the search before the space was exhausted.
    """
    path: Optional[Tuple[Grid, ...]]
    nodes_explored: int
    elapsed_time: float  # seconds
    truncated: bool = False

    @property
    def solved(self) -> bool:
        return self.path is not None

    @property
    def move_count(self) -> Optional[int]:
        return len(self.path) - 1 if self.path is not None else None

    @property
    def moves(self) -> List[str]:
        """Blank directions between consecutive boards of the path."""
        if self.path is None:
            return []
        return [move_between(a, b) for a, b in zip(self.path, self.path[1:])]

    def summary(self) -> str:
        ms = self.elapsed_time * 1000.0
        if self.solved:
            return f"solved in {self.move_count} moves, {self.nodes_explored} nodes explored, {ms:.2f} ms"
        reason = "step budget reached" if self.truncated else "no solution"
        return f"{reason}, {self.nodes_explored} nodes explored, {ms:.2f} ms"


def reconstruct_path(nodes: List[SearchNode], index: int) -> Tuple[Grid, ...]:
    """Reconstruct path from start to the node at `index`."""
    path = []
    current: Optional[int] = index
    while current is not None:
        node = nodes[current]
        path.append(node.board)
        current = node.parent
    return tuple(path[::-1])


def solve(initial: Sequence[int], goal: Sequence[int] = GOAL,
          max_expansions: Optional[int] = None) -> SearchResult:
    """Solve the puzzle using A* with Manhattan distance.

    Equal-f nodes are expanded in insertion order, so identical input
    always yields the same path and the same `nodes_explored`.
    """
    start = validate_board(initial)
    goal = validate_board(goal)
    if max_expansions is not None and max_expansions <= 0:
        raise ValueError(f"max_expansions must be positive, got {max_expansions}")

    start_time = time.perf_counter()
    logger.debug("Starting A* search: %s -> %s", start, goal)

    # Node arena; parents are referenced by index
    nodes: List[SearchNode] = [SearchNode(start, 0, manhattan_distance(start, goal), None)]
    # Priority queue (frontier) with (f_score, insertion seq, node index)
    priority_queue: List[Tuple[int, int, int]] = [(nodes[0].f, 0, 0)]
    # Board key -> index of its current best node in the frontier
    open_index: Dict[int, int] = {encode(start): 0}
    # Keys of expanded boards
    closed: Set[int] = set()
    seq = 1
    nodes_explored = 0

    while priority_queue:
        _, _, idx = heapq.heappop(priority_queue)
        current = nodes[idx]
        key = encode(current.board)

        # Entry was replaced by a cheaper node for the same board
        if open_index.get(key) != idx:
            continue
        del open_index[key]
        nodes_explored += 1

        if equals(current.board, goal):
            path = reconstruct_path(nodes, idx)
            result = SearchResult(path, nodes_explored, time.perf_counter() - start_time)
            logger.info("A* %s", result.summary())
            return result

        closed.add(key)

        for neighbor in successors(current.board):
            nkey = encode(neighbor)
            if nkey in closed:
                continue

            new_g = current.g + 1
            existing = open_index.get(nkey)
            # If we already have an equal or better path, skip
            if existing is not None and new_g >= nodes[existing].g:
                continue

            new_f = new_g + manhattan_distance(neighbor, goal)
            nodes.append(SearchNode(neighbor, new_g, new_f, idx))
            open_index[nkey] = len(nodes) - 1
            heapq.heappush(priority_queue, (new_f, seq, len(nodes) - 1))
            seq += 1

        if max_expansions is not None and nodes_explored >= max_expansions and open_index:
            result = SearchResult(None, nodes_explored, time.perf_counter() - start_time, truncated=True)
            logger.warning("A* stopped after %d expansions without reaching the goal", nodes_explored)
            return result

    # If we've exhausted the search space, there is no path
    result = SearchResult(None, nodes_explored, time.perf_counter() - start_time)
    logger.info("A* %s", result.summary())
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="8-Puzzle Solver - Find an optimal move sequence with A* (Manhattan distance)"
    )
    parser.add_argument(
        "tiles",
        nargs="*",
        type=int,
        help="Initial board, 9 values row by row, 0 = blank (default: 1 2 3 4 0 6 7 5 8)"
    )
    parser.add_argument(
        "-m", "--max-expansions",
        type=int,
        default=MAX_EXPANSIONS,
        help="Stop after this many expanded nodes (default: no limit)"
    )
    args = parser.parse_args(argv)

    configure_logging()
    try:
        tiles = validate_board(args.tiles or [1, 2, 3, 4, 0, 6, 7, 5, 8])
        res = solve(tiles, GOAL, max_expansions=args.max_expansions)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print("Initial state:")
    print(pretty(tiles))
    print()
    if res.solved:
        for step, (move, board) in enumerate(zip(res.moves, res.path[1:]), start=1):
            print(f"Step {step} ({move}):")
            print(pretty(board))
            print()
    print(res.summary())
    return 0 if res.solved else 1


if __name__ == "__main__":
    sys.exit(main())
