# puzzle_board.py: 8-puzzle state model
import logging
import operator
import random
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Define the Grid type: 9 cells, row-major; 0 = blank
Grid = Tuple[int, ...]

SIZE = 3
CELLS = SIZE * SIZE
GOAL: Grid = (1, 2, 3, 4, 5, 6, 7, 8, 0)

# Blank movement as index deltas, tried in this order
MOVES: Dict[str, int] = {
    "up": -SIZE,
    "down": SIZE,
    "left": -1,
    "right": 1,
}
OPPOSITE = {"up": "down", "down": "up", "left": "right", "right": "left"}


class PuzzleError(ValueError):
    """Base error for bad puzzle input."""


class InvalidBoard(PuzzleError):
    """Board is not a permutation of 0..8."""


class IllegalMove(PuzzleError):
    """Requested move is not possible from the given board."""


def validate_board(board: Sequence[int]) -> Grid:
    """Return `board` as a tuple, or raise InvalidBoard."""
    try:
        cells = list(board)
        # operator.index rejects floats and strings instead of truncating them
        grid = tuple(operator.index(x) for x in cells)
    except TypeError as e:
        raise InvalidBoard(f"Board must be a sequence of integers: {e}") from e
    if any(isinstance(x, bool) for x in cells):
        raise InvalidBoard("Board must be a sequence of integers, got a bool")
    if len(grid) != CELLS:
        raise InvalidBoard(f"Board must have {CELLS} cells, got {len(grid)}")
    if 0 not in grid:
        raise InvalidBoard("Board has no blank (0)")
    if sorted(grid) != list(range(CELLS)):
        raise InvalidBoard(f"Board must contain each of 0..{CELLS - 1} exactly once: {list(grid)}")
    return grid


def encode(board: Grid) -> int:
    """Pack a board into a single integer (base-9 digits)."""
    key = 0
    for v in board:
        key = key * CELLS + v
    return key


def decode(key: int) -> Grid:
    cells = []
    for _ in range(CELLS):
        key, v = divmod(key, CELLS)
        cells.append(v)
    return tuple(reversed(cells))


def equals(a: Grid, b: Grid) -> bool:
    """Element-wise equality of two boards."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def _is_legal(blank: int, direction: str) -> bool:
    target = blank + MOVES[direction]
    if not 0 <= target < CELLS:
        return False
    # No wrapping across a row boundary
    if direction == "left" and blank % SIZE == 0:
        return False
    if direction == "right" and blank % SIZE == SIZE - 1:
        return False
    return True


def _swap(board: Grid, i: int, j: int) -> Grid:
    new_state = list(board)
    new_state[i], new_state[j] = new_state[j], new_state[i]
    return tuple(new_state)


def neighbors(board: Grid) -> List[Tuple[str, Grid]]:
    """Return list of (direction, next_board) pairs, up/down/left/right order."""
    z = board.index(0)
    result = []
    for direction, delta in MOVES.items():
        if _is_legal(z, direction):
            result.append((direction, _swap(board, z, z + delta)))
    return result


def successors(board: Grid) -> List[Grid]:
    """Get the 2 to 4 boards reachable by one blank move."""
    return [nxt for _, nxt in neighbors(board)]


def legal_moves(board: Grid) -> List[str]:
    z = board.index(0)
    return [d for d in MOVES if _is_legal(z, d)]


def apply_move(board: Grid, direction: str) -> Grid:
    """Move the blank one step in `direction`."""
    if direction not in MOVES:
        raise IllegalMove(f"Unknown move: {direction}")
    z = board.index(0)
    if not _is_legal(z, direction):
        r, c = divmod(z, SIZE)
        raise IllegalMove(f"Illegal move {direction} from blank at {(r, c)}")
    return _swap(board, z, z + MOVES[direction])


def move_between(a: Grid, b: Grid) -> str:
    """Direction of the blank move that turns `a` into `b`."""
    for direction, nxt in neighbors(a):
        if nxt == b:
            return direction
    raise IllegalMove(f"{list(b)} is not one move away from {list(a)}")


def move_tile(board: Grid, index: int) -> Optional[Grid]:
    """Slide the tile at `index` into the blank; None if it is not adjacent."""
    if not 0 <= index < CELLS:
        return None
    z = board.index(0)
    same_row = index // SIZE == z // SIZE
    if (abs(index - z) == 1 and same_row) or abs(index - z) == SIZE:
        return _swap(board, z, index)
    return None


def inversion_count(board: Grid) -> int:
    """Count inversions ignoring 0."""
    arr = [x for x in board if x != 0]
    inv = 0
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] > arr[j]:
                inv += 1
    return inv


def is_solvable(board: Grid, goal: Grid = GOAL) -> bool:
    """
    On a 3-wide grid a move never changes inversion parity, so a board can
    reach `goal` iff both have the same parity.
    """
    return inversion_count(board) % 2 == inversion_count(goal) % 2


def shuffle_via_legal_moves(steps: int = 40, rng: Optional[random.Random] = None,
                            start: Grid = GOAL) -> Grid:
    """Shuffle by valid moves from `start` (always solvable)."""
    rng = rng or random.Random()
    g = start
    last: Optional[str] = None
    for _ in range(steps):
        opts = legal_moves(g)
        if last is not None and OPPOSITE[last] in opts and len(opts) > 1:
            opts.remove(OPPOSITE[last])  # avoid immediate undo
        last = rng.choice(opts)
        g = apply_move(g, last)
    logger.debug("Shuffled %d moves from %s to %s", steps, start, g)
    return g


def random_board(rng: Optional[random.Random] = None) -> Grid:
    """Uniformly random permutation; may be unsolvable."""
    rng = rng or random.Random()
    cells = list(range(CELLS))
    rng.shuffle(cells)
    return tuple(cells)


def pretty(board: Grid) -> str:
    """ASCII rendering."""
    lines = []
    for r in range(SIZE):
        row = board[r * SIZE:(r + 1) * SIZE]
        lines.append(" ".join(" ." if v == 0 else f"{v:2d}" for v in row))
    return "\n".join(lines)
