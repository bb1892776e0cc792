"""
Randomized backtracking Sudoku solver with a bounded solution-counting mode.

The search runs on a plain-int copy of the grid with per-row, per-column and
per-box bitmasks of used digits; the numpy board is only written on success.
"""

import numpy as np

from .grid import BOX, DIGITS, EMPTY, SIZE, find_conflicts

DEFAULT_MAX_STEPS = 200000


def make_rng(seed=None) -> np.random.Generator:
    """Digit-order source for the search; pin `seed` for reproducible output."""
    return np.random.default_rng(seed)


class _DigitOrders:
    """Shuffled 1..9 orders, drawn from the generator a block at a time."""

    BLOCK = 256

    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self._orders = []

    def next(self) -> list[int]:
        if not self._orders:
            block = np.tile(np.array(DIGITS), (self.BLOCK, 1))
            self._orders = self.rng.permuted(block, axis=1).tolist()
        return self._orders.pop()


class _SearchState:
    """Working copy of a grid: cell values, used-digit masks and empty cells in row-major order."""

    def __init__(self, board: np.ndarray):
        self.cells = board.tolist()
        self.rows = [0] * SIZE
        self.cols = [0] * SIZE
        self.boxes = [0] * SIZE
        self.empties = []
        for r in range(SIZE):
            for c in range(SIZE):
                b = (r // BOX) * BOX + c // BOX
                val = self.cells[r][c]
                if val == EMPTY:
                    self.empties.append((r, c, b))
                else:
                    bit = 1 << val
                    self.rows[r] |= bit
                    self.cols[c] |= bit
                    self.boxes[b] |= bit

    def used(self, r: int, c: int, b: int) -> int:
        return self.rows[r] | self.cols[c] | self.boxes[b]

    def assign(self, r: int, c: int, b: int, val: int) -> None:
        bit = 1 << val
        self.cells[r][c] = val
        self.rows[r] |= bit
        self.cols[c] |= bit
        self.boxes[b] |= bit

    def unassign(self, r: int, c: int, b: int, val: int) -> None:
        mask = ~(1 << val)
        self.cells[r][c] = EMPTY
        self.rows[r] &= mask
        self.cols[c] &= mask
        self.boxes[b] &= mask


def _fill(state: _SearchState, i: int, orders: _DigitOrders, step_counter: list[int], max_steps: int | None) -> bool:
    if max_steps is not None and step_counter[0] > max_steps:
        return False

    if i == len(state.empties):
        return True

    r, c, b = state.empties[i]
    used = state.used(r, c, b)
    for val in orders.next():
        if used & (1 << val):
            continue
        state.assign(r, c, b, val)
        step_counter[0] += 1
        if _fill(state, i + 1, orders, step_counter, max_steps):
            return True
        state.unassign(r, c, b, val)

    return False


def _count(state: _SearchState, i: int, orders: _DigitOrders, counter: list[int], limit: int) -> None:
    if i == len(state.empties):
        counter[0] += 1
        return

    r, c, b = state.empties[i]
    used = state.used(r, c, b)
    for val in orders.next():
        if counter[0] >= limit:
            return
        if used & (1 << val):
            continue
        state.assign(r, c, b, val)
        _count(state, i + 1, orders, counter, limit)
        state.unassign(r, c, b, val)


def solve_board(
    board: np.ndarray,
    rng: np.random.Generator | None = None,
    step_counter: list[int] | None = None,
    max_steps: int | None = None,
) -> bool:
    """
    In-place randomized backtracking. Returns True if solved.

    Cells are visited in row-major order; the digits for each cell are tried
    in a freshly shuffled order, so repeated calls on an empty grid produce
    different full grids. On failure the board is left exactly as given.

    Args:
        board: 9x9 grid, mutated into a solution on success
        rng: digit-order source (a new unseeded generator when None)
        step_counter: one-element list incremented per placement
        max_steps: optional placement budget; exceeding it reports failure
    """
    if rng is None:
        rng = make_rng()
    if step_counter is None:
        step_counter = [0]
    if find_conflicts(board):
        return False
    state = _SearchState(board)
    if not _fill(state, 0, _DigitOrders(rng), step_counter, max_steps):
        return False
    board[:, :] = state.cells
    return True


def count_solutions(board: np.ndarray, limit: int = 2, rng: np.random.Generator | None = None) -> int:
    """
    Count completions of `board`, stopping as soon as `limit` are found.

    With limit=2 this answers "is the solution unique" without enumerating
    every completion of a sparse grid. The board itself is never modified.
    """
    if rng is None:
        rng = make_rng()
    if limit < 1 or find_conflicts(board):
        return 0
    counter = [0]
    _count(_SearchState(board), 0, _DigitOrders(rng), counter, limit)
    return counter[0]


def has_unique_solution(board: np.ndarray, rng: np.random.Generator | None = None) -> bool:
    return count_solutions(board.copy(), limit=2, rng=rng) == 1


def solve(board: np.ndarray, rng: np.random.Generator | None = None) -> bool:
    """Fill `board` in place with one valid solution."""
    return solve_board(board, rng=rng)


def solve_puzzle(
    board: np.ndarray,
    max_steps: int = DEFAULT_MAX_STEPS,
    rng: np.random.Generator | None = None,
) -> tuple[np.ndarray | None, str]:
    """
    Return a solved copy of the board, or (None, reason) if unsolvable or invalid.
    Limits the search to max_steps expansions to avoid runaway loops.
    """
    conflicts = find_conflicts(board)
    if conflicts:
        return None, conflicts[0]

    working = board.copy()
    steps = [0]
    solved = solve_board(working, rng=rng, step_counter=steps, max_steps=max_steps)
    if solved:
        return working, f"Solved in {steps[0]} steps"
    if steps[0] >= max_steps:
        return None, f"Stopped after {steps[0]} steps (limit {max_steps})"
    return None, "No solution found"
