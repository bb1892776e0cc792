"""
Grid Module

This module holds the 9x9 board representation shared by the solver, the
candidate analyzer and the puzzle generator:
- Loading and validating grids from lists, arrays, strings and text files
- Placement validity against row, column and 3x3 box
- Duplicate-given detection and completeness checks
- Text rendering and scoring helpers for callers that present the puzzle

A grid is a numpy integer array of shape (9, 9); 0 marks an empty cell.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

SIZE = 9
BOX = 3
EMPTY = 0
DIGITS = tuple(range(1, SIZE + 1))


class InvalidGrid(ValueError):
    """Raised when input cannot be interpreted as a 9x9 Sudoku grid."""


def empty_grid() -> np.ndarray:
    return np.zeros((SIZE, SIZE), dtype=int)


def _parse_grid_string(text: str) -> np.ndarray:
    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != SIZE * SIZE:
        raise InvalidGrid(f"Expected {SIZE * SIZE} cells, got {len(chars)}")

    values = []
    for i, ch in enumerate(chars):
        if ch == ".":
            values.append(EMPTY)
        elif ch in "0123456789":
            values.append(int(ch))
        else:
            raise InvalidGrid(f"Unexpected character {ch!r} at cell {i}")
    return np.array(values, dtype=int).reshape(SIZE, SIZE)


def load_grid(data) -> np.ndarray:
    """
    Build a validated, independent grid from user-supplied data.

    Args:
        data: nested sequence of ints, numpy array, or an 81-character string
              where '0' or '.' marks an empty cell (whitespace is ignored)

    Returns:
        np.ndarray: 9x9 integer array

    Raises:
        InvalidGrid: wrong dimensions, non-integer values, or digits outside 0..9
    """
    if isinstance(data, str):
        return _parse_grid_string(data)

    try:
        board = np.array(data)
    except (ValueError, TypeError) as exc:
        raise InvalidGrid(f"Could not interpret grid: {exc}") from exc

    if board.shape != (SIZE, SIZE):
        raise InvalidGrid(f"Grid has shape {board.shape}, expected {(SIZE, SIZE)}")
    if not np.issubdtype(board.dtype, np.integer):
        raise InvalidGrid(f"Grid values must be integers, got dtype {board.dtype}")
    if board.min() < EMPTY or board.max() > SIZE:
        raise InvalidGrid(f"Grid values must be in 0..{SIZE}")

    return board.astype(int)


def is_placement_valid(board: np.ndarray, row: int, col: int, digit: int) -> bool:
    """True iff `digit` is absent from the row, column and box of (row, col)."""
    if digit in board[row, :]:
        return False
    if digit in board[:, col]:
        return False

    r0 = (row // BOX) * BOX
    c0 = (col // BOX) * BOX
    if digit in board[r0:r0 + BOX, c0:c0 + BOX]:
        return False

    return True


def find_empty(board: np.ndarray):
    """First empty cell in row-major order, or None when the grid is full."""
    positions = np.argwhere(board == EMPTY)
    if positions.size == 0:
        return None
    return int(positions[0][0]), int(positions[0][1])


def count_clues(board: np.ndarray) -> int:
    return int(np.count_nonzero(board))


def find_conflicts(board: np.ndarray) -> list[str]:
    """Describe every row, column and box that repeats a given digit."""
    notes = []
    for i in range(SIZE):
        row_vals = [v for v in board[i, :] if v != EMPTY]
        if len(row_vals) != len(set(row_vals)):
            notes.append(f"Row {i+1} has duplicate given digit")

        col_vals = [v for v in board[:, i] if v != EMPTY]
        if len(col_vals) != len(set(col_vals)):
            notes.append(f"Column {i+1} has duplicate given digit")

    for br in range(BOX):
        for bc in range(BOX):
            block = board[br*BOX:(br+1)*BOX, bc*BOX:(bc+1)*BOX].ravel()
            block_vals = [v for v in block if v != EMPTY]
            if len(block_vals) != len(set(block_vals)):
                notes.append(f"3x3 block ({br+1},{bc+1}) has duplicate given digit")

    return notes


def is_complete(board: np.ndarray) -> bool:
    """True when every row, column and box holds each digit exactly once."""
    expected = np.array(DIGITS)
    for i in range(SIZE):
        if not np.array_equal(np.sort(board[i, :]), expected):
            return False
        if not np.array_equal(np.sort(board[:, i]), expected):
            return False

    for br in range(BOX):
        for bc in range(BOX):
            block = board[br*BOX:(br+1)*BOX, bc*BOX:(bc+1)*BOX].ravel()
            if not np.array_equal(np.sort(block), expected):
                return False

    return True


def format_board(board: np.ndarray) -> str:
    """Render the 9x9 board as a human-friendly string."""
    lines = []
    for r, row in enumerate(board):
        parts = []
        for c, val in enumerate(row):
            parts.append(str(val) if val != EMPTY else ".")
            if c in {2, 5}:
                parts.append("|")
        line = " ".join(parts)
        lines.append(line)
        if r in {2, 5}:
            lines.append("-" * len(line))
    return "\n".join(lines)


def grid_to_string(board: np.ndarray) -> str:
    """One-line form, 81 characters, '.' for empty cells."""
    return "".join(str(v) if v != EMPTY else "." for v in board.ravel())


def save_grid(path, board: np.ndarray) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(path, board, fmt="%d")
    return path


def read_grid(path) -> np.ndarray:
    """Load a grid written by `save_grid` (9 lines of 9 integers)."""
    try:
        data = np.loadtxt(path, dtype=int, ndmin=2)
    except ValueError as exc:
        raise InvalidGrid(f"Could not parse grid file {path}: {exc}") from exc
    return load_grid(data)


def find_mistakes(board: np.ndarray, puzzle: np.ndarray, solution: np.ndarray) -> list[tuple[int, int]]:
    """Non-clue cells holding a digit that disagrees with the reference solution."""
    wrong = (puzzle == EMPTY) & (board != EMPTY) & (board != solution)
    return [(int(r), int(c)) for r, c in np.argwhere(wrong)]


def is_board_correct(board: np.ndarray, solution: np.ndarray) -> bool:
    return bool(np.all(board != EMPTY) and np.array_equal(board, solution))
