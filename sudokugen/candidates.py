"""Candidate computation and singles detection used to grade how much deduction a grid needs."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

import numpy as np

from .grid import BOX, DIGITS, EMPTY, SIZE, is_placement_valid

Cell = tuple[int, int]  # (row, col) 0-based
Candidates = dict[Cell, set[int]]


class Technique(str, Enum):
    """Cheapest technique that makes progress on a grid."""

    EASY_SINGLE = "easy_single"
    REQUIRES_ADVANCED = "requires_advanced"
    SOLVED = "solved"


class Placement(NamedTuple):
    row: int
    col: int
    digit: int
    technique: str  # 'naked_single' or 'hidden_single'


def unit_cells_row(r: int) -> list[Cell]:
    return [(r, c) for c in range(SIZE)]


def unit_cells_col(c: int) -> list[Cell]:
    return [(r, c) for r in range(SIZE)]


def unit_cells_box(b: int) -> list[Cell]:
    r0 = BOX * (b // BOX)
    c0 = BOX * (b % BOX)
    return [(r0 + i, c0 + j) for i in range(BOX) for j in range(BOX)]


def unit_cells() -> list[list[Cell]]:
    """All 27 units: 9 rows, then 9 columns, then 9 boxes."""
    return (
        [unit_cells_row(i) for i in range(SIZE)]
        + [unit_cells_col(i) for i in range(SIZE)]
        + [unit_cells_box(i) for i in range(SIZE)]
    )


def compute_candidates(board: np.ndarray, row: int, col: int) -> set[int]:
    """Digits still allowed in (row, col); filled cells have none."""
    if board[row, col] != EMPTY:
        return set()
    r0 = (row // BOX) * BOX
    c0 = (col // BOX) * BOX
    used = (
        set(board[row, :].tolist())
        | set(board[:, col].tolist())
        | set(board[r0:r0 + BOX, c0:c0 + BOX].ravel().tolist())
    )
    return set(DIGITS) - used


def compute_all_candidates(board: np.ndarray) -> Candidates:
    return {
        (r, c): compute_candidates(board, r, c)
        for r in range(SIZE)
        for c in range(SIZE)
        if board[r, c] == EMPTY
    }


def find_naked_singles(board: np.ndarray, candidates: Candidates | None = None) -> list[Placement]:
    if candidates is None:
        candidates = compute_all_candidates(board)
    moves = []
    for (r, c), opts in candidates.items():
        if len(opts) == 1:
            moves.append(Placement(r, c, next(iter(opts)), "naked_single"))
    return moves


def find_hidden_singles(board: np.ndarray, candidates: Candidates | None = None) -> list[Placement]:
    """Digits with exactly one possible cell in some row, column or box."""
    if candidates is None:
        candidates = compute_all_candidates(board)
    moves = []
    seen = set()
    for cells in unit_cells():
        for d in DIGITS:
            spots = [cell for cell in cells if d in candidates.get(cell, ())]
            if len(spots) != 1:
                continue
            r, c = spots[0]
            if (r, c, d) not in seen:
                seen.add((r, c, d))
                moves.append(Placement(r, c, d, "hidden_single"))
    return moves


def _classify(candidates: Candidates) -> Technique:
    if any(len(opts) == 1 for opts in candidates.values()):
        return Technique.EASY_SINGLE

    for cells in unit_cells():
        for d in DIGITS:
            if sum(1 for cell in cells if d in candidates.get(cell, ())) == 1:
                return Technique.EASY_SINGLE

    if not candidates:
        return Technique.SOLVED
    return Technique.REQUIRES_ADVANCED


def classify_required_technique(board: np.ndarray) -> Technique:
    """
    Grade the next step needed on `board` without modifying it.

    Naked singles are checked first, then hidden singles over every unit and
    digit. A grid with no empty cells is SOLVED; anything else that offers no
    single needs a technique beyond singles.
    """
    return _classify(compute_all_candidates(board))


def _apply_singles(board: np.ndarray, candidates: Candidates) -> int:
    placed = 0
    for move in find_naked_singles(board, candidates) + find_hidden_singles(board, candidates):
        if board[move.row, move.col] != EMPTY:
            continue
        if is_placement_valid(board, move.row, move.col, move.digit):
            board[move.row, move.col] = move.digit
            placed += 1
    return placed


def solve_with_singles(board: np.ndarray) -> tuple[np.ndarray, int]:
    """
    Fill a copy of `board` using naked and hidden singles only.

    Returns:
        (reduced grid, number of placements made)
    """
    work = board.copy()
    placed = 0
    while True:
        step = _apply_singles(work, compute_all_candidates(work))
        if step == 0:
            return work, placed
        placed += step


def is_solvable_by_singles(board: np.ndarray) -> bool:
    """
    True when singles alone carry `board` to a full grid, i.e. no state along
    the way classifies as REQUIRES_ADVANCED.
    """
    work = board.copy()
    while True:
        candidates = compute_all_candidates(work)
        level = _classify(candidates)
        if level is Technique.SOLVED:
            return True
        if level is Technique.REQUIRES_ADVANCED:
            return False
        if _apply_singles(work, candidates) == 0:
            return False
