"""
Puzzle Generator Module

Builds puzzles by clearing cells from a random full grid:
- every removal must keep the solution unique (bounded solution count)
- easy and medium tiers additionally keep the puzzle solvable by singles
- a cap on consecutive failed removals bounds the generation time

When the cap fires the puzzle keeps more clues than its tier asks for; this
is reported through GenerationStats.cap_reached rather than raised.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from .candidates import is_solvable_by_singles
from .grid import EMPTY, SIZE, count_clues, empty_grid
from .solver import count_solutions, make_rng, solve_board

MAX_FAILED_ATTEMPTS = 50
DEFAULT_DIFFICULTY = "easy"


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    target_clues: int
    singles_gate: bool


DIFFICULTY_PROFILES = {
    "easy": DifficultyProfile("easy", 48, True),
    "medium": DifficultyProfile("medium", 35, True),
    "hard": DifficultyProfile("hard", 25, False),
    "minima": DifficultyProfile("minima", 17, False),
}

PROFILE_ALIASES = {"minimal": "minima"}


def get_profile(difficulty) -> DifficultyProfile:
    """
    Resolve a tier name (case-insensitive) or pass a profile through.

    Unknown names fall back to the easy tier.
    """
    if isinstance(difficulty, DifficultyProfile):
        return difficulty
    key = str(difficulty).strip().lower()
    key = PROFILE_ALIASES.get(key, key)
    return DIFFICULTY_PROFILES.get(key, DIFFICULTY_PROFILES[DEFAULT_DIFFICULTY])


@dataclass
class GenerationStats:
    difficulty: str
    target_clues: int
    clues: int = SIZE * SIZE
    removals: int = 0
    failed_trials: int = 0
    cap_reached: bool = False
    elapsed: float = 0.0
    clue_history: list[int] = field(default_factory=list)  # clue count after each trial

    @property
    def reached_target(self) -> bool:
        return self.clues <= self.target_clues


@dataclass
class Puzzle:
    grid: np.ndarray
    solution: np.ndarray
    difficulty: str
    stats: GenerationStats

    @property
    def clues(self) -> int:
        return count_clues(self.grid)


def generate_full_grid(rng: np.random.Generator | None = None) -> np.ndarray:
    """A random, completely filled valid grid."""
    board = empty_grid()
    solve_board(board, rng=rng)
    return board


def passes_singles_gate(board: np.ndarray) -> bool:
    """
    True when `board` does not need anything beyond naked or hidden singles:
    the grid itself offers a single, and so does every grid reached by
    filling singles until it is solved.
    """
    return is_solvable_by_singles(board)


def generate_puzzle(
    profile=DEFAULT_DIFFICULTY,
    rng: np.random.Generator | None = None,
    max_attempts: int = MAX_FAILED_ATTEMPTS,
    full_grid: np.ndarray | None = None,
    debug: bool = False,
) -> tuple[np.ndarray, GenerationStats]:
    """
    Clear cells from a full grid until the tier's clue target is reached.

    Cells are tried in a shuffled order held in a deque: the next trial comes
    off the right end, a rejected cell goes back on the left end. A rejected
    trial restores the cell and counts towards `max_attempts`; an accepted one
    resets the count. Reaching the cap stops the loop early.

    Args:
        profile: tier name or DifficultyProfile
        rng: random source for the full grid, the removal order and the solver
        max_attempts: consecutive failed removals tolerated before giving up
        full_grid: optional solved grid to start from (copied, not mutated)
        debug: print one line per removal trial

    Returns:
        tuple: (puzzle grid, GenerationStats)
    """
    profile = get_profile(profile)
    if rng is None:
        rng = make_rng()

    start = time.perf_counter()
    if full_grid is None:
        full_grid = generate_full_grid(rng)
    puzzle = full_grid.copy()

    order = rng.permutation(SIZE * SIZE)
    queue = deque(divmod(int(i), SIZE) for i in order)

    stats = GenerationStats(profile.name, profile.target_clues, clues=count_clues(puzzle))
    attempts = 0

    while stats.clues > profile.target_clues and queue:
        if attempts >= max_attempts:
            stats.cap_reached = True
            break

        r, c = queue.pop()
        original = puzzle[r, c]
        puzzle[r, c] = EMPTY
        accepted = count_solutions(puzzle.copy(), limit=2, rng=rng) == 1
        if accepted and profile.singles_gate:
            accepted = passes_singles_gate(puzzle)

        if accepted:
            stats.clues -= 1
            stats.removals += 1
            attempts = 0
        else:
            puzzle[r, c] = original
            queue.appendleft((r, c))
            attempts += 1
            stats.failed_trials += 1

        stats.clue_history.append(stats.clues)
        if debug:
            verdict = "removed" if accepted else "kept"
            print(f"      ({r},{c}) {verdict}: clues={stats.clues}, failed in a row={attempts}")

    stats.elapsed = time.perf_counter() - start
    return puzzle, stats


def create_puzzle(
    difficulty=DEFAULT_DIFFICULTY,
    rng: np.random.Generator | None = None,
    max_attempts: int = MAX_FAILED_ATTEMPTS,
    debug: bool = False,
) -> Puzzle:
    """Generate a puzzle and derive its reference solution from a solved copy."""
    profile = get_profile(difficulty)
    if rng is None:
        rng = make_rng()

    grid, stats = generate_puzzle(profile, rng=rng, max_attempts=max_attempts, debug=debug)
    solution = grid.copy()
    solve_board(solution, rng=rng)
    return Puzzle(grid=grid, solution=solution, difficulty=profile.name, stats=stats)
