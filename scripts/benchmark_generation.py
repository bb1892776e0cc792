"""
Generation benchmark: run the puzzle generator repeatedly and report clue statistics per tier.

Imports the `sudokugen` package, so install the project first (`pip install -e .`
from the repository root) or run from the root with it on PYTHONPATH.

Usage:
  python scripts/benchmark_generation.py
  python scripts/benchmark_generation.py --difficulty easy medium --runs 20 --seed 1 --max-attempts 30
"""

from __future__ import annotations

import argparse
from typing import Dict, List

import numpy as np

from sudokugen.generator import DIFFICULTY_PROFILES, MAX_FAILED_ATTEMPTS, generate_puzzle
from sudokugen.solver import count_solutions, make_rng


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def run_tier(difficulty: str, runs: int, rng: np.random.Generator, max_attempts: int) -> Dict[str, np.ndarray]:
    """Generate `runs` puzzles and collect per-run clue counts, timings and cap hits."""
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")
    clues: List[int] = []
    elapsed: List[float] = []
    capped: List[bool] = []
    for _ in range(runs):
        puzzle, stats = generate_puzzle(difficulty, rng=rng, max_attempts=max_attempts)
        # Uniqueness is enforced on every removal; re-check the final grid anyway.
        if count_solutions(puzzle.copy(), limit=2, rng=rng) != 1:
            raise RuntimeError(f"{difficulty}: generated puzzle does not have a unique solution")
        clues.append(stats.clues)
        elapsed.append(stats.elapsed)
        capped.append(stats.cap_reached)
    return {
        "clues": np.array(clues),
        "elapsed": np.array(elapsed),
        "capped": np.array(capped),
    }


def print_report(difficulty: str, result: Dict[str, np.ndarray]) -> None:
    target = DIFFICULTY_PROFILES[difficulty].target_clues
    clues = result["clues"]
    elapsed = result["elapsed"]
    cap_rate = float(result["capped"].mean()) if result["capped"].size else 0.0
    print(
        f"{difficulty:>7}: target={target:2d} clues mean={clues.mean():5.1f} "
        f"min={clues.min():2d} max={clues.max():2d} | cap hit {cap_rate:4.0%} "
        f"| {elapsed.mean():.2f}s avg, {elapsed.max():.2f}s worst"
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark Sudoku puzzle generation per difficulty tier.")
    parser.add_argument("--difficulty", nargs="+", default=["easy", "medium"],
                        choices=sorted(DIFFICULTY_PROFILES), help="Tiers to benchmark.")
    parser.add_argument("--runs", type=positive_int, default=10, help="Puzzles generated per tier.")
    parser.add_argument("--seed", type=int, help="Seed for reproducible runs.")
    parser.add_argument("--max-attempts", type=int, default=MAX_FAILED_ATTEMPTS,
                        help="Consecutive failed removals before a run stops early.")
    args = parser.parse_args(argv)

    rng = make_rng(args.seed)
    for difficulty in args.difficulty:
        result = run_tier(difficulty, args.runs, rng, args.max_attempts)
        print_report(difficulty, result)


if __name__ == "__main__":
    main()
