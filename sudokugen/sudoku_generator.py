"""
Sudoku Generator - Main Application Module
"""

import argparse
import os
import sys

from .generator import (
    DIFFICULTY_PROFILES,
    MAX_FAILED_ATTEMPTS,
    generate_full_grid,
    generate_puzzle,
    get_profile,
)
from .grid import InvalidGrid, count_clues, format_board, grid_to_string, read_grid, save_grid
from .solver import has_unique_solution, make_rng, solve_board, solve_puzzle


class SudokuGenerator:
    """
    Main class for the Sudoku Generator application.

    This class runs the generation pipeline for one difficulty tier and
    reports each stage on the console: full grid, clue removal, reference
    solution.
    """

    def __init__(self, seed=None, max_attempts=MAX_FAILED_ATTEMPTS, save_output=True, debug=False):
        """
        Initialize the Sudoku Generator.

        Args:
            seed (int | None): Seed for the random source (None = fresh entropy)
            max_attempts (int): Consecutive failed removals before giving up
            save_output (bool): Whether to write puzzle/solution text files
            debug (bool): Print every removal trial
        """
        self.seed = seed
        self.max_attempts = max_attempts
        self.save_output = save_output
        self.debug = debug
        self.rng = make_rng(seed)
        self.grids = {}

    def generate(self, difficulty='easy', output_dir='output'):
        """
        Generate one puzzle through the complete pipeline.

        Pipeline steps:
        1. Fill a random complete grid
        2. Remove clues while the solution stays unique (and singles-solvable
           for gated tiers)
        3. Solve a copy of the puzzle to obtain the reference solution

        Args:
            difficulty (str): Tier name ('easy', 'medium', 'hard', 'minima')
            output_dir (str): Directory to save puzzle files

        Returns:
            dict: puzzle, solution and generation statistics
        """
        profile = get_profile(difficulty)
        self.grids = {}

        print(f"\n{'='*60}")
        print(f"Generating: {profile.name.upper()} (target clues: {profile.target_clues})")
        print(f"{'='*60}")

        print("\n[1/3] Generating full grid...")
        full_grid = generate_full_grid(self.rng)
        self.grids['full'] = full_grid
        print(format_board(full_grid))

        print("\n[2/3] Removing clues...")
        if profile.singles_gate:
            print("      Singles gate: on (puzzle must stay solvable by naked/hidden singles)")
        else:
            print("      Singles gate: off (uniqueness check only)")

        puzzle, stats = generate_puzzle(
            profile,
            rng=self.rng,
            max_attempts=self.max_attempts,
            full_grid=full_grid,
            debug=self.debug,
        )
        self.grids['puzzle'] = puzzle
        print(f"      Removed {stats.removals} clues in {stats.elapsed:.2f}s "
              f"({stats.failed_trials} rejected trials)")
        print(f"      Clues remaining: {stats.clues}")
        if stats.cap_reached:
            print(f"      WARNING: stopped after {self.max_attempts} failed removals in a row; "
                  f"puzzle keeps {stats.clues - stats.target_clues} clues above target")
        print(format_board(puzzle))

        print("\n[3/3] Solving reference...")
        solution = puzzle.copy()
        if solve_board(solution, rng=self.rng):
            print("      ✓ Reference solution:")
            print(format_board(solution))
        else:
            print("      ✗ Could not solve generated puzzle")
            solution = None
        self.grids['solution'] = solution

        if self.save_output and solution is not None:
            self._save_results(profile.name, output_dir)

        print(f"\n{'='*60}")
        print("Generation complete!")
        print(f"Puzzle: {grid_to_string(puzzle)}")
        print(f"{'='*60}\n")

        return {
            'difficulty': profile.name,
            'puzzle': puzzle,
            'solution': solution,
            'clues': stats.clues,
            'stats': stats,
        }

    def solve_file(self, path):
        """
        Load a puzzle from a text file, solve it and report uniqueness.

        Returns:
            np.ndarray | None: the solved grid
        """
        board = read_grid(path)
        print(f"\nLoaded puzzle ({count_clues(board)} clues):")
        print(format_board(board))

        solution, message = solve_puzzle(board, rng=self.rng)
        if solution is None:
            print(f"      ✗ Could not solve: {message}")
            return None

        print(f"      ✓ Solved puzzle ({message}):")
        print(format_board(solution))
        if has_unique_solution(board, rng=self.rng):
            print("      Solution is unique")
        else:
            print("      WARNING: puzzle has more than one solution")
        return solution

    def _save_results(self, name, output_dir):
        """
        Save the puzzle and its solution as text grids.

        Args:
            name (str): File name prefix (the difficulty tier)
            output_dir (str): Output directory
        """
        os.makedirs(output_dir, exist_ok=True)
        for key in ('puzzle', 'solution'):
            save_grid(os.path.join(output_dir, f"{name}_{key}.txt"), self.grids[key])

        print(f"\n      Saved puzzle and solution to {output_dir}/")


def main(argv=None):
    """
    Main entry point for the Sudoku Generator application.

    Handles command-line arguments and generates or solves puzzles.
    """
    parser = argparse.ArgumentParser(
        description='Sudoku Generator - unique-solution puzzles with difficulty tiers',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Generate an easy puzzle:
    python -m sudokugen --difficulty easy

  Reproducible hard puzzle without writing files:
    python -m sudokugen -d hard --seed 7 --no-save

  Solve a puzzle stored as 9 lines of 9 digits:
    python -m sudokugen --solve output/easy_puzzle.txt
        """
    )

    parser.add_argument('--difficulty', '-d', default='easy',
                        choices=sorted(DIFFICULTY_PROFILES) + ['minimal'],
                        help='Difficulty tier (default: easy)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible puzzles')
    parser.add_argument('--max-attempts', type=int, default=MAX_FAILED_ATTEMPTS,
                        help=f'Consecutive failed removals before stopping (default: {MAX_FAILED_ATTEMPTS})')
    parser.add_argument('--output', '-o', default='output',
                        help='Output directory (default: output)')
    parser.add_argument('--no-save', action='store_true',
                        help='Do not save puzzle and solution files')
    parser.add_argument('--solve', metavar='PATH',
                        help='Solve the puzzle stored in PATH instead of generating one')
    parser.add_argument('--debug', action='store_true',
                        help='Print every clue-removal trial')

    args = parser.parse_args(argv)

    generator = SudokuGenerator(
        seed=args.seed,
        max_attempts=args.max_attempts,
        save_output=not args.no_save,
        debug=args.debug,
    )

    if args.solve:
        if not os.path.exists(args.solve):
            print(f"Error: Puzzle file not found: {args.solve}")
            sys.exit(1)
        try:
            solution = generator.solve_file(args.solve)
        except (InvalidGrid, OSError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        sys.exit(0 if solution is not None else 1)

    try:
        result = generator.generate(args.difficulty, args.output)

        if result['solution'] is None:
            print("\nGeneration failed. Please try again.")
            sys.exit(1)

    except Exception as e:
        print(f"\nError during generation: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
