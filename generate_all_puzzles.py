#!/usr/bin/env python3
"""
Generate one puzzle for every difficulty tier and summarize the results.
"""

import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudokugen.generator import DIFFICULTY_PROFILES
from sudokugen.sudoku_generator import SudokuGenerator


def main():
    """Generate easy, medium, hard and minima puzzles into ./output."""
    difficulties = list(DIFFICULTY_PROFILES)

    print(f"Generating {len(difficulties)} puzzles")
    print("=" * 60)

    generator = SudokuGenerator(save_output=True)
    output_dir = "output"

    results = {
        'on_target': [],
        'above_target': [],
        'error': []
    }

    for i, difficulty in enumerate(difficulties, 1):
        print(f"\n[{i}/{len(difficulties)}] Generating {difficulty}...")

        try:
            result = generator.generate(difficulty, output_dir)
            if result['solution'] is None:
                results['error'].append(difficulty)
            elif result['stats'].reached_target:
                results['on_target'].append(difficulty)
            else:
                results['above_target'].append(f"{difficulty} ({result['clues']} clues)")
        except Exception as e:
            print(f"Error generating {difficulty}: {e}")
            results['error'].append(difficulty)

    # Print summary
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"✅ On target:     {len(results['on_target'])}/{len(difficulties)}")
    print(f"⚠️  Above target:  {len(results['above_target'])}/{len(difficulties)}")
    print(f"❌ Errors:        {len(results['error'])}/{len(difficulties)}")

    if results['above_target']:
        print(f"\nStopped early by the attempt cap: {', '.join(results['above_target'])}")

    print(f"\nPuzzles saved to: {output_dir}/")
    print("Look for files named: <difficulty>_puzzle.txt and <difficulty>_solution.txt")


if __name__ == '__main__':
    main()
