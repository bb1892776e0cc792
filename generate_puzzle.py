#!/usr/bin/env python3
"""
Convenience script to generate Sudoku puzzles.

This script provides a simple interface to the Sudoku Generator pipeline.

Usage:
    python generate_puzzle.py --difficulty easy
    python generate_puzzle.py -d hard --seed 42 --output my_output/
    python generate_puzzle.py --solve my_output/hard_puzzle.txt
"""

import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudokugen.sudoku_generator import main

if __name__ == '__main__':
    main()
