"""
Entry point for running the sudokugen package as a module.

Usage:
    python -m sudokugen --difficulty easy
"""

from .sudoku_generator import main

if __name__ == '__main__':
    main()
