"""
Sudoku Generator - Puzzle Generation Engine

This package contains modules for:
- Grid loading, validation and rendering
- Randomized backtracking solving and bounded solution counting
- Candidate analysis (naked and hidden singles) for difficulty grading
- Unique-solution puzzle generation with difficulty tiers
"""

from .candidates import Technique, classify_required_technique, compute_candidates
from .generator import (
    DIFFICULTY_PROFILES,
    DifficultyProfile,
    Puzzle,
    create_puzzle,
    generate_full_grid,
    generate_puzzle,
    get_profile,
)
from .grid import InvalidGrid, is_placement_valid, load_grid
from .solver import count_solutions, make_rng, solve, solve_board

__version__ = "1.0.0"
__author__ = "Sudoku Generator Team"
