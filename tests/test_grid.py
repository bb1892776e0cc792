# tests/test_grid.py
import numpy as np
import pytest

from sudokugen.grid import (
    InvalidGrid,
    count_clues,
    empty_grid,
    find_conflicts,
    find_empty,
    find_mistakes,
    format_board,
    grid_to_string,
    is_board_correct,
    is_complete,
    is_placement_valid,
    load_grid,
    read_grid,
    save_grid,
)


# ---------- Loading ----------


def test_load_grid_from_nested_lists(puzzle):
    board = load_grid(puzzle.tolist())
    assert board.shape == (9, 9)
    assert np.array_equal(board, puzzle)


def test_load_grid_returns_independent_copy(puzzle):
    board = load_grid(puzzle)
    board[0, 0] = 0
    assert puzzle[0, 0] == 5


def test_load_grid_from_string_accepts_dots_and_zeros(puzzle):
    text = grid_to_string(puzzle)
    assert len(text) == 81
    assert np.array_equal(load_grid(text), puzzle)
    assert np.array_equal(load_grid(text.replace(".", "0")), puzzle)


def test_load_grid_string_ignores_whitespace(puzzle):
    text = "\n".join(grid_to_string(puzzle)[i:i + 9] for i in range(0, 81, 9))
    assert np.array_equal(load_grid(text), puzzle)


@pytest.mark.parametrize(
    "data",
    [
        [[0] * 9 for _ in range(8)],
        [[0] * 8 for _ in range(9)],
        [[0] * 9 for _ in range(8)] + [[0] * 8],
        [[10] + [0] * 8] + [[0] * 9 for _ in range(8)],
        [[-1] + [0] * 8] + [[0] * 9 for _ in range(8)],
        [[0.5] * 9 for _ in range(9)],
        "123",
        "x" * 81,
    ],
)
def test_load_grid_rejects_malformed_input(data):
    with pytest.raises(InvalidGrid):
        load_grid(data)


def test_invalid_grid_is_a_value_error():
    assert issubclass(InvalidGrid, ValueError)


# ---------- Placement validity ----------


def test_placement_rejects_row_column_and_box_duplicates(puzzle):
    assert not is_placement_valid(puzzle, 0, 2, 5)  # row 0 has 5
    assert not is_placement_valid(puzzle, 2, 0, 4)  # column 0 has 4
    assert not is_placement_valid(puzzle, 2, 0, 3)  # box 0 has 3
    assert is_placement_valid(puzzle, 0, 2, 4)


def test_placement_check_is_pure(puzzle):
    before = puzzle.copy()
    first = is_placement_valid(puzzle, 4, 4, 5)
    second = is_placement_valid(puzzle, 4, 4, 5)
    assert first == second
    assert np.array_equal(puzzle, before)


def test_find_empty_is_row_major(puzzle):
    assert find_empty(puzzle) == (0, 2)
    assert find_empty(empty_grid()) == (0, 0)


def test_find_empty_returns_none_for_full_grid(solution):
    assert find_empty(solution) is None


# ---------- Consistency ----------


def test_find_conflicts_reports_each_unit():
    board = empty_grid()
    board[0, 0] = 7
    board[0, 8] = 7
    board[8, 0] = 7
    notes = find_conflicts(board)
    assert "Row 1 has duplicate given digit" in notes
    assert "Column 1 has duplicate given digit" in notes
    assert find_conflicts(empty_grid()) == []


def test_find_conflicts_detects_box_duplicate():
    board = empty_grid()
    board[0, 0] = 4
    board[1, 1] = 4
    assert find_conflicts(board) == ["3x3 block (1,1) has duplicate given digit"]


def test_is_complete(solution):
    assert is_complete(solution)

    partial = solution.copy()
    partial[4, 4] = 0
    assert not is_complete(partial)

    swapped = solution.copy()
    swapped[0, 0], swapped[0, 1] = swapped[0, 1], swapped[0, 0]
    assert not is_complete(swapped)


def test_count_clues(puzzle, solution):
    assert count_clues(puzzle) == 30
    assert count_clues(solution) == 81
    assert count_clues(empty_grid()) == 0


# ---------- Rendering and files ----------


def test_format_board_layout(puzzle):
    text = format_board(puzzle)
    lines = text.splitlines()
    assert len(lines) == 11
    assert lines[0] == "5 3 . | . 7 . | . . ."
    assert set(lines[3]) == {"-"}


def test_save_and_read_grid(tmp_path, puzzle):
    path = save_grid(tmp_path / "nested" / "puzzle.txt", puzzle)
    assert path.exists()
    assert np.array_equal(read_grid(path), puzzle)


def test_read_grid_rejects_garbage(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("1 2 3\nfoo bar baz\n")
    with pytest.raises(InvalidGrid):
        read_grid(path)


def test_read_grid_rejects_wrong_shape(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("0 0 0\n0 0 0\n")
    with pytest.raises(InvalidGrid):
        read_grid(path)


# ---------- Scoring ----------


def test_find_mistakes_ignores_clues_and_blanks(puzzle, solution):
    board = puzzle.copy()
    board[0, 2] = 4  # correct
    board[0, 3] = 9  # wrong
    board[0, 0] = 1  # clue cell, not a player entry
    assert find_mistakes(board, puzzle, solution) == [(0, 3)]


def test_is_board_correct(puzzle, solution):
    assert is_board_correct(solution.copy(), solution)
    assert not is_board_correct(puzzle, solution)
