"""Unit tests for xoboard game logic."""

import pytest

from xoboard.game import (
    DRAW,
    IN_PROGRESS,
    WINNING_LINES,
    Cell,
    CellOccupied,
    GameAlreadyOver,
    GameState,
    InvalidIndex,
    Mark,
    Won,
    apply_move,
    cell,
    find_winner,
    new_game,
    next_mark,
    position,
    status,
    winning_line,
)


def play(*indices):
    state = new_game()
    for index in indices:
        state = apply_move(state, index)
    return state


def board_with(marks):
    """Build a board from a {index: Mark} mapping."""
    return tuple(Cell.of(marks[i]) if i in marks else Cell.EMPTY for i in range(9))


def test_new_game_is_empty_and_x_starts():
    state = new_game()
    assert state.board == (Cell.EMPTY,) * 9
    assert next_mark(state) is Mark.X
    assert status(state) == IN_PROGRESS
    assert state.empty_cells() == list(range(9))


def test_board_must_have_nine_cells():
    with pytest.raises(ValueError):
        GameState(board=(Cell.EMPTY,) * 8)


def test_position_maps_index_to_row_and_column():
    assert position(0) == (0, 0)
    assert position(5) == (1, 2)
    assert position(7) == (2, 1)


@pytest.mark.parametrize("index", range(9))
def test_move_places_the_mark_that_was_next(index):
    state = new_game()
    before = next_mark(state)
    after = apply_move(state, index)
    assert cell(after, index) is Cell.of(before)
    assert sum(c is not Cell.EMPTY for c in after.board) == 1


def test_previous_snapshot_is_not_mutated():
    state = new_game()
    apply_move(state, 4)
    assert state == new_game()


def test_occupied_cell_is_rejected_without_changes():
    state = play(4)
    with pytest.raises(CellOccupied) as excinfo:
        apply_move(state, 4)
    assert excinfo.value.index == 4
    assert state.board[4] is Cell.X
    assert next_mark(state) is Mark.O


def test_turns_alternate():
    state = new_game()
    seen = []
    for index in (0, 4, 8, 1, 7, 6):
        seen.append(next_mark(state))
        state = apply_move(state, index)
    assert seen == [Mark.X, Mark.O] * 3
    assert status(state) == IN_PROGRESS


@pytest.mark.parametrize("line", WINNING_LINES)
def test_each_line_wins(line):
    board = board_with({i: Mark.O for i in line})
    assert find_winner(board) is Mark.O
    assert winning_line(board) == line


@pytest.mark.parametrize("line", WINNING_LINES)
def test_completing_a_line_through_play_wins(line):
    # O only gets two moves, both off the line
    o_moves = [i for i in range(9) if i not in line][:2]
    state = new_game()
    for x_index, o_index in zip(line, o_moves + [None]):
        state = apply_move(state, x_index)
        if o_index is not None:
            state = apply_move(state, o_index)
    assert status(state) == Won(Mark.X)
    assert next_mark(state) is Mark.X


def test_no_winner_on_empty_or_mixed_line():
    assert find_winner((Cell.EMPTY,) * 9) is None
    assert find_winner(board_with({0: Mark.X, 1: Mark.O, 2: Mark.X})) is None


def test_first_line_in_order_wins_tie_break():
    marks = {i: Mark.O for i in (0, 1, 2)}
    marks.update({i: Mark.X for i in (6, 7, 8)})
    board = board_with(marks)
    assert winning_line(board) == (0, 1, 2)
    assert find_winner(board) is Mark.O


def test_top_row_win():
    state = play(0, 3, 1, 4, 2)
    assert status(state) == Won(Mark.X)
    assert winning_line(state.board) == (0, 1, 2)


def test_draw():
    state = play(0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert status(state) == DRAW
    assert state.is_full()
    assert find_winner(state.board) is None


def test_win_on_last_cell_is_not_a_draw():
    # X: 0, 2, 3, 7, 6 -> column {0, 3, 6} on the ninth move
    state = play(0, 1, 2, 4, 3, 5, 7, 8, 6)
    assert status(state) == Won(Mark.X)


@pytest.mark.parametrize(
    "state",
    [play(0, 3, 1, 4, 2), play(0, 1, 2, 4, 3, 5, 7, 6, 8)],
)
def test_terminal_state_rejects_moves(state):
    free = state.empty_cells() or [0]
    with pytest.raises(GameAlreadyOver):
        apply_move(state, free[0])
    assert state.is_over


@pytest.mark.parametrize("index", [-1, 9, 100])
def test_out_of_range_index_is_rejected(index):
    state = new_game()
    with pytest.raises(InvalidIndex):
        apply_move(state, index)
    assert state == new_game()


def test_index_is_checked_before_game_over():
    state = play(0, 3, 1, 4, 2)
    with pytest.raises(InvalidIndex):
        apply_move(state, 9)


def test_game_over_is_checked_before_occupancy():
    state = play(0, 3, 1, 4, 2)
    with pytest.raises(GameAlreadyOver):
        apply_move(state, 0)


def test_cell_accessor_rejects_bad_index():
    with pytest.raises(InvalidIndex):
        cell(new_game(), 9)
