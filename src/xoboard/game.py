"""Core rules for 3x3 tic-tac-toe: board snapshots, move application, win detection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


# ---------- Marks and cells ----------


class Mark(str, Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


class Cell(str, Enum):
    # ' ' (space) for empty, same as the mark's letter otherwise
    EMPTY = " "
    X = "X"
    O = "O"

    @classmethod
    def of(cls, mark: Mark) -> "Cell":
        return cls(mark.value)

    @property
    def mark(self) -> Optional[Mark]:
        return None if self is Cell.EMPTY else Mark(self.value)


Board = Tuple[Cell, ...]


def empty_board() -> Board:
    return (Cell.EMPTY,) * CELL_COUNT


def position(index: int) -> Tuple[int, int]:
    """Map a linear cell index to its (row, column) pair."""
    return index // BOARD_SIZE, index % BOARD_SIZE


# ---------- Status ----------


@dataclass(frozen=True)
class InProgress:
    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Won:
    mark: Mark

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Draw:
    @property
    def is_terminal(self) -> bool:
        return True


Status = Union[InProgress, Won, Draw]

IN_PROGRESS = InProgress()
DRAW = Draw()


# ---------- Errors ----------


class MoveError(ValueError):
    """Base class for every rejected move. The state passed in is left untouched."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class InvalidIndex(MoveError):
    def __init__(self, index: int) -> None:
        super().__init__(f"Cell index {index} is outside 0..{CELL_COUNT - 1}", index)


class CellOccupied(MoveError):
    def __init__(self, index: int) -> None:
        super().__init__(f"Cell {index} already occupied", index)


class GameAlreadyOver(MoveError):
    def __init__(self, index: int) -> None:
        super().__init__("Game already finished", index)


# ---------- Win detection ----------


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """Return the first line, in ``WINNING_LINES`` order, held by a single mark."""
    for line in WINNING_LINES:
        a, b, c = line
        v = board[a]
        if v is not Cell.EMPTY and v == board[b] == board[c]:
            return line
    return None


def find_winner(board: Board) -> Optional[Mark]:
    line = winning_line(board)
    if line is None:
        return None
    return board[line[0]].mark


# ---------- Game state ----------


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one game. New snapshots come from :func:`apply_move`."""

    board: Board = empty_board()
    next_mark: Mark = Mark.X
    status: Status = IN_PROGRESS

    def __post_init__(self) -> None:
        if len(self.board) != CELL_COUNT:
            raise ValueError(f"Board must have exactly {CELL_COUNT} cells")

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def is_full(self) -> bool:
        return all(c is not Cell.EMPTY for c in self.board)

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.board) if c is Cell.EMPTY]


def new_game() -> GameState:
    return GameState()


def apply_move(state: GameState, index: int) -> GameState:
    """Place ``state.next_mark`` at ``index`` and return the resulting snapshot.

    Checks run in a fixed order: index range, then whether the game is
    already over, then whether the cell is free. The first failing check
    raises its :class:`MoveError` subclass.
    """
    _check_index(index)
    if state.is_over:
        raise GameAlreadyOver(index)
    if state.board[index] is not Cell.EMPTY:
        raise CellOccupied(index)

    cells = list(state.board)
    cells[index] = Cell.of(state.next_mark)
    board = tuple(cells)

    winner = find_winner(board)
    if winner is not None:
        return replace(state, board=board, status=Won(winner))
    if all(c is not Cell.EMPTY for c in board):
        return replace(state, board=board, status=DRAW)
    return replace(state, board=board, next_mark=state.next_mark.other)


# ---- read accessors ----


def status(state: GameState) -> Status:
    return state.status


def cell(state: GameState, index: int) -> Cell:
    _check_index(index)
    return state.board[index]


def next_mark(state: GameState) -> Mark:
    return state.next_mark


def _check_index(index: int) -> None:
    # bool is an int subclass but never a cell index
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndex(index)
    if not 0 <= index < CELL_COUNT:
        raise InvalidIndex(index)
