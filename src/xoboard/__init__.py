"""xoboard package exposing the tic-tac-toe rule engine and the web application."""

from .game import (
    Cell,
    CellOccupied,
    Draw,
    GameAlreadyOver,
    GameState,
    InProgress,
    InvalidIndex,
    Mark,
    MoveError,
    Won,
    apply_move,
    cell,
    find_winner,
    new_game,
    next_mark,
    status,
    winning_line,
)
from .ui import app

__all__ = [
    "Cell",
    "CellOccupied",
    "Draw",
    "GameAlreadyOver",
    "GameState",
    "InProgress",
    "InvalidIndex",
    "Mark",
    "MoveError",
    "Won",
    "app",
    "apply_move",
    "cell",
    "find_winner",
    "new_game",
    "next_mark",
    "status",
    "winning_line",
]
