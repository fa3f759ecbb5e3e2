"""FastAPI-powered web UI for playing xoboard in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .game import (
    CELL_COUNT,
    Cell,
    GameState,
    MoveError,
    Won,
    apply_move,
    new_game,
    winning_line,
)

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for the latest snapshot of a game and the moves that led to it."""

    state: GameState = field(default_factory=new_game)
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="xoboard", description="Tic-tac-toe played in the browser")


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=CELL_COUNT - 1)


def status_text(state: GameState) -> str:
    """Human-readable status line shown above the board."""
    if isinstance(state.status, Won):
        return f"Winner: {state.status.mark.value}"
    if state.is_over:
        return "Draw"
    return f"Next player: {state.next_mark.value}"


def _status_name(state: GameState) -> str:
    if isinstance(state.status, Won):
        return "won"
    if state.is_over:
        return "draw"
    return "in_progress"


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        state = session.state
        line = winning_line(state.board)
        payload: Dict[str, object] = {
            "id": game_id,
            "cells": [c.value if c is not Cell.EMPTY else "" for c in state.board],
            "nextPlayer": state.next_mark.value,
            "status": _status_name(state),
            "winner": state.status.mark.value if isinstance(state.status, Won) else None,
            "winningLine": list(line) if line is not None else None,
            "statusText": status_text(state),
            "availableCells": [] if state.is_over else state.empty_cells(),
            "moveLog": list(session.move_log),
        }
        if session.move_log:
            payload["lastMove"] = session.move_log[-1]
        return payload


def _apply_player_move(game_id: str, session: GameSession, cell_index: int) -> None:
    with session.lock:
        previous = session.state
        try:
            session.state = apply_move(previous, cell_index)
        except MoveError as exc:
            logger.info("Rejected move at %d in game %s: %s", cell_index, game_id, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        session.move_log.append(
            {"player": previous.next_mark.value, "cellIndex": cell_index}
        )
        logger.debug(
            "Game %s: %s played %d", game_id, previous.next_mark.value, cell_index
        )
        if session.state.is_over:
            logger.info("Game %s finished: %s", game_id, status_text(session.state))


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>xoboard</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(420px, 100%);
        text-align: center;
      }
      h1 {
        margin: 0 0 1rem;
        letter-spacing: 0.06em;
      }
      .status {
        font-weight: 600;
        margin-bottom: 1rem;
        min-height: 1.5em;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 6px;
        margin: 0 auto 1.25rem;
        width: min(300px, 100%);
      }
      .square {
        aspect-ratio: 1;
        font-size: 2.4rem;
        font-weight: 700;
        border: none;
        border-radius: 10px;
        background: #eef1ff;
        color: #0c1a33;
        cursor: pointer;
      }
      .square:disabled {
        cursor: default;
      }
      .square.win {
        background: #ffe9a8;
      }
      .message {
        color: #b3261e;
        min-height: 1.25em;
        margin-bottom: 1rem;
      }
      .new-game {
        padding: 0.6rem 1.4rem;
        border: none;
        border-radius: 999px;
        background: #3451c7;
        color: #fff;
        font-weight: 600;
        cursor: pointer;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>xoboard</h1>
      <div id=\"status\" class=\"status\"></div>
      <div id=\"board\" class=\"board\"></div>
      <div id=\"message\" class=\"message\"></div>
      <button id=\"new-game\" class=\"new-game\" type=\"button\">New game</button>
    </main>
    <script>
      const boardContainer = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const messageEl = document.getElementById('message');
      const newGameButton = document.getElementById('new-game');

      let gameId = null;
      let gameState = null;
      let isRequestPending = false;

      function renderBoard() {
        boardContainer.innerHTML = '';
        const cells = gameState ? gameState.cells : Array(9).fill('');
        const available = new Set(gameState ? gameState.availableCells : []);
        const line = new Set(gameState?.winningLine || []);
        cells.forEach((value, index) => {
          const square = document.createElement('button');
          square.type = 'button';
          square.className = 'square';
          if (line.has(index)) {
            square.classList.add('win');
          }
          square.textContent = value;
          square.disabled = !available.has(index);
          square.addEventListener('click', () => sendMove(index));
          boardContainer.appendChild(square);
        });
      }

      function setState(data) {
        gameId = data.id;
        gameState = data;
        statusEl.textContent = data.statusText;
        renderBoard();
      }

      async function startGame() {
        if (isRequestPending) return;
        isRequestPending = true;
        messageEl.textContent = '';
        statusEl.textContent = 'Setting up your game…';
        try {
          const response = await fetch('/api/game', { method: 'POST' });
          if (!response.ok) {
            throw new Error('Unable to start game');
          }
          setState(await response.json());
        } catch (error) {
          messageEl.textContent = error.message || 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      async function sendMove(cellIndex) {
        if (!gameId || isRequestPending || gameState.status !== 'in_progress') {
          return;
        }
        isRequestPending = true;
        messageEl.textContent = '';
        try {
          const response = await fetch(`/api/game/${gameId}/move`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ cellIndex }),
          });
          if (!response.ok) {
            const payload = await response.json().catch(() => ({}));
            messageEl.textContent = payload?.detail || 'Invalid move';
            return;
          }
          setState(await response.json());
        } catch (error) {
          messageEl.textContent = 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      newGameButton.addEventListener('click', startGame);
      renderBoard();
      startGame();
    </script>
  </body>
</html>
"""
