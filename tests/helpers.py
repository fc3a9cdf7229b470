from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable

from hexstack.components.board import Board
from hexstack.components.run_state import RunState
from hexstack.game import Game, create_game
from hexstack.systems.board_ops import install_board, place_tile
from hexstack.utils.run_state import get_or_create_run_state


def empty_board(cols: int = 7, rows: int = 9, num_colors: int = 3) -> Board:
    return Board(cols=cols, rows=rows, num_colors=num_colors)


def fill_column(board: Board, col: int, rows: Iterable[int], color_index: int) -> None:
    for row in rows:
        place_tile(board, col, row, color_index)


def playing_game(
    tmp_path: Path,
    *,
    level: int = 1,
    board: Board | None = None,
    seed: int = 0,
    settle_delay_ms: float = 0.0,
) -> Game:
    """A game already on the PLAYING screen, optionally with a hand-built board."""
    game = create_game(
        save_path=tmp_path / "progress.json",
        rng=random.Random(seed),
        settle_delay_ms=settle_delay_ms,
    )
    assert game.flow.start_level(level, force=True)
    if board is not None:
        install_board(game.world, board)
    return game


def run_state(game: Game) -> RunState:
    return get_or_create_run_state(game.world)
