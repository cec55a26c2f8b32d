"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys

import pytest

from gosgf.core.board import Board
from gosgf.core.enums import Stone
from gosgf.core.types import Point
from gosgf.game.controller import GameController

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def place_all(board: Board, stones: list[tuple[int, int, Stone]]) -> None:
    """Play every ``(x, y, color)`` in order, ignoring turn order."""
    for x, y, color in stones:
        board.place_stone(Point(x, y), color)


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def controller() -> GameController:
    return GameController()


@pytest.fixture
def ko_board() -> Board:
    """Black has just taken the ko at (1, 1) by playing (2, 1)."""
    b = Board()
    place_all(
        b,
        [
            (1, 0, Stone.BLACK),
            (2, 0, Stone.WHITE),
            (0, 1, Stone.BLACK),
            (3, 1, Stone.WHITE),
            (1, 2, Stone.BLACK),
            (2, 2, Stone.WHITE),
            (1, 1, Stone.WHITE),
            (2, 1, Stone.BLACK),
        ],
    )
    return b
