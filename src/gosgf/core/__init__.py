"""Core domain layer — pure Go logic with zero external dependencies.

Quick start::

    from gosgf.core import Board, Point, Stone

    board = Board()
    board.place_stone(Point(3, 3), Stone.BLACK)
    print(board)
"""

from gosgf.core.board import Board, IllegalMoveError
from gosgf.core.enums import IllegalReason, Mark, Stone
from gosgf.core.groups import capture_adjacent, collect_group, has_liberty, neighbors
from gosgf.core.move import Move, Variation, count_moves
from gosgf.core.types import (
    DEFAULT_BOARD_SIZE,
    PASS,
    STAR_POINTS,
    Grid,
    GridSnapshot,
    Point,
    parse_sgf_area,
    parse_sgf_coord,
    sgf_coord,
)

__all__ = [
    # Enums
    "IllegalReason",
    "Mark",
    "Stone",
    # Types / helpers
    "DEFAULT_BOARD_SIZE",
    "PASS",
    "STAR_POINTS",
    "Grid",
    "GridSnapshot",
    "Point",
    "parse_sgf_area",
    "parse_sgf_coord",
    "sgf_coord",
    # Group analysis
    "capture_adjacent",
    "collect_group",
    "has_liberty",
    "neighbors",
    # Domain objects
    "Board",
    "IllegalMoveError",
    "Move",
    "Variation",
    "count_moves",
]
