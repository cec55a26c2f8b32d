"""Board - stone placement with capture, suicide and simple-ko rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gosgf.core.enums import IllegalReason, Stone
from gosgf.core.groups import capture_adjacent, has_liberty
from gosgf.core.move import Move
from gosgf.core.types import (
    DEFAULT_BOARD_SIZE,
    Grid,
    GridSnapshot,
    Point,
    empty_grid,
    freeze_grid,
    thaw_grid,
)

_LOGGER = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a placement breaks the rules; the board is unchanged."""

    def __init__(self, point: Point, reason: IllegalReason) -> None:
        super().__init__(f"Illegal move at {tuple(point)}: {reason.name.lower()}")
        self.point = point
        self.reason = reason


class Board:
    """Mutable square grid plus side to move and ko memory."""

    __slots__ = ("size", "_grid", "side_to_move", "ko_point", "skipped_moves")

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        self.size = size
        self._grid: Grid = empty_grid(size)
        self.side_to_move = Stone.BLACK
        self.ko_point: Point | None = None
        # Moves dropped by the last replay because they were illegal there.
        self.skipped_moves = 0

    # -- Element access -----------------------------------------------------

    def __getitem__(self, point: Point) -> Stone:
        return self._grid[point.x][point.y]

    def stone_at(self, x: int, y: int) -> Stone | None:
        """Stone at ``(x, y)``, or ``None`` off the board."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            return None
        return self._grid[x][y]

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.x][point.y] == Stone.EMPTY

    def stones(self, color: Stone) -> list[Point]:
        """Every point holding *color*, column by column."""
        return [
            Point(x, y)
            for x in range(self.size)
            for y in range(self.size)
            if self._grid[x][y] == color
        ]

    # -- Moves --------------------------------------------------------------

    def place_stone(self, point: Point, color: Stone) -> frozenset[Point]:
        """Play *color* at *point* and return the captured points.

        Raises :class:`IllegalMoveError` for an off-board point, an occupied
        point, an immediate ko recapture or a suicide.
        """
        if color == Stone.EMPTY or not point.on_board(self.size):
            raise IllegalMoveError(point, IllegalReason.OUT_OF_RANGE)
        if self._grid[point.x][point.y] != Stone.EMPTY:
            raise IllegalMoveError(point, IllegalReason.OCCUPIED)

        saved = [column.copy() for column in self._grid]
        self._grid[point.x][point.y] = color
        groups = capture_adjacent(point, color, self._grid)
        captured = frozenset().union(*groups)

        if point == self.ko_point and len(captured) == 1:
            self._grid = saved
            raise IllegalMoveError(point, IllegalReason.KO)
        if not captured and not has_liberty(point, self._grid):
            self._grid = saved
            raise IllegalMoveError(point, IllegalReason.SUICIDE)

        # First single-stone capture in direction order wins the ko slot.
        if groups and all(len(group) == 1 for group in groups):
            self.ko_point = next(iter(groups[0]))
        else:
            self.ko_point = None
        self.side_to_move = color.opposite
        return captured

    def pass_turn(self, color: Stone) -> None:
        """Record a pass for *color*: grid untouched, turn switches."""
        self.ko_point = None
        self.side_to_move = color.opposite

    def play(self, move: Move) -> frozenset[Point]:
        if move.is_pass:
            self.pass_turn(move.color)
            return frozenset()
        return self.place_stone(move.position, move.color)

    # -- Setup / reset ------------------------------------------------------

    def set_stone(self, point: Point, stone: Stone) -> None:
        """Put or remove a setup stone; no rules are applied."""
        if not point.on_board(self.size):
            raise ValueError(f"Setup point off the board: {tuple(point)}")
        self._grid[point.x][point.y] = stone

    def snapshot(self) -> GridSnapshot:
        return freeze_grid(self._grid)

    def reset(
        self, setup: GridSnapshot | None = None, to_move: Stone = Stone.BLACK
    ) -> None:
        """Restore *setup* (empty board by default) and forget ko."""
        self._grid = thaw_grid(setup) if setup is not None else empty_grid(self.size)
        self.side_to_move = to_move
        self.ko_point = None

    def replay(
        self,
        setup: GridSnapshot | None,
        moves: Iterable[Move],
        to_move: Stone = Stone.BLACK,
    ) -> int:
        """Rebuild the position from *setup* through *moves*.

        Moves that are illegal against the replayed prefix are skipped
        rather than raised. Returns the number of skipped moves.
        """
        self.reset(setup, to_move)
        skipped = 0
        for move in moves:
            try:
                self.play(move)
            except IllegalMoveError as exc:
                skipped += 1
                _LOGGER.debug("Replay skipped %s: %s", move, exc.reason.name)
                self.side_to_move = move.color.opposite
        self.skipped_moves = skipped
        return skipped

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        symbols = {Stone.EMPTY: ".", Stone.BLACK: "X", Stone.WHITE: "O"}
        rows = [
            " ".join(symbols[self._grid[x][y]] for x in range(self.size))
            for y in range(self.size)
        ]
        return "\n".join(rows)
