"""Point type and coordinate helpers.

Coordinates follow SGF: ``x`` is the column and ``y`` the row, both
counted from the top-left corner, so ``"pd"`` is ``Point(15, 3)``.
"""

from __future__ import annotations

from typing import NamedTuple, TypeAlias

from gosgf.core.enums import Stone

DEFAULT_BOARD_SIZE = 19


class Point(NamedTuple):
    """Board intersection; ``PASS`` is the ``(-1, -1)`` sentinel."""

    x: int
    y: int

    @property
    def is_pass(self) -> bool:
        return self.x == -1 and self.y == -1

    def on_board(self, size: int = DEFAULT_BOARD_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size


PASS = Point(-1, -1)

# grid[x][y], column-major like the SGF coordinate order.
Grid: TypeAlias = list[list[Stone]]
GridSnapshot: TypeAlias = tuple[tuple[Stone, ...], ...]

# Direction order matters: it decides which capture is remembered for ko.
DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

# Handicap points, placed in this order for HA[n] without explicit AB.
STAR_POINTS: tuple[Point, ...] = (
    Point(15, 3),
    Point(3, 15),
    Point(15, 15),
    Point(3, 3),
    Point(9, 9),
    Point(9, 3),
    Point(9, 15),
    Point(3, 9),
    Point(15, 9),
)


def empty_grid(size: int = DEFAULT_BOARD_SIZE) -> Grid:
    return [[Stone.EMPTY] * size for _ in range(size)]


def freeze_grid(grid: Grid) -> GridSnapshot:
    """Immutable copy of *grid*."""
    return tuple(tuple(column) for column in grid)


def thaw_grid(snapshot: GridSnapshot) -> Grid:
    return [list(column) for column in snapshot]


def sgf_coord(point: Point) -> str:
    """SGF coordinate for *point*, e.g. ``Point(15, 3)`` -> ``'pd'``.

    A pass is written as the empty string.
    """
    if point.is_pass:
        return ""
    return chr(ord("a") + point.x) + chr(ord("a") + point.y)


def parse_sgf_coord(text: str, size: int = DEFAULT_BOARD_SIZE) -> Point:
    """Parse an SGF point value.

    ``""`` and the legacy ``"tt"`` (boards up to 19x19) are passes.
    Raises :class:`ValueError` for anything that is not a point on the
    board.
    """
    if text == "" or (text == "tt" and size <= 19):
        return PASS
    if len(text) != 2 or not text.isalpha() or not text.islower():
        raise ValueError(f"Invalid SGF coordinate: {text!r}")
    point = Point(ord(text[0]) - ord("a"), ord(text[1]) - ord("a"))
    if not point.on_board(size):
        raise ValueError(f"SGF coordinate off the board: {text!r}")
    return point


def parse_sgf_area(text: str, size: int = DEFAULT_BOARD_SIZE) -> list[Point]:
    """Parse a point or an ``aa:bb`` rectangle into the covered points."""
    if ":" not in text:
        point = parse_sgf_coord(text, size)
        return [] if point.is_pass else [point]
    first, second = text.split(":", 1)
    a = parse_sgf_coord(first, size)
    b = parse_sgf_coord(second, size)
    if a.is_pass or b.is_pass:
        raise ValueError(f"Invalid SGF rectangle: {text!r}")
    return [
        Point(x, y)
        for x in range(min(a.x, b.x), max(a.x, b.x) + 1)
        for y in range(min(a.y, b.y), max(a.y, b.y) + 1)
    ]
