"""Group analysis: connectivity, liberties and captures on a grid.

All functions take the grid explicitly and only mutate it in
:func:`capture_adjacent`.
"""

from __future__ import annotations

from collections.abc import Iterator

from gosgf.core.enums import Stone
from gosgf.core.types import DIRECTIONS, Grid, Point


def neighbors(point: Point, size: int) -> Iterator[Point]:
    """On-board 4-neighbours of *point* in ``+x, -x, +y, -y`` order."""
    for dx, dy in DIRECTIONS:
        nx, ny = point.x + dx, point.y + dy
        if 0 <= nx < size and 0 <= ny < size:
            yield Point(nx, ny)


def collect_group(point: Point, color: Stone, grid: Grid) -> set[Point]:
    """Flood-fill the 4-connected stones of *color* containing *point*."""
    size = len(grid)
    if not point.on_board(size) or grid[point.x][point.y] != color:
        return set()

    group: set[Point] = set()
    stack = [point]
    while stack:
        current = stack.pop()
        if current in group:
            continue
        group.add(current)
        for n in neighbors(current, size):
            if n not in group and grid[n.x][n.y] == color:
                stack.append(n)
    return group


def has_liberty(point: Point, grid: Grid) -> bool:
    """Whether *point* is empty or its group touches an empty point."""
    size = len(grid)
    if not point.on_board(size):
        return False
    color = grid[point.x][point.y]
    if color == Stone.EMPTY:
        return True

    visited: set[Point] = set()
    stack = [point]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        for n in neighbors(current, size):
            stone = grid[n.x][n.y]
            if stone == Stone.EMPTY:
                return True
            if stone == color and n not in visited:
                stack.append(n)
    return False


def capture_adjacent(
    point: Point, placed_color: Stone, grid: Grid
) -> list[frozenset[Point]]:
    """Remove opposing groups next to *point* that have no liberty left.

    Returns the removed groups in discovery order. A neighbour belonging
    to a group already removed is empty by the time it is visited, so each
    group is reported once.
    """
    opponent = placed_color.opposite
    captured: list[frozenset[Point]] = []
    for n in neighbors(point, len(grid)):
        if grid[n.x][n.y] != opponent:
            continue
        if has_liberty(n, grid):
            continue
        group = collect_group(n, opponent, grid)
        for p in group:
            grid[p.x][p.y] = Stone.EMPTY
        captured.append(frozenset(group))
    return captured
