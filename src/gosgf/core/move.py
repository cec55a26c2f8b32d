"""Move and Variation value objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from gosgf.core.enums import Mark, Stone
from gosgf.core.types import DEFAULT_BOARD_SIZE, PASS, Point, sgf_coord

MoveKey = tuple[int, int, Stone]


@dataclass(slots=True)
class Move:
    """A recorded move together with its annotations and variations.

    A move owns its variations; nothing points back to a parent, so a
    subtree can be copied or compared on its own.
    """

    position: Point
    color: Stone
    comment: str = ""
    mark: Mark = Mark.NONE
    label: str = ""
    variations: list[Variation] = field(default_factory=list)

    @classmethod
    def pass_move(cls, color: Stone) -> Move:
        return cls(PASS, color)

    @property
    def is_pass(self) -> bool:
        return self.position.is_pass

    @property
    def key(self) -> MoveKey:
        return (self.position.x, self.position.y, self.color)

    def has_valid_position(self, size: int = DEFAULT_BOARD_SIZE) -> bool:
        """Pass, or a point on the board; colour must be black or white."""
        if self.color == Stone.EMPTY:
            return False
        return self.is_pass or self.position.on_board(size)

    def copy(self) -> Move:
        """Deep copy, variations included, without recursing."""
        root = self.without_variations()
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for variation in source.variations:
                moves = [move.without_variations() for move in variation.moves]
                target.variations.append(Variation(variation.name, moves))
                stack.extend(zip(variation.moves, moves))
        return root

    def without_variations(self) -> Move:
        """Copy of the move and its annotations only."""
        return Move(self.position, self.color, self.comment, self.mark, self.label)

    def __str__(self) -> str:
        coord = sgf_coord(self.position)
        return f"{self.color.sgf_letter}[{coord}]"


@dataclass(slots=True)
class Variation:
    """Alternative continuation from a move or from the empty board."""

    name: str
    moves: list[Move] = field(default_factory=list)

    @property
    def keys(self) -> tuple[MoveKey, ...]:
        return tuple(move.key for move in self.moves)

    def same_line(self, other: Variation | list[Move]) -> bool:
        """Compare move sequences by position and colour only."""
        other_moves = other.moves if isinstance(other, Variation) else other
        return self.keys == tuple(move.key for move in other_moves)

    def __len__(self) -> int:
        return len(self.moves)


def count_moves(moves: list[Move]) -> int:
    """Number of moves in *moves* including every nested variation."""
    total = 0
    stack = [moves]
    while stack:
        line = stack.pop()
        total += len(line)
        for move in line:
            stack.extend(variation.moves for variation in move.variations)
    return total
