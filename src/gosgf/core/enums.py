"""Core enumerations for the Go domain."""

from __future__ import annotations

from enum import IntEnum


class Stone(IntEnum):
    """Content of a board intersection, also used as the colour of a move."""

    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opposite(self) -> Stone:
        if self == Stone.EMPTY:
            return Stone.EMPTY
        return Stone(3 - self.value)

    @property
    def sgf_letter(self) -> str:
        """``B`` or ``W`` (empty string for :attr:`EMPTY`)."""
        return _SGF_LETTERS[self]

    def __str__(self) -> str:
        return self.name.lower()


_SGF_LETTERS: dict[Stone, str] = {
    Stone.EMPTY: "",
    Stone.BLACK: "B",
    Stone.WHITE: "W",
}


class Mark(IntEnum):
    """Board annotation attached to a move."""

    NONE = 0
    TRIANGLE = 1
    SQUARE = 2
    CIRCLE = 3
    CROSS = 4
    NUMBER = 5
    LETTER = 6


class IllegalReason(IntEnum):
    """Why the board refused a placement."""

    OUT_OF_RANGE = 1
    OCCUPIED = 2
    KO = 3
    SUICIDE = 4
