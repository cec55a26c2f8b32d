"""Abstract interfaces for the game layer.

UI, file and session code depend on :class:`IGameController`, not on the
concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gosgf.core.enums import Stone
    from gosgf.core.move import Move


@dataclass(slots=True, frozen=True)
class LoadResult:
    """Outcome of loading SGF text; ``error`` is set when ``ok`` is false."""

    ok: bool
    error: str = ""
    skipped_moves: int = 0

    def __bool__(self) -> bool:
        return self.ok


class IGameController(ABC):
    """Interface for the record editor."""

    @abstractmethod
    def new_game(self) -> None:
        """Discard the current record and start an empty one."""

    @abstractmethod
    def place_stone(self, x: int, y: int, color: Stone | None = None) -> bool:
        """Play at ``(x, y)``. Returns True if legal and recorded."""

    @abstractmethod
    def pass_move(self) -> bool:
        """Record a pass for the side to move."""

    @abstractmethod
    def undo(self) -> bool:
        """Remove the last main-line move. Returns True on success."""

    @abstractmethod
    def previous_move(self) -> bool:
        """Step the cursor back one move."""

    @abstractmethod
    def next_move(self) -> bool:
        """Step the cursor forward one move."""

    @abstractmethod
    def set_cursor(self, index: int) -> None:
        """Jump to main-line move *index* (``-1`` = empty board)."""

    @abstractmethod
    def select_variation(self, index: int) -> bool:
        """Make variation *index* at the cursor part of the main line."""

    @abstractmethod
    def remove_variation(self, index: int, at_start: bool = False) -> bool:
        """Delete a stored variation."""

    @abstractmethod
    def stone_at(self, x: int, y: int) -> Stone:
        """Stone on the board at the cursor position."""

    @abstractmethod
    def load_from_text(self, text: str) -> LoadResult:
        """Replace the record with parsed SGF *text*."""

    @abstractmethod
    def to_text(self) -> str:
        """Serialize the record to SGF."""

    @property
    @abstractmethod
    def current_move(self) -> Move | None: ...

    @property
    @abstractmethod
    def move_history(self) -> tuple[Move, ...]: ...
