"""GameRecord — game metadata, initial setup and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from gosgf.core.enums import Stone
from gosgf.core.types import GridSnapshot, Point, empty_grid, freeze_grid
from gosgf.game.history import MoveHistory
from gosgf.game.settings import RecordSettings


@dataclass
class GameRecord:
    """Everything saved to or loaded from an SGF file.

    This is a pure data class; the board position for the cursor is
    derived from :attr:`initial_setup` and the history by the controller.
    """

    settings: RecordSettings = field(default_factory=RecordSettings)
    black_player: str = ""
    white_player: str = ""
    result: str = ""
    date: str = ""
    handicap: int = 0
    first_player: Stone = Stone.BLACK
    initial_setup: GridSnapshot = field(init=False)
    history: MoveHistory = field(init=False)

    def __post_init__(self) -> None:
        self.initial_setup = freeze_grid(empty_grid(self.settings.board_size))
        self.history = MoveHistory(self.settings)

    @property
    def setup_stones(self) -> dict[Stone, list[Point]]:
        """Setup points per colour, column by column."""
        stones: dict[Stone, list[Point]] = {
            Stone.BLACK: [],
            Stone.WHITE: [],
        }
        for x, column in enumerate(self.initial_setup):
            for y, stone in enumerate(column):
                if stone != Stone.EMPTY:
                    stones[stone].append(Point(x, y))
        return stones

    @property
    def has_setup(self) -> bool:
        return any(
            stone != Stone.EMPTY for column in self.initial_setup for stone in column
        )

    def side_to_move_at_cursor(self) -> Stone:
        """Colour due to play after the moves up to the cursor."""
        move = self.history.current_move
        if move is None:
            return self.first_player
        return move.color.opposite
