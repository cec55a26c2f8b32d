"""GameController — the central orchestrator of a game record.

Coordinates: GameRecord, MoveHistory, Board, SGF conversion.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gosgf.core.board import Board, IllegalMoveError
from gosgf.core.enums import IllegalReason, Mark, Stone
from gosgf.core.move import Move, Variation
from gosgf.core.notation import SgfParseError
from gosgf.core.types import Point
from gosgf.game.history import MoveHistory, VariationNotFoundError
from gosgf.game.interfaces import IGameController, LoadResult
from gosgf.game.record import GameRecord
from gosgf.game.settings import RecordSettings
from gosgf.game.sgf_io import export_variation, record_from_sgf, record_to_sgf

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

PositionCallback = Callable[[int], None]  # cursor
RecordLoadedCallback = Callable[[], None]
MoveRejectedCallback = Callable[[Point, IllegalReason], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_position_changed: list[PositionCallback] = field(default_factory=list)
    on_record_loaded: list[RecordLoadedCallback] = field(default_factory=list)
    on_move_rejected: list[MoveRejectedCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Edits one game record: plays moves, walks and edits the variation
    tree, loads and saves SGF.

    The board always shows the initial setup replayed through the main
    line up to the cursor. Methods are meant to be called from a single
    thread; nothing here locks.
    """

    __slots__ = ("_settings", "_record", "_board", "events")

    def __init__(self, settings: RecordSettings | None = None) -> None:
        self._settings = settings or RecordSettings()
        self._record = GameRecord(settings=self._settings)
        self._board = Board(self._settings.board_size)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def record(self) -> GameRecord:
        return self._record

    @property
    def board(self) -> Board:
        return self._board

    @property
    def history(self) -> MoveHistory:
        return self._record.history

    @property
    def cursor(self) -> int:
        return self.history.cursor

    @property
    def side_to_move(self) -> Stone:
        return self._board.side_to_move

    @property
    def skipped_moves(self) -> int:
        """Moves the last replay could not apply to the board."""
        return self._board.skipped_moves

    @property
    def current_move(self) -> Move | None:
        return self.history.current_move

    @property
    def move_history(self) -> tuple[Move, ...]:
        return tuple(self.history.main_line)

    @property
    def variations(self) -> tuple[Variation, ...]:
        """Alternatives available at the cursor."""
        return tuple(self.history.variations_here())

    @property
    def start_variations(self) -> tuple[Variation, ...]:
        return tuple(self.history.start_variations)

    # Game info

    @property
    def black_player(self) -> str:
        return self._record.black_player

    @black_player.setter
    def black_player(self, name: str) -> None:
        self._record.black_player = name

    @property
    def white_player(self) -> str:
        return self._record.white_player

    @white_player.setter
    def white_player(self, name: str) -> None:
        self._record.white_player = name

    @property
    def result(self) -> str:
        return self._record.result

    @result.setter
    def result(self, result: str) -> None:
        self._record.result = result

    @property
    def date(self) -> str:
        return self._record.date

    @date.setter
    def date(self, date: str) -> None:
        self._record.date = date

    # Annotations of the current move

    @property
    def comment(self) -> str:
        move = self.current_move
        return move.comment if move is not None else ""

    def set_comment(self, text: str) -> bool:
        move = self.current_move
        if move is None:
            return False
        move.comment = text
        return True

    @property
    def mark(self) -> Mark:
        move = self.current_move
        return move.mark if move is not None else Mark.NONE

    def set_mark(self, mark: Mark) -> bool:
        move = self.current_move
        if move is None:
            return False
        move.mark = mark
        return True

    @property
    def label(self) -> str:
        move = self.current_move
        return move.label if move is not None else ""

    def set_label(self, text: str) -> bool:
        move = self.current_move
        if move is None:
            return False
        move.label = text
        return True

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self) -> None:
        self._record = GameRecord(settings=self._settings)
        self._sync()

    def stone_at(self, x: int, y: int) -> Stone:
        stone = self._board.stone_at(x, y)
        return stone if stone is not None else Stone.EMPTY

    def place_stone(self, x: int, y: int, color: Stone | None = None) -> bool:
        point = Point(x, y)
        mover = color if color is not None else self._board.side_to_move
        try:
            self._board.place_stone(point, mover)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected %s at %s: %s", mover, (x, y), exc.reason.name)
            self._emit_move_rejected(point, exc.reason)
            return False

        branch = self.history.append(Move(point, mover))
        if branch is not None:
            _LOGGER.debug("Kept previous continuation as %r", branch.name)
        self._emit_position()
        return True

    def pass_move(self) -> bool:
        mover = self._board.side_to_move
        self._board.pass_turn(mover)
        self.history.append(Move.pass_move(mover))
        self._emit_position()
        return True

    def undo(self) -> bool:
        if self.history.undo() is None:
            return False
        self._sync()
        return True

    def previous_move(self) -> bool:
        if not self.history.previous():
            return False
        self._sync()
        return True

    def next_move(self) -> bool:
        try:
            moved = self.history.next()
        except VariationNotFoundError:
            return False
        if moved:
            self._sync()
        return moved

    def set_cursor(self, index: int) -> None:
        self.history.set_cursor(index)
        self._sync()

    def select_variation(self, index: int) -> bool:
        try:
            selected = self.history.select_variation(index)
        except VariationNotFoundError as exc:
            _LOGGER.debug("%s", exc)
            return False
        if selected:
            self._sync()
        return selected

    def remove_variation(self, index: int, at_start: bool = False) -> bool:
        try:
            self.history.remove_variation(index, at_start=at_start)
        except VariationNotFoundError as exc:
            _LOGGER.debug("%s", exc)
            return False
        return True

    def load_from_text(self, text: str) -> LoadResult:
        try:
            record = record_from_sgf(text, self._settings)
        except SgfParseError as exc:
            _LOGGER.warning("Could not load SGF: %s", exc)
            return LoadResult(ok=False, error=str(exc))

        self._record = record
        self._sync()
        for cb in self.events.on_record_loaded:
            cb()
        return LoadResult(ok=True, skipped_moves=self._board.skipped_moves)

    def to_text(self) -> str:
        return record_to_sgf(self._record)

    # ── Variation editing ────────────────────────────────────────────────

    def rename_variation(self, index: int, name: str, at_start: bool = False) -> bool:
        try:
            self.history.rename_variation(index, name, at_start=at_start)
        except VariationNotFoundError:
            return False
        return True

    def reorder_variation(
        self, source: int, target: int, at_start: bool = False
    ) -> bool:
        try:
            self.history.reorder_variation(source, target, at_start=at_start)
        except VariationNotFoundError:
            return False
        return True

    def copy_variation(
        self, index: int, name: str | None = None, at_start: bool = False
    ) -> bool:
        try:
            self.history.copy_variation(index, name, at_start=at_start)
        except VariationNotFoundError:
            return False
        return True

    def compare_variations(
        self, first: int, second: int, at_start: bool = False
    ) -> list[Move]:
        """Moves of *second* after it leaves *first* (empty if unknown)."""
        try:
            return self.history.compare_variations(first, second, at_start=at_start)
        except VariationNotFoundError:
            return []

    def export_variation(self, index: int, at_start: bool = False) -> str | None:
        """SGF of the line leading here followed by variation *index*."""
        try:
            return export_variation(self._record, index, at_start=at_start)
        except VariationNotFoundError:
            return None

    # ── Setup stones / lookup ────────────────────────────────────────────

    def add_setup_stone(self, x: int, y: int, stone: Stone) -> bool:
        """Place or clear a setup stone; only before any move is recorded."""
        history = self.history
        if history.main_line or history.start_variations:
            return False
        point = Point(x, y)
        if not point.on_board(self._settings.board_size):
            return False
        board = Board(self._settings.board_size)
        board.reset(self._record.initial_setup)
        board.set_stone(point, stone)
        self._record.initial_setup = board.snapshot()
        self._sync()
        return True

    def move_at(self, x: int, y: int) -> Move | None:
        """Latest main-line move played at ``(x, y)``."""
        point = Point(x, y)
        for move in reversed(self.history.main_line):
            if move.position == point:
                return move
        return None

    def has_branch(self, x: int, y: int) -> bool:
        move = self.move_at(x, y)
        return move is not None and bool(move.variations)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _sync(self) -> None:
        """Rebuild the board for the cursor and notify listeners."""
        record = self._record
        skipped = self._board.replay(
            record.initial_setup,
            record.history.moves_to_cursor(),
            record.first_player,
        )
        if skipped:
            _LOGGER.debug("Replay skipped %d illegal moves", skipped)
        self._emit_position()

    def _emit_position(self) -> None:
        for cb in self.events.on_position_changed:
            cb(self.history.cursor)

    def _emit_move_rejected(self, point: Point, reason: IllegalReason) -> None:
        for cb in self.events.on_move_rejected:
            cb(point, reason)
