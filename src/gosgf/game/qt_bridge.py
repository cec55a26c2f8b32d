"""Qt bridge exposing a game record to widgets through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gosgf.core.enums import IllegalReason
from gosgf.core.types import Point
from gosgf.game.controller import GameController


class RecordSession(QObject):
    """Thread-affine wrapper around a :class:`GameController`.

    Board views call the slots; every change of the displayed position is
    reported through :attr:`position_changed`.
    """

    position_changed = pyqtSignal(int)  # cursor
    record_loaded = pyqtSignal()
    load_failed = pyqtSignal(str)
    move_rejected = pyqtSignal(int, int, str)  # x, y, reason

    __slots__ = ("_controller",)

    def __init__(self, controller: GameController | None = None) -> None:
        super().__init__()
        self._controller = controller or GameController()
        events = self._controller.events
        events.on_position_changed.append(self.position_changed.emit)
        events.on_record_loaded.append(self.record_loaded.emit)
        events.on_move_rejected.append(self._on_move_rejected)

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()

    @pyqtSlot(int, int)
    def play(self, x: int, y: int) -> None:
        self._controller.place_stone(x, y)

    @pyqtSlot()
    def pass_turn(self) -> None:
        self._controller.pass_move()

    @pyqtSlot()
    def undo(self) -> None:
        self._controller.undo()

    @pyqtSlot()
    def previous_move(self) -> None:
        self._controller.previous_move()

    @pyqtSlot()
    def next_move(self) -> None:
        self._controller.next_move()

    @pyqtSlot(int)
    def jump_to(self, index: int) -> None:
        self._controller.set_cursor(index)

    @pyqtSlot(int)
    def select_variation(self, index: int) -> None:
        self._controller.select_variation(index)

    @pyqtSlot(str)
    def load_text(self, text: str) -> None:
        """Load SGF *text*; failures are reported through :attr:`load_failed`."""
        result = self._controller.load_from_text(text)
        if not result.ok:
            self.load_failed.emit(result.error)

    def save_text(self) -> str:
        return self._controller.to_text()

    def _on_move_rejected(self, point: Point, reason: IllegalReason) -> None:
        self.move_rejected.emit(point.x, point.y, reason.name.lower())
