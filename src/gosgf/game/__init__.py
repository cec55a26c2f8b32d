"""Game record layer — history tree, SGF conversion, controller.

Quick start::

    from gosgf.game import GameController

    ctrl = GameController()
    ctrl.load_from_text("(;FF[4]GM[1]SZ[19]PB[A]PW[B];B[pd];W[qe])")
    ctrl.previous_move()
    print(ctrl.to_text())
"""

from gosgf.game.controller import GameController, GameEvents
from gosgf.game.history import MoveHistory, VariationNotFoundError
from gosgf.game.interfaces import IGameController, LoadResult
from gosgf.game.record import GameRecord
from gosgf.game.settings import RecordSettings
from gosgf.game.sgf_io import (
    export_variation,
    move_from_node,
    node_from_move,
    record_from_collection,
    record_from_sgf,
    record_to_collection,
    record_to_sgf,
)

__all__ = [
    # Interfaces
    "IGameController",
    "LoadResult",
    # Concrete
    "GameController",
    "GameEvents",
    "GameRecord",
    "MoveHistory",
    "RecordSettings",
    "VariationNotFoundError",
    # SGF conversion
    "export_variation",
    "move_from_node",
    "node_from_move",
    "record_from_collection",
    "record_from_sgf",
    "record_to_collection",
    "record_to_sgf",
]
