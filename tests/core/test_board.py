"""Tests for Board placement rules: capture, suicide, ko and replay."""

import pytest

from gosgf.core.board import Board, IllegalMoveError
from gosgf.core.enums import IllegalReason, Stone
from gosgf.core.move import Move
from gosgf.core.types import PASS, Point


def _play(board: Board, *stones: tuple[int, int, Stone]) -> None:
    for x, y, color in stones:
        board.place_stone(Point(x, y), color)


class TestBasics:
    def test_empty_board(self, board: Board) -> None:
        assert board.size == 19
        assert board.side_to_move == Stone.BLACK
        assert board.ko_point is None
        assert board.stones(Stone.BLACK) == []

    def test_place_switches_turn(self, board: Board) -> None:
        captured = board.place_stone(Point(15, 3), Stone.BLACK)
        assert captured == frozenset()
        assert board[Point(15, 3)] == Stone.BLACK
        assert board.side_to_move == Stone.WHITE

    def test_stone_at_off_board(self, board: Board) -> None:
        assert board.stone_at(-1, 0) is None
        assert board.stone_at(0, 19) is None
        assert board.stone_at(0, 0) == Stone.EMPTY

    def test_out_of_range(self, board: Board) -> None:
        with pytest.raises(IllegalMoveError) as info:
            board.place_stone(Point(19, 0), Stone.BLACK)
        assert info.value.reason == IllegalReason.OUT_OF_RANGE

    def test_empty_colour_rejected(self, board: Board) -> None:
        with pytest.raises(IllegalMoveError):
            board.place_stone(Point(3, 3), Stone.EMPTY)

    def test_occupied(self, board: Board) -> None:
        board.place_stone(Point(3, 3), Stone.BLACK)
        with pytest.raises(IllegalMoveError) as info:
            board.place_stone(Point(3, 3), Stone.WHITE)
        assert info.value.reason == IllegalReason.OCCUPIED
        assert board[Point(3, 3)] == Stone.BLACK

    def test_error_is_value_error(self, board: Board) -> None:
        board.place_stone(Point(3, 3), Stone.BLACK)
        with pytest.raises(ValueError, match="occupied"):
            board.place_stone(Point(3, 3), Stone.WHITE)


class TestCapture:
    def test_surrounded_stone_is_captured(self, board: Board) -> None:
        _play(
            board,
            (3, 3, Stone.BLACK),
            (3, 4, Stone.WHITE),
            (4, 3, Stone.WHITE),
            (2, 3, Stone.WHITE),
        )
        captured = board.place_stone(Point(3, 2), Stone.WHITE)
        assert captured == frozenset({Point(3, 3)})
        assert board.stone_at(3, 3) == Stone.EMPTY

    def test_corner_group_capture(self, board: Board) -> None:
        _play(
            board,
            (0, 0, Stone.BLACK),
            (1, 0, Stone.BLACK),
            (0, 1, Stone.WHITE),
            (1, 1, Stone.WHITE),
        )
        captured = board.place_stone(Point(2, 0), Stone.WHITE)
        assert captured == frozenset({Point(0, 0), Point(1, 0)})
        # Two stones taken: no ko.
        assert board.ko_point is None

    def test_capture_beats_suicide(self, board: Board) -> None:
        # White (0,0) has a single liberty at (1,0); filling it is a capture.
        _play(board, (0, 0, Stone.WHITE), (0, 1, Stone.BLACK), (2, 0, Stone.WHITE))
        _play(board, (1, 1, Stone.WHITE))
        captured = board.place_stone(Point(1, 0), Stone.BLACK)
        assert captured == frozenset({Point(0, 0)})
        assert board[Point(1, 0)] == Stone.BLACK


class TestSuicide:
    def test_suicide_rejected_and_board_unchanged(self, board: Board) -> None:
        _play(board, (1, 0, Stone.WHITE), (0, 1, Stone.WHITE))
        before = board.snapshot()
        with pytest.raises(IllegalMoveError) as info:
            board.place_stone(Point(0, 0), Stone.BLACK)
        assert info.value.reason == IllegalReason.SUICIDE
        assert board.snapshot() == before
        assert board.side_to_move == Stone.BLACK

    def test_group_suicide(self, board: Board) -> None:
        _play(
            board,
            (0, 0, Stone.BLACK),
            (2, 0, Stone.WHITE),
            (0, 1, Stone.WHITE),
            (1, 1, Stone.WHITE),
        )
        with pytest.raises(IllegalMoveError) as info:
            board.place_stone(Point(1, 0), Stone.BLACK)
        assert info.value.reason == IllegalReason.SUICIDE
        assert board[Point(0, 0)] == Stone.BLACK
        assert board[Point(1, 0)] == Stone.EMPTY


class TestKo:
    def test_ko_point_set_after_single_capture(self, ko_board: Board) -> None:
        assert ko_board.ko_point == Point(1, 1)
        assert ko_board[Point(1, 1)] == Stone.EMPTY

    def test_immediate_recapture_rejected(self, ko_board: Board) -> None:
        before = ko_board.snapshot()
        with pytest.raises(IllegalMoveError) as info:
            ko_board.place_stone(Point(1, 1), Stone.WHITE)
        assert info.value.reason == IllegalReason.KO
        assert ko_board.snapshot() == before
        assert ko_board.ko_point == Point(1, 1)

    def test_recapture_after_ko_threat(self, ko_board: Board) -> None:
        _play(ko_board, (10, 10, Stone.WHITE), (12, 12, Stone.BLACK))
        assert ko_board.ko_point is None
        captured = ko_board.place_stone(Point(1, 1), Stone.WHITE)
        assert captured == frozenset({Point(2, 1)})
        assert ko_board.ko_point == Point(2, 1)

    def test_double_single_capture_remembers_plus_x(self, board: Board) -> None:
        # White singles at (6,5) and (4,5) both lose their last liberty at (5,5).
        _play(
            board,
            (6, 5, Stone.WHITE),
            (4, 5, Stone.WHITE),
            (7, 5, Stone.BLACK),
            (6, 6, Stone.BLACK),
            (6, 4, Stone.BLACK),
            (3, 5, Stone.BLACK),
            (4, 6, Stone.BLACK),
            (4, 4, Stone.BLACK),
        )
        captured = board.place_stone(Point(5, 5), Stone.BLACK)
        assert captured == frozenset({Point(6, 5), Point(4, 5)})
        assert board.ko_point == Point(6, 5)

    def test_double_single_capture_minus_x_before_plus_y(self, board: Board) -> None:
        _play(
            board,
            (4, 5, Stone.WHITE),
            (5, 6, Stone.WHITE),
            (3, 5, Stone.BLACK),
            (4, 6, Stone.BLACK),
            (4, 4, Stone.BLACK),
            (6, 6, Stone.BLACK),
            (5, 7, Stone.BLACK),
        )
        board.place_stone(Point(5, 5), Stone.BLACK)
        assert board.ko_point == Point(4, 5)

    def test_pass_clears_ko(self, ko_board: Board) -> None:
        ko_board.pass_turn(Stone.WHITE)
        assert ko_board.ko_point is None
        assert ko_board.side_to_move == Stone.BLACK

    def test_play_pass_move(self, ko_board: Board) -> None:
        before = ko_board.snapshot()
        assert ko_board.play(Move(PASS, Stone.WHITE)) == frozenset()
        assert ko_board.snapshot() == before
        assert ko_board.ko_point is None


class TestSetupAndReplay:
    def test_set_stone_ignores_rules(self, board: Board) -> None:
        board.set_stone(Point(0, 0), Stone.BLACK)
        board.set_stone(Point(1, 0), Stone.WHITE)
        board.set_stone(Point(0, 1), Stone.WHITE)
        assert board[Point(0, 0)] == Stone.BLACK

    def test_set_stone_off_board(self, board: Board) -> None:
        with pytest.raises(ValueError):
            board.set_stone(Point(20, 0), Stone.BLACK)

    def test_reset_restores_setup(self, board: Board) -> None:
        board.set_stone(Point(3, 3), Stone.BLACK)
        setup = board.snapshot()
        board.place_stone(Point(4, 4), Stone.WHITE)
        board.reset(setup, Stone.WHITE)
        assert board.snapshot() == setup
        assert board.side_to_move == Stone.WHITE

    def test_replay_counts_skipped_moves(self, board: Board) -> None:
        moves = [
            Move(Point(3, 3), Stone.BLACK),
            Move(Point(3, 3), Stone.WHITE),  # occupied
            Move(Point(4, 4), Stone.WHITE),
        ]
        assert board.replay(None, moves) == 1
        assert board.skipped_moves == 1
        assert board[Point(4, 4)] == Stone.WHITE
        assert board.side_to_move == Stone.BLACK

    def test_replay_matches_direct_play(self) -> None:
        direct = Board()
        moves = [
            Move(Point(3, 3), Stone.BLACK),
            Move(Point(3, 4), Stone.WHITE),
            Move(PASS, Stone.BLACK),
            Move(Point(4, 3), Stone.WHITE),
        ]
        for move in moves:
            direct.play(move)
        replayed = Board()
        replayed.replay(None, moves)
        assert replayed == direct
        assert replayed.skipped_moves == 0
