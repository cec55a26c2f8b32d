"""Branching move history with a cursor.

The main line is the active sequence of moves. Alternatives live either on
a move (``move.variations``, continuations after that move) or in
``start_variations`` (alternative openings). Selecting a variation swaps
it with the continuation it replaces, so no recorded line is ever lost.
"""

from __future__ import annotations

from gosgf.core.move import Move, Variation
from gosgf.game.settings import RecordSettings


class VariationNotFoundError(IndexError):
    """Raised for a variation index with nothing stored behind it."""

    def __init__(self, index: int, *, at_start: bool) -> None:
        where = "start of the game" if at_start else "current move"
        super().__init__(f"No variation {index} at the {where}")
        self.index = index
        self.at_start = at_start


class MoveHistory:
    """Main line + variation trees + cursor (``-1`` = before any move)."""

    __slots__ = ("main_line", "start_variations", "cursor", "_settings")

    def __init__(self, settings: RecordSettings | None = None) -> None:
        self._settings = settings or RecordSettings()
        self.main_line: list[Move] = []
        self.start_variations: list[Variation] = []
        self.cursor = -1

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def tip(self) -> int:
        """Index of the last main-line move (``-1`` when empty)."""
        return len(self.main_line) - 1

    @property
    def is_at_tip(self) -> bool:
        return self.cursor == self.tip

    @property
    def current_move(self) -> Move | None:
        if self.cursor < 0:
            return None
        return self.main_line[self.cursor]

    def moves_to_cursor(self) -> list[Move]:
        """The prefix of the main line the board reflects."""
        return self.main_line[: self.cursor + 1]

    def variations_here(self) -> list[Variation]:
        """Alternatives to the continuation after the cursor."""
        if self.cursor < 0:
            return self.start_variations
        return self.main_line[self.cursor].variations

    def _bucket(self, at_start: bool, index: int | None = None) -> list[Variation]:
        if at_start:
            bucket = self.start_variations
        elif self.cursor >= 0:
            bucket = self.main_line[self.cursor].variations
        else:
            raise VariationNotFoundError(index or 0, at_start=False)
        if index is not None and not 0 <= index < len(bucket):
            raise VariationNotFoundError(index, at_start=at_start)
        return bucket

    def _store(self, bucket: list[Variation], moves: list[Move]) -> Variation:
        """Keep *moves* in *bucket* unless the same line is already there."""
        for existing in bucket:
            if existing.same_line(moves):
                return existing
        variation = Variation(self._settings.name_for(len(bucket) + 1), moves)
        bucket.append(variation)
        return variation

    # ── Mutation ─────────────────────────────────────────────────────────

    def reset(self) -> None:
        self.main_line = []
        self.start_variations = []
        self.cursor = -1

    def append(self, move: Move) -> Variation | None:
        """Record *move* after the cursor and make it current.

        Playing before the tip keeps the old continuation as a variation
        (returned) instead of discarding it. Replaying the recorded next
        move only advances the cursor, and replaying the first move of a
        stored variation switches to that variation.
        """
        if self.cursor < self.tip and self.main_line[self.cursor + 1].key == move.key:
            self.cursor += 1
            return None
        for index, variation in enumerate(self.variations_here()):
            first = variation.moves[0] if variation.moves else None
            if first is not None and first.key == move.key:
                if self.select_variation(index):
                    return None

        branch: Variation | None = None
        if self.cursor < self.tip:
            suffix = self.main_line[self.cursor + 1 :]
            del self.main_line[self.cursor + 1 :]
            bucket = self.variations_here()
            branch = self._store(bucket, suffix)

        self.main_line.append(move)
        self.cursor = self.tip
        return branch

    def undo(self) -> Move | None:
        """Drop the last main-line move; the cursor stays in range."""
        if not self.main_line:
            return None
        move = self.main_line.pop()
        self.cursor = min(self.cursor, self.tip)
        return move

    # ── Navigation ───────────────────────────────────────────────────────

    def previous(self) -> bool:
        if self.cursor < 0:
            return False
        self.cursor -= 1
        return True

    def next(self) -> bool:
        """Step forward, entering the first variation at the tip."""
        if self.cursor < self.tip:
            self.cursor += 1
            return True
        if self.variations_here():
            return self.select_variation(0)
        return False

    def set_cursor(self, index: int) -> None:
        self.cursor = max(-1, min(index, self.tip))

    # ── Variations ───────────────────────────────────────────────────────

    def select_variation(self, index: int, board_size: int | None = None) -> bool:
        """Splice variation *index* in after the cursor and step onto it.

        The continuation it replaces is stored in its place. Returns
        ``False`` (nothing changed) for an empty variation or one whose
        first move is not on the board.
        """
        at_start = self.cursor < 0
        bucket = self._bucket(at_start, index)
        chosen = bucket[index]
        size = board_size or self._settings.board_size
        if not chosen.moves or not chosen.moves[0].has_valid_position(size):
            return False

        del bucket[index]
        previous = self.main_line[self.cursor + 1 :]
        del self.main_line[self.cursor + 1 :]
        if previous and not any(v.same_line(previous) for v in bucket):
            name = self._settings.name_for(len(bucket) + 1)
            bucket.insert(index, Variation(name, previous))

        self.main_line.extend(chosen.moves)
        self.cursor += 1
        return True

    def add_variation(
        self, moves: list[Move], name: str | None = None, *, at_start: bool = False
    ) -> Variation:
        if not moves:
            raise ValueError("A variation needs at least one move")
        bucket = self._bucket(at_start)
        variation = self._store(bucket, moves)
        if name:
            variation.name = name
        return variation

    def remove_variation(self, index: int, *, at_start: bool = False) -> Variation:
        bucket = self._bucket(at_start, index)
        return bucket.pop(index)

    def rename_variation(
        self, index: int, name: str, *, at_start: bool = False
    ) -> None:
        self._bucket(at_start, index)[index].name = name

    def reorder_variation(
        self, source: int, target: int, *, at_start: bool = False
    ) -> None:
        bucket = self._bucket(at_start, source)
        if not 0 <= target < len(bucket):
            raise VariationNotFoundError(target, at_start=at_start)
        bucket.insert(target, bucket.pop(source))

    def copy_variation(
        self, index: int, name: str | None = None, *, at_start: bool = False
    ) -> Variation:
        """Append a deep copy of variation *index* to the same bucket."""
        bucket = self._bucket(at_start, index)
        original = bucket[index]
        duplicate = Variation(
            name or f"{original.name} (copy)",
            [move.copy() for move in original.moves],
        )
        bucket.append(duplicate)
        return duplicate

    def compare_variations(
        self, first: int, second: int, *, at_start: bool = False
    ) -> list[Move]:
        """Moves of *second* from the point where it leaves *first*."""
        bucket = self._bucket(at_start, first)
        if not 0 <= second < len(bucket):
            raise VariationNotFoundError(second, at_start=at_start)
        a, b = bucket[first].moves, bucket[second].moves
        shared = 0
        while shared < min(len(a), len(b)) and a[shared].key == b[shared].key:
            shared += 1
        return b[shared:]
