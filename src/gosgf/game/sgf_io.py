"""Conversion between generic SGF node trees and game records."""

from __future__ import annotations

import logging

from gosgf.core.board import Board
from gosgf.core.enums import Mark, Stone
from gosgf.core.move import Move, Variation, count_moves
from gosgf.core.notation import (
    SgfCollection,
    SgfNode,
    parse_sgf,
    serialize_collection,
)
from gosgf.core.types import (
    DEFAULT_BOARD_SIZE,
    PASS,
    STAR_POINTS,
    parse_sgf_area,
    parse_sgf_coord,
    sgf_coord,
)
from gosgf.game.history import VariationNotFoundError
from gosgf.game.record import GameRecord
from gosgf.game.settings import RecordSettings

_LOGGER = logging.getLogger(__name__)

_MOVE_IDENTS: tuple[tuple[str, Stone], ...] = (("B", Stone.BLACK), ("W", Stone.WHITE))

# Later entries win when a node carries several marks.
_MARK_IDENTS: tuple[tuple[str, Mark], ...] = (
    ("MA", Mark.TRIANGLE),
    ("CR", Mark.CIRCLE),
    ("SQ", Mark.SQUARE),
    ("TR", Mark.TRIANGLE),
    ("BM", Mark.CROSS),
)

_MARK_OUTPUT: dict[Mark, str] = {
    Mark.TRIANGLE: "TR",
    Mark.SQUARE: "SQ",
    Mark.CIRCLE: "CR",
    Mark.CROSS: "BM",
}

_SETUP_IDENTS: tuple[tuple[str, Stone], ...] = (
    ("AB", Stone.BLACK),
    ("AW", Stone.WHITE),
    ("AE", Stone.EMPTY),
)


# ── Node <-> Move ───────────────────────────────────────────────────────────


def move_from_node(
    node: SgfNode, board_size: int = DEFAULT_BOARD_SIZE
) -> Move | None:
    """Build a :class:`Move` from a ``B``/``W`` node, ``None`` otherwise.

    Variations of the node are not converted here.
    """
    for ident, color in _MOVE_IDENTS:
        if ident in node:
            coord = node.get(ident, "") or ""
            break
    else:
        return None

    try:
        position = parse_sgf_coord(coord, board_size)
    except ValueError:
        _LOGGER.warning("Treating malformed move %s[%s] as a pass", ident, coord)
        position = PASS

    move = Move(position, color, comment=node.get("C", "") or "")
    for mark_ident, mark in _MARK_IDENTS:
        if mark_ident in node:
            move.mark = mark

    labels = node.values("LB")
    if labels:
        own = f"{coord}:"
        raw = next((value for value in labels if value.startswith(own)), labels[0])
        text = raw.split(":", 1)[1] if ":" in raw else raw
        move.label = text
        if move.mark == Mark.NONE and text:
            move.mark = Mark.NUMBER if text.isdigit() else Mark.LETTER
    return move


def node_from_move(move: Move) -> SgfNode:
    """Build the SGF node for *move*, its variations included."""
    return nodes_from_moves([move])[0]


def _annotated_node(move: Move) -> SgfNode:
    node = SgfNode()
    coord = sgf_coord(move.position)
    node.add(move.color.sgf_letter, coord)
    if move.comment:
        node.add("C", move.comment)
    if not move.is_pass:
        mark_ident = _MARK_OUTPUT.get(move.mark)
        if mark_ident is not None:
            node.add(mark_ident, coord)
        if move.label:
            node.add("LB", f"{coord}:{move.label}")
    return node


def nodes_from_moves(moves: list[Move]) -> list[SgfNode]:
    top: list[SgfNode] = []
    # Each branch list is attached before it is filled, so order holds.
    stack = [(moves, top)]
    while stack:
        line, out = stack.pop()
        for move in line:
            node = _annotated_node(move)
            out.append(node)
            for variation in move.variations:
                branch: list[SgfNode] = []
                node.variations.append(branch)
                stack.append((variation.moves, branch))
    return top


class _SequenceFrame:
    """Conversion state of one node sequence while its sub-trees are read."""

    __slots__ = ("nodes", "moves", "leading", "_node", "_branch")

    def __init__(self, nodes: list[SgfNode]) -> None:
        self.nodes = nodes
        self.moves: list[Move] = []
        self.leading: list[Variation] = []
        self._node = -1
        self._branch = 0

    def next_branch(self, board_size: int) -> list[SgfNode] | None:
        """Next sub-tree to convert; moves of passed nodes are collected."""
        while True:
            if self._node >= 0:
                branches = self.nodes[self._node].variations
                if self._branch < len(branches):
                    self._branch += 1
                    return branches[self._branch - 1]
            self._node += 1
            self._branch = 0
            if self._node >= len(self.nodes):
                return None
            node = self.nodes[self._node]
            move = move_from_node(node, board_size)
            if move is not None:
                self.moves.append(move)
            elif any(ident in node for ident, _ in _SETUP_IDENTS) and self.moves:
                _LOGGER.warning("Ignoring setup stones placed after the first move")

    def attach(self, child: _SequenceFrame, settings: RecordSettings) -> None:
        bucket = self.moves[-1].variations if self.moves else self.leading
        if child.moves:
            bucket.append(Variation(settings.name_for(len(bucket) + 1), child.moves))
        for variation in child.leading:
            variation.name = settings.name_for(len(bucket) + 1)
            bucket.append(variation)


def moves_from_nodes(
    nodes: list[SgfNode], settings: RecordSettings
) -> tuple[list[Move], list[Variation]]:
    """Convert a node sequence depth-first.

    Returns the moves plus the variations found on move-less nodes ahead
    of the first move (alternatives to the whole sequence). Variations on
    any later node belong to the latest move.
    """
    top = _SequenceFrame(nodes)
    stack = [top]
    while stack:
        frame = stack[-1]
        branch = frame.next_branch(settings.board_size)
        if branch is None:
            stack.pop()
            if stack:
                stack[-1].attach(frame, settings)
        else:
            stack.append(_SequenceFrame(branch))
    return top.moves, top.leading


# ── Header / setup ──────────────────────────────────────────────────────────


def _apply_root(root: SgfNode, record: GameRecord) -> None:
    settings = record.settings
    record.black_player = root.get("PB", "") or ""
    record.white_player = root.get("PW", "") or ""
    record.result = root.get("RE", "") or ""
    record.date = root.get("DT", "") or ""

    size_text = root.get("SZ")
    if size_text is not None:
        try:
            size = int(size_text.split(":", 1)[0])
        except ValueError:
            _LOGGER.warning("Invalid board size SZ[%s]", size_text)
        else:
            if size != settings.board_size:
                _LOGGER.warning(
                    "Board size %d is not supported, using %d",
                    size,
                    settings.board_size,
                )

    board = Board(settings.board_size)
    for ident, stone in _SETUP_IDENTS:
        for value in root.values(ident):
            try:
                points = parse_sgf_area(value, settings.board_size)
            except ValueError:
                _LOGGER.warning("Ignoring invalid setup point %s[%s]", ident, value)
                continue
            for point in points:
                board.set_stone(point, stone)

    handicap_text = root.get("HA")
    if handicap_text is not None:
        try:
            record.handicap = int(handicap_text)
        except ValueError:
            _LOGGER.warning("Invalid handicap HA[%s]", handicap_text)
    if not 0 <= record.handicap <= len(STAR_POINTS):
        _LOGGER.warning("Handicap must be between 1 and 9, got %d", record.handicap)
        record.handicap = 0
    if record.handicap and "AB" not in root:
        for point in STAR_POINTS[: record.handicap]:
            board.set_stone(point, Stone.BLACK)

    record.initial_setup = board.snapshot()
    record.first_player = default_first_player(record.handicap)
    player = root.get("PL", "") or ""
    if player.upper().startswith("B"):
        record.first_player = Stone.BLACK
    elif player.upper().startswith("W"):
        record.first_player = Stone.WHITE


def default_first_player(handicap: int) -> Stone:
    """White starts handicap games, Black everything else."""
    return Stone.WHITE if handicap >= 2 else Stone.BLACK


# ── Collection <-> record ───────────────────────────────────────────────────


def _tree_move_count(nodes: list[SgfNode]) -> int:
    total = 0
    stack = [nodes]
    while stack:
        sequence = stack.pop()
        for node in sequence:
            if any(ident in node for ident, _ in _MOVE_IDENTS):
                total += 1
            stack.extend(node.variations)
    return total


def record_from_collection(
    collection: SgfCollection, settings: RecordSettings | None = None
) -> GameRecord:
    """Build a fresh :class:`GameRecord` from parsed SGF.

    With several top-level trees the longest one provides the header and
    main line; the others become alternative openings.
    """
    settings = settings or RecordSettings()
    trees = [nodes for nodes in collection.trees if nodes]
    record = GameRecord(settings=settings)
    if not trees:
        return record

    main_index = max(range(len(trees)), key=lambda i: _tree_move_count(trees[i]))
    main_tree = trees[main_index]
    _apply_root(main_tree[0], record)

    history = record.history
    main_line, start_variations = moves_from_nodes(main_tree, settings)
    for index, nodes in enumerate(trees):
        if index == main_index:
            continue
        moves, nested = moves_from_nodes(nodes, settings)
        if moves:
            start_variations.append(Variation("", moves))
        start_variations.extend(nested)
    for slot, variation in enumerate(start_variations, start=1):
        variation.name = variation.name or settings.name_for(slot)

    history.main_line = main_line
    history.start_variations = start_variations
    history.cursor = history.tip
    _LOGGER.debug(
        "Loaded %d moves (%d incl. variations), %d opening variations",
        len(main_line),
        count_moves(main_line),
        len(start_variations),
    )
    return record


def record_from_sgf(text: str, settings: RecordSettings | None = None) -> GameRecord:
    """Parse SGF *text*; raises :class:`SgfParseError` on malformed input."""
    return record_from_collection(parse_sgf(text), settings)


def root_node(record: GameRecord) -> SgfNode:
    settings = record.settings
    root = SgfNode()
    root.add("FF", "4")
    root.add("GM", "1")
    root.add("SZ", str(settings.board_size))
    if settings.application:
        root.add("AP", settings.application)
    root.add("PB", record.black_player)
    root.add("PW", record.white_player)
    root.add("RE", record.result)
    if record.date:
        root.add("DT", record.date)
    if record.handicap:
        root.add("HA", str(record.handicap))

    setup = record.setup_stones
    if setup[Stone.BLACK]:
        root.add("AB", *(sgf_coord(p) for p in setup[Stone.BLACK]))
    if setup[Stone.WHITE]:
        root.add("AW", *(sgf_coord(p) for p in setup[Stone.WHITE]))
    if record.first_player != default_first_player(record.handicap):
        root.add("PL", record.first_player.sgf_letter)
    return root


def record_to_collection(record: GameRecord) -> SgfCollection:
    history = record.history
    root = root_node(record)
    root.variations = [nodes_from_moves(v.moves) for v in history.start_variations]
    return SgfCollection(trees=[[root, *nodes_from_moves(history.main_line)]])


def record_to_sgf(record: GameRecord) -> str:
    return serialize_collection(record_to_collection(record))


def export_variation(record: GameRecord, index: int, *, at_start: bool = False) -> str:
    """SGF of the main line up to the cursor followed by one variation.

    Raises :class:`VariationNotFoundError` for a bad index.
    """
    history = record.history
    bucket = history.start_variations if at_start else history.variations_here()
    if not 0 <= index < len(bucket):
        raise VariationNotFoundError(index, at_start=at_start)

    prefix = [] if at_start else history.moves_to_cursor()
    moves = [m.without_variations() for m in prefix]
    moves += [m.copy() for m in bucket[index].moves]
    return serialize_collection([[root_node(record), *nodes_from_moves(moves)]])
