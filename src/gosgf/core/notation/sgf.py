"""SGF parsing and serialization.

Grammar accepted by :func:`parse_sgf`::

    Collection = GameTree+
    GameTree   = "(" (Node | GameTree)* ")"
    Node       = ";" Property*
    Property   = Ident PropValue+
    PropValue  = "[" text "]"

A game tree that follows a node is attached to that node as a variation
and the enclosing sequence carries on after it, which is also the shape
:func:`serialize_tree` writes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from gosgf.core.notation.models import SgfCollection, SgfNode

_LOGGER = logging.getLogger(__name__)


class SgfParseError(ValueError):
    """Raised for SGF text that cannot be read; nothing is returned."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.reason = message
        self.position = position


# ── Text values ─────────────────────────────────────────────────────────────


def escape_text(text: str) -> str:
    """Escape a property value for writing inside ``[...]``."""
    return (
        text.replace("\\", "\\\\")
        .replace("]", "\\]")
        .replace("[", "\\[")
        .replace("\n", "\\n")
    )


def unescape_text(text: str) -> str:
    """Inverse of :func:`escape_text`; ``\\x`` becomes ``x`` for other ``x``."""
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            out.append("\n" if nxt == "n" else nxt)
        else:
            out.append(ch)
    return "".join(out)


# ── Parser ──────────────────────────────────────────────────────────────────


class _SgfReader:
    """Single-pass reader over one SGF string."""

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self._text = text
        self._pos = pos

    def _peek(self) -> str | None:
        """Next non-whitespace character without consuming it."""
        text = self._text
        while self._pos < len(text) and text[self._pos].isspace():
            self._pos += 1
        if self._pos >= len(text):
            return None
        return text[self._pos]

    def collection(self) -> SgfCollection:
        trees: list[list[SgfNode]] = []
        while True:
            ch = self._peek()
            if ch is None:
                break
            if ch != "(":
                _LOGGER.warning(
                    "Ignoring trailing SGF content at offset %d", self._pos
                )
                break
            trees.append(self.game_tree())
        return SgfCollection(trees=trees)

    def game_tree(self) -> list[SgfNode]:
        """Read one tree; nested trees are tracked on an explicit stack."""
        # (offset of "(", nodes read so far) for every tree still open
        open_trees: list[tuple[int, list[SgfNode]]] = [(self._pos, [])]
        self._pos += 1  # "("
        while True:
            start, nodes = open_trees[-1]
            ch = self._peek()
            if ch is None:
                raise SgfParseError("Unterminated game tree", start)
            if ch == ")":
                self._pos += 1
                open_trees.pop()
                if not open_trees:
                    return nodes
                parent = open_trees[-1][1]
                if nodes:
                    if not parent:
                        # Anchor for branches that open before any node.
                        parent.append(SgfNode())
                    parent[-1].variations.append(nodes)
            elif ch == ";":
                nodes.append(self.node())
            elif ch == "(":
                open_trees.append((self._pos, []))
                self._pos += 1
            elif ch.isalpha():
                raise SgfParseError("Property outside of a node", self._pos)
            else:
                raise SgfParseError(f"Unexpected character {ch!r}", self._pos)

    def node(self) -> SgfNode:
        self._pos += 1  # ";"
        node = SgfNode()
        while True:
            ch = self._peek()
            if ch is None or not ch.isalpha():
                return node
            ident, values = self.prop()
            node.add(ident, *values)

    def prop(self) -> tuple[str, list[str]]:
        text = self._text
        start = self._pos
        while self._pos < len(text) and text[self._pos].isalpha():
            self._pos += 1
        raw = text[start : self._pos]
        # FF[3] files may spell identifiers in mixed case, e.g. "SiZe".
        ident = "".join(ch for ch in raw if ch.isupper())
        if not ident:
            raise SgfParseError(f"Malformed property identifier {raw!r}", start)

        values: list[str] = []
        while self._peek() == "[":
            values.append(self.value())
        if not values:
            raise SgfParseError(f"Property {ident} has no value", start)
        return ident, values

    def value(self) -> str:
        text = self._text
        start = self._pos
        self._pos += 1  # "["
        out: list[str] = []
        while self._pos < len(text):
            ch = text[self._pos]
            self._pos += 1
            if ch == "]":
                return "".join(out)
            if ch == "\\":
                if self._pos >= len(text):
                    break
                nxt = text[self._pos]
                self._pos += 1
                out.append("\n" if nxt == "n" else nxt)
            else:
                out.append(ch)
        raise SgfParseError("Unterminated property value", start)


def parse_sgf(text: str) -> SgfCollection:
    """Parse SGF *text* into a :class:`SgfCollection`.

    Raises :class:`SgfParseError` when the text holds no complete game tree
    or is malformed inside one.
    """
    if not text or not text.strip():
        raise SgfParseError("Empty SGF input", 0)
    start = text.find("(")
    if start < 0:
        raise SgfParseError("No game tree found", 0)
    if text[:start].strip():
        _LOGGER.debug("Skipping %d characters before the first game tree", start)

    collection = _SgfReader(text, start).collection()
    if not any(collection.trees):
        raise SgfParseError("Game tree holds no nodes", start)
    return collection


# ── Writer ──────────────────────────────────────────────────────────────────


def serialize_node(node: SgfNode) -> str:
    parts = [";"]
    for ident, values in node.properties.items():
        if not values:
            continue
        parts.append(ident)
        parts.extend(f"[{escape_text(value)}]" for value in values)
    return "".join(parts)


def _tree_items(nodes: list[SgfNode]) -> Iterator[str | list[SgfNode]]:
    for node in nodes:
        yield serialize_node(node)
        yield from node.variations


def serialize_tree(nodes: list[SgfNode]) -> str:
    """Write one game tree, each node followed by its variations."""
    parts = ["("]
    stack = [_tree_items(nodes)]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            parts.append(")")
        elif isinstance(item, str):
            parts.append(item)
        else:
            parts.append("(")
            stack.append(_tree_items(item))
    return "".join(parts)


def serialize_collection(trees: SgfCollection | Iterable[list[SgfNode]]) -> str:
    if isinstance(trees, SgfCollection):
        trees = trees.trees
    return "\n".join(serialize_tree(nodes) for nodes in trees)
