"""Notation package: generic SGF parsing and serialization."""

from gosgf.core.notation.models import SgfCollection, SgfNode
from gosgf.core.notation.sgf import (
    SgfParseError,
    escape_text,
    parse_sgf,
    serialize_collection,
    serialize_node,
    serialize_tree,
    unescape_text,
)

__all__ = [
    "SgfCollection",
    "SgfNode",
    "SgfParseError",
    "escape_text",
    "unescape_text",
    "parse_sgf",
    "serialize_node",
    "serialize_tree",
    "serialize_collection",
]
