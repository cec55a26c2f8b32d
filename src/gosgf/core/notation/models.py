"""Generic SGF node tree shared by the parser and the writer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SgfNode:
    """One ``;``-node: properties in file order plus attached variations.

    Every game tree that follows this node inside the same parent tree is
    stored in :attr:`variations` as its own node sequence.
    """

    properties: dict[str, list[str]] = field(default_factory=dict)
    variations: list[list[SgfNode]] = field(default_factory=list)

    def get(self, ident: str, default: str | None = None) -> str | None:
        """First value of *ident*, or *default* when absent."""
        values = self.properties.get(ident)
        if not values:
            return default
        return values[0]

    def values(self, ident: str) -> list[str]:
        return list(self.properties.get(ident, ()))

    def add(self, ident: str, *values: str) -> None:
        self.properties.setdefault(ident, []).extend(values)

    def __contains__(self, ident: object) -> bool:
        return ident in self.properties


@dataclass(slots=True)
class SgfCollection:
    """Parsed SGF file: one node sequence per top-level game tree."""

    trees: list[list[SgfNode]] = field(default_factory=list)
