"""Record-level configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gosgf.core.types import DEFAULT_BOARD_SIZE


@dataclass
class RecordSettings:
    """All tunable defaults of a game record."""

    # Board; only 19x19 is fully supported (star points, "tt" passes).
    board_size: int = DEFAULT_BOARD_SIZE

    # History
    variation_name: str = "Variation {n}"  # n = 1-based slot number

    # SGF output
    application: str = ""  # AP[...] when set

    def name_for(self, n: int) -> str:
        return self.variation_name.format(n=n)
