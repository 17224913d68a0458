from __future__ import annotations

from typing import NamedTuple


class Location(NamedTuple):
    """1-based line and column of a node in its source text."""

    line: int
    column: int

    @classmethod
    def unknown(cls) -> Location:
        return cls(0, 0)

    def __str__(self) -> str:
        return f"[{self.line:03}:{self.column:03}]"
