from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class Property:
    name: str


@dataclass(frozen=True)
class Element:
    """Wildcard step into an array element or record value."""


@dataclass(frozen=True)
class Index:
    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"Index requires an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValueError("Negative indices are not supported in schema paths")


Segment: TypeAlias = Property | Element | Index

__all__ = ["Element", "Index", "Property", "Segment"]
