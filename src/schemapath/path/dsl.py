from __future__ import annotations

from dataclasses import dataclass

from .parser import format_path
from .segments import Element, Index, Property, Segment


@dataclass(frozen=True)
class PathRef:
    """Attribute/item builder for schema paths.

    ``P.users[:].name`` is ``users[].name`` and ``P.coords[2]`` is
    ``coords[2]``. Use ``P["name"]`` for property names that start with an
    underscore or collide with ``segments``/``path``.
    """

    segments: tuple[Segment, ...] = ()

    def _child(self, segment: Segment) -> PathRef:
        return PathRef(segments=(*self.segments, segment))

    def __getattr__(self, name: str) -> PathRef:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._child(Property(name))

    def __getitem__(self, key: int | str | slice) -> PathRef:
        if isinstance(key, slice):
            if key != slice(None):
                raise ValueError("Only the full slice [:] is supported in schema paths")
            return self._child(Element())
        if isinstance(key, bool):
            raise TypeError("Boolean keys are not supported in schema paths")
        if isinstance(key, int):
            if key < 0:
                raise ValueError("Negative indices are not supported in schema paths")
            return self._child(Index(key))
        if not key:
            raise ValueError("String keys in schema paths cannot be empty")
        if "." in key or "[" in key:
            raise ValueError("String keys in schema paths may not contain '.' or '['")
        return self._child(Property(key))

    @property
    def path(self) -> str:
        return format_path(self.segments)

    def __str__(self) -> str:
        return self.path


P = PathRef()

__all__ = ["P", "PathRef"]
