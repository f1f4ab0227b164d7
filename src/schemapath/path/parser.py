"""Path grammar.

``users[].name`` reads as: property ``users``, any element, property ``name``.
Brackets hold nothing (array element / record value) or a non-negative decimal
index (tuple item / union option).
"""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import MalformedPathError
from .segments import Element, Index, Property, Segment

_NAME_TERMINATORS = ".["


def _name_end(path: str, start: int) -> int:
    end = len(path)
    for terminator in _NAME_TERMINATORS:
        found = path.find(terminator, start)
        if found != -1 and found < end:
            end = found
    return end


def _bracket_segment(path: str, content: str, position: int) -> Segment:
    if not content:
        return Element()
    if content.isascii() and content.isdigit():
        return Index(int(content))
    raise MalformedPathError(path, f"invalid index {content!r}", position=position)


def parse_path(path: str) -> tuple[Segment, ...]:
    """Split ``path`` into segments, left to right, none elided.

    Raises ``MalformedPathError`` for unclosed brackets, empty property names
    and bracket contents that are neither empty nor a non-negative integer.
    """

    if not isinstance(path, str):
        raise TypeError(f"path must be a string, got {type(path).__name__}")

    segments: list[Segment] = []
    length = len(path)
    # ".[0]" is tolerated; ".name" is covered by the separator branch.
    index = 1 if path.startswith(".[") else 0

    while index < length:
        char = path[index]
        if char == "[":
            close = path.find("]", index + 1)
            if close == -1:
                raise MalformedPathError(path, "unclosed bracket", position=index)
            segments.append(_bracket_segment(path, path[index + 1 : close], index))
            index = close + 1
            continue

        start = index + 1 if char == "." else index
        end = _name_end(path, start)
        if end == start:
            raise MalformedPathError(path, "empty property name", position=start)
        segments.append(Property(path[start:end]))
        index = end

    return tuple(segments)


def _check_name(name: str) -> None:
    if not name or any(char in name for char in _NAME_TERMINATORS):
        raise MalformedPathError(
            name, "property names must be non-empty and may not contain '.' or '['"
        )


def format_path(segments: Iterable[Segment]) -> str:
    """Render segments as canonical path text; inverse of :func:`parse_path`."""

    parts: list[str] = []
    for segment in segments:
        match segment:
            case Property(name=name):
                _check_name(name)
                parts.append(f".{name}" if parts else name)
            case Element():
                parts.append("[]")
            case Index(index=position):
                parts.append(f"[{position}]")
            case _:
                raise TypeError(f"expected a path segment, got {type(segment).__name__}")
    return "".join(parts)


__all__ = ["format_path", "parse_path"]
