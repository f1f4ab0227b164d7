from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .schema.kinds import SchemaKind


class _SchemaPathMissing:
    """Marker for an absent value, the counterpart of an undefined input."""

    _instance: _SchemaPathMissing | None = None

    def __new__(cls) -> _SchemaPathMissing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "schemapath.MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _SchemaPathMissing()


class SchemaPathError(Exception):
    """Base class for every error raised by schemapath."""


class MalformedPathError(SchemaPathError, ValueError):
    """Raised by the path parser before any traversal begins."""

    def __init__(self, path: str, message: str, *, position: int | None = None):
        self.path = path
        self.position = position
        location = "" if position is None else f" at position {position}"
        super().__init__(f"invalid path {path!r}: {message}{location}")


class ResolutionReason(enum.StrEnum):
    UNKNOWN_PROPERTY = "unknown_property"
    NOT_AN_OBJECT = "not_an_object"
    NOT_INDEXABLE = "not_indexable"
    INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
    UNWRAP_LIMIT = "unwrap_limit"


class PathResolutionError(SchemaPathError, LookupError):
    """Raised mid-traversal; ``path`` is always the complete original path."""

    reason: ResolutionReason

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"invalid path {path!r}: {detail}")


class UnknownPropertyError(PathResolutionError):
    reason = ResolutionReason.UNKNOWN_PROPERTY

    def __init__(self, path: str, name: str):
        self.name = name
        super().__init__(path, f"property {name!r} does not exist on object schema")


class NotAnObjectError(PathResolutionError):
    reason = ResolutionReason.NOT_AN_OBJECT

    def __init__(self, path: str, name: str, kind: SchemaKind):
        self.name = name
        self.kind = kind
        super().__init__(
            path,
            f"cannot access property {name!r} on non-object schema (got {kind})",
        )


class NotIndexableError(PathResolutionError):
    reason = ResolutionReason.NOT_INDEXABLE

    def __init__(self, path: str, accessor: str, expected: str, kind: SchemaKind):
        self.accessor = accessor
        self.kind = kind
        super().__init__(
            path, f"cannot use {accessor} on non-{expected} schema (got {kind})"
        )


class IndexOutOfBoundsError(PathResolutionError):
    reason = ResolutionReason.INDEX_OUT_OF_BOUNDS

    def __init__(self, path: str, index: int, length: int, kind: SchemaKind):
        self.index = index
        self.length = length
        self.kind = kind
        super().__init__(
            path, f"{kind} index {index} out of bounds (length {length})"
        )


class UnwrapLimitError(PathResolutionError):
    reason = ResolutionReason.UNWRAP_LIMIT

    def __init__(self, path: str, limit: int):
        self.limit = limit
        super().__init__(
            path, f"wrapper chain exceeds max unwrap depth ({limit})"
        )


__all__ = [
    "MISSING",
    "IndexOutOfBoundsError",
    "MalformedPathError",
    "NotAnObjectError",
    "NotIndexableError",
    "PathResolutionError",
    "ResolutionReason",
    "SchemaPathError",
    "UnknownPropertyError",
    "UnwrapLimitError",
]
