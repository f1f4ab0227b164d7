"""Resolve a path against a schema tree.

The fold in :func:`walk` is shared by the runtime resolver and the static
mirror in :mod:`schemapath.static`; each supplies a view exposing the same
kind/accessor surface over its own node representation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, TypeVar

from .config import SCHEMAPATH_CONFIG
from .errors import (
    IndexOutOfBoundsError,
    NotAnObjectError,
    NotIndexableError,
    UnknownPropertyError,
    UnwrapLimitError,
)
from .path import Element, Index, PathRef, Property, Segment, format_path, parse_path
from .runtime.logging import get_logger
from .schema.classify import NODE_VIEW
from .schema.kinds import SchemaKind, is_transparent
from .schema.nodes import Schema

NodeT = TypeVar("NodeT")

PathLike = str | PathRef | Sequence[Segment]


class SchemaView(Protocol[NodeT]):
    def kind(self, node: NodeT) -> SchemaKind: ...

    def inner(self, node: NodeT) -> NodeT: ...

    def properties(self, node: NodeT) -> Mapping[str, NodeT]: ...

    def element(self, node: NodeT) -> NodeT: ...

    def value(self, node: NodeT) -> NodeT: ...

    def items(self, node: NodeT) -> Sequence[NodeT]: ...

    def options(self, node: NodeT) -> Sequence[NodeT]: ...


def coerce_path(path: PathLike) -> tuple[str, tuple[Segment, ...]]:
    """Return ``(path text, segments)`` for any accepted path form."""

    if isinstance(path, str):
        return path, parse_path(path)
    if isinstance(path, PathRef):
        return path.path, path.segments
    if isinstance(path, Sequence):
        segments = tuple(path)
        return format_path(segments), segments
    raise TypeError(
        f"path must be a string, PathRef or sequence of segments, got {type(path).__name__}"
    )


def _unwrap(view: SchemaView[NodeT], node: NodeT, path: str) -> tuple[NodeT, SchemaKind]:
    limit = SCHEMAPATH_CONFIG.max_unwrap_depth
    kind = view.kind(node)
    depth = 0
    while is_transparent(kind):
        if depth >= limit:
            raise UnwrapLimitError(path, limit)
        node = view.inner(node)
        kind = view.kind(node)
        depth += 1
    return node, kind


def _step(view: SchemaView[NodeT], node: NodeT, segment: Segment, path: str) -> NodeT:
    node, kind = _unwrap(view, node, path)

    match segment:
        case Property(name=name):
            if kind is not SchemaKind.OBJECT:
                raise NotAnObjectError(path, name, kind)
            properties = view.properties(node)
            if name not in properties:
                raise UnknownPropertyError(path, name)
            return properties[name]

        case Element():
            if kind is SchemaKind.ARRAY:
                return view.element(node)
            if kind is SchemaKind.RECORD:
                return view.value(node)
            raise NotIndexableError(path, "[]", "array/record", kind)

        case Index(index=index):
            if kind is SchemaKind.TUPLE:
                children = view.items(node)
            elif kind is SchemaKind.UNION:
                children = view.options(node)
            else:
                raise NotIndexableError(path, f"[{index}]", "tuple/union", kind)
            if index >= len(children):
                raise IndexOutOfBoundsError(path, index, len(children), kind)
            return children[index]

    raise TypeError(f"expected a path segment, got {type(segment).__name__}")


def walk(
    view: SchemaView[NodeT], root: NodeT, segments: Sequence[Segment], path: str
) -> NodeT:
    """Fold ``segments`` over ``root``.

    Wrappers are unwrapped before every step, never after the last one, so a
    path ending on a wrapper yields the wrapper itself.
    """

    current = root
    for segment in segments:
        current = _step(view, current, segment, path)
    return current


def resolve(schema: Schema, path: PathLike = "") -> Schema:
    """Return the node of ``schema`` responsible for values at ``path``.

    The empty path returns ``schema`` itself. Raises ``MalformedPathError`` for
    bad path text and a ``PathResolutionError`` subclass, carrying the full
    path, when the path does not fit the schema.
    """

    if not isinstance(schema, Schema):
        raise TypeError(f"resolve() expects a Schema, got {type(schema).__name__}")

    text, segments = coerce_path(path)
    if not segments:
        return schema

    result = walk(NODE_VIEW, schema, segments, text)
    get_logger().debug("resolved path %r to %s schema", text, result.kind)
    return result


__all__ = ["PathLike", "SchemaView", "coerce_path", "resolve", "walk"]
