"""Kind discrimination and kind-specific accessors for runtime schema nodes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeVar

from .kinds import SchemaKind
from .nodes import (
    ArraySchema,
    DefaultSchema,
    LazySchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    PipeSchema,
    ReadonlySchema,
    RecordSchema,
    Schema,
    TupleSchema,
    UnionSchema,
)

_NodeT = TypeVar("_NodeT", bound=Schema)


def kind_of(node: object) -> SchemaKind:
    """Return the declared kind of ``node``.

    The tag is read from the node class, never inferred from the fields a node
    happens to expose.
    """
    if not isinstance(node, Schema):
        raise TypeError(f"expected a Schema node, got {type(node).__name__}")
    return node.kind


def _expect(node: Schema, cls: type[_NodeT], accessor: str) -> _NodeT:
    if not isinstance(node, cls):
        raise TypeError(f"{accessor}() requires {cls.__name__}, got {type(node).__name__}")
    return node


def shape_of(node: Schema) -> Mapping[str, Schema]:
    return _expect(node, ObjectSchema, "shape_of").shape


def element_of(node: Schema) -> Schema:
    return _expect(node, ArraySchema, "element_of").element


def value_of(node: Schema) -> Schema:
    return _expect(node, RecordSchema, "value_of").value


def items_of(node: Schema) -> Sequence[Schema]:
    return _expect(node, TupleSchema, "items_of").items


def options_of(node: Schema) -> Sequence[Schema]:
    return _expect(node, UnionSchema, "options_of").options


def inner_of(node: Schema) -> Schema:
    """Step one level into a transparent wrapper.

    Lazy nodes are forced here and nowhere earlier; pipes yield their output
    side.
    """
    match node:
        case OptionalSchema() | NullableSchema() | DefaultSchema() | ReadonlySchema():
            return node.inner
        case LazySchema():
            return node.inner
        case PipeSchema():
            return node.output
        case _:
            raise TypeError(f"inner_of() requires a wrapper schema, got {type(node).__name__}")


class NodeView:
    """Adapts the runtime accessors to the traversal fold."""

    def kind(self, node: Schema) -> SchemaKind:
        return kind_of(node)

    def inner(self, node: Schema) -> Schema:
        return inner_of(node)

    def properties(self, node: Schema) -> Mapping[str, Schema]:
        return shape_of(node)

    def element(self, node: Schema) -> Schema:
        return element_of(node)

    def value(self, node: Schema) -> Schema:
        return value_of(node)

    def items(self, node: Schema) -> Sequence[Schema]:
        return items_of(node)

    def options(self, node: Schema) -> Sequence[Schema]:
        return options_of(node)


NODE_VIEW = NodeView()

__all__ = [
    "NODE_VIEW",
    "NodeView",
    "element_of",
    "inner_of",
    "items_of",
    "kind_of",
    "options_of",
    "shape_of",
    "value_of",
]
