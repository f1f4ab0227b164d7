from __future__ import annotations

import enum


class SchemaKind(enum.StrEnum):
    """Declared discriminant of a schema node.

    ``LEAF`` covers every node without a child relevant to traversal; it is the
    default tag of the node base class so that new leaf types are classified
    explicitly rather than by falling through.
    """

    OBJECT = "object"
    ARRAY = "array"
    RECORD = "record"
    TUPLE = "tuple"
    UNION = "union"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    READONLY = "readonly"
    LAZY = "lazy"
    PIPE = "pipe"
    LEAF = "leaf"


TRANSPARENT_KINDS = frozenset(
    {
        SchemaKind.OPTIONAL,
        SchemaKind.NULLABLE,
        SchemaKind.DEFAULT,
        SchemaKind.READONLY,
        SchemaKind.LAZY,
        SchemaKind.PIPE,
    }
)

# Properties of these kinds may be absent from an object value.
ABSENT_OK_KINDS = frozenset({SchemaKind.OPTIONAL, SchemaKind.DEFAULT})


def is_transparent(kind: SchemaKind) -> bool:
    return kind in TRANSPARENT_KINDS


__all__ = ["ABSENT_OK_KINDS", "SchemaKind", "TRANSPARENT_KINDS", "is_transparent"]
