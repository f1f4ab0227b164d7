from .classify import (
    element_of,
    inner_of,
    items_of,
    kind_of,
    options_of,
    shape_of,
    value_of,
)
from .compile import compile_core_schema
from .kinds import TRANSPARENT_KINDS, SchemaKind, is_transparent
from .nodes import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    DefaultSchema,
    EnumSchema,
    IntegerSchema,
    LazySchema,
    LiteralSchema,
    NullableSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    PipeSchema,
    ReadonlySchema,
    RecordSchema,
    Schema,
    StringSchema,
    TransformSchema,
    TupleSchema,
    UnionSchema,
    absence_kind,
)

__all__ = [
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "DefaultSchema",
    "EnumSchema",
    "IntegerSchema",
    "LazySchema",
    "LiteralSchema",
    "NullSchema",
    "NullableSchema",
    "NumberSchema",
    "ObjectSchema",
    "OptionalSchema",
    "PipeSchema",
    "ReadonlySchema",
    "RecordSchema",
    "Schema",
    "SchemaKind",
    "StringSchema",
    "TRANSPARENT_KINDS",
    "TransformSchema",
    "TupleSchema",
    "UnionSchema",
    "absence_kind",
    "compile_core_schema",
    "element_of",
    "inner_of",
    "is_transparent",
    "items_of",
    "kind_of",
    "options_of",
    "shape_of",
    "value_of",
]
