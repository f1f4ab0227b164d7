"""
schemapath: select nested sub-schemas by path, and compute their static types.

This package uses a src-layout. Import the package as `schemapath`.
"""

from importlib.metadata import version

__version__ = version("schemapath")

from .config import SCHEMAPATH_CONFIG, SchemaPathConfig
from .errors import (
    MISSING,
    IndexOutOfBoundsError,
    MalformedPathError,
    NotAnObjectError,
    NotIndexableError,
    PathResolutionError,
    ResolutionReason,
    SchemaPathError,
    UnknownPropertyError,
    UnwrapLimitError,
)
from .path import Element, Index, P, PathRef, Property, Segment, format_path, parse_path
from .resolve import resolve, walk
from .runtime import configure_logging, get_logger
from .schema import (
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
    SchemaKind,
    StringSchema,
    TransformSchema,
    TupleSchema,
    UnionSchema,
    kind_of,
)
from .static import output_at, output_type_of, schema_at, schema_type_of

__all__ = [
    "__version__",
    "MISSING",
    "SCHEMAPATH_CONFIG",
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "DefaultSchema",
    "Element",
    "EnumSchema",
    "Index",
    "IndexOutOfBoundsError",
    "IntegerSchema",
    "LazySchema",
    "LiteralSchema",
    "MalformedPathError",
    "NotAnObjectError",
    "NotIndexableError",
    "NullSchema",
    "NullableSchema",
    "NumberSchema",
    "ObjectSchema",
    "OptionalSchema",
    "P",
    "PathRef",
    "PathResolutionError",
    "PipeSchema",
    "Property",
    "ReadonlySchema",
    "RecordSchema",
    "ResolutionReason",
    "Schema",
    "SchemaKind",
    "SchemaPathConfig",
    "SchemaPathError",
    "Segment",
    "StringSchema",
    "TransformSchema",
    "TupleSchema",
    "UnionSchema",
    "UnknownPropertyError",
    "UnwrapLimitError",
    "configure_logging",
    "format_path",
    "get_logger",
    "kind_of",
    "output_at",
    "output_type_of",
    "parse_path",
    "resolve",
    "schema_at",
    "schema_type_of",
    "walk",
]
