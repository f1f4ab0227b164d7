"""Schema node types.

Every node carries its discriminant as the ``kind`` class attribute and keeps
its children in plain dataclass fields. Nodes are frozen and compare by
identity; value validation is delegated to pydantic-core through
:meth:`Schema.parse`.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import cached_property, partial
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Generic,
    Self,
    TypeVar,
    TypeVarTuple,
    Unpack,
)

from pydantic_core import CoreSchema, SchemaValidator, core_schema

from ..config import SCHEMAPATH_CONFIG
from ..errors import MISSING
from .kinds import ABSENT_OK_KINDS, SchemaKind

if TYPE_CHECKING:
    from .compile import CoreSchemaBuilder

InnerT = TypeVar("InnerT", bound="Schema")
ElementT = TypeVar("ElementT", bound="Schema")
KeyT = TypeVar("KeyT", bound="Schema")
ValueT = TypeVar("ValueT", bound="Schema")
InputT = TypeVar("InputT", bound="Schema")
OutputT = TypeVar("OutputT", bound="Schema")
ShapeT = TypeVar("ShapeT")
LiteralT = TypeVar("LiteralT")
ResultT = TypeVar("ResultT")
ItemsT = TypeVarTuple("ItemsT")
OptionsT = TypeVarTuple("OptionsT")


class Schema:
    kind: ClassVar[SchemaKind] = SchemaKind.LEAF
    output_type: ClassVar[Any] = Any

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        raise NotImplementedError(f"{type(self).__name__} does not define validation")

    @cached_property
    def compiled(self) -> CoreSchema:
        from .compile import compile_core_schema

        return compile_core_schema(self)

    @cached_property
    def _validator(self) -> SchemaValidator:
        return SchemaValidator(self.compiled)

    def parse(self, value: object = MISSING) -> Any:
        """Validate ``value``; omit it to validate an absent value.

        Raises ``pydantic_core.ValidationError`` on failure.
        """
        return self._validator.validate_python(value)

    def optional(self) -> OptionalSchema[Self]:
        return OptionalSchema(self)

    def nullable(self) -> NullableSchema[Self]:
        return NullableSchema(self)

    def default(self, value: Any) -> DefaultSchema[Self]:
        return DefaultSchema(self, value)

    def readonly(self) -> ReadonlySchema[Self]:
        return ReadonlySchema(self)

    def pipe(self, output: OutputT) -> PipeSchema[Self, OutputT]:
        return PipeSchema(self, output)

    def transform(
        self, function: Callable[[Any], ResultT]
    ) -> PipeSchema[Self, TransformSchema[ResultT]]:
        return PipeSchema(self, TransformSchema(function))

    def array(self) -> ArraySchema[Self]:
        return ArraySchema(self)


def _require_schema(owner: str, value: object) -> None:
    if not isinstance(value, Schema):
        raise TypeError(f"{owner} expects Schema children, got {type(value).__name__}")


# Leaves


@dataclass(frozen=True, eq=False)
class StringSchema(Schema):
    output_type: ClassVar[Any] = str

    strict: bool = True

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.str_schema(strict=self.strict)


@dataclass(frozen=True, eq=False)
class NumberSchema(Schema):
    output_type: ClassVar[Any] = float

    strict: bool = True

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.float_schema(strict=self.strict, allow_inf_nan=False)


@dataclass(frozen=True, eq=False)
class IntegerSchema(Schema):
    output_type: ClassVar[Any] = int

    strict: bool = True

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.int_schema(strict=self.strict)


@dataclass(frozen=True, eq=False)
class BooleanSchema(Schema):
    output_type: ClassVar[Any] = bool

    strict: bool = True

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.bool_schema(strict=self.strict)


@dataclass(frozen=True, eq=False)
class NullSchema(Schema):
    output_type: ClassVar[Any] = None

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.none_schema()


@dataclass(frozen=True, eq=False)
class AnySchema(Schema):
    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.any_schema()


@dataclass(frozen=True, eq=False)
class LiteralSchema(Schema, Generic[LiteralT]):
    value: Any

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.literal_schema([self.value])


@dataclass(frozen=True, eq=False)
class EnumSchema(Schema, Generic[LiteralT]):
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        values = tuple(self.values)
        if not values:
            raise ValueError("EnumSchema requires at least one value")
        object.__setattr__(self, "values", values)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.literal_schema(list(self.values))


@dataclass(frozen=True, eq=False)
class TransformSchema(Schema, Generic[ResultT]):
    function: Callable[[Any], ResultT]

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(self.function)


# Containers


@dataclass(frozen=True, eq=False)
class ObjectSchema(Schema, Generic[ShapeT]):
    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    shape: Mapping[str, Schema]

    def __post_init__(self) -> None:
        shape = dict(self.shape)
        for name, child in shape.items():
            if not isinstance(name, str):
                raise TypeError(f"ObjectSchema keys must be strings, got {type(name)}")
            _require_schema("ObjectSchema", child)
        object.__setattr__(self, "shape", MappingProxyType(shape))

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        fields = {
            name: _object_field(builder, child) for name, child in self.shape.items()
        }
        return core_schema.typed_dict_schema(fields)


@dataclass(frozen=True, eq=False)
class ArraySchema(Schema, Generic[ElementT]):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    element: ElementT

    def __post_init__(self) -> None:
        _require_schema("ArraySchema", self.element)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.list_schema(builder.build(self.element))


@dataclass(frozen=True, eq=False)
class RecordSchema(Schema, Generic[KeyT, ValueT]):
    kind: ClassVar[SchemaKind] = SchemaKind.RECORD

    key: KeyT
    value: ValueT

    def __post_init__(self) -> None:
        _require_schema("RecordSchema", self.key)
        _require_schema("RecordSchema", self.value)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.dict_schema(
            builder.build(self.key), builder.build(self.value)
        )


@dataclass(frozen=True, eq=False)
class TupleSchema(Schema, Generic[Unpack[ItemsT]]):
    kind: ClassVar[SchemaKind] = SchemaKind.TUPLE

    items: tuple[Schema, ...]

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            _require_schema("TupleSchema", item)
        object.__setattr__(self, "items", items)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.tuple_schema([builder.build(item) for item in self.items])


@dataclass(frozen=True, eq=False)
class UnionSchema(Schema, Generic[Unpack[OptionsT]]):
    kind: ClassVar[SchemaKind] = SchemaKind.UNION

    options: tuple[Schema, ...]

    def __post_init__(self) -> None:
        options = tuple(self.options)
        if not options:
            raise ValueError("UnionSchema requires at least one option")
        for option in options:
            _require_schema("UnionSchema", option)
        object.__setattr__(self, "options", options)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.union_schema(
            [builder.build(option) for option in self.options]
        )


# Transparent wrappers


def _missing_as_none(value: object, handler: Callable[[object], Any]) -> Any:
    if value is MISSING:
        return None
    return handler(value)


def _missing_as_default(
    default: Any, value: object, handler: Callable[[object], Any]
) -> Any:
    if value is MISSING:
        return copy.deepcopy(default)
    return handler(value)


@dataclass(frozen=True, eq=False)
class OptionalSchema(Schema, Generic[InnerT]):
    kind: ClassVar[SchemaKind] = SchemaKind.OPTIONAL

    inner: InnerT

    def __post_init__(self) -> None:
        _require_schema("OptionalSchema", self.inner)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.no_info_wrap_validator_function(
            _missing_as_none, builder.build(self.inner)
        )


@dataclass(frozen=True, eq=False)
class NullableSchema(Schema, Generic[InnerT]):
    kind: ClassVar[SchemaKind] = SchemaKind.NULLABLE

    inner: InnerT

    def __post_init__(self) -> None:
        _require_schema("NullableSchema", self.inner)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.nullable_schema(builder.build(self.inner))


@dataclass(frozen=True, eq=False)
class DefaultSchema(Schema, Generic[InnerT]):
    kind: ClassVar[SchemaKind] = SchemaKind.DEFAULT

    inner: InnerT
    default_value: Any

    def __post_init__(self) -> None:
        _require_schema("DefaultSchema", self.inner)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.with_default_schema(
            core_schema.no_info_wrap_validator_function(
                partial(_missing_as_default, self.default_value),
                builder.build(self.inner),
            ),
            default_factory=partial(copy.deepcopy, self.default_value),
        )


@dataclass(frozen=True, eq=False)
class ReadonlySchema(Schema, Generic[InnerT]):
    kind: ClassVar[SchemaKind] = SchemaKind.READONLY

    inner: InnerT

    def __post_init__(self) -> None:
        _require_schema("ReadonlySchema", self.inner)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return builder.build(self.inner)


@dataclass(frozen=True, eq=False)
class LazySchema(Schema, Generic[InnerT]):
    """Wrapper around a schema produced on demand, for self-referential trees.

    ``getter`` runs the first time :attr:`inner` is read and its result is
    memoised on the node.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.LAZY

    getter: Callable[[], InnerT]

    @cached_property
    def inner(self) -> InnerT:
        inner = self.getter()
        _require_schema("LazySchema getter", inner)
        return inner

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return builder.reference(self)


@dataclass(frozen=True, eq=False)
class PipeSchema(Schema, Generic[InputT, OutputT]):
    kind: ClassVar[SchemaKind] = SchemaKind.PIPE

    input: InputT
    output: OutputT

    def __post_init__(self) -> None:
        _require_schema("PipeSchema", self.input)
        _require_schema("PipeSchema", self.output)

    def _core_schema(self, builder: CoreSchemaBuilder) -> CoreSchema:
        return core_schema.chain_schema(
            [builder.build(self.input), builder.build(self.output)]
        )


def absence_kind(node: Schema) -> SchemaKind | None:
    """Kind that lets an object property holding ``node`` be absent, if any.

    Nullable, readonly, lazy and the input side of a pipe pass an absent value
    through to their inner schema, so ``StringSchema().optional().nullable()``
    may be absent just like ``StringSchema().optional()``.
    """
    for _ in range(SCHEMAPATH_CONFIG.max_unwrap_depth):
        match node:
            case OptionalSchema() | DefaultSchema():
                return node.kind
            case NullableSchema() | ReadonlySchema() | LazySchema():
                node = node.inner
            case PipeSchema():
                node = node.input
            case _:
                return None
    return None


def _object_field(builder: CoreSchemaBuilder, child: Schema) -> core_schema.TypedDictField:
    schema = builder.build(child)
    absence = absence_kind(child)
    if absence is None:
        return core_schema.typed_dict_field(schema)
    # An absent key is left out unless a default applies; a default below the
    # outermost wrapper is reached by validating MISSING through the chain.
    if absence is SchemaKind.DEFAULT and child.kind not in ABSENT_OK_KINDS:
        schema = core_schema.with_default_schema(
            schema, default=MISSING, validate_default=True
        )
    return core_schema.typed_dict_field(schema, required=False)


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
    "StringSchema",
    "TransformSchema",
    "TupleSchema",
    "UnionSchema",
    "absence_kind",
]
