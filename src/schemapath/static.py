"""Static mirror of :func:`schemapath.resolve`.

Works on schema *types* rather than schema nodes: ``ArraySchema[StringSchema]``,
``ObjectSchema[UserShape]`` where ``UserShape`` is a ``TypedDict`` whose
annotations are schema types, ``TupleSchema[NumberSchema, StringSchema]`` and
so on. No node is ever built or touched. Paths that do not fit reduce to
``typing.Never`` instead of raising.

Forward references inside a shape (``LazySchema["TreeSchema"]``) are evaluated
one property at a time when a lookup reaches them; one that cannot be evaluated
stands for ``Never``. Types derived from runtime nodes by :func:`schema_type_of`
refer to recursive parts through forward references registered in this module.
"""

from __future__ import annotations

import itertools
import sys
import types
import weakref
from collections.abc import Iterator, Mapping, Sequence
from typing import (
    Any,
    ForwardRef,
    Literal,
    Never,
    NotRequired,
    Optional,
    TypedDict,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from .config import SCHEMAPATH_CONFIG
from .errors import SchemaPathError
from .resolve import PathLike, coerce_path, walk
from .schema.kinds import SchemaKind
from .schema.nodes import (
    ArraySchema,
    DefaultSchema,
    EnumSchema,
    LazySchema,
    LiteralSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    PipeSchema,
    ReadonlySchema,
    RecordSchema,
    Schema,
    TransformSchema,
    TupleSchema,
    UnionSchema,
)

# Targets of the forward references produced by schema_type_of, by name.
_DERIVED_LAZY: dict[str, Any] = {}
_LAZY_NAMES: weakref.WeakKeyDictionary[LazySchema[Any], str] = weakref.WeakKeyDictionary()
_lazy_ids = itertools.count()
_shape_ids = itertools.count()


def _schema_class(schema_type: Any) -> type[Schema] | None:
    origin = get_origin(schema_type)
    if origin is None:
        origin = schema_type
    if isinstance(origin, type) and issubclass(origin, Schema):
        return origin
    return None


def _arg(schema_type: Any, position: int) -> Any:
    args = get_args(schema_type)
    if len(args) <= position:
        return Never
    arg = args[position]
    if isinstance(arg, ForwardRef):
        return _DERIVED_LAZY.get(arg.__forward_arg__, Never)
    return arg


class _ShapeProperties(Mapping[str, Any]):
    """Annotations of a ``TypedDict`` shape, evaluated per key on lookup."""

    def __init__(self, shape: Any):
        self._shape = shape
        self._annotations: dict[str, Any] = dict(shape.__annotations__)

    def __getitem__(self, key: str) -> Any:
        holder = types.SimpleNamespace(__annotations__={key: self._annotations[key]})
        module = sys.modules.get(self._shape.__module__)
        globalns = vars(module) if module is not None else {}
        try:
            return get_type_hints(holder, globalns=globalns, localns=_DERIVED_LAZY)[key]
        except NameError:
            return Never

    def __contains__(self, key: object) -> bool:
        return key in self._annotations

    def __iter__(self) -> Iterator[str]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)


class TypeView:
    """Exposes schema types through the accessor surface used by ``walk``."""

    def kind(self, node: Any) -> SchemaKind:
        cls = _schema_class(node)
        if cls is None:
            return SchemaKind.LEAF
        return cls.kind

    def inner(self, node: Any) -> Any:
        if self.kind(node) is SchemaKind.PIPE:
            return _arg(node, 1)
        return _arg(node, 0)

    def properties(self, node: Any) -> Mapping[str, Any]:
        shape = _arg(node, 0)
        if not is_typeddict(shape):
            return {}
        return _ShapeProperties(shape)

    def element(self, node: Any) -> Any:
        return _arg(node, 0)

    def value(self, node: Any) -> Any:
        return _arg(node, 1)

    def items(self, node: Any) -> Sequence[Any]:
        return get_args(node)

    def options(self, node: Any) -> Sequence[Any]:
        return get_args(node)


TYPE_VIEW = TypeView()


def schema_at(schema_type: Any, path: PathLike) -> Any:
    """Static schema type reachable at ``path``, or ``Never``."""

    try:
        text, segments = coerce_path(path)
        return walk(TYPE_VIEW, schema_type, segments, text)
    except SchemaPathError:
        return Never


def output_at(schema_type: Any, path: PathLike) -> Any:
    """Type of the value a successful validation at ``path`` produces."""

    return output_type_of(schema_at(schema_type, path))


_OBJECT_OUTPUTS: weakref.WeakKeyDictionary[type, Any] = weakref.WeakKeyDictionary()


def output_type_of(schema_type: Any) -> Any:
    return _output(schema_type, frozenset())


def _output(schema_type: Any, building: frozenset[type]) -> Any:
    cls = _schema_class(schema_type)
    if cls is None:
        return Never

    args = get_args(schema_type)
    match cls.kind:
        case SchemaKind.OBJECT:
            return _object_output(_arg(schema_type, 0), building)
        case SchemaKind.ARRAY:
            return list[_output(_arg(schema_type, 0), building)]
        case SchemaKind.RECORD:
            return dict[
                _output(_arg(schema_type, 0), building),
                _output(_arg(schema_type, 1), building),
            ]
        case SchemaKind.TUPLE:
            return tuple[tuple(_output(item, building) for item in args)]
        case SchemaKind.UNION:
            if not args:
                return Never
            return Union[tuple(_output(option, building) for option in args)]
        case SchemaKind.OPTIONAL | SchemaKind.NULLABLE:
            return Optional[_output(_arg(schema_type, 0), building)]
        case SchemaKind.DEFAULT | SchemaKind.READONLY | SchemaKind.LAZY:
            return _output(_arg(schema_type, 0), building)
        case SchemaKind.PIPE:
            return _output(_arg(schema_type, 1), building)
        case SchemaKind.LEAF:
            if args:
                return args[0]
            return cls.output_type


def _absence_kind(schema_type: Any) -> SchemaKind | None:
    """Kind that lets a property of this type be absent, if any.

    Mirrors ``schemapath.schema.nodes.absence_kind``: nullable, readonly, lazy
    and the input side of a pipe pass absence through to their inner type.
    """
    for _ in range(SCHEMAPATH_CONFIG.max_unwrap_depth):
        cls = _schema_class(schema_type)
        if cls is None:
            return None
        match cls.kind:
            case SchemaKind.OPTIONAL | SchemaKind.DEFAULT:
                return cls.kind
            case SchemaKind.NULLABLE | SchemaKind.READONLY | SchemaKind.LAZY | SchemaKind.PIPE:
                schema_type = _arg(schema_type, 0)
            case _:
                return None
    return None


def _object_output(shape: Any, building: frozenset[type]) -> Any:
    if not is_typeddict(shape):
        return dict[str, Any]

    cached = _OBJECT_OUTPUTS.get(shape)
    if cached is not None:
        return cached

    name = f"{shape.__name__}Output"
    if shape in building:
        return ForwardRef(name)

    building = building | {shape}
    fields: dict[str, Any] = {}
    for key, child in _ShapeProperties(shape).items():
        value = _output(child, building)
        if _absence_kind(child) is SchemaKind.OPTIONAL:
            value = NotRequired[value]
        fields[key] = value

    output = TypedDict(name, fields)  # type: ignore[misc]
    _OBJECT_OUTPUTS[shape] = output
    return output


def schema_type_of(node: Schema) -> Any:
    """Derive the schema type of a runtime node.

    Each lazy node becomes ``LazySchema[ForwardRef(name)]`` with its target
    registered under ``name``, so recursive schemas stay traversable to any
    depth. The registration lives as long as the lazy node.
    """

    return _schema_type(node)


def _lazy_type(node: LazySchema[Any]) -> Any:
    name = _LAZY_NAMES.get(node)
    if name is None:
        name = f"DerivedLazy{next(_lazy_ids)}"
        _LAZY_NAMES[node] = name
        try:
            _DERIVED_LAZY[name] = _schema_type(node.inner)
        except BaseException:
            del _LAZY_NAMES[node]
            raise
        weakref.finalize(node, _DERIVED_LAZY.pop, name, None)
    return LazySchema[ForwardRef(name)]


def _schema_type(node: Schema) -> Any:
    match node:
        case ObjectSchema():
            shape = TypedDict(  # type: ignore[misc]
                f"Shape{next(_shape_ids)}",
                {name: _schema_type(child) for name, child in node.shape.items()},
            )
            return ObjectSchema[shape]
        case ArraySchema():
            return ArraySchema[_schema_type(node.element)]
        case RecordSchema():
            return RecordSchema[_schema_type(node.key), _schema_type(node.value)]
        case TupleSchema():
            return TupleSchema[tuple(_schema_type(item) for item in node.items)]
        case UnionSchema():
            return UnionSchema[tuple(_schema_type(option) for option in node.options)]
        case OptionalSchema():
            return OptionalSchema[_schema_type(node.inner)]
        case NullableSchema():
            return NullableSchema[_schema_type(node.inner)]
        case DefaultSchema():
            return DefaultSchema[_schema_type(node.inner)]
        case ReadonlySchema():
            return ReadonlySchema[_schema_type(node.inner)]
        case LazySchema():
            return _lazy_type(node)
        case PipeSchema():
            return PipeSchema[_schema_type(node.input), _schema_type(node.output)]
        case LiteralSchema():
            return LiteralSchema[Literal[node.value]]
        case EnumSchema():
            return EnumSchema[Literal[node.values]]
        case TransformSchema():
            return TransformSchema[Any]
        case Schema():
            return type(node)
        case _:
            raise TypeError(f"schema_type_of() expects a Schema, got {type(node).__name__}")


__all__ = [
    "TYPE_VIEW",
    "TypeView",
    "output_at",
    "output_type_of",
    "schema_at",
    "schema_type_of",
]
