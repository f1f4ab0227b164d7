from typing import (
    Any,
    Literal,
    Never,
    Optional,
    TypedDict,
    get_origin,
    get_type_hints,
    is_typeddict,
)

import pytest

from example_schemas import (
    SCHEMA,
    TREE,
    WRAPPED,
    BShape,
    ExampleSchema,
    TreeSchema,
    TreeShape,
    UserShape,
    WrappedSchema,
)
from schemapath import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    DefaultSchema,
    EnumSchema,
    IntegerSchema,
    LazySchema,
    LiteralSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    P,
    PipeSchema,
    Property,
    ReadonlySchema,
    RecordSchema,
    StringSchema,
    TransformSchema,
    TupleSchema,
    UnionSchema,
    output_at,
    output_type_of,
    schema_at,
    schema_type_of,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("name", StringSchema),
        ("users[].name", StringSchema),
        ("users[].email", OptionalSchema[StringSchema]),
        ("users[]", ObjectSchema[UserShape]),
        ("config[]", BooleanSchema),
        ("status[0].data", StringSchema),
        ("status[1].message", StringSchema),
        ("status[0].type", LiteralSchema[Literal["ok"]]),
        ("coords[2]", StringSchema),
        ("coords[0]", NumberSchema),
        ("deep.a.b.c", StringSchema),
        ("users[].address.zip", NumberSchema),
        ("nullableField", NullableSchema[StringSchema]),
    ],
)
def test_schema_at_follows_paths(path: str, expected: Any) -> None:
    assert schema_at(ExampleSchema, path) == expected


def test_schema_at_empty_path_is_root() -> None:
    assert schema_at(ExampleSchema, "") is ExampleSchema


@pytest.mark.parametrize(
    "path",
    [
        "nonexistent",
        "name.foo",
        "name[]",
        "users[0]",
        "users.name",
        "status[]",
        "status[2]",
        "coords[3]",
        "optionalField.x",
        "users[",
        "coords[-1]",
        "a..b",
    ],
)
def test_schema_at_reduces_failures_to_never(path: str) -> None:
    assert schema_at(ExampleSchema, path) is Never


def test_schema_at_sees_through_wrappers() -> None:
    assert schema_at(WrappedSchema, "tags[]") is StringSchema
    assert schema_at(WrappedSchema, "settings.theme") is StringSchema
    assert schema_at(WrappedSchema, "point[1]") is IntegerSchema
    assert schema_at(WrappedSchema, "payload.id") is IntegerSchema
    assert schema_at(WrappedSchema, "matrix[][]") is NumberSchema
    assert schema_at(WrappedSchema, "length") == PipeSchema[StringSchema, TransformSchema[int]]


def test_schema_at_resolves_forward_references() -> None:
    assert schema_at(TreeSchema, "children[]") == LazySchema[TreeSchema]
    assert schema_at(TreeSchema, "children[].children[].value") is NumberSchema
    assert schema_at(TreeSchema, "children[].missing") is Never


def test_schema_at_accepts_path_refs_and_segments() -> None:
    assert schema_at(ExampleSchema, P.users[:].name) is StringSchema
    assert schema_at(ExampleSchema, [Property("deep"), Property("a")]) == ObjectSchema[BShape]


def test_schema_at_of_non_schema_type_is_never_past_the_root() -> None:
    assert schema_at(int, "") is int
    assert schema_at(int, "x") is Never
    assert schema_at(ObjectSchema, "x") is Never


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("name", str),
        ("age", float),
        ("config", dict[str, bool]),
        ("coords", tuple[float, float, str]),
        ("optionalField", Optional[str]),
        ("nullableField", Optional[str]),
        ("defaultField", str),
        ("status[0].type", Literal["ok"]),
        ("users[].address.city", str),
    ],
)
def test_output_at(path: str, expected: Any) -> None:
    assert output_at(ExampleSchema, path) == expected


def test_output_at_wrapped_values() -> None:
    assert output_at(WrappedSchema, "length") is int
    assert output_at(WrappedSchema, "tags") == list[str]
    assert output_at(WrappedSchema, "point") == Optional[Optional[tuple[int, int]]]
    assert output_at(WrappedSchema, "matrix") == list[list[float]]


def test_output_at_failure_is_never() -> None:
    assert output_at(ExampleSchema, "nonexistent") is Never


def test_object_output_is_typed_dict() -> None:
    output = output_at(ExampleSchema, "users[]")

    assert is_typeddict(output)
    assert output.__name__ == "UserShapeOutput"
    assert output.__required_keys__ == frozenset({"name", "address"})
    assert output.__optional_keys__ == frozenset({"email"})
    hints = get_type_hints(output)
    assert hints["name"] is str
    assert hints["email"] == Optional[str]
    assert output_at(ExampleSchema, "users[]") is output


def test_object_output_of_status_union() -> None:
    status = output_at(ExampleSchema, "status")
    ok, error = status.__args__
    assert get_type_hints(ok) == {"type": Literal["ok"], "data": str}
    assert get_type_hints(error) == {"type": Literal["error"], "message": str}


def test_recursive_object_output_uses_forward_reference() -> None:
    output = output_type_of(ObjectSchema[TreeShape])

    assert output.__name__ == "TreeShapeOutput"
    children = output.__annotations__["children"]
    assert children.__origin__ is list
    assert children.__args__[0].__forward_arg__ == "TreeShapeOutput"


def test_output_type_of_leaves_and_unparameterised_objects() -> None:
    assert output_type_of(StringSchema) is str
    assert output_type_of(BooleanSchema) is bool
    assert output_type_of(EnumSchema[Literal["a", "b"]]) == Literal["a", "b"]
    assert output_type_of(ObjectSchema) == dict[str, Any]
    assert output_type_of(int) is Never


def test_schema_type_of_derives_types_from_nodes() -> None:
    assert schema_type_of(StringSchema()) is StringSchema
    assert schema_type_of(ArraySchema(NumberSchema())) == ArraySchema[NumberSchema]
    assert (
        schema_type_of(RecordSchema(StringSchema(), BooleanSchema()))
        == RecordSchema[StringSchema, BooleanSchema]
    )
    assert (
        schema_type_of(TupleSchema((NumberSchema(), StringSchema())))
        == TupleSchema[NumberSchema, StringSchema]
    )
    assert (
        schema_type_of(UnionSchema((StringSchema(), NumberSchema())))
        == UnionSchema[StringSchema, NumberSchema]
    )
    assert schema_type_of(LiteralSchema("ok")) == LiteralSchema[Literal["ok"]]
    assert schema_type_of(EnumSchema(("a", "b"))) == EnumSchema[Literal["a", "b"]]
    assert schema_type_of(StringSchema().optional()) == OptionalSchema[StringSchema]


def test_schema_type_of_object_matches_runtime_paths() -> None:
    derived = schema_type_of(SCHEMA)
    assert schema_at(derived, "users[].email") == OptionalSchema[StringSchema]
    assert schema_at(derived, "coords[2]") is StringSchema
    assert schema_at(derived, "status[1].type") == LiteralSchema[Literal["error"]]
    assert schema_at(derived, "nonexistent") is Never

    wrapped = schema_type_of(WRAPPED)
    assert schema_at(wrapped, "payload.id") is IntegerSchema
    assert schema_at(wrapped, "length") == PipeSchema[StringSchema, TransformSchema[Any]]


def test_schema_type_of_follows_lazy_cycles_to_any_depth() -> None:
    derived = schema_type_of(TREE)
    assert schema_at(derived, "children[].value") is NumberSchema
    assert schema_at(derived, "children[].children[].children[].value") is NumberSchema
    assert schema_at(derived, "children[].children[].missing") is Never

    child = schema_at(derived, "children[]")
    assert get_origin(child) is LazySchema
    assert schema_at(derived, "children[].children[]") == child
    assert schema_type_of(TREE) is not derived
    assert schema_at(schema_type_of(TREE), "children[]") == child


def test_derived_recursive_output_refers_to_itself() -> None:
    output = output_at(schema_type_of(TREE), "")
    node_output = output.__annotations__["children"].__args__[0]

    assert is_typeddict(node_output)
    nested = node_output.__annotations__["children"].__args__[0]
    assert nested.__forward_arg__ == node_output.__name__


def test_derived_shapes_get_distinct_output_names() -> None:
    first = output_type_of(schema_type_of(ObjectSchema({"a": StringSchema()})))
    second = output_type_of(schema_type_of(ObjectSchema({"a": StringSchema()})))
    assert first.__name__ != second.__name__


def test_schema_type_of_rejects_non_schemas() -> None:
    with pytest.raises(TypeError, match="expects a Schema"):
        schema_type_of("string")  # type: ignore[arg-type]


class PartlyResolvableShape(TypedDict):
    a: StringSchema
    b: "UndefinedSchema"  # noqa: F821


def test_unresolvable_annotation_only_affects_its_own_property() -> None:
    schema_type = ObjectSchema[PartlyResolvableShape]
    assert schema_at(schema_type, "a") is StringSchema
    assert schema_at(schema_type, "b") is Never
    assert schema_at(schema_type, "b.x") is Never
    assert output_at(schema_type, "a") is str


class NestedAbsenceShape(TypedDict):
    maybe: NullableSchema[OptionalSchema[StringSchema]]
    kept: ReadonlySchema[DefaultSchema[StringSchema]]
    piped: PipeSchema[OptionalSchema[StringSchema], AnySchema]
    plain: NullableSchema[StringSchema]


def test_object_output_optionality_passes_through_wrappers() -> None:
    output = output_type_of(ObjectSchema[NestedAbsenceShape])

    assert output.__optional_keys__ == frozenset({"maybe", "piped"})
    assert output.__required_keys__ == frozenset({"kept", "plain"})
