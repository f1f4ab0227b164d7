from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Never, get_origin

import pytest

from .config import SCHEMAPATH_CONFIG, SchemaPathConfig
from .errors import SchemaPathError
from .resolve import PathLike, resolve
from .schema.nodes import Schema
from .static import schema_at, schema_type_of


@contextmanager
def schemapath_test_config(**overrides: Any) -> Generator[SchemaPathConfig, None, None]:
    """Apply config overrides for the duration of the block, then restore."""
    snapshot = SCHEMAPATH_CONFIG.model_dump()
    try:
        for name, value in overrides.items():
            setattr(SCHEMAPATH_CONFIG, name, value)
        yield SCHEMAPATH_CONFIG
    finally:
        for name, value in snapshot.items():
            setattr(SCHEMAPATH_CONFIG, name, value)


def assert_mirror_agrees(
    schema: Schema, path: PathLike, schema_type: Any = None
) -> None:
    """Check that ``resolve`` and ``schema_at`` agree on ``path``.

    Either both fail (``resolve`` raises, ``schema_at`` is ``Never``) or the
    static type's class is exactly the class of the resolved node. When
    ``schema_type`` is omitted it is derived from ``schema``.
    """
    if schema_type is None:
        schema_type = schema_type_of(schema)
    static = schema_at(schema_type, path)

    try:
        node = resolve(schema, path)
    except SchemaPathError as exc:
        if static is not Never:
            raise AssertionError(
                f"resolve() failed for {path!r} ({exc}) but schema_at() gave {static!r}"
            ) from exc
        return

    if static is Never:
        raise AssertionError(
            f"schema_at() gave Never for {path!r} but resolve() found {type(node).__name__}"
        )
    static_cls = get_origin(static) or static
    if static_cls is not type(node):
        raise AssertionError(
            f"path {path!r}: schema_at() gave {static!r}, resolve() gave {type(node).__name__}"
        )


@pytest.fixture()
def schemapath_config() -> Generator[SchemaPathConfig, None, None]:
    """Isolate changes to ``SCHEMAPATH_CONFIG`` made inside a test."""
    with schemapath_test_config() as config:
        yield config
