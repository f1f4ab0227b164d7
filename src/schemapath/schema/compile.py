"""Translate schema nodes into pydantic-core schemas."""

from __future__ import annotations

from typing import cast

from pydantic_core import CoreSchema, core_schema

from ..config import SCHEMAPATH_CONFIG
from .nodes import LazySchema, Schema


class CoreSchemaBuilder:
    """Builds one pydantic-core schema, sharing definitions between lazy nodes.

    Each lazy node becomes a definition the first time it is reached; later
    occurrences, including the self-references of recursive schemas, become
    definition references.
    """

    def __init__(self) -> None:
        self._refs: dict[int, str] = {}
        self._definitions: list[CoreSchema] = []

    def build(self, node: Schema) -> CoreSchema:
        return node._core_schema(self)

    def reference(self, node: LazySchema[Schema]) -> CoreSchema:
        ref = self._refs.get(id(node))
        if ref is not None:
            return core_schema.definition_reference_schema(ref)

        ref = f"schemapath-lazy-{len(self._refs)}"
        self._refs[id(node)] = ref
        definition = dict(self.build(_force(node)))
        definition["ref"] = ref
        self._definitions.append(cast(CoreSchema, definition))
        return core_schema.definition_reference_schema(ref)

    def finish(self, schema: CoreSchema) -> CoreSchema:
        if not self._definitions:
            return schema
        return core_schema.definitions_schema(schema, list(self._definitions))


def _force(node: LazySchema[Schema]) -> Schema:
    """Follow a chain of lazy nodes to the first non-lazy schema."""
    limit = SCHEMAPATH_CONFIG.max_unwrap_depth
    target: Schema = node
    for _ in range(limit):
        if not isinstance(target, LazySchema):
            return target
        target = target.inner
    raise ValueError(f"lazy schema does not resolve within {limit} steps")


def compile_core_schema(node: Schema) -> CoreSchema:
    builder = CoreSchemaBuilder()
    return builder.finish(builder.build(node))


__all__ = ["CoreSchemaBuilder", "compile_core_schema"]
