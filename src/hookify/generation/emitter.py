"""Schema-to-TypeScript type synthesis.

This module provides the TypeEmitter class which converts OpenAPI schema
objects into TypeScript type expressions together with the named model
types those expressions reference.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import cast

from ..errors import UnresolvedSchemaReferenceError
from ..loader import SCHEMA_NAME_KEY
from ..openapi import SchemaObject
from .imports import ImportRef
from .naming import pascal, property_key

UNKNOWN = "unknown"

_SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass(frozen=True)
class ResolvedType:
    type_expression: str
    imports: frozenset[ImportRef] = frozenset()


def has_default(schema: object) -> bool:
    """Whether a schema declares a default value.

    A default declared on any ``allOf`` member counts as well, since the
    composed schema inherits it.
    """
    if not isinstance(schema, dict):
        return False
    if "default" in schema:
        return True
    all_of = schema.get("allOf")
    if isinstance(all_of, list):
        return any(has_default(item) for item in all_of)
    return False


@dataclass
class TypeEmitter:
    """Converts OpenAPI schemas to TypeScript type expressions.

    Attributes:
        use_dates: Emit ``Date`` for ``date`` and ``date-time`` strings
        inline_named: Expand the top-level named schema instead of
            referring to it by name (used when declaring the model itself)

    Example:
        >>> emitter = TypeEmitter()
        >>> emitter.resolve({"type": "array", "items": {"type": "integer"}}).type_expression
        'number[]'
    """

    use_dates: bool = False
    _imports: set[ImportRef] = field(default_factory=set, init=False)

    def resolve(self, schema: SchemaObject | None, inline_named: bool = False) -> ResolvedType:
        """Resolve one schema node.

        Raises:
            UnresolvedSchemaReferenceError: For a ``$ref`` that does not
                point at a component schema
        """
        self._imports = set()
        expression = self._emit(schema, inline_named=inline_named)
        return ResolvedType(type_expression=expression, imports=frozenset(self._imports))

    def _emit(self, schema: SchemaObject | None, inline_named: bool = False) -> str:
        if schema is None or not isinstance(schema, dict) or not schema:
            return UNKNOWN
        return self._apply_nullable(self._emit_base(schema, inline_named), schema)

    def _emit_base(self, schema: SchemaObject, inline_named: bool) -> str:
        if "$ref" in schema:
            ref = schema["$ref"]
            if not ref.startswith(_SCHEMA_REF_PREFIX):
                raise UnresolvedSchemaReferenceError(f"Unresolved $ref: {ref}")
            return self._named(ref[len(_SCHEMA_REF_PREFIX) :])
        schema_name = schema.get(SCHEMA_NAME_KEY)
        if isinstance(schema_name, str) and schema_name and not inline_named:
            return self._named(schema_name)

        one_of = schema.get("oneOf")
        if one_of:
            return self._emit_union(one_of)
        any_of = schema.get("anyOf")
        if any_of:
            return self._emit_union(any_of)
        all_of = schema.get("allOf")
        if all_of:
            return self._emit_intersection(all_of)

        enum_values = schema.get("enum")
        if enum_values:
            return _join_unique([_literal(value) for value in enum_values], " | ")
        if "const" in schema:
            return _literal(schema["const"])

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            return _join_unique([self._emit_type(cast(str, item), schema) for item in schema_type], " | ")
        return self._emit_type(schema_type, schema)

    def _emit_type(self, schema_type: str | None, schema: SchemaObject) -> str:
        if schema_type == "string":
            schema_format = schema.get("format")
            if schema_format == "binary":
                return "Blob"
            if self.use_dates and schema_format in {"date", "date-time"}:
                return "Date"
            return "string"
        if schema_type in {"integer", "number"}:
            return "number"
        if schema_type == "boolean":
            return "boolean"
        if schema_type == "null":
            return "null"
        if schema_type == "array":
            items = schema.get("items")
            item_type = self._emit(cast(SchemaObject, items)) if isinstance(items, dict) else UNKNOWN
            if _has_top_level(item_type, "|") or _has_top_level(item_type, "&"):
                item_type = f"({item_type})"
            return f"{item_type}[]"
        if schema_type == "object" or "properties" in schema:
            return self._emit_object(schema)
        return UNKNOWN

    def _emit_object(self, schema: SchemaObject) -> str:
        properties = schema.get("properties", {})
        additional = schema.get("additionalProperties")
        members: list[str] = []
        if properties:
            required = set(schema.get("required", []))
            for name, prop_schema in properties.items():
                marker = "" if name in required else "?"
                members.append(f"{property_key(name)}{marker}: {self._emit(prop_schema)}")
        if isinstance(additional, dict) and additional:
            members.append(f"[key: string]: {self._emit(cast(SchemaObject, additional))}")
        elif not properties and additional is not False:
            members.append(f"[key: string]: {UNKNOWN}")
        if not members:
            return "{ }"
        return "{ " + "; ".join(members) + " }"

    def _named(self, name: str) -> str:
        type_name = pascal(name)
        self._imports.add(ImportRef(name=type_name))
        return type_name

    @staticmethod
    def _apply_nullable(base: str, schema: SchemaObject) -> str:
        if not schema.get("nullable") or base in {UNKNOWN, "null"}:
            return base
        return f"{base} | null"

    def _emit_union(self, items: list[SchemaObject]) -> str:
        types = [self._emit(item) for item in items]
        return _join_unique([_parenthesize(item, "&") for item in types], " | ")

    def _emit_intersection(self, items: list[SchemaObject]) -> str:
        types = [self._emit(item) for item in items]
        return _join_unique([_parenthesize(item, "|") for item in types], " & ")


def _literal(value: object) -> str:
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return json.dumps(value)


def _has_top_level(expression: str, operator: str) -> bool:
    depth = 0
    for index, ch in enumerate(expression):
        if ch in "{([<":
            depth += 1
        elif ch in "})]>":
            depth -= 1
        elif depth == 0 and expression[index : index + 3] == f" {operator} ":
            return True
    return False


def _parenthesize(expression: str, operator: str) -> str:
    if _has_top_level(expression, operator):
        return f"({expression})"
    return expression


def _join_unique(types: list[str], separator: str) -> str:
    unique = list(dict.fromkeys(types))
    if not unique:
        return UNKNOWN
    if len(unique) == 1:
        return unique[0]
    return separator.join(unique)
