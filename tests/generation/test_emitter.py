from __future__ import annotations

import pytest

from hookify.errors import UnresolvedSchemaReferenceError
from hookify.generation.emitter import ResolvedType, TypeEmitter, has_default
from hookify.generation.imports import ImportRef
from hookify.loader import SCHEMA_NAME_KEY
from hookify.openapi import SchemaObject


class TestTypeEmitter:
    @pytest.mark.parametrize(
        "schema, expected",
        [
            pytest.param({"type": "string"}, "string", id="string"),
            pytest.param({"type": "integer"}, "number", id="integer"),
            pytest.param({"type": "number"}, "number", id="number"),
            pytest.param({"type": "boolean"}, "boolean", id="boolean"),
            pytest.param({"type": "null"}, "null", id="null"),
            pytest.param({"type": "string", "format": "binary"}, "Blob", id="binary"),
            pytest.param({"type": "string", "format": "date-time"}, "string", id="date-time-as-string"),
            pytest.param({}, "unknown", id="empty"),
            pytest.param(None, "unknown", id="missing"),
        ],
    )
    def test_emits_scalar_types(self, schema: SchemaObject | None, expected: str) -> None:
        assert TypeEmitter().resolve(schema).type_expression == expected

    def test_emits_dates_when_enabled(self) -> None:
        emitter = TypeEmitter(use_dates=True)
        assert emitter.resolve({"type": "string", "format": "date"}).type_expression == "Date"
        assert emitter.resolve({"type": "string", "format": "date-time"}).type_expression == "Date"

    def test_emits_enum_and_const_literals(self) -> None:
        emitter = TypeEmitter()
        assert emitter.resolve({"type": "string", "enum": ["a", "b", "a"]}).type_expression == "'a' | 'b'"
        assert emitter.resolve({"enum": [1, True, None]}).type_expression == "1 | true | null"
        assert emitter.resolve({"const": "it's"}).type_expression == "'it\\'s'"

    def test_emits_arrays(self) -> None:
        emitter = TypeEmitter()
        assert emitter.resolve({"type": "array", "items": {"type": "string"}}).type_expression == "string[]"
        assert emitter.resolve({"type": "array"}).type_expression == "unknown[]"
        union_items: SchemaObject = {"type": "array", "items": {"oneOf": [{"type": "string"}, {"type": "integer"}]}}
        assert emitter.resolve(union_items).type_expression == "(string | number)[]"

    def test_emits_inline_objects(self) -> None:
        schema: SchemaObject = {
            "type": "object",
            "required": ["id"],
            "properties": {"id": {"type": "integer"}, "content-type": {"type": "string"}},
        }
        assert TypeEmitter().resolve(schema).type_expression == "{ id: number; 'content-type'?: string }"

    def test_emits_maps(self) -> None:
        emitter = TypeEmitter()
        assert emitter.resolve({"type": "object"}).type_expression == "{ [key: string]: unknown }"
        typed_map: SchemaObject = {"type": "object", "additionalProperties": {"type": "integer"}}
        assert emitter.resolve(typed_map).type_expression == "{ [key: string]: number }"

    def test_emits_unions_and_intersections(self) -> None:
        emitter = TypeEmitter()
        one_of: SchemaObject = {"oneOf": [{"type": "string"}, {"type": "integer"}]}
        assert emitter.resolve(one_of).type_expression == "string | number"
        any_of: SchemaObject = {"anyOf": [{"type": "string"}, {"type": "null"}]}
        assert emitter.resolve(any_of).type_expression == "string | null"
        all_of: SchemaObject = {
            "allOf": [{"$ref": "#/components/schemas/Base"}, {"oneOf": [{"type": "string"}, {"type": "integer"}]}]
        }
        assert emitter.resolve(all_of).type_expression == "Base & (string | number)"

    def test_emits_type_list(self) -> None:
        schema: SchemaObject = {"type": ["string", "null"]}
        assert TypeEmitter().resolve(schema).type_expression == "string | null"

    def test_applies_nullable(self) -> None:
        emitter = TypeEmitter()
        assert emitter.resolve({"type": "string", "nullable": True}).type_expression == "string | null"
        assert emitter.resolve({"nullable": True}).type_expression == "unknown"

    def test_emits_ref_name_with_import(self) -> None:
        resolved = TypeEmitter().resolve({"$ref": "#/components/schemas/pet-item"})
        assert resolved == ResolvedType("PetItem", frozenset({ImportRef(name="PetItem")}))

    def test_emits_tagged_schema_by_name(self) -> None:
        schema: SchemaObject = {"type": "object", "properties": {"id": {"type": "integer"}}, SCHEMA_NAME_KEY: "Pet"}
        emitter = TypeEmitter()
        assert emitter.resolve(schema).type_expression == "Pet"
        inline = emitter.resolve(schema, inline_named=True)
        assert inline.type_expression == "{ id?: number }"
        assert inline.imports == frozenset()

    def test_collects_nested_imports(self) -> None:
        schema: SchemaObject = {
            "type": "array",
            "items": {"oneOf": [{"$ref": "#/components/schemas/Cat"}, {"$ref": "#/components/schemas/Dog"}]},
        }
        resolved = TypeEmitter().resolve(schema)
        assert resolved.type_expression == "(Cat | Dog)[]"
        assert resolved.imports == frozenset({ImportRef(name="Cat"), ImportRef(name="Dog")})

    def test_imports_do_not_leak_between_calls(self) -> None:
        emitter = TypeEmitter()
        emitter.resolve({"$ref": "#/components/schemas/Pet"})
        assert emitter.resolve({"type": "string"}).imports == frozenset()

    def test_foreign_ref_raises(self) -> None:
        with pytest.raises(UnresolvedSchemaReferenceError, match="#/definitions/Pet"):
            TypeEmitter().resolve({"$ref": "#/definitions/Pet"})


class TestHasDefault:
    @pytest.mark.parametrize(
        "schema, expected",
        [
            pytest.param({"type": "integer", "default": 0}, True, id="direct"),
            pytest.param({"type": "boolean", "default": False}, True, id="falsy-default"),
            pytest.param({"type": "string", "default": None}, True, id="null-default"),
            pytest.param({"type": "string"}, False, id="none"),
            pytest.param({"allOf": [{"$ref": "#/components/schemas/Size"}, {"default": "m"}]}, True, id="all-of"),
            pytest.param({"oneOf": [{"type": "string", "default": "x"}]}, False, id="one-of-ignored"),
            pytest.param(None, False, id="missing"),
        ],
    )
    def test_detects_defaults(self, schema: object, expected: bool) -> None:
        assert has_default(schema) is expected
