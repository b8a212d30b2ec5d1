from __future__ import annotations

import logging

import pytest

from hookify.config import OverrideConfig
from hookify.generation.contract import build_contract
from hookify.generation.models import generate_models
from hookify.ir import IRDocument, OperationIR, ParameterIR, SchemaIR


class TestGenerateModels:
    def test_generates_interface_with_optional_members(self) -> None:
        schemas = [
            SchemaIR(
                name="User",
                schema={
                    "type": "object",
                    "properties": {"id": {"type": "integer"}, "display-name": {"type": "string"}},
                    "required": ["id"],
                },
            )
        ]
        output = generate_models(schemas, [])
        assert output.code == "export interface User {\n  id: number;\n  'display-name'?: string;\n}\n"
        assert output.names == ["User"]

    def test_generates_alias_for_non_object(self) -> None:
        schemas = [
            SchemaIR(name="UserId", schema={"type": "integer"}),
            SchemaIR(name="Status", schema={"type": "string", "enum": ["available", "sold"]}),
            SchemaIR(name="Tags", schema={"type": "array", "items": {"$ref": "#/components/schemas/Tag"}}),
        ]
        code = generate_models(schemas, []).code
        assert "export type UserId = number;" in code
        assert "export type Status = 'available' | 'sold';" in code
        assert "export type Tags = Tag[];" in code

    def test_nullable_object_is_alias(self) -> None:
        schemas = [SchemaIR(name="Maybe", schema={"type": "object", "nullable": True, "properties": {"a": {}}})]
        assert generate_models(schemas, []).code == "export type Maybe = { a?: unknown } | null;\n"

    def test_merges_inline_all_of(self) -> None:
        schemas = [
            SchemaIR(
                name="NewPet",
                schema={
                    "allOf": [
                        {"type": "object", "required": ["name"], "properties": {"name": {"type": "string"}}},
                        {"properties": {"tag": {"type": "string"}}},
                    ]
                },
            )
        ]
        assert generate_models(schemas, []).code == "export interface NewPet {\n  name: string;\n  tag?: string;\n}\n"

    def test_all_of_with_named_member_is_intersection(self) -> None:
        schemas = [
            SchemaIR(
                name="Cat",
                schema={
                    "allOf": [
                        {"$ref": "#/components/schemas/Pet"},
                        {"type": "object", "properties": {"meow": {"type": "boolean"}}},
                    ]
                },
            )
        ]
        assert "export type Cat = Pet & { meow?: boolean };" in generate_models(schemas, []).code

    def test_nested_named_schemas_are_referenced(self) -> None:
        schemas = [
            SchemaIR(
                name="Owner",
                schema={
                    "type": "object",
                    "properties": {"pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}},
                    "additionalProperties": {"type": "string"},
                },
            )
        ]
        code = generate_models(schemas, []).code
        assert "  pets?: Pet[];\n  [key: string]: string;\n" in code

    def test_uses_dates(self) -> None:
        schemas = [SchemaIR(name="Stamp", schema={"type": "string", "format": "date-time"})]
        assert generate_models(schemas, [], use_dates=True).code == "export type Stamp = Date;\n"

    def test_appends_contract_declarations(self, petstore_ir: IRDocument) -> None:
        contracts = [build_contract(operation, OverrideConfig()) for operation in petstore_ir.operations]
        output = generate_models(petstore_ir.schemas, contracts)
        assert output.names == ["Pet", "Error", "ListPetsParams"]
        assert output.code.endswith("export type ListPetsParams = { limit?: number; tag?: string };\n")
        assert "export interface Pet {\n  id: number;\n  name: string;\n  tag?: string;\n}\n" in output.code

    def test_skips_colliding_declarations(self, caplog: pytest.LogCaptureFixture) -> None:
        operation = OperationIR(
            verb="get",
            path="/pets",
            operation_id="listPets",
            parameters=[
                ParameterIR(name="q", location="query", required=False, schema={"type": "string"}, content=[])
            ],
            request_body=None,
            responses=[],
            extensions={},
        )
        schemas = [SchemaIR(name="ListPetsParams", schema={"type": "string"})]
        with caplog.at_level(logging.WARNING, logger="hookify.generation.models"):
            output = generate_models(schemas, [build_contract(operation, OverrideConfig())])
        assert output.code == "export type ListPetsParams = string;\n"
        assert "already declared" in caplog.text
