from __future__ import annotations

from collections.abc import Callable

import pytest

from hookify.config import OverrideConfig
from hookify.errors import MalformedParameterError
from hookify.generation.imports import ImportRef
from hookify.generation.params import (
    ContentSchema,
    DirectSchema,
    NormalizedParameter,
    is_optional,
    locate_schema,
    normalize_parameter,
)
from hookify.ir import MediaTypeIR, ParameterIR
from hookify.openapi import SchemaObject


def _direct(schema: SchemaObject, required: bool, name: str = "status") -> ParameterIR:
    return ParameterIR(name=name, location="query", required=required, schema=schema, content=[])


def _wrapped(schema: SchemaObject, required: bool, name: str = "status") -> ParameterIR:
    return ParameterIR(
        name=name,
        location="query",
        required=required,
        schema=None,
        content=[MediaTypeIR(content_type="application/json", schema=schema)],
    )


class TestScenarios:
    def test_not_required_is_optional(self) -> None:
        normalized = normalize_parameter(_direct({"type": "string"}, required=False), OverrideConfig())
        assert normalized.optional is True
        assert normalized.type_expression == "string"

    def test_required_without_default_is_required(self) -> None:
        normalized = normalize_parameter(_direct({"type": "string"}, required=True), OverrideConfig())
        assert normalized.optional is False

    def test_default_overrides_required(self) -> None:
        schema: SchemaObject = {"type": "string", "default": "available"}
        normalized = normalize_parameter(_direct(schema, required=True), OverrideConfig())
        assert normalized.optional is True


class TestOptionalitySymmetry:
    @pytest.mark.parametrize("build", [pytest.param(_direct, id="schema"), pytest.param(_wrapped, id="content")])
    @pytest.mark.parametrize(
        "schema, required, expected",
        [
            pytest.param({"type": "string"}, False, True, id="optional-no-default"),
            pytest.param({"type": "string"}, True, False, id="required-no-default"),
            pytest.param({"type": "string", "default": "available"}, False, True, id="optional-default"),
            pytest.param({"type": "string", "default": "available"}, True, True, id="required-default"),
            pytest.param({"type": "integer", "default": 0}, True, True, id="required-falsy-default"),
            pytest.param({"type": "boolean", "default": False}, True, True, id="required-false-default"),
            pytest.param(
                {"allOf": [{"$ref": "#/components/schemas/Status"}, {"default": "available"}]},
                True,
                True,
                id="required-composed-default",
            ),
        ],
    )
    def test_optionality(
        self, build: Callable[..., ParameterIR], schema: SchemaObject, required: bool, expected: bool
    ) -> None:
        param = build(schema, required)
        assert is_optional(param, locate_schema(param)) is expected
        assert normalize_parameter(param, OverrideConfig()).optional is expected

    def test_both_forms_normalize_identically(self) -> None:
        schema: SchemaObject = {"type": "string", "default": "available"}
        direct = normalize_parameter(_direct(schema, required=True), OverrideConfig())
        wrapped = normalize_parameter(_wrapped(schema, required=True), OverrideConfig())
        assert direct == wrapped

    def test_parameter_level_default_makes_optional(self) -> None:
        param = ParameterIR(
            name="page", location="query", required=True, schema={"type": "integer"}, content=[], default=1
        )
        assert normalize_parameter(param, OverrideConfig()).optional is True


class TestLocateSchema:
    def test_prefers_direct_schema(self) -> None:
        param = ParameterIR(
            name="q",
            location="query",
            required=False,
            schema={"type": "string"},
            content=[MediaTypeIR(content_type="application/json", schema={"type": "integer"})],
        )
        assert locate_schema(param) == DirectSchema(schema={"type": "string"})

    def test_uses_first_content_entry_with_schema(self) -> None:
        param = ParameterIR(
            name="q",
            location="query",
            required=False,
            schema=None,
            content=[
                MediaTypeIR(content_type="text/plain", schema=None),
                MediaTypeIR(content_type="application/json", schema={"type": "integer"}),
            ],
        )
        assert locate_schema(param) == ContentSchema(media_type="application/json", schema={"type": "integer"})

    @pytest.mark.parametrize(
        "content",
        [
            pytest.param([], id="no-content"),
            pytest.param([MediaTypeIR(content_type="application/json", schema=None)], id="content-without-schema"),
        ],
    )
    def test_missing_schema_raises(self, content: list[MediaTypeIR]) -> None:
        param = ParameterIR(name="q", location="query", required=True, schema=None, content=content)
        with pytest.raises(MalformedParameterError, match="'q'"):
            locate_schema(param)


class TestNormalizeParameter:
    def test_is_idempotent(self) -> None:
        param = _wrapped({"$ref": "#/components/schemas/Status"}, required=True)
        first = normalize_parameter(param, OverrideConfig())
        second = normalize_parameter(param, OverrideConfig())
        assert first == second
        assert first == NormalizedParameter(
            name="status",
            location="query",
            type_expression="Status",
            optional=False,
            imports=frozenset({ImportRef(name="Status")}),
        )

    def test_applies_use_dates(self) -> None:
        param = _direct({"type": "string", "format": "date-time"}, required=True, name="since")
        assert normalize_parameter(param, OverrideConfig()).type_expression == "string"
        assert normalize_parameter(param, OverrideConfig(use_dates=True)).type_expression == "Date"

    def test_keeps_description(self) -> None:
        param = ParameterIR(
            name="q", location="query", required=False, schema={"type": "string"}, content=[], description="Search"
        )
        assert normalize_parameter(param, OverrideConfig()).description == "Search"
