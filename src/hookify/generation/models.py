from __future__ import annotations

import logging
from dataclasses import dataclass

from ..ir import SchemaIR
from ..loader import SCHEMA_NAME_KEY
from ..openapi import SchemaObject
from .contract import OperationContract
from .emitter import TypeEmitter
from .naming import pascal, property_key

logger = logging.getLogger(__name__)


@dataclass
class ModelOutput:
    code: str
    names: list[str]


def generate_models(
    schemas: list[SchemaIR],
    contracts: list[OperationContract],
    use_dates: bool = False,
) -> ModelOutput:
    """Render the models file.

    Component schemas come first, in document order, followed by the
    aggregate parameter and body types each contract declares. All of
    them live in one module, so references between models need no imports.
    """
    emitter = TypeEmitter(use_dates=use_dates)
    lines: list[str] = []
    names: list[str] = []

    for schema in schemas:
        name = pascal(schema.name)
        if name in names:
            logger.warning("Schema '%s' collides with an earlier model named %s, skipping", schema.name, name)
            continue
        names.append(name)
        lines.extend(_emit_schema(name, schema.schema, emitter))

    for contract in contracts:
        for declaration in contract.declarations:
            if declaration.name in names:
                logger.warning(
                    "%s: type %s is already declared, skipping", contract.operation_name, declaration.name
                )
                continue
            names.append(declaration.name)
            lines.extend([declaration.render(), ""])

    return ModelOutput(code="\n".join(lines).rstrip() + "\n", names=names)


def _emit_schema(name: str, schema: SchemaObject, emitter: TypeEmitter) -> list[str]:
    # allOf of plain objects reads better as a single interface
    all_of = schema.get("allOf")
    if all_of and isinstance(all_of, list):
        merged_schema = _merge_all_of(all_of)
        if merged_schema is not None:
            return _emit_interface(name, merged_schema, emitter)

    if schema.get("type") == "object" and schema.get("properties") and not schema.get("nullable"):
        return _emit_interface(name, schema, emitter)
    return [_emit_alias(name, schema, emitter), ""]


def _emit_interface(name: str, schema: SchemaObject, emitter: TypeEmitter) -> list[str]:
    properties = schema.get("properties", {})
    required_set = set(schema.get("required", []))
    lines = [f"export interface {name} {{"]
    for prop_name, prop_schema in properties.items():
        marker = "" if prop_name in required_set else "?"
        prop_type = emitter.resolve(prop_schema).type_expression
        lines.append(f"  {property_key(prop_name)}{marker}: {prop_type};")
    additional = schema.get("additionalProperties")
    if isinstance(additional, dict) and additional:
        lines.append(f"  [key: string]: {emitter.resolve(additional).type_expression};")
    lines.extend(["}", ""])
    return lines


def _emit_alias(name: str, schema: SchemaObject, emitter: TypeEmitter) -> str:
    base = emitter.resolve(schema, inline_named=True).type_expression
    return f"export type {name} = {base};"


def _merge_all_of(schemas: list[SchemaObject]) -> SchemaObject | None:
    """Merge allOf members into a single object schema.

    Only inline object members are merged. Returns ``None`` when any member
    is a named model or a non-object, in which case the caller emits an
    intersection type instead.
    """
    merged_properties: dict[str, SchemaObject] = {}
    merged_required: list[str] = []

    for schema in schemas:
        if not isinstance(schema, dict) or "$ref" in schema or SCHEMA_NAME_KEY in schema:
            return None
        if schema.get("type") not in ("object", None):
            return None
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return None
        merged_properties.update(properties)
        required = schema.get("required")
        if isinstance(required, list):
            merged_required.extend(name for name in required if name not in merged_required)

    if not merged_properties:
        return None

    result: SchemaObject = {"type": "object", "properties": merged_properties}
    if merged_required:
        result["required"] = merged_required
    return result
