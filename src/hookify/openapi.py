"""TypedDict views over the OpenAPI objects hookify reads.

Only the fields consumed by the IR builder and the generators are listed;
everything else in a document is passed through untouched.
"""

from __future__ import annotations

from typing import TypedDict

JsonPrimitive = str | int | float | bool | None
JsonValue = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]

# Parameter and schema defaults are arbitrary JSON
DefaultValue = JsonValue

SchemaObject = TypedDict(
    "SchemaObject",
    {
        "type": str | list[str],
        "format": str,
        "properties": dict[str, "SchemaObject"],
        "items": "SchemaObject",
        "required": list[str],
        "nullable": bool,
        "enum": list[JsonPrimitive],
        "const": JsonPrimitive,
        "oneOf": list["SchemaObject"],
        "anyOf": list["SchemaObject"],
        "allOf": list["SchemaObject"],
        # bool or SchemaObject
        "additionalProperties": object,
        "default": DefaultValue,
        "description": str,
        "$ref": str,
        "x-hookify-schema-name": str,
    },
    total=False,
)

MediaTypeObject = TypedDict(
    "MediaTypeObject",
    {
        "schema": SchemaObject,
        "encoding": dict[str, object],
    },
    total=False,
)

ResponseObject = TypedDict(
    "ResponseObject",
    {
        "description": str,
        "content": dict[str, MediaTypeObject],
        "$ref": str,
    },
    total=False,
)

RequestBodyObject = TypedDict(
    "RequestBodyObject",
    {
        "description": str,
        "content": dict[str, MediaTypeObject],
        "required": bool,
        "$ref": str,
    },
    total=False,
)

ParameterObject = TypedDict(
    "ParameterObject",
    {
        "name": str,
        "in": str,
        "description": str,
        "required": bool,
        "schema": SchemaObject,
        "content": dict[str, MediaTypeObject],
        # Swagger 2 style parameter-level default
        "default": DefaultValue,
        "$ref": str,
    },
    total=False,
)

OperationObject = TypedDict(
    "OperationObject",
    {
        "operationId": str,
        "summary": str,
        "tags": list[str],
        "deprecated": bool,
        "parameters": list[ParameterObject],
        "requestBody": RequestBodyObject,
        "responses": dict[str, ResponseObject],
    },
    total=False,
)

PathItemObject = TypedDict(
    "PathItemObject",
    {
        "parameters": list[ParameterObject],
        "get": OperationObject,
        "put": OperationObject,
        "post": OperationObject,
        "delete": OperationObject,
        "options": OperationObject,
        "head": OperationObject,
        "patch": OperationObject,
        "trace": OperationObject,
    },
    total=False,
)

ComponentsObject = TypedDict(
    "ComponentsObject",
    {
        "schemas": dict[str, SchemaObject],
        "parameters": dict[str, ParameterObject],
        "requestBodies": dict[str, RequestBodyObject],
        "responses": dict[str, ResponseObject],
    },
    total=False,
)

InfoObject = TypedDict(
    "InfoObject",
    {
        "title": str,
        "version": str,
    },
    total=False,
)

OpenAPIDocument = TypedDict(
    "OpenAPIDocument",
    {
        "openapi": str,
        "info": InfoObject,
        "paths": dict[str, PathItemObject],
        "components": ComponentsObject,
    },
    total=False,
)
