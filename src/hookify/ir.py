"""Intermediate Representation (IR) for OpenAPI documents.

The IR is a thin, typed copy of the dereferenced document: one
``OperationIR`` per (route, verb) pair with its raw parameters, request
body and responses. It deliberately keeps the loosely-typed parts
(a parameter's ``schema`` *or* ``content``) as they are; deciding what
they mean is the job of the normalizers in ``hookify.generation``.

Key classes:
- IRDocument: Root container for schemas and operations
- OperationIR: One HTTP operation
- ParameterIR: A raw request parameter
- RequestBodyIR / ResponseIR / MediaTypeIR: Body and response content
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TypedDict, cast

from .openapi import (
    ComponentsObject,
    MediaTypeObject,
    OpenAPIDocument,
    OperationObject,
    ParameterObject,
    PathItemObject,
    RequestBodyObject,
    ResponseObject,
    SchemaObject,
)

VERBS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

HookifyExtensions = TypedDict(
    "HookifyExtensions",
    {
        "x-hookify-request-options": object,
        "x-hookify-form-data": bool,
        "x-hookify-form-url-encoded": bool,
    },
    total=False,
)


@dataclass(frozen=True)
class SchemaIR:
    """A named component schema."""

    name: str
    schema: SchemaObject


@dataclass(frozen=True)
class MediaTypeIR:
    content_type: str
    schema: SchemaObject | None


@dataclass(frozen=True)
class ResponseIR:
    """One declared response.

    Attributes:
        status: The status code as written in the document ("200", "4XX", "default")
        description: Human-readable description of the response
        content: Declared media types, in declaration order
    """

    status: str
    description: str | None
    content: list[MediaTypeIR]


@dataclass(frozen=True)
class RequestBodyIR:
    required: bool
    content: list[MediaTypeIR]


@dataclass(frozen=True)
class ParameterIR:
    """A raw request parameter.

    Exactly one of ``schema`` and ``content`` is normally set; both may be
    missing in a malformed document.

    Attributes:
        name: The parameter name
        location: Value of ``in`` ("path", "query", "header", "cookie")
        required: The ``required`` flag, ``False`` when absent
        schema: The schema given directly on the parameter
        content: Media type wrappers, each holding a schema
        default: Parameter-level default (Swagger 2 style documents)
    """

    name: str
    location: str
    required: bool
    schema: SchemaObject | None
    content: list[MediaTypeIR]
    default: object | None = None
    description: str | None = None


@dataclass(frozen=True)
class OperationIR:
    """One HTTP operation.

    Attributes:
        verb: The HTTP method in lowercase
        path: The URL path template (e.g., "/pets/{petId}")
        operation_id: ``operationId`` from the document, if any
        parameters: Merged path-level and operation-level parameters
        request_body: The request body definition, if any
        responses: Declared responses in declaration order
        extensions: hookify extension fields (x-hookify-*)
    """

    verb: str
    path: str
    operation_id: str | None
    parameters: list[ParameterIR]
    request_body: RequestBodyIR | None
    responses: list[ResponseIR]
    extensions: HookifyExtensions


@dataclass(frozen=True)
class IRDocument:
    schemas: list[SchemaIR]
    operations: list[OperationIR]


def build_ir(document: OpenAPIDocument) -> IRDocument:
    """Build the IR from a dereferenced OpenAPI document."""
    components = cast(ComponentsObject, document.get("components", {}))
    schemas = [SchemaIR(name=name, schema=schema) for name, schema in components.get("schemas", {}).items()]

    operations: list[OperationIR] = []
    for path, item in cast(dict[str, PathItemObject], document.get("paths", {})).items():
        operations.extend(_build_path_operations(path, item))
    return IRDocument(schemas=schemas, operations=operations)


def _build_path_operations(path: str, item: PathItemObject) -> Iterable[OperationIR]:
    common_params = cast(list[ParameterObject], item.get("parameters", []))
    for verb in VERBS:
        operation = cast(OperationObject | None, item.get(verb))
        if not operation:
            continue
        yield OperationIR(
            verb=verb,
            path=path,
            operation_id=operation.get("operationId"),
            parameters=_merge_parameters(
                common_params,
                cast(list[ParameterObject], operation.get("parameters", [])),
            ),
            request_body=_build_request_body(cast(RequestBodyObject | None, operation.get("requestBody"))),
            responses=_build_responses(cast(dict[str, ResponseObject], operation.get("responses", {}))),
            extensions=_extract_extensions(operation),
        )


def _merge_parameters(
    common: list[ParameterObject],
    specific: list[ParameterObject],
) -> list[ParameterIR]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters replace path-level ones with the same name
    and location but keep the position of the first declaration. A
    parameter missing its name or location is kept as is, so the contract
    builder can report it.
    """
    merged: dict[tuple[str, str] | int, ParameterObject] = {}
    for index, param in enumerate(common + specific):
        name = param.get("name")
        location = param.get("in")
        merged[(name, location) if name and location else index] = param
    return [_build_parameter(param) for param in merged.values()]


def _build_parameter(param: ParameterObject) -> ParameterIR:
    return ParameterIR(
        name=param.get("name", ""),
        location=param.get("in", ""),
        required=bool(param.get("required", False)),
        schema=param.get("schema"),
        content=_build_media_types(param.get("content", {})),
        default=param.get("default"),
        description=param.get("description"),
    )


def _build_request_body(request_body: RequestBodyObject | None) -> RequestBodyIR | None:
    if not request_body:
        return None
    return RequestBodyIR(
        required=bool(request_body.get("required", False)),
        content=_build_media_types(request_body.get("content", {})),
    )


def _build_responses(responses: dict[str, ResponseObject]) -> list[ResponseIR]:
    return [
        ResponseIR(
            status=str(status),
            description=response.get("description"),
            content=_build_media_types(response.get("content", {})),
        )
        for status, response in responses.items()
    ]


def _build_media_types(content: dict[str, MediaTypeObject]) -> list[MediaTypeIR]:
    return [
        MediaTypeIR(content_type=content_type, schema=media_type.get("schema"))
        for content_type, media_type in content.items()
    ]


def _extract_extensions(operation: OperationObject) -> HookifyExtensions:
    return cast(
        HookifyExtensions,
        {key: value for key, value in operation.items() if key.startswith("x-hookify-")},
    )
