from __future__ import annotations

from dataclasses import dataclass

from ..config import OverrideConfig
from ..ir import RequestBodyIR, ResponseIR
from ..openapi import SchemaObject
from .emitter import UNKNOWN, TypeEmitter
from .imports import ImportRef

FORM_DATA = "multipart/form-data"
FORM_URL_ENCODED = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class BodyDescriptor:
    """Normalized request body.

    ``type_expression`` is empty when the operation has no body.
    """

    type_expression: str
    media_type: str | None
    imports: frozenset[ImportRef]
    is_form_data: bool = False
    is_form_url_encoded: bool = False
    schema: SchemaObject | None = None

    @property
    def defined(self) -> bool:
        return bool(self.type_expression)


EMPTY_BODY = BodyDescriptor(type_expression="", media_type=None, imports=frozenset())


@dataclass(frozen=True)
class ResponseDescriptor:
    success_type: str
    error_type: str
    imports: frozenset[ImportRef]


def normalize_body(request_body: RequestBodyIR | None, override: OverrideConfig) -> BodyDescriptor:
    """Normalize the request body, using its first declared media type.

    Form encodings are recognised only while enabled in ``override``;
    disabling them yields a plainly typed body whatever the media type.
    """
    if request_body is None or not request_body.content:
        return EMPTY_BODY
    media = request_body.content[0]
    resolved = TypeEmitter(use_dates=override.use_dates).resolve(media.schema)
    return BodyDescriptor(
        type_expression=resolved.type_expression,
        media_type=media.content_type,
        imports=resolved.imports,
        is_form_data=override.form_data and media.content_type.startswith(FORM_DATA),
        is_form_url_encoded=override.form_url_encoded and media.content_type.startswith(FORM_URL_ENCODED),
        schema=media.schema,
    )


def normalize_response(responses: list[ResponseIR], override: OverrideConfig) -> ResponseDescriptor:
    """Derive success and error types.

    The first 2xx response that declares a schema gives the success type;
    every other declared schema joins the error union. Either side falls
    back to ``unknown``.
    """
    emitter = TypeEmitter(use_dates=override.use_dates)
    imports: set[ImportRef] = set()
    success: str | None = None
    errors: list[str] = []
    for response in responses:
        schema = _first_schema(response)
        if schema is None:
            continue
        resolved = emitter.resolve(schema)
        if _is_success_status(response.status):
            if success is None:
                success = resolved.type_expression
                imports.update(resolved.imports)
        else:
            errors.append(resolved.type_expression)
            imports.update(resolved.imports)
    error_types = list(dict.fromkeys(errors))
    return ResponseDescriptor(
        success_type=success or UNKNOWN,
        error_type=" | ".join(error_types) if error_types else UNKNOWN,
        imports=frozenset(imports),
    )


def _first_schema(response: ResponseIR) -> SchemaObject | None:
    for media in response.content:
        if media.schema is not None:
            return media.schema
    return None


def _is_success_status(status: str) -> bool:
    return status.startswith("2")
