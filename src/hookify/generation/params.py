"""Parameter normalization.

A raw parameter declares its type either directly (``schema``) or through
a media-type wrapper (``content``). ``locate_schema`` collapses both into
one ``SchemaLocation`` right away so the optionality rule below is applied
by a single code path whichever form the document uses:

    optional = not required or schema declares a default

A required parameter with a default is still optional for the caller,
because the server supplies the value when it is omitted.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import OverrideConfig
from ..errors import MalformedParameterError
from ..ir import ParameterIR
from ..openapi import SchemaObject
from .emitter import TypeEmitter, has_default
from .imports import ImportRef


@dataclass(frozen=True)
class DirectSchema:
    schema: SchemaObject


@dataclass(frozen=True)
class ContentSchema:
    media_type: str
    schema: SchemaObject


SchemaLocation = DirectSchema | ContentSchema


@dataclass(frozen=True)
class NormalizedParameter:
    name: str
    location: str
    type_expression: str
    optional: bool
    imports: frozenset[ImportRef]
    description: str | None = None


def locate_schema(param: ParameterIR) -> SchemaLocation:
    """Find the schema of a parameter.

    Raises:
        MalformedParameterError: If the parameter has neither ``schema``
            nor a ``content`` entry holding one
    """
    if param.schema is not None:
        return DirectSchema(schema=param.schema)
    for media in param.content:
        if media.schema is not None:
            return ContentSchema(media_type=media.content_type, schema=media.schema)
    raise MalformedParameterError(f"Parameter '{param.name}' ({param.location}) has neither schema nor content")


def is_optional(param: ParameterIR, location: SchemaLocation) -> bool:
    if param.default is not None:
        return True
    return not param.required or has_default(location.schema)


def normalize_parameter(param: ParameterIR, override: OverrideConfig) -> NormalizedParameter:
    location = locate_schema(param)
    resolved = TypeEmitter(use_dates=override.use_dates).resolve(location.schema)
    return NormalizedParameter(
        name=param.name,
        location=param.location,
        type_expression=resolved.type_expression,
        optional=is_optional(param, location),
        imports=resolved.imports,
        description=param.description,
    )
