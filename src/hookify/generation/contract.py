"""Operation contracts.

An ``OperationContract`` is everything a flavor needs to render one
operation: normalized parameters, body, response, the mutator binding
and the ``ParameterSurface`` that every flavor uses as the request
function's signature. The surface order is fixed:

    path parameters, query object, header object, body, options
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from ..config import MutatorDescriptor, OverrideConfig
from ..errors import HookifyError, MalformedParameterError, UnsupportedParameterLocationError
from ..ir import OperationIR
from .body import BodyDescriptor, ResponseDescriptor, normalize_body, normalize_response
from .imports import ImportRef
from .naming import camel, operation_name, pascal, property_key, to_template_route
from .params import NormalizedParameter, normalize_parameter

logger = logging.getLogger(__name__)

LOCATIONS = ("path", "query", "header", "cookie")

DEFAULT_TRANSPORT_OPTIONS = "AxiosRequestConfig"


class SlotRole(Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    OPTIONS = "options"


@dataclass(frozen=True)
class SurfaceSlot:
    """One argument of a generated function.

    ``generic_wrapper`` names a generic type applied around
    ``type_expression`` when the slot is rendered, e.g. a mutator's body
    envelope ``BodyType<Pet>``.
    """

    role: SlotRole
    name: str
    type_expression: str
    optional: bool
    generic_wrapper: str | None = None

    @property
    def rendered_type(self) -> str:
        if self.generic_wrapper:
            return f"{self.generic_wrapper}<{self.type_expression}>"
        return self.type_expression


@dataclass(frozen=True)
class ParameterSurface:
    slots: tuple[SurfaceSlot, ...] = ()

    def __iter__(self) -> Iterator[SurfaceSlot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def only(self, *roles: SlotRole) -> ParameterSurface:
        return ParameterSurface(tuple(slot for slot in self.slots if slot.role in roles))

    def without(self, *roles: SlotRole) -> ParameterSurface:
        return ParameterSurface(tuple(slot for slot in self.slots if slot.role not in roles))

    def first(self, role: SlotRole) -> SurfaceSlot | None:
        return next((slot for slot in self.slots if slot.role is role), None)

    def names(self) -> list[str]:
        return [slot.name for slot in self.slots]

    def render(self) -> str:
        return ", ".join(self.render_parts())

    def render_parts(self) -> list[str]:
        """Render each slot as a TypeScript parameter declaration.

        An optional slot followed by a required one cannot use ``?``, so it
        is rendered as ``name: T | undefined`` instead.
        """
        parts: list[str] = []
        for index, slot in enumerate(self.slots):
            required_after = any(not later.optional for later in self.slots[index + 1 :])
            if not slot.optional:
                parts.append(f"{slot.name}: {slot.rendered_type}")
            elif required_after:
                parts.append(f"{slot.name}: {slot.rendered_type} | undefined")
            else:
                parts.append(f"{slot.name}?: {slot.rendered_type}")
        return parts


@dataclass(frozen=True)
class TypeDeclaration:
    """A named type the contract introduces, written to the models file."""

    name: str
    definition: str
    imports: frozenset[ImportRef] = frozenset()

    def render(self) -> str:
        return f"export type {self.name} = {self.definition};"


@dataclass(frozen=True)
class OperationContract:
    operation_name: str
    path: str
    route: str
    verb: str
    parameters: Mapping[str, tuple[NormalizedParameter, ...]]
    surface: ParameterSurface
    body: BodyDescriptor
    response: ResponseDescriptor
    override: OverrideConfig
    declarations: tuple[TypeDeclaration, ...] = ()
    mutator: MutatorDescriptor | None = None
    body_type_name: str | None = None

    @property
    def location(self) -> str:
        return f"{self.verb.upper()} {self.path}"

    @property
    def imports(self) -> list[ImportRef]:
        refs: dict[ImportRef, None] = {}
        for params in self.parameters.values():
            for param in params:
                if param.location == "path":
                    refs.update(dict.fromkeys(param.imports))
        refs.update(dict.fromkeys(ImportRef(name=declaration.name) for declaration in self.declarations))
        refs.update(dict.fromkeys(_body_imports(self)))
        refs.update(dict.fromkeys(sorted(self.response.imports, key=lambda ref: ref.name)))
        return list(refs)


def build_contract(operation: OperationIR, override: OverrideConfig) -> OperationContract:
    """Build the contract for one operation.

    Raises:
        HookifyError: Any normalization failure, annotated with the
            operation name and route
    """
    name = operation_name(operation.operation_id, operation.verb, operation.path)
    try:
        return _build(name, operation, override)
    except HookifyError as exc:
        raise exc.at(name, f"{operation.verb.upper()} {operation.path}")


def _build(name: str, operation: OperationIR, override: OverrideConfig) -> OperationContract:
    grouped: dict[str, list[NormalizedParameter]] = {location: [] for location in LOCATIONS}
    for param in operation.parameters:
        if param.location not in grouped:
            raise UnsupportedParameterLocationError(
                f"Parameter '{param.name}' has unsupported location '{param.location}'"
            )
        if not param.name:
            raise MalformedParameterError(f"Parameter in '{param.location}' has no name")
        grouped[param.location].append(normalize_parameter(param, override))
    if grouped["cookie"]:
        logger.debug("%s: cookie parameters are not part of the generated signature", name)

    body = normalize_body(operation.request_body, override)
    response = normalize_response(operation.responses, override)
    mutator = override.mutator
    declarations: list[TypeDeclaration] = []
    slots: list[SurfaceSlot] = []

    for param in grouped["path"]:
        slots.append(SurfaceSlot(SlotRole.PATH, camel(param.name), param.type_expression, param.optional))

    for location, role, slot_name, suffix in (
        ("query", SlotRole.QUERY, "params", "Params"),
        ("header", SlotRole.HEADER, "headers", "Headers"),
    ):
        members = grouped[location]
        if not members:
            continue
        declaration = _group_declaration(f"{pascal(name)}{suffix}", members)
        declarations.append(declaration)
        slots.append(
            SurfaceSlot(role, slot_name, declaration.name, optional=all(member.optional for member in members))
        )

    body_type_name: str | None = None
    if body.defined:
        body_type_name = body.type_expression
        if ImportRef(name=body_type_name) not in body.imports:
            declaration = TypeDeclaration(f"{pascal(name)}Body", body.type_expression, body.imports)
            declarations.append(declaration)
            body_type_name = declaration.name
        slots.append(
            SurfaceSlot(
                SlotRole.BODY,
                camel(body_type_name),
                body_type_name,
                optional=False,
                generic_wrapper=mutator.body_type_name if mutator else None,
            )
        )

    if override.is_request_options and (mutator is None or mutator.has_second_arg):
        options_type = f"SecondParameter<typeof {mutator.name}>" if mutator else DEFAULT_TRANSPORT_OPTIONS
        slots.append(SurfaceSlot(SlotRole.OPTIONS, "options", options_type, optional=True))

    logger.debug("Built contract for %s (%s %s)", name, operation.verb.upper(), operation.path)
    return OperationContract(
        operation_name=name,
        path=operation.path,
        route=to_template_route(operation.path),
        verb=operation.verb,
        parameters={location: tuple(params) for location, params in grouped.items()},
        surface=ParameterSurface(tuple(slots)),
        body=body,
        response=response,
        override=override,
        declarations=tuple(declarations),
        mutator=mutator,
        body_type_name=body_type_name,
    )


def _group_declaration(type_name: str, members: Iterable[NormalizedParameter]) -> TypeDeclaration:
    imports: set[ImportRef] = set()
    properties: list[str] = []
    for member in members:
        marker = "?" if member.optional else ""
        properties.append(f"{property_key(member.name)}{marker}: {member.type_expression}")
        imports.update(member.imports)
    return TypeDeclaration(type_name, "{ " + "; ".join(properties) + " }", frozenset(imports))


def _body_imports(contract: OperationContract) -> list[ImportRef]:
    if not contract.body.defined:
        return []
    if contract.body_type_name != contract.body.type_expression:
        # inline bodies are reached through their declaration
        return []
    return sorted(contract.body.imports, key=lambda ref: ref.name)
