"""SWR flavor: request functions wrapped in ``useSWR`` / ``useSWRMutation`` hooks.

For every GET operation the output has a request function, a cache-key
function and a ``use<Operation>`` hook built on ``useSWR``. POST, PUT,
PATCH and DELETE operations get a hook built on ``useSWRMutation``
instead. Other verbs only get the request function.
"""

from __future__ import annotations

import logging

from ...errors import UnsupportedVerbError
from ..contract import OperationContract, SlotRole
from ..imports import DependencyExport, GeneratorDependency
from ..naming import camel, pascal
from .base import ClientOutput, Flavor, HeaderFlags, VerbKind, classify_verb
from .request import (
    AXIOS_DEPENDENCIES,
    SECOND_PARAMETER_HELPER,
    error_type,
    literal_entries,
    mutator_imports,
    render_request_function,
    transport_options_name,
)

logger = logging.getLogger(__name__)

SWR_DEPENDENCIES = [
    GeneratorDependency(
        dependency="swr",
        exports=(
            DependencyExport(name="useSWR", default=True, values=True),
            DependencyExport(name="SWRConfiguration"),
            DependencyExport(name="Key"),
        ),
    ),
    GeneratorDependency(
        dependency="swr/mutation",
        exports=(
            DependencyExport(name="useSWRMutation", default=True, values=True),
            DependencyExport(name="SWRMutationConfiguration"),
        ),
    ),
]

AWAITED_HELPER = """type AwaitedInput<T> = PromiseLike<T> | T;

type Awaited<O> = O extends AwaitedInput<infer T> ? T : never;"""


class SwrFlavor(Flavor):
    @property
    def name(self) -> str:
        return "swr"

    def declare_dependencies(self, has_global_mutator: bool) -> list[GeneratorDependency]:
        axios = [] if has_global_mutator else list(AXIOS_DEPENDENCIES)
        return [*axios, *SWR_DEPENDENCIES]

    def render_header(self, flags: HeaderFlags) -> str:
        blocks: list[str] = []
        if not flags.has_awaited_type:
            blocks.append(AWAITED_HELPER)
        if flags.is_mutator_with_request_options:
            blocks.append(SECOND_PARAMETER_HELPER)
        return "".join(f"{block}\n\n" for block in blocks)

    def render_client(self, contract: OperationContract) -> ClientOutput:
        implementation = render_request_function(contract, self.profile) + "\n"
        hook = self.render_hook(contract)
        if hook:
            implementation = f"{implementation}\n{hook}"
        return ClientOutput(
            implementation=implementation,
            imports=[*contract.imports, *mutator_imports(contract, with_error_type=bool(hook))],
        )

    def render_hook(self, contract: OperationContract) -> str:
        """Render the cache-key function and hook, or ``""`` for other verbs."""
        try:
            kind = classify_verb(contract.verb)
        except UnsupportedVerbError as exc:
            logger.debug("%s: no hook rendered: %s", contract.operation_name, exc.message)
            return ""
        return "\n".join([_render_key_function(contract), "", _render_hook(contract, kind)]) + "\n"


def key_function_name(contract: OperationContract) -> str:
    return camel(f"get-{contract.operation_name}-key")


def hook_name(contract: OperationContract) -> str:
    return camel(f"use-{contract.operation_name}")


def _render_key_function(contract: OperationContract) -> str:
    key_surface = contract.surface.only(SlotRole.PATH, SlotRole.QUERY)
    elements = [f"`{contract.route}`"]
    query_slot = key_surface.first(SlotRole.QUERY)
    if query_slot is not None:
        elements.append(f"...({query_slot.name} ? [{query_slot.name}] : [])")
    return (
        f"export const {key_function_name(contract)} = ({key_surface.render()}) => "
        f"[{', '.join(elements)}] as const;"
    )


def _options_definition(contract: OperationContract, kind: VerbKind) -> str:
    configuration = "SWRMutationConfiguration" if kind is VerbKind.MUTATION else "SWRConfiguration"
    return (
        f"{configuration}<Awaited<ReturnType<typeof {contract.operation_name}>>, TError> "
        "& { swrKey?: Key, enabled?: boolean }"
    )


def _options_parameter(contract: OperationContract, kind: VerbKind) -> str:
    definition = _options_definition(contract, kind)
    if not contract.override.is_request_options:
        return f"swrOptions?: {definition}"
    fields = [f"swr?: {definition}"]
    if contract.mutator is None:
        fields.append("axios?: AxiosRequestConfig")
    elif contract.mutator.has_second_arg:
        fields.append(f"request?: SecondParameter<typeof {contract.mutator.name}>")
    return "options?: { " + ", ".join(fields) + " }"


def _enabled_expression(contract: OperationContract) -> str:
    # path parameters are baked into the key; a required query object must be present too
    names = [slot.name for slot in contract.surface.only(SlotRole.PATH)]
    query_slot = contract.surface.first(SlotRole.QUERY)
    if query_slot is not None and not query_slot.optional:
        names.append(query_slot.name)
    expression = "swrOptions?.enabled !== false"
    if names:
        expression += f" && !!({' && '.join(names)})"
    return expression


def _render_hook(contract: OperationContract, kind: VerbKind) -> str:
    is_mutation = kind is VerbKind.MUTATION
    suffix = "Mutation" if is_mutation else "Query"
    type_prefix = pascal(contract.operation_name)
    errors = error_type(contract)
    body_slot = contract.surface.first(SlotRole.BODY)

    hook_surface = contract.surface.without(SlotRole.OPTIONS, *((SlotRole.BODY,) if is_mutation else ()))
    parameters = [*hook_surface.render_parts(), _options_parameter(contract, kind)]

    lines = [
        f"export type {type_prefix}{suffix}Result = "
        f"NonNullable<Awaited<ReturnType<typeof {contract.operation_name}>>>;",
        f"export type {type_prefix}{suffix}Error = {errors};",
        "",
        f"export const {hook_name(contract)} = <TError = {errors}>(",
        *(f"  {parameter}," for parameter in parameters),
        ") => {",
    ]

    options_name = transport_options_name(contract)
    if contract.override.is_request_options:
        destructured = ["swr: swrOptions"]
        if options_name == "axiosOptions":
            destructured.append("axios: axiosOptions")
        elif options_name == "requestOptions":
            destructured.append("request: requestOptions")
        lines.extend([f"  const {{ {', '.join(destructured)} }} = options ?? {{}};", ""])

    key_arguments = ", ".join(contract.surface.only(SlotRole.PATH, SlotRole.QUERY).names())
    lines.append(f"  const isEnabled = {_enabled_expression(contract)};")
    key_call = f"{key_function_name(contract)}({key_arguments})"
    lines.append(f"  const swrKey = swrOptions?.swrKey ?? (() => (isEnabled ? {key_call} : null));")

    call_arguments = [
        "arg" if is_mutation and slot.role is SlotRole.BODY else slot.name
        for slot in contract.surface.without(SlotRole.OPTIONS)
    ]
    if options_name is not None:
        call_arguments.append(options_name)
    call = f"{contract.operation_name}({', '.join(call_arguments)})"
    if is_mutation and body_slot is not None:
        fn_parameters = f"_key: Key, {{ arg }}: {{ arg: {body_slot.rendered_type} }}"
    else:
        fn_parameters = ""
    lines.append(f"  const swrFn = ({fn_parameters}) => {call};")
    lines.append("")

    swr_options = "swrOptions"
    defaults = contract.override.swr.options
    if defaults:
        swr_options = "{ " + ", ".join([*literal_entries(defaults), "...swrOptions"]) + " }"
    if is_mutation:
        generics = "Awaited<ReturnType<typeof swrFn>>, TError, Key"
        if body_slot is not None:
            generics += f", {body_slot.rendered_type}"
        lines.append(f"  const mutation = useSWRMutation<{generics}>(swrKey, swrFn, {swr_options});")
        result = "mutation"
    else:
        lines.append(
            f"  const query = useSWR<Awaited<ReturnType<typeof swrFn>>, TError>(swrKey, swrFn, {swr_options});"
        )
        result = "query"
    lines.extend(["", "  return {", "    swrKey,", f"    ...{result},", "  };", "};"])
    return "\n".join(lines)
