"""Request function rendering shared by the built-in flavors.

Both flavors call the API through the same request function: either a
direct axios call or a call to the configured mutator.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from ...config import MutatorDescriptor
from ...openapi import SchemaObject
from ..body import FORM_DATA, FORM_URL_ENCODED
from ..contract import OperationContract, ParameterSurface, SlotRole
from ..imports import DependencyExport, GeneratorDependency, ImportRef
from ..naming import property_key
from ..profile import GenerationProfile

AXIOS_DEPENDENCIES = [
    GeneratorDependency(
        dependency="axios",
        exports=(
            DependencyExport(name="axios", default=True, values=True, synthetic_default_import=True),
            DependencyExport(name="AxiosRequestConfig"),
            DependencyExport(name="AxiosResponse"),
            DependencyExport(name="AxiosError"),
        ),
    )
]

SECOND_PARAMETER_HELPER = """// eslint-disable-next-line
type SecondParameter<T extends (...args: any) => any> = T extends (
  config: any,
  args: infer P,
) => any
  ? P
  : never;"""

_BODY_IN_CONFIG_VERBS = ("delete",)
_BODY_POSITIONAL_VERBS = ("post", "put", "patch")


def to_ts_literal(value: object) -> str:
    """Render a JSON-like value as a TypeScript literal.

    Example:
        >>> to_ts_literal({"revalidateOnFocus": False, "dedupingInterval": 500})
        '{ revalidateOnFocus: false, dedupingInterval: 500 }'
    """
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        return "{ " + ", ".join(literal_entries(value)) + " }"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_ts_literal(item) for item in value) + "]"
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return json.dumps(value)


def literal_entries(value: Mapping[str, object]) -> list[str]:
    return [f"{property_key(str(key))}: {to_ts_literal(item)}" for key, item in value.items()]


def error_type(contract: OperationContract) -> str:
    """Error type seen by callers, depending on the transport."""
    errors = contract.response.error_type
    mutator = contract.mutator
    if mutator is None:
        return f"AxiosError<{errors}>"
    if mutator.has_error_type:
        return f"ErrorType<{errors}>"
    return errors


def mutator_imports(contract: OperationContract, with_error_type: bool = False) -> list[ImportRef]:
    mutator = contract.mutator
    if mutator is None:
        return []
    refs = [ImportRef(name=mutator.name, specifier=mutator.path, default=mutator.default, values=True)]
    if with_error_type and mutator.has_error_type:
        refs.append(ImportRef(name="ErrorType", specifier=mutator.path))
    if mutator.body_type_name and contract.body.defined:
        refs.append(ImportRef(name=mutator.body_type_name, specifier=mutator.path))
    return refs


def has_mutator_with_request_options(contracts: list[OperationContract]) -> bool:
    return any(
        contract.mutator is not None and contract.mutator.has_second_arg and contract.override.is_request_options
        for contract in contracts
    )


def transport_options_name(contract: OperationContract) -> str | None:
    """Name of the variable hooks pass as the request function's options."""
    if not contract.override.is_request_options:
        return None
    if contract.mutator is None:
        return "axiosOptions"
    if contract.mutator.has_second_arg:
        return "requestOptions"
    return None


def render_signature(surface: ParameterSurface) -> str:
    parts = surface.render_parts()
    if not parts:
        return "()"
    return "(\n" + "".join(f"  {part},\n" for part in parts) + ")"


def render_request_function(contract: OperationContract, profile: GenerationProfile) -> str:
    body_lines, data = _form_body(contract)
    if contract.mutator is not None:
        call = _mutator_call(contract, contract.mutator, data)
        head = f"export const {contract.operation_name} = {render_signature(contract.surface)} => {{"
    else:
        call = _axios_call(contract, profile, data)
        head = (
            f"export const {contract.operation_name} = {render_signature(contract.surface)}: "
            f"Promise<AxiosResponse<{contract.response.success_type}>> => {{"
        )
    lines = [head, *body_lines, f"  return {call};", "};"]
    return "\n".join(lines)


def _mutator_call(contract: OperationContract, mutator: MutatorDescriptor, data: str | None) -> str:
    config = [f"url: `{contract.route}`", f"method: '{contract.verb}'"]
    headers_slot = contract.surface.first(SlotRole.HEADER)
    content_type = _content_type(contract)
    header_entries: list[str] = []
    if content_type:
        header_entries.append(f"'Content-Type': '{content_type}'")
    if headers_slot is not None:
        header_entries.append(f"...{headers_slot.name}")
    if header_entries:
        config.append("headers: { " + ", ".join(header_entries) + " }")
    if data is not None:
        config.append(f"data: {data}")
    query_slot = contract.surface.first(SlotRole.QUERY)
    if query_slot is not None:
        config.append(query_slot.name)

    args = ["{ " + ", ".join(config) + " }"]
    request_options = contract.override.request_options
    if contract.override.is_request_options:
        defaults = literal_entries(request_options) if isinstance(request_options, Mapping) else []
        if mutator.has_second_arg:
            args.append("{ " + ", ".join([*defaults, "...options"]) + " }" if defaults else "options")
        elif defaults:
            args.append("{ " + ", ".join(defaults) + " }")
    rendered = "".join(f"    {arg},\n" for arg in args)
    return f"{mutator.name}<{contract.response.success_type}>(\n{rendered}  )"


def _axios_call(contract: OperationContract, profile: GenerationProfile, data: str | None) -> str:
    override = contract.override
    request_options = override.request_options
    config: list[str] = []
    if isinstance(request_options, Mapping):
        config.extend(literal_entries(request_options))
    if override.is_request_options:
        config.append("...options")
    query_slot = contract.surface.first(SlotRole.QUERY)
    if query_slot is not None:
        if override.is_request_options:
            config.append(f"params: {{ ...{query_slot.name}, ...options?.params }}")
        else:
            config.append(query_slot.name)
    headers_slot = contract.surface.first(SlotRole.HEADER)
    if headers_slot is not None:
        if override.is_request_options:
            config.append(f"headers: {{ ...{headers_slot.name}, ...options?.headers }}")
        else:
            config.append(headers_slot.name)
    verb = contract.verb
    if data is not None and verb in _BODY_IN_CONFIG_VERBS:
        config.append(f"data: {data}")

    if config == ["...options"]:
        config_arg: str | None = "options"
    elif config:
        config_arg = "{ " + ", ".join(config) + " }"
    else:
        config_arg = None

    args = [f"`{contract.route}`"]
    if verb in _BODY_POSITIONAL_VERBS:
        if data is not None:
            args.append(data)
        elif config_arg is not None:
            args.append("undefined")
    if config_arg is not None:
        args.append(config_arg)
    client = "axios" if profile.allow_synthetic_default_imports else "axios.default"
    return f"{client}.{verb}({', '.join(args)})"


def _content_type(contract: OperationContract) -> str | None:
    body = contract.body
    if not body.defined:
        return None
    if body.is_form_data:
        return FORM_DATA
    if body.is_form_url_encoded:
        return FORM_URL_ENCODED
    if body.media_type and "json" in body.media_type:
        return body.media_type
    return None


def _form_body(contract: OperationContract) -> tuple[list[str], str | None]:
    """Statements building a form body, and the expression sent as data."""
    body_slot = contract.surface.first(SlotRole.BODY)
    if body_slot is None:
        return [], None
    body = contract.body
    if body.is_form_data:
        variable, constructor = "formData", "FormData"
    elif body.is_form_url_encoded:
        variable, constructor = "formUrlEncoded", "URLSearchParams"
    else:
        return [], body_slot.name

    lines = [f"  const {variable} = new {constructor}();"]
    schema = body.schema or {}
    properties = schema.get("properties", {})
    if not properties:
        lines.append(
            f"  Object.entries({body_slot.name}).forEach(([key, value]) => "
            f"{variable}.append(key, {_append_value('value', None)}));"
        )
        return lines, variable

    required = set(schema.get("required", []))
    for name, prop_schema in properties.items():
        accessor = f"{body_slot.name}.{name}" if property_key(name) == name else f"{body_slot.name}['{name}']"
        if prop_schema.get("type") == "array":
            items = prop_schema.get("items")
            value = _append_value("value", items if isinstance(items, dict) else None)
            statement = f"{accessor}.forEach(value => {variable}.append('{name}', {value}));"
        else:
            statement = f"{variable}.append('{name}', {_append_value(accessor, prop_schema)});"
        if name in required:
            lines.append(f"  {statement}")
        else:
            lines.extend([f"  if ({accessor} !== undefined) {{", f"    {statement}", "  }"])
    return lines, variable


def _append_value(accessor: str, schema: SchemaObject | None) -> str:
    if schema is None:
        return f"typeof {accessor} === 'string' ? {accessor} : JSON.stringify({accessor})"
    schema_type = schema.get("type")
    if schema_type == "string":
        return accessor
    if schema_type in {"integer", "number", "boolean"}:
        return f"{accessor}.toString()"
    return f"JSON.stringify({accessor})"
