"""Override configuration.

Configuration is an explicit value: the CLI (or a caller) builds one
``HookifyConfig``, and ``resolve_override`` turns it into the
``OverrideConfig`` for a single operation. Nothing reads configuration
from ambient state.

A config file uses the same camelCase keys as the generated code's
ecosystem::

    override:
      requestOptions: true
      formData: true
      useDates: false
      mutator:
        path: ./mutator/custom-instance.ts
        name: customInstance
        hasSecondArg: true
        hasErrorType: true
      swr:
        options:
          revalidateOnFocus: false
      operations:
        listPets:
          requestOptions: false
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from os import PathLike
from typing import cast

from .errors import ConfigError, HookifyError
from .ir import OperationIR
from .loader import load_structured_file

RequestOptions = bool | Mapping[str, object]


@dataclass(frozen=True)
class MutatorDescriptor:
    """A caller-supplied transport function used instead of axios.

    Attributes:
        name: Exported function name
        path: Import specifier of the module defining it
        default: Whether the function is the module's default export
        has_second_arg: The function accepts a second request-options argument
        has_error_type: The module exports an ``ErrorType<T>`` wrapper
        body_type_name: Generic wrapper applied to request body types
    """

    name: str
    path: str
    default: bool = False
    has_second_arg: bool = False
    has_error_type: bool = False
    body_type_name: str | None = None


@dataclass(frozen=True)
class SwrOptions:
    options: Mapping[str, object] | None = None


@dataclass(frozen=True)
class OverrideConfig:
    request_options: RequestOptions = True
    form_data: bool = True
    form_url_encoded: bool = True
    use_dates: bool = False
    mutator: MutatorDescriptor | None = None
    swr: SwrOptions = field(default_factory=SwrOptions)

    @property
    def is_request_options(self) -> bool:
        return self.request_options is not False


@dataclass(frozen=True)
class HookifyConfig:
    override: OverrideConfig = field(default_factory=OverrideConfig)
    operations: Mapping[str, Mapping[str, object]] = field(default_factory=dict)

    @property
    def has_global_mutator(self) -> bool:
        return self.override.mutator is not None


def resolve_override(config: HookifyConfig, operation: OperationIR) -> OverrideConfig:
    """Merge global, per-operation and extension overrides for one operation."""
    override = config.override
    if operation.operation_id and operation.operation_id in config.operations:
        override = _apply(override, config.operations[operation.operation_id])
        if config.has_global_mutator and override.mutator is None:
            raise ConfigError(f"Operation '{operation.operation_id}' cannot drop the global mutator")
    extensions = cast(Mapping[str, object], operation.extensions)
    if "x-hookify-request-options" in extensions:
        override = replace(override, request_options=_request_options(extensions["x-hookify-request-options"]))
    if "x-hookify-form-data" in extensions:
        override = replace(override, form_data=_flag("x-hookify-form-data", extensions["x-hookify-form-data"]))
    if "x-hookify-form-url-encoded" in extensions:
        value = _flag("x-hookify-form-url-encoded", extensions["x-hookify-form-url-encoded"])
        override = replace(override, form_url_encoded=value)
    return override


def load_config(path: str | PathLike[str]) -> HookifyConfig:
    """Read a JSON or YAML config file.

    Raises:
        ConfigError: If the file is unreadable or has the wrong shape
    """
    try:
        data = load_structured_file(path)
    except (OSError, HookifyError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if data is None:
        return HookifyConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain an object")
    return parse_config(cast(Mapping[str, object], data))


def parse_config(data: Mapping[str, object]) -> HookifyConfig:
    raw_override = data.get("override", {})
    if not isinstance(raw_override, Mapping):
        raise ConfigError("'override' must be an object")
    operations = raw_override.get("operations", {})
    if not isinstance(operations, Mapping) or not all(isinstance(v, Mapping) for v in operations.values()):
        raise ConfigError("'override.operations' must map operation ids to objects")
    override = _apply(OverrideConfig(), raw_override)
    for operation_id, raw in operations.items():
        # an operation may swap the global mutator, not drop it
        if "mutator" in raw and raw["mutator"] is None:
            raise ConfigError(f"'override.operations.{operation_id}.mutator' cannot be null")
        _apply(override, raw)
    return HookifyConfig(
        override=override,
        operations={str(key): value for key, value in operations.items()},
    )


def _apply(base: OverrideConfig, raw: Mapping[str, object]) -> OverrideConfig:
    changes: dict[str, object] = {}
    if "requestOptions" in raw:
        changes["request_options"] = _request_options(raw["requestOptions"])
    for key, attr in (("formData", "form_data"), ("formUrlEncoded", "form_url_encoded"), ("useDates", "use_dates")):
        if key in raw:
            changes[attr] = _flag(key, raw[key])
    if "mutator" in raw:
        changes["mutator"] = _mutator(raw["mutator"])
    if "swr" in raw:
        changes["swr"] = _swr(raw["swr"])
    return replace(base, **changes)  # type: ignore[arg-type]


def _request_options(value: object) -> RequestOptions:
    if isinstance(value, bool):
        return value
    if isinstance(value, Mapping):
        _check_literal("requestOptions", value)
        return dict(value)
    raise ConfigError("'requestOptions' must be a boolean or an object")


def _flag(key: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean")
    return value


def _check_literal(key: str, value: object) -> None:
    """Reject values that have no TypeScript literal form, e.g. YAML dates."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return
    if isinstance(value, list):
        for item in value:
            _check_literal(key, item)
        return
    if isinstance(value, Mapping):
        for name, item in value.items():
            if not isinstance(name, str):
                raise ConfigError(f"'{key}' keys must be strings")
            _check_literal(f"{key}.{name}", item)
        return
    raise ConfigError(f"'{key}' must be a JSON value, got {type(value).__name__}")


def _mutator(value: object) -> MutatorDescriptor | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigError("'mutator' must be an object")
    name = value.get("name")
    path = value.get("path")
    if not isinstance(name, str) or not name:
        raise ConfigError("'mutator.name' is required")
    if not isinstance(path, str) or not path:
        raise ConfigError("'mutator.path' is required")
    body_type_name = value.get("bodyTypeName")
    if body_type_name is not None and not isinstance(body_type_name, str):
        raise ConfigError("'mutator.bodyTypeName' must be a string")
    return MutatorDescriptor(
        name=name,
        path=path,
        default=bool(value.get("default", False)),
        has_second_arg=bool(value.get("hasSecondArg", False)),
        has_error_type=bool(value.get("hasErrorType", False)),
        body_type_name=body_type_name,
    )


def _swr(value: object) -> SwrOptions:
    if not isinstance(value, Mapping):
        raise ConfigError("'swr' must be an object")
    options = value.get("options")
    if options is not None and not isinstance(options, Mapping):
        raise ConfigError("'swr.options' must be an object")
    if options is not None:
        _check_literal("swr.options", options)
    return SwrOptions(options=dict(options) if options is not None else None)
