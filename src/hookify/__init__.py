from .config import HookifyConfig, MutatorDescriptor, OverrideConfig, load_config, resolve_override
from .errors import (
    ConfigError,
    HookifyError,
    MalformedParameterError,
    SpecError,
    UnknownFlavorError,
    UnresolvedSchemaReferenceError,
    UnsupportedParameterLocationError,
    UnsupportedVerbError,
)
from .generation import GenerationProfile, TypeEmitter, build_contract, emit, generate_models
from .generator import GenerationResult, PackageSpec, generate_package
from .ir import IRDocument, build_ir
from .loader import load_openapi

__all__ = [
    "ConfigError",
    "GenerationProfile",
    "GenerationResult",
    "HookifyConfig",
    "HookifyError",
    "IRDocument",
    "MalformedParameterError",
    "MutatorDescriptor",
    "OverrideConfig",
    "PackageSpec",
    "SpecError",
    "TypeEmitter",
    "UnknownFlavorError",
    "UnresolvedSchemaReferenceError",
    "UnsupportedParameterLocationError",
    "UnsupportedVerbError",
    "build_contract",
    "build_ir",
    "emit",
    "generate_models",
    "generate_package",
    "load_config",
    "load_openapi",
    "resolve_override",
]
