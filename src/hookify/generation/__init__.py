from .contract import OperationContract, ParameterSurface, SlotRole, SurfaceSlot, build_contract
from .driver import EmittedFile, EmittedOperation, emit, emit_file
from .emitter import ResolvedType, TypeEmitter
from .flavors import Flavor, available_flavors, get_flavor, register_flavor
from .models import generate_models
from .profile import GenerationProfile

__all__ = [
    "EmittedFile",
    "EmittedOperation",
    "Flavor",
    "GenerationProfile",
    "OperationContract",
    "ParameterSurface",
    "ResolvedType",
    "SlotRole",
    "SurfaceSlot",
    "TypeEmitter",
    "available_flavors",
    "build_contract",
    "emit",
    "emit_file",
    "generate_models",
    "get_flavor",
    "register_flavor",
]
