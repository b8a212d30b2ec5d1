from __future__ import annotations

from ..contract import OperationContract
from ..imports import GeneratorDependency
from .base import ClientOutput, Flavor, HeaderFlags
from .request import (
    AXIOS_DEPENDENCIES,
    SECOND_PARAMETER_HELPER,
    mutator_imports,
    render_request_function,
)


class AxiosFlavor(Flavor):
    """Plain request functions, one per operation, on top of axios."""

    @property
    def name(self) -> str:
        return "axios"

    def declare_dependencies(self, has_global_mutator: bool) -> list[GeneratorDependency]:
        return [] if has_global_mutator else list(AXIOS_DEPENDENCIES)

    def render_header(self, flags: HeaderFlags) -> str:
        if flags.is_mutator_with_request_options:
            return SECOND_PARAMETER_HELPER + "\n"
        return ""

    def render_client(self, contract: OperationContract) -> ClientOutput:
        return ClientOutput(
            implementation=render_request_function(contract, self.profile) + "\n",
            imports=[*contract.imports, *mutator_imports(contract)],
        )
