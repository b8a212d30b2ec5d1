"""Emission driver.

``emit`` runs a flavor's three capabilities for one contract. ``emit_file``
does the same for every contract of an output file: the flavor header is
rendered once, implementations keep the input order, and imports are
unioned by symbol identity. An operation that fails to render is recorded
and skipped; the rest of the file is still produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import HookifyError
from .contract import OperationContract
from .flavors.base import Flavor, HeaderFlags
from .flavors.request import has_mutator_with_request_options
from .imports import GeneratorDependency, ImportRef, ImportSet, render_imports, used_dependency_imports

logger = logging.getLogger(__name__)

GENERATED_BANNER = """/**
 * Generated by hookify. Do not edit manually.
 */"""


@dataclass(frozen=True)
class EmittedOperation:
    operation_name: str
    header: str
    implementation: str
    imports: list[ImportRef]
    dependencies: list[GeneratorDependency]

    @property
    def code(self) -> str:
        return self.header + self.implementation


@dataclass
class EmittedFile:
    flavor: str
    header: str
    dependencies: list[GeneratorDependency]
    implementations: list[str] = field(default_factory=list)
    imports: ImportSet = field(default_factory=ImportSet)
    failures: list[HookifyError] = field(default_factory=list)

    def render(self, flavor: Flavor) -> str:
        sections = [GENERATED_BANNER]
        import_lines = render_imports(self.imports, flavor.profile, self.dependencies)
        if import_lines:
            sections.append("\n".join(import_lines))
        if self.header:
            sections.append(self.header.strip("\n"))
        sections.extend(implementation.strip("\n") for implementation in self.implementations)
        return "\n\n".join(sections) + "\n"


def header_flags(flavor: Flavor, contracts: list[OperationContract]) -> HeaderFlags:
    return HeaderFlags(
        has_awaited_type=flavor.profile.has_awaited_type,
        is_mutator_with_request_options=has_mutator_with_request_options(contracts),
    )


def emit(
    contract: OperationContract,
    flavor: Flavor,
    flags: HeaderFlags | None = None,
    has_global_mutator: bool = False,
) -> EmittedOperation:
    """Render one operation with ``flavor``.

    The returned imports cover both the models and mutator symbols the
    flavor asked for and the dependency exports the code actually uses.
    Without ``flags`` the header is rendered for this contract alone.
    """
    dependencies = flavor.declare_dependencies(has_global_mutator)
    header = flavor.render_header(flags or header_flags(flavor, [contract]))
    output = flavor.render_client(contract)
    imports = ImportSet()
    imports.update(output.imports)
    imports.update(used_dependency_imports(dependencies, header + output.implementation))
    return EmittedOperation(
        operation_name=contract.operation_name,
        header=header,
        implementation=output.implementation,
        imports=list(imports),
        dependencies=dependencies,
    )


def emit_file(
    contracts: list[OperationContract],
    flavor: Flavor,
    has_global_mutator: bool = False,
) -> EmittedFile:
    flags = header_flags(flavor, contracts)
    emitted = EmittedFile(
        flavor=flavor.name,
        header=flavor.render_header(flags),
        dependencies=flavor.declare_dependencies(has_global_mutator),
    )
    for contract in contracts:
        try:
            operation = emit(contract, flavor, flags, has_global_mutator)
        except HookifyError as exc:
            error = exc.at(contract.operation_name, contract.location)
            logger.warning("Skipping %s in %s output: %s", contract.operation_name, flavor.name, error.message)
            emitted.failures.append(error)
            continue
        emitted.implementations.append(operation.implementation)
        emitted.imports.update(operation.imports)
    logger.debug("Rendered %d operations for flavor %s", len(emitted.implementations), flavor.name)
    return emitted
