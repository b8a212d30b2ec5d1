from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import HookifyConfig, resolve_override
from .errors import HookifyError
from .generation import GenerationProfile, build_contract, emit_file, generate_models, get_flavor
from .generation.contract import OperationContract
from .ir import IRDocument

logger = logging.getLogger(__name__)

MODELS_FILENAME = "model.ts"


@dataclass(frozen=True)
class PackageSpec:
    package_name: str
    output_dir: Path


@dataclass
class GenerationResult:
    """Files written and operations that could not be generated.

    Attributes:
        paths: Every file written, models first
        failures: One error per failed operation and flavor, each carrying
            the operation name and route
    """

    paths: list[Path] = field(default_factory=list)
    failures: list[HookifyError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def generate_package(
    spec: PackageSpec,
    ir: IRDocument,
    profile: GenerationProfile,
    config: HookifyConfig | None = None,
    flavors: Sequence[str] = ("swr",),
) -> GenerationResult:
    """Write the models file and one client file per flavor.

    Raises:
        UnknownFlavorError: If a flavor name is not registered
    """
    config = config or HookifyConfig()
    selected = [get_flavor(name, profile) for name in flavors]
    result = GenerationResult()

    package_dir = spec.output_dir / spec.package_name
    package_dir.mkdir(parents=True, exist_ok=True)

    contracts = _build_contracts(ir, config, result)
    models = generate_models(ir.schemas, contracts, use_dates=config.override.use_dates)
    models_path = package_dir / MODELS_FILENAME
    models_path.write_text(models.code, encoding="utf-8")
    result.paths.append(models_path)
    logger.info("Wrote %d models to %s", len(models.names), models_path)

    for flavor in selected:
        emitted = emit_file(contracts, flavor, has_global_mutator=config.has_global_mutator)
        path = package_dir / f"{flavor.name}.ts"
        path.write_text(emitted.render(flavor), encoding="utf-8")
        result.paths.append(path)
        result.failures.extend(emitted.failures)
        logger.info("Wrote %d operations to %s", len(emitted.implementations), path)

    return result


def _build_contracts(ir: IRDocument, config: HookifyConfig, result: GenerationResult) -> list[OperationContract]:
    contracts: list[OperationContract] = []
    for operation in ir.operations:
        try:
            contracts.append(build_contract(operation, resolve_override(config, operation)))
        except HookifyError as exc:
            logger.warning("Skipping operation: %s", exc)
            result.failures.append(exc)
    return contracts
