"""Import references and their rendering into TypeScript import statements.

``ImportRef`` is a value type: two references to the same symbol from the
same module compare equal, so collecting them in an ``ImportSet`` never
produces duplicate import lines.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .profile import GenerationProfile

MODELS_SPECIFIER = "./model"


@dataclass(frozen=True)
class ImportRef:
    """A symbol the emitted code refers to.

    Attributes:
        name: The imported symbol
        specifier: Module to import from; ``None`` means the models module
        default: Imported as the module's default export
        values: Used as a value, not only as a type
    """

    name: str
    specifier: str | None = None
    default: bool = False
    values: bool = False


@dataclass(frozen=True)
class DependencyExport:
    name: str
    default: bool = False
    values: bool = False
    synthetic_default_import: bool = False


@dataclass(frozen=True)
class GeneratorDependency:
    """External package symbols a flavor's output may reference."""

    dependency: str
    exports: tuple[DependencyExport, ...]


@dataclass
class ImportSet:
    """Insertion-ordered set of import references."""

    _items: dict[ImportRef, None] = field(default_factory=dict)

    def add(self, ref: ImportRef) -> None:
        self._items.setdefault(ref, None)

    def update(self, refs: Iterable[ImportRef]) -> None:
        for ref in refs:
            self.add(ref)

    def __iter__(self) -> Iterator[ImportRef]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, ref: object) -> bool:
        return ref in self._items


def used_dependency_imports(
    dependencies: Iterable[GeneratorDependency],
    code: str,
) -> list[ImportRef]:
    """Select the dependency exports that actually appear in ``code``."""
    refs: list[ImportRef] = []
    for dependency in dependencies:
        for export in dependency.exports:
            if re.search(rf"\b{re.escape(export.name)}\b", code):
                refs.append(
                    ImportRef(
                        name=export.name,
                        specifier=dependency.dependency,
                        default=export.default,
                        values=export.values,
                    )
                )
    return refs


def render_imports(
    refs: Iterable[ImportRef],
    profile: GenerationProfile,
    dependencies: Iterable[GeneratorDependency] = (),
    models_specifier: str = MODELS_SPECIFIER,
) -> list[str]:
    """Render import statements, one per module, in first-seen module order."""
    synthetic = {
        (dependency.dependency, export.name)
        for dependency in dependencies
        for export in dependency.exports
        if export.synthetic_default_import
    }
    grouped: dict[str, list[ImportRef]] = {}
    for ref in refs:
        specifier = ref.specifier or models_specifier
        group = grouped.setdefault(specifier, [])
        if ref not in group:
            group.append(ref)

    lines: list[str] = []
    for specifier, group in grouped.items():
        default_ref = next((ref for ref in group if ref.default), None)
        named = sorted({ref.name for ref in group if not ref.default})
        type_only = not any(ref.values for ref in group if not ref.default)
        if default_ref is not None:
            if (specifier, default_ref.name) in synthetic and not profile.allow_synthetic_default_imports:
                lines.append(f"import * as {default_ref.name} from '{specifier}';")
            elif named:
                lines.append(f"import {default_ref.name}, {{ {', '.join(named)} }} from '{specifier}';")
                named = []
            else:
                lines.append(f"import {default_ref.name} from '{specifier}';")
        if named:
            keyword = "import type" if type_only else "import"
            lines.append(f"{keyword} {{ {', '.join(named)} }} from '{specifier}';")
    return lines
