from __future__ import annotations

import json
import re
from dataclasses import dataclass, replace
from os import PathLike
from pathlib import Path

from ..errors import ConfigError


@dataclass(frozen=True)
class GenerationProfile:
    """Interop facts about the TypeScript project receiving the output."""

    has_awaited_type: bool
    allow_synthetic_default_imports: bool

    @classmethod
    def from_version(cls, target_version: str | tuple[int, int]) -> "GenerationProfile":
        if isinstance(target_version, str):
            parts = target_version.split(".")
            major = int(parts[0])
            minor = int(parts[1]) if len(parts) > 1 else 0
        else:
            major, minor = target_version
        # Awaited<T> is built in since TypeScript 4.5
        return cls(
            has_awaited_type=(major, minor) >= (4, 5),
            allow_synthetic_default_imports=True,
        )

    def with_tsconfig(self, path: str | PathLike[str]) -> "GenerationProfile":
        """Refine the profile from a ``tsconfig.json``.

        ``allowSyntheticDefaultImports`` wins when present; otherwise
        ``esModuleInterop`` implies it. A tsconfig that sets neither keeps
        the profile's current value.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
            data = json.loads(_strip_json_comments(text))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read tsconfig {path}: {exc}") from exc
        options = data.get("compilerOptions", {}) if isinstance(data, dict) else {}
        if not isinstance(options, dict):
            raise ConfigError(f"'compilerOptions' must be an object in {path}")
        if "allowSyntheticDefaultImports" in options:
            return replace(self, allow_synthetic_default_imports=bool(options["allowSyntheticDefaultImports"]))
        if "esModuleInterop" in options:
            return replace(self, allow_synthetic_default_imports=bool(options["esModuleInterop"]))
        return self


def _strip_json_comments(text: str) -> str:
    # tsconfig files are JSONC; drop line/block comments and trailing commas
    text = re.sub(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', lambda m: m.group(1) or "", text, flags=re.S)
    return re.sub(r",(\s*[}\]])", r"\1", text)
