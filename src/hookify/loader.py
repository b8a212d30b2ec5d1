from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Mapping, cast
from urllib.parse import urldefrag, urlparse

import yaml

from .errors import SpecError, UnresolvedSchemaReferenceError
from .openapi import OpenAPIDocument

logger = logging.getLogger(__name__)

OpenAPISource = str | PathLike[str] | Mapping[str, object]

SCHEMA_NAME_KEY = "x-hookify-schema-name"
_SCHEMA_REF_PREFIX = "#/components/schemas/"


def load_openapi(
    source: OpenAPISource,
    base_path: str | PathLike[str] | None = None,
) -> OpenAPIDocument:
    """Load an OpenAPI document and inline every ``$ref`` in it.

    Args:
        source: A file path, an http(s) URL, or an already parsed mapping
        base_path: Base directory for relative file references

    Returns:
        The dereferenced document. Component schemas keep their name in
        ``x-hookify-schema-name`` so generators can refer to them by name.
    """
    resolved_base_path = Path(base_path) if base_path is not None else None
    document, resolved_base = _read_source(source, resolved_base_path)
    if not isinstance(document, dict):
        raise SpecError("OpenAPI document must be an object")
    openapi_version = document.get("openapi")
    if not isinstance(openapi_version, str):
        raise SpecError("Missing or invalid 'openapi' field in document")
    logger.debug("Resolving references in OpenAPI %s document", openapi_version)
    resolver = RefResolver(document, resolved_base)
    return resolver.resolve()


def load_structured_file(path: str | PathLike[str]) -> object:
    """Read a JSON or YAML file, picking the parser from the suffix."""
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix in {".yaml", ".yml"}:
        return _load_yaml(text)
    return _load_json_or_yaml(text)


@dataclass
class RefResolver:
    """Inlines ``$ref`` references in an OpenAPI document.

    Handles local pointers, relative file references and sibling keys
    merged next to a ``$ref``. A reference to a component schema that is
    already being expanded is left in place as a ``$ref`` node, so
    recursive schemas terminate and are emitted by name.

    Example:
        >>> resolver = RefResolver(document, Path("./specs"))
        >>> resolved = resolver.resolve()
    """

    document: OpenAPIDocument
    base_path: Path | None
    _doc_cache: dict[Path, OpenAPIDocument] = field(default_factory=dict, init=False)
    _active: list[str] = field(default_factory=list, init=False)

    def resolve(self) -> OpenAPIDocument:
        effective_base = self.base_path or Path.cwd()
        return cast(OpenAPIDocument, self._resolve_object(self.document, effective_base))

    def _resolve_object(self, obj: object, current_base: Path) -> object:
        if isinstance(obj, list):
            return [self._resolve_object(item, current_base) for item in obj]
        if not isinstance(obj, dict):
            return obj
        obj_dict = cast(dict[str, object], obj)
        if "$ref" in obj_dict:
            ref = obj_dict["$ref"]
            if not isinstance(ref, str):
                raise SpecError("$ref must be a string")
            if ref in self._active:
                return dict(obj_dict)
            resolved = self._resolve_ref(ref, current_base)
            if len(obj_dict) == 1:
                return resolved
            if not isinstance(resolved, dict):
                raise SpecError("$ref target must be an object when merged")
            merged = deepcopy(cast(dict[str, object], resolved))
            for key, value in obj_dict.items():
                if key == "$ref":
                    continue
                merged[key] = self._resolve_object(value, current_base)
            return merged
        return {key: self._resolve_object(value, current_base) for key, value in obj_dict.items()}

    def _resolve_ref(self, ref: str, current_base: Path) -> object:
        path_part, frag = urldefrag(ref)
        if path_part:
            target_path = (current_base / path_part).resolve()
            target_doc = _load_doc(target_path, self._doc_cache)
            base_for_ref = target_path.parent
        else:
            target_doc = self.document
            base_for_ref = current_base
        if frag and not frag.startswith("/"):
            raise UnresolvedSchemaReferenceError(f"Unsupported $ref fragment: {frag}")
        resolved = _resolve_pointer(target_doc, frag)
        if ref.startswith(_SCHEMA_REF_PREFIX) and isinstance(resolved, dict):
            resolved = dict(resolved)
            resolved.setdefault(SCHEMA_NAME_KEY, ref.split("/")[-1])
        self._active.append(ref)
        try:
            return self._resolve_object(deepcopy(resolved), base_for_ref)
        finally:
            self._active.pop()


def _is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _fetch_url(url: str) -> str:
    from urllib.request import Request, urlopen

    try:
        request = Request(url, headers={"User-Agent": "hookify"})
        with urlopen(request, timeout=30) as response:  # noqa: S310
            return response.read().decode("utf-8")
    except OSError as exc:
        raise SpecError(f"Failed to fetch URL: {url}") from exc


def _get_url_extension(url: str) -> str:
    path = urlparse(url).path
    if "." in path:
        return "." + path.rsplit(".", 1)[-1].lower()
    return ""


def _read_source(
    source: OpenAPISource,
    base_path: Path | None,
) -> tuple[object, Path | None]:
    if isinstance(source, Mapping):
        return dict(source), base_path

    source_str = str(source) if isinstance(source, PathLike) else source

    if _is_url(source_str):
        text = _fetch_url(source_str)
        if _get_url_extension(source_str) in {".yaml", ".yml"}:
            return _load_yaml(text), base_path
        return _load_json_or_yaml(text), base_path

    path = Path(source_str)
    return load_structured_file(path), base_path or path.parent


def _load_json_or_yaml(text: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return _load_yaml(text)


def _load_yaml(text: str) -> object:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SpecError(f"Invalid YAML: {exc}") from exc


def _load_doc(path: Path, cache: dict[Path, OpenAPIDocument]) -> OpenAPIDocument:
    if path in cache:
        return cache[path]
    data = load_structured_file(path)
    if not isinstance(data, dict):
        raise SpecError(f"Referenced document must be an object: {path}")
    cache[path] = cast(OpenAPIDocument, data)
    return cache[path]


def _resolve_pointer(document: OpenAPIDocument, fragment: str) -> object:
    """Resolve a JSON pointer fragment within a document.

    Raises:
        UnresolvedSchemaReferenceError: If the pointer does not exist
    """
    if fragment in {"", "#"}:
        return document
    pointer = fragment[1:] if fragment.startswith("/") else fragment
    current: object = document
    for part in pointer.split("/"):
        key = part.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            raise UnresolvedSchemaReferenceError(f"Unresolvable $ref pointer: #{fragment}")
    return current
