"""Flavor registry.

Built-in flavors are registered at import time. Third-party flavors are
picked up from the ``hookify.flavors`` entry-point group by
:func:`load_entry_point_flavors`.
"""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable

from ...errors import UnknownFlavorError
from ..profile import GenerationProfile
from .axios import AxiosFlavor
from .base import ClientOutput, Flavor, HeaderFlags, VerbKind, classify_verb
from .swr import SwrFlavor

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "hookify.flavors"

FlavorFactory = Callable[[GenerationProfile], Flavor]

_FLAVORS: dict[str, FlavorFactory] = {
    "axios": AxiosFlavor,
    "swr": SwrFlavor,
}


def register_flavor(name: str, factory: FlavorFactory) -> None:
    if name in _FLAVORS:
        logger.warning("Flavor '%s' is already registered, replacing it", name)
    _FLAVORS[name] = factory


def available_flavors() -> list[str]:
    return sorted(_FLAVORS)


def get_flavor(name: str, profile: GenerationProfile) -> Flavor:
    """Instantiate a registered flavor.

    Raises:
        UnknownFlavorError: If no flavor is registered under ``name``
    """
    try:
        factory = _FLAVORS[name]
    except KeyError:
        raise UnknownFlavorError(
            f"Unknown flavor '{name}' (available: {', '.join(available_flavors())})"
        ) from None
    return factory(profile)


def load_entry_point_flavors() -> list[str]:
    """Register flavors advertised by installed packages.

    Returns:
        Names of the flavors that were registered. Entry points that fail
        to load are logged and skipped.
    """
    loaded: list[str] = []
    for entry_point in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
        try:
            factory = entry_point.load()
        except Exception as exc:
            logger.warning("Failed to load flavor '%s': %s", entry_point.name, exc)
            continue
        register_flavor(entry_point.name, factory)
        loaded.append(entry_point.name)
        logger.info("Loaded flavor '%s' from %s", entry_point.name, entry_point.value)
    return loaded


__all__ = [
    "AxiosFlavor",
    "ClientOutput",
    "Flavor",
    "HeaderFlags",
    "SwrFlavor",
    "VerbKind",
    "available_flavors",
    "classify_verb",
    "get_flavor",
    "load_entry_point_flavors",
    "register_flavor",
]
