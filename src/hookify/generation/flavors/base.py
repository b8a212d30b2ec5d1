"""Abstract base class for output flavors.

A flavor turns an ``OperationContract`` into source code for one client
library. Every flavor implements the same three capabilities:

- ``declare_dependencies``: external package symbols its output may use
- ``render_header``: helper declarations emitted once per output file
- ``render_client``: the code for one operation

Flavors are looked up by name in :mod:`hookify.generation.flavors`;
third-party packages add new ones through the ``hookify.flavors``
entry-point group::

    [project.entry-points."hookify.flavors"]
    react-query = "my_package.flavor:ReactQueryFlavor"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ...errors import UnsupportedVerbError
from ..contract import OperationContract
from ..imports import GeneratorDependency, ImportRef
from ..profile import GenerationProfile

QUERY_VERBS = ("get",)
MUTATION_VERBS = ("post", "put", "patch", "delete")


class VerbKind(Enum):
    QUERY = "query"
    MUTATION = "mutation"


def classify_verb(verb: str) -> VerbKind:
    """Classify an HTTP verb as read-style or mutating.

    Raises:
        UnsupportedVerbError: For verbs that are neither (head, options, trace)
    """
    verb = verb.lower()
    if verb in QUERY_VERBS:
        return VerbKind.QUERY
    if verb in MUTATION_VERBS:
        return VerbKind.MUTATION
    raise UnsupportedVerbError(f"Verb '{verb}' is neither a query nor a mutation")


@dataclass(frozen=True)
class HeaderFlags:
    has_awaited_type: bool
    is_mutator_with_request_options: bool


@dataclass(frozen=True)
class ClientOutput:
    implementation: str
    imports: list[ImportRef] = field(default_factory=list)


class Flavor(ABC):
    """Base class for all flavors.

    Instances are built with the target's ``GenerationProfile`` and must
    not keep per-operation state: ``render_client`` may be called for
    many operations in any order.
    """

    def __init__(self, profile: GenerationProfile) -> None:
        self.profile = profile

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the flavor name, also used as the output file stem."""
        ...

    @abstractmethod
    def declare_dependencies(self, has_global_mutator: bool) -> list[GeneratorDependency]:
        """List external package symbols the output may reference.

        Args:
            has_global_mutator: A mutator replaces the default transport
                for every operation, so its package is not needed.
        """
        ...

    def render_header(self, flags: HeaderFlags) -> str:
        return ""

    @abstractmethod
    def render_client(self, contract: OperationContract) -> ClientOutput:
        """Render one operation. Must not mutate ``contract``."""
        ...
