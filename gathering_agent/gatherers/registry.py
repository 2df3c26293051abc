# gathering_agent/gatherers/registry.py - Versioned gatherer registry
"""
Registry resolving "<name>" or "<name>@<version>" references to the
shared gatherer instance registered under them.

The registry is assembled once through GatherersRegistryBuilder before
any event is consumed and is read-only afterwards.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
import logging

from gathering_agent.errors import NameFormatError, NotFoundError
from gathering_agent.gatherers.base import Gatherer


VERSION_SEPARATOR = '@'


def parse_reference(reference: str) -> Tuple[str, Optional[str]]:
    """
    Split a gatherer reference into name and optional version.

    Args:
        reference: "<name>" or "<name>@<version>"

    Returns:
        (name, version) tuple, version is None when not pinned

    Raises:
        NameFormatError: If the reference holds more than one separator
    """
    parts = reference.split(VERSION_SEPARATOR)

    if len(parts) == 1:
        return parts[0], None
    if len(parts) != 2:
        raise NameFormatError(reference)

    return parts[0], parts[1]


class GatherersRegistry:
    """
    Immutable mapping of gatherer name -> version -> gatherer.

    Versions are opaque strings. When a reference does not pin a version
    the lexicographically greatest one wins, so "v9" is preferred over
    "v10".
    """

    def __init__(self, gatherers: Mapping[str, Mapping[str, Gatherer]]):
        """
        Initialize the registry. Use GatherersRegistryBuilder instead of
        calling this directly.

        Args:
            gatherers: Versioned gatherers by name
        """
        self._gatherers = MappingProxyType({
            name: MappingProxyType(dict(versions))
            for name, versions in gatherers.items()
        })
        self.logger = logging.getLogger(__name__)

    def resolve(self, reference: str) -> Gatherer:
        """
        Resolve a reference to its registered gatherer.

        Args:
            reference: "<name>" or "<name>@<version>"

        Returns:
            The shared gatherer instance

        Raises:
            NameFormatError: Malformed reference
            NotFoundError: Unknown name, or known name with unknown version
        """
        name, version = parse_reference(reference)

        versions = self._gatherers.get(name)
        if not versions:
            # Report the composite string when a version was pinned
            raise NotFoundError(reference if version is not None else name)

        if version is None:
            version = self._latest_version(name)

        gatherer = versions.get(version)
        if gatherer is None:
            raise NotFoundError(reference)

        self.logger.debug(f"Resolved {reference} to {name}@{version}")
        return gatherer

    def list(self) -> List[str]:
        """
        Summarize the registered gatherers.

        Returns:
            One "<name> - <v1>/<v2>" line per gatherer name
        """
        return [
            f"{name} - {'/'.join(sorted(versions))}"
            for name, versions in self._gatherers.items()
        ]

    def versions(self, name: str) -> List[str]:
        """
        Registered versions for a gatherer, ascending.

        Args:
            name: Gatherer name

        Returns:
            Sorted version strings (empty if the name is unknown)
        """
        return sorted(self._gatherers.get(name, {}))

    def __contains__(self, reference: str) -> bool:
        try:
            self.resolve(reference)
        except (NameFormatError, NotFoundError):
            return False
        return True

    def __len__(self) -> int:
        return sum(len(versions) for versions in self._gatherers.values())

    def _latest_version(self, name: str) -> str:
        return max(self._gatherers[name])


class GatherersRegistryBuilder:
    """
    Collects gatherer registrations and freezes them into a registry.

    Registering the same name and version twice keeps the last gatherer.
    """

    def __init__(self):
        self._gatherers: Dict[str, Dict[str, Gatherer]] = {}
        self.logger = logging.getLogger(__name__)

    def add(self, name: str, version: str, gatherer: Gatherer) -> 'GatherersRegistryBuilder':
        """
        Register a gatherer under a name and version.

        Args:
            name: Gatherer name used in fact requests
            version: Opaque version string
            gatherer: Gatherer instance, shared by every resolution

        Returns:
            The builder, for chaining
        """
        versions = self._gatherers.setdefault(name, {})

        if version in versions:
            self.logger.debug(f"Overriding gatherer {name}@{version}")

        versions[version] = gatherer
        return self

    def build(self) -> GatherersRegistry:
        """
        Freeze the registrations.

        Returns:
            Read-only GatherersRegistry
        """
        registry = GatherersRegistry(self._gatherers)
        self.logger.info(f"Built gatherers registry with {len(registry)} gatherer(s)")
        return registry
