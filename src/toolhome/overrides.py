# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-node tool location overrides and effective home resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

from .errors import ConfigurationError, TypeResolutionError
from .interfaces import NodeLike, OverridesSource, ToolInstallationLike, ToolType, ToolTypeResolver
from .location import ToolLocation, UnresolvedToolLocation, encode_key, location_from_key
from .models import NodeKind, ToolInstallation

LOGGER = logging.getLogger(__name__)

DISPLAY_NAME: Final[str] = "Tool Locations"


class NodeToolOverrides:
    """Ordered, immutable set of tool locations attached to a single node.

    The set is never edited in place. Reconfiguring a node builds a new
    instance and the owning node registry publishes it in one step.
    """

    __slots__ = ("_locations",)

    def __init__(self, locations: Iterable[ToolLocation] | None) -> None:
        """Freeze ``locations`` into the override set.

        Args:
            locations: Overrides in display order.

        Raises:
            ConfigurationError: If ``locations`` is ``None``.
        """

        if locations is None:
            raise ConfigurationError("tool location overrides require a collection of locations")
        self._locations: tuple[ToolLocation, ...] = tuple(locations)

    @classmethod
    def of(cls, *locations: ToolLocation) -> NodeToolOverrides:
        """Build an override set from positional ``locations``."""

        return cls(locations)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> NodeToolOverrides:
        """Build an override set from raw ``(key, home)`` pairs.

        Raises:
            KeyFormatError: If any key lacks the ``@`` separator.
        """

        return cls(location_from_key(key, home) for key, home in pairs)

    @property
    def locations(self) -> tuple[ToolLocation, ...]:
        """Return the overrides as a read-only tuple."""

        return self._locations

    def home_for(self, installation: ToolInstallationLike, resolver: ToolTypeResolver) -> str | None:
        """Return the overridden home for ``installation`` if one is configured.

        Entries whose tool type no longer resolves are skipped, so a single
        stale override never hides the others.

        Args:
            installation: Installation being resolved.
            resolver: Tool type registry used for stored identifiers.

        Returns:
            str | None: Home of the first matching override, or ``None``.
        """

        for location in self._locations:
            try:
                matched = location.matches(installation, resolver)
            except TypeResolutionError as exc:
                LOGGER.debug("Skipping tool location %s: %s", location.key(), exc)
                continue
            if matched:
                return location.home
        return None

    def resolved(self, resolver: ToolTypeResolver) -> NodeToolOverrides:
        """Return a copy whose resolvable entries carry their tool types.

        Stale entries stay in their unresolved form and keep their position.
        """

        locations: list[ToolLocation] = []
        for location in self._locations:
            if isinstance(location, UnresolvedToolLocation):
                try:
                    locations.append(location.resolve(resolver))
                    continue
                except TypeResolutionError:
                    LOGGER.debug("Tool location %s references an unknown type", location.key())
            locations.append(location)
        return NodeToolOverrides(locations)

    def stale_entries(self, resolver: ToolTypeResolver) -> tuple[ToolLocation, ...]:
        """Return the entries whose tool type identifier no longer resolves.

        Resolved entries are checked too, so a type unregistered after the set
        was published is reported.
        """

        stale: list[ToolLocation] = []
        for location in self._locations:
            try:
                location.type(resolver)
            except TypeResolutionError:
                stale.append(location)
        return tuple(stale)

    def pairs(self) -> list[tuple[str, str]]:
        """Return ``(key, home)`` pairs in display order."""

        return [(location.key(), location.home) for location in self._locations]

    def __iter__(self) -> Iterator[ToolLocation]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeToolOverrides):
            return NotImplemented
        return self.pairs() == other.pairs()

    def __hash__(self) -> int:
        return hash(tuple(self.pairs()))

    def __repr__(self) -> str:
        keys = ", ".join(location.key() for location in self._locations)
        return f"NodeToolOverrides(locations=[{keys}])"


@dataclass(frozen=True, slots=True)
class OverrideEntry:
    """Row describing one override for configuration views."""

    key: str
    home: str
    display_name: str | None
    stale: bool = False
    error: str | None = None


def resolve_home(
    node: NodeLike,
    installation: ToolInstallationLike,
    *,
    nodes: OverridesSource,
    resolver: ToolTypeResolver,
) -> str:
    """Return the home directory ``installation`` has on ``node``.

    The node-specific override wins when one matches; otherwise the
    installation's own default home is returned. Missing configuration is the
    common case and never raises.

    Args:
        node: Node the tool will run on.
        installation: Tool installation being located.
        nodes: Registry providing the overrides attached to ``node``.
        resolver: Tool type registry used to resolve stored identifiers.

    Returns:
        str: Effective home directory; never ``None``.
    """

    overrides = nodes.get_overrides_for(node)
    if overrides is not None:
        home = overrides.home_for(installation, resolver)
        if home is not None:
            LOGGER.debug("Using %s override for %s: %s", node.name, key_for(installation), home)
            return home
    return installation.home


def for_node(
    installation: ToolInstallation,
    node: NodeLike,
    *,
    nodes: OverridesSource,
    resolver: ToolTypeResolver,
) -> ToolInstallation:
    """Return a copy of ``installation`` whose home is the one used on ``node``."""

    home = resolve_home(node, installation, nodes=nodes, resolver=resolver)
    if home == installation.home:
        return installation
    return installation.with_home(home)


def list_overrides(overrides: NodeToolOverrides, resolver: ToolTypeResolver) -> list[OverrideEntry]:
    """Return display rows for ``overrides`` flagging stale tool types.

    Args:
        overrides: Override set being edited.
        resolver: Tool type registry used to resolve stored identifiers.

    Returns:
        list[OverrideEntry]: Rows in the order the overrides were configured.
    """

    entries: list[OverrideEntry] = []
    for location in overrides:
        try:
            display_name: str | None = location.type(resolver).display_name
        except TypeResolutionError as exc:
            entries.append(
                OverrideEntry(key=location.key(), home=location.home, display_name=None, stale=True, error=str(exc)),
            )
            continue
        entries.append(OverrideEntry(key=location.key(), home=location.home, display_name=display_name))
    return entries


def key_for(installation: ToolInstallationLike) -> str:
    """Return the compound key that identifies ``installation``."""

    return encode_key(installation.descriptor.identifier, installation.name)


def is_applicable(kind: NodeKind | str) -> bool:
    """Return whether nodes of ``kind`` may carry tool location overrides.

    The controller never runs builds itself, so it cannot be overridden.
    """

    return NodeKind(kind) is not NodeKind.CONTROLLER


def tool_descriptors(registry: Iterable[ToolType]) -> tuple[ToolType, ...]:
    """Return the tool types offered when editing overrides."""

    return tuple(registry)


__all__ = [
    "DISPLAY_NAME",
    "NodeToolOverrides",
    "OverrideEntry",
    "for_node",
    "is_applicable",
    "key_for",
    "list_overrides",
    "resolve_home",
    "tool_descriptors",
]
