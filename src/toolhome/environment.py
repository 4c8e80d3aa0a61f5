# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble registries from configuration and answer home lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import ControllerConfig, load_config
from .errors import UnknownInstallationError
from .models import Node, ToolDescriptor, ToolInstallation
from .nodes import NodeRegistry
from .overrides import NodeToolOverrides, OverrideEntry, is_applicable, list_overrides, resolve_home
from .registry import ToolTypeRegistry
from .store import load_overrides, save_overrides

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ToolEnvironment:
    """Tool types, installations and nodes known to a controller."""

    types: ToolTypeRegistry
    installations: dict[str, ToolInstallation]
    nodes: NodeRegistry
    store_path: Path | None = None
    orphaned: dict[str, NodeToolOverrides] = field(default_factory=dict)
    persisted: dict[str, NodeToolOverrides] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: ControllerConfig, *, base_dir: Path) -> ToolEnvironment:
        """Build an environment from a validated configuration.

        Override sets persisted in the configured store replace the inline
        ``tool_locations`` of the same node. Stored sets for nodes that are
        not declared, or that cannot carry overrides, are kept in
        :attr:`orphaned` so ``check`` can report them.
        Only sets read from the store are tracked in :attr:`persisted`;
        inline sets are never written back.

        Args:
            config: Validated controller configuration.
            base_dir: Directory relative store paths are anchored to.

        Returns:
            ToolEnvironment: Ready-to-query environment.
        """

        types = ToolTypeRegistry(
            ToolDescriptor(identifier=identifier, display_name=spec.display_name)
            for identifier, spec in config.tool_types.items()
        )
        installations: dict[str, ToolInstallation] = {}
        for spec in config.installations:
            installation = ToolInstallation(name=spec.name, descriptor=types.resolve_type(spec.type), home=spec.home)
            installations[installation.key] = installation

        nodes = NodeRegistry()
        orphaned: dict[str, NodeToolOverrides] = {}
        inline: dict[str, NodeToolOverrides] = {}
        for name, spec in config.nodes.items():
            nodes.add(Node(name=name, kind=spec.kind, labels=spec.labels))
            if spec.tool_locations:
                inline[name] = NodeToolOverrides.from_pairs(
                    (location.key, location.home) for location in spec.tool_locations
                )

        store_path = config.resolve_store(base_dir)
        stored = load_overrides(store_path) if store_path is not None else {}
        persisted: dict[str, NodeToolOverrides] = {}
        for name, overrides in {**inline, **stored}.items():
            node = nodes.get(name) if name in nodes else None
            if node is None or not is_applicable(node.kind):
                LOGGER.warning("Ignoring tool locations for node %s that cannot carry overrides", name)
                orphaned[name] = overrides
                continue
            published = overrides.resolved(types)
            nodes.attach(node, published)
            if name in stored:
                persisted[name] = published
        return cls(
            types=types,
            installations=installations,
            nodes=nodes,
            store_path=store_path,
            orphaned=orphaned,
            persisted=persisted,
        )

    @classmethod
    def load(cls, path: Path) -> ToolEnvironment:
        """Load the configuration at ``path`` and build an environment from it."""

        config = load_config(path)
        return cls.from_config(config, base_dir=path.resolve().parent)

    def installation(self, key: str) -> ToolInstallation:
        """Return the installation identified by the compound ``key``.

        Raises:
            UnknownInstallationError: If no installation uses ``key``.
        """

        installation = self.installations.get(key)
        if installation is None:
            raise UnknownInstallationError(key)
        return installation

    def resolve(self, node_name: str, key: str) -> str:
        """Return the effective home of installation ``key`` on ``node_name``."""

        return resolve_home(self.nodes.get(node_name), self.installation(key), nodes=self.nodes, resolver=self.types)

    def describe_overrides(self, node_name: str) -> list[OverrideEntry]:
        """Return display rows for the overrides attached to ``node_name``."""

        overrides = self.nodes.get_overrides_for(self.nodes.get(node_name))
        if overrides is None:
            return []
        return list_overrides(overrides, self.types)

    def publish(self, node_name: str, overrides: NodeToolOverrides) -> None:
        """Replace the overrides of ``node_name`` and persist the store if configured.

        An empty set stays attached and is persisted as an empty list, so the
        node's inline configuration does not reappear on the next load. Inline
        sets of other nodes are not written, so their ``${VAR}`` references are
        expanded afresh on every load.
        """

        node = self.nodes.get(node_name)
        published = overrides.resolved(self.types)
        self.nodes.attach(node, published)
        if self.store_path is None:
            return
        self.persisted[node_name] = published
        save_overrides(self.store_path, {**self.orphaned, **self.persisted})


__all__ = ["ToolEnvironment"]
