# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Registry of build nodes and the override sets attached to them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .errors import ConfigurationError, UnknownNodeError
from .interfaces import NodeLike, OverridesSource
from .models import Node, NodeKind
from .overrides import NodeToolOverrides, is_applicable

LOGGER = logging.getLogger(__name__)


class NodeRegistry(OverridesSource):
    """Track known nodes and publish their override sets atomically.

    Writers serialise on an internal lock and publish a fresh mapping with a
    single assignment. Readers never lock: they observe either the previous
    or the new override set for a node, never a partial one.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        """Initialise the registry with optional ``nodes``."""

        self._lock = threading.Lock()
        self._nodes: dict[str, Node] = {}
        self._overrides: dict[str, NodeToolOverrides] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: Node) -> Node:
        """Register ``node``, replacing any node with the same name.

        Overrides already attached under that name are kept.
        """

        with self._lock:
            nodes = dict(self._nodes)
            nodes[node.name] = node
            self._nodes = nodes
        return node

    def get(self, name: str) -> Node:
        """Return the node registered as ``name``.

        Raises:
            UnknownNodeError: If no such node is registered.
        """

        node = self._nodes.get(name)
        if node is None:
            raise UnknownNodeError(name)
        return node

    def nodes(self) -> tuple[Node, ...]:
        """Return registered nodes in registration order."""

        return tuple(self._nodes.values())

    def get_overrides_for(self, node: NodeLike) -> NodeToolOverrides | None:
        """Return the override set attached to ``node`` if any."""

        return self._overrides.get(node.name)

    def attach(self, node: NodeLike, overrides: NodeToolOverrides) -> None:
        """Replace the override set attached to ``node`` with ``overrides``.

        Args:
            node: Node receiving the overrides.
            overrides: Complete override set to publish.

        Raises:
            ConfigurationError: If ``node`` cannot carry tool location overrides.
            UnknownNodeError: If ``node`` is not registered.
        """

        if not is_applicable(node.kind):
            kind = NodeKind(node.kind).value
            raise ConfigurationError(f"{kind} node {node.name!r} cannot carry tool location overrides")
        with self._lock:
            if node.name not in self._nodes:
                raise UnknownNodeError(node.name)
            published = dict(self._overrides)
            published[node.name] = overrides
            self._overrides = published
        LOGGER.debug("Published %d tool location(s) for %s", len(overrides), node.name)

    def detach(self, node: NodeLike) -> NodeToolOverrides | None:
        """Remove and return the override set attached to ``node``."""

        with self._lock:
            published = dict(self._overrides)
            removed = published.pop(node.name, None)
            self._overrides = published
        return removed

    def remove(self, node: NodeLike) -> None:
        """Decommission ``node`` together with its override set."""

        with self._lock:
            nodes = dict(self._nodes)
            nodes.pop(node.name, None)
            published = dict(self._overrides)
            published.pop(node.name, None)
            self._nodes = nodes
            self._overrides = published

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        names = ", ".join(self._nodes)
        return f"NodeRegistry(nodes=[{names}])"


__all__ = ["NodeRegistry"]
