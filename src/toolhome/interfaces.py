# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols describing the collaborators consulted during home resolution."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .models import NodeKind
    from .overrides import NodeToolOverrides


@runtime_checkable
class ToolType(Protocol):
    """Opaque handle describing a class of installable tool."""

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Return the canonical string form stored inside compound keys.

        Returns:
            str: Identifier that never contains the ``@`` separator.
        """

        raise NotImplementedError

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return the human readable name of the tool type.

        Returns:
            str: Display name rendered by listing views.
        """

        raise NotImplementedError


@runtime_checkable
class ToolInstallationLike(Protocol):
    """Named, typed installation carrying a default home directory."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the installation name, unique within its type."""

        raise NotImplementedError

    @property
    @abstractmethod
    def descriptor(self) -> ToolType:
        """Return the tool type the installation belongs to."""

        raise NotImplementedError

    @property
    @abstractmethod
    def home(self) -> str:
        """Return the globally declared default home directory."""

        raise NotImplementedError


@runtime_checkable
class ToolTypeResolver(Protocol):
    """Resolve tool type identifiers back to their registered metadata."""

    @abstractmethod
    def resolve_type(self, identifier: str) -> ToolType:
        """Return the tool type registered under ``identifier``.

        Args:
            identifier: Canonical tool type identifier.

        Returns:
            ToolType: Registered tool type.

        Raises:
            TypeResolutionError: If no tool type is registered for ``identifier``.
        """

        raise NotImplementedError


@runtime_checkable
class NodeLike(Protocol):
    """Build-execution node known to the node registry."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique node name."""

        raise NotImplementedError

    @property
    @abstractmethod
    def kind(self) -> NodeKind:
        """Return the node kind used by the applicability predicate."""

        raise NotImplementedError


@runtime_checkable
class OverridesSource(Protocol):
    """Provide the override set currently attached to a node."""

    @abstractmethod
    def get_overrides_for(self, node: NodeLike) -> NodeToolOverrides | None:
        """Return the overrides attached to ``node`` or ``None`` when absent.

        Args:
            node: Node whose override set is requested.

        Returns:
            NodeToolOverrides | None: Attached overrides, if any.
        """

        raise NotImplementedError


__all__ = [
    "NodeLike",
    "OverridesSource",
    "ToolInstallationLike",
    "ToolType",
    "ToolTypeResolver",
]
