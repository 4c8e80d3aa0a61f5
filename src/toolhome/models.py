# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value types for tool types, installations and build nodes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Final

KEY_SEPARATOR: Final[str] = "@"


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """Registered class of installable tool such as a JDK or build tool."""

    identifier: str
    display_name: str = ""

    def __post_init__(self) -> None:
        """Validate that ``identifier`` can be embedded in a compound key.

        Raises:
            ValueError: If the identifier is empty or contains ``@``.
        """

        if not self.identifier:
            raise ValueError("tool type identifier must not be empty")
        if KEY_SEPARATOR in self.identifier:
            raise ValueError(f"tool type identifier {self.identifier!r} must not contain {KEY_SEPARATOR!r}")
        if not self.display_name:
            object.__setattr__(self, "display_name", self.identifier)

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True, slots=True)
class ToolInstallation:
    """Named installation of a tool type with its default home directory."""

    name: str
    descriptor: ToolDescriptor
    home: str

    @property
    def key(self) -> str:
        """Return the ``type@name`` compound key identifying the installation."""

        return f"{self.descriptor.identifier}{KEY_SEPARATOR}{self.name}"

    def with_home(self, home: str) -> ToolInstallation:
        """Return a copy of the installation pointing at ``home``."""

        return replace(self, home=home)


class NodeKind(str, Enum):
    """Enumerate the kinds of node known to the build system."""

    CONTROLLER = "controller"
    AGENT = "agent"


@dataclass(frozen=True, slots=True)
class Node:
    """Machine or execution context that runs build work."""

    name: str
    kind: NodeKind = NodeKind.AGENT
    labels: tuple[str, ...] = field(default_factory=tuple)


__all__ = [
    "KEY_SEPARATOR",
    "Node",
    "NodeKind",
    "ToolDescriptor",
    "ToolInstallation",
]
