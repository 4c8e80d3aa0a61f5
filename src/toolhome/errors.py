# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the tool location modules."""

from __future__ import annotations


class ToolHomeError(RuntimeError):
    """Base class for errors raised by :mod:`toolhome`."""


class ConfigurationError(ToolHomeError, ValueError):
    """Raised when a caller wires overrides or nodes together incorrectly."""


class ConfigError(ConfigurationError):
    """Raised when a controller configuration document is invalid."""


class KeyFormatError(ToolHomeError, ValueError):
    """Raised when a compound ``type@name`` key cannot be decoded."""

    def __init__(self, key: str) -> None:
        """Create the error for the malformed ``key``.

        Args:
            key: Raw compound key supplied by the caller.
        """

        super().__init__(f"tool location key {key!r} has no '@' separator")
        self.key = key


class TypeResolutionError(ToolHomeError, LookupError):
    """Raised when a stored tool type identifier is no longer registered."""

    def __init__(self, identifier: str) -> None:
        """Create the error for the unknown type ``identifier``.

        Args:
            identifier: Tool type identifier that failed to resolve.
        """

        super().__init__(f"unknown tool type {identifier!r}")
        self.identifier = identifier


class UnknownNodeError(ToolHomeError, LookupError):
    """Raised when a node name is not present in the node registry."""

    def __str__(self) -> str:
        return f"unknown node {self.args[0]!r}"


class UnknownInstallationError(ToolHomeError, LookupError):
    """Raised when no tool installation is declared for a compound key."""

    def __str__(self) -> str:
        return f"unknown tool installation {self.args[0]!r}"


class StoreError(ToolHomeError):
    """Raised when the persisted override document cannot be read."""


__all__ = [
    "ConfigError",
    "ConfigurationError",
    "KeyFormatError",
    "StoreError",
    "ToolHomeError",
    "TypeResolutionError",
    "UnknownInstallationError",
    "UnknownNodeError",
]
