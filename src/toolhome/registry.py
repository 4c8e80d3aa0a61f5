# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-memory registry mapping tool type identifiers to descriptors."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .errors import TypeResolutionError
from .interfaces import ToolTypeResolver
from .models import ToolDescriptor

LOGGER = logging.getLogger(__name__)


class ToolTypeRegistry(ToolTypeResolver):
    """Provide lookup of registered tool types by identifier."""

    def __init__(self, descriptors: Iterable[ToolDescriptor] = ()) -> None:
        """Initialise the registry with optional ``descriptors``.

        Args:
            descriptors: Tool types registered in iteration order.
        """

        self._descriptors: dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: ToolDescriptor, *, replace: bool = False) -> ToolDescriptor:
        """Register ``descriptor`` under its identifier.

        Args:
            descriptor: Tool type to register.
            replace: When ``True`` replace an existing registration.

        Returns:
            ToolDescriptor: The registered descriptor.

        Raises:
            ValueError: If the identifier is already registered and ``replace`` is ``False``.
        """

        if not replace and descriptor.identifier in self._descriptors:
            raise ValueError(f"tool type '{descriptor.identifier}' already registered")
        self._descriptors[descriptor.identifier] = descriptor
        LOGGER.debug("Registered tool type %s", descriptor.identifier)
        return descriptor

    def unregister(self, identifier: str) -> None:
        """Remove the tool type registered under ``identifier`` if present."""

        if self._descriptors.pop(identifier, None) is not None:
            LOGGER.debug("Unregistered tool type %s", identifier)

    def resolve_type(self, identifier: str) -> ToolDescriptor:
        """Return the descriptor registered under ``identifier``.

        Args:
            identifier: Canonical tool type identifier.

        Returns:
            ToolDescriptor: Registered descriptor.

        Raises:
            TypeResolutionError: If ``identifier`` is not registered.
        """

        descriptor = self._descriptors.get(identifier)
        if descriptor is None:
            raise TypeResolutionError(identifier)
        return descriptor

    def all(self) -> tuple[ToolDescriptor, ...]:
        """Return every registered descriptor in registration order."""

        return tuple(self._descriptors.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._descriptors

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        keys = ", ".join(sorted(self._descriptors))
        return f"ToolTypeRegistry(types=[{keys}])"


__all__ = ["ToolTypeRegistry"]
