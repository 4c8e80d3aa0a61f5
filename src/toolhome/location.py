# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Node specific tool locations and their ``type@name`` key codec.

A tool location exists in one of two phases. Locations decoded from a stored
key only know the tool type identifier (:class:`UnresolvedToolLocation`) and
must consult a :class:`~toolhome.interfaces.ToolTypeResolver` before they can
be matched. Locations created while holding a live tool type carry it directly
(:class:`ResolvedToolLocation`). Resolving an unresolved location returns a new
value rather than caching into the existing one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .errors import KeyFormatError
from .interfaces import ToolInstallationLike, ToolType, ToolTypeResolver
from .models import KEY_SEPARATOR


def encode_key(type_id: str, name: str) -> str:
    """Return the compound key for ``type_id`` and ``name``.

    Args:
        type_id: Tool type identifier, which must not contain ``@``.
        name: Installation name; may itself contain ``@``.

    Returns:
        str: ``type_id@name`` compound key.

    Raises:
        ValueError: If ``type_id`` contains the separator.
    """

    if KEY_SEPARATOR in type_id:
        raise ValueError(f"tool type identifier {type_id!r} must not contain {KEY_SEPARATOR!r}")
    return f"{type_id}{KEY_SEPARATOR}{name}"


def decode_key(key: str) -> tuple[str, str]:
    """Split ``key`` on its first ``@`` into ``(type_id, name)``.

    Empty halves are returned as-is: ``"JDK@"`` has an empty name and
    ``"@jdk8"`` an empty type identifier that will never resolve.

    Args:
        key: Compound key produced by :func:`encode_key`.

    Returns:
        tuple[str, str]: Tool type identifier and installation name.

    Raises:
        KeyFormatError: If ``key`` contains no separator at all.
    """

    type_id, separator, name = key.partition(KEY_SEPARATOR)
    if not separator:
        raise KeyFormatError(key)
    return type_id, name


@dataclass(frozen=True, slots=True)
class ResolvedToolLocation:
    """Override whose tool type is already known."""

    descriptor: ToolType
    name: str
    home: str

    def __post_init__(self) -> None:
        if KEY_SEPARATOR in self.descriptor.identifier:
            raise ValueError(
                f"tool type identifier {self.descriptor.identifier!r} must not contain {KEY_SEPARATOR!r}",
            )

    @property
    def type_id(self) -> str:
        """Return the identifier of the carried tool type."""

        return self.descriptor.identifier

    def key(self) -> str:
        """Return the ``type@name`` compound key."""

        return encode_key(self.type_id, self.name)

    def type(self, resolver: ToolTypeResolver | None = None) -> ToolType:
        """Return the tool type of this location.

        When ``resolver`` is given the identifier is looked up again, so a type
        unregistered after this location was resolved is reported rather than
        silently matched.

        Raises:
            TypeResolutionError: If ``resolver`` no longer knows the identifier.
        """

        if resolver is None:
            return self.descriptor
        return resolver.resolve_type(self.type_id)

    def resolve(self, resolver: ToolTypeResolver | None = None) -> ResolvedToolLocation:
        """Return this location unchanged; it already carries its tool type."""

        return self

    def matches(self, installation: ToolInstallationLike, resolver: ToolTypeResolver | None = None) -> bool:
        """Return whether this override applies to ``installation``.

        The tool type is compared against the installation descriptor rather
        than against the installation key, so same-named installations of two
        different types never collide.

        Raises:
            TypeResolutionError: If ``resolver`` no longer knows the identifier.
        """

        if self.name != installation.name:
            return False
        return self.type(resolver) == installation.descriptor


@dataclass(frozen=True, slots=True)
class UnresolvedToolLocation:
    """Override decoded from storage that only records its type identifier."""

    type_id: str
    name: str
    home: str

    def key(self) -> str:
        """Return the ``type@name`` compound key."""

        return f"{self.type_id}{KEY_SEPARATOR}{self.name}"

    def resolve(self, resolver: ToolTypeResolver) -> ResolvedToolLocation:
        """Return the resolved variant of this location.

        Args:
            resolver: Tool type registry consulted for the identifier.

        Returns:
            ResolvedToolLocation: Location carrying the registered tool type.

        Raises:
            TypeResolutionError: If the stored identifier is no longer registered.
        """

        return ResolvedToolLocation(
            descriptor=resolver.resolve_type(self.type_id),
            name=self.name,
            home=self.home,
        )

    def type(self, resolver: ToolTypeResolver) -> ToolType:
        """Return the tool type registered for the stored identifier.

        Raises:
            TypeResolutionError: If the stored identifier is no longer registered.
        """

        return self.resolve(resolver).descriptor

    def matches(self, installation: ToolInstallationLike, resolver: ToolTypeResolver) -> bool:
        """Return whether this override applies to ``installation``.

        Raises:
            TypeResolutionError: If the stored identifier is no longer registered.
        """

        if self.name != installation.name:
            return False
        return self.type(resolver) == installation.descriptor


ToolLocation: TypeAlias = UnresolvedToolLocation | ResolvedToolLocation


def location_from_key(key: str, home: str) -> UnresolvedToolLocation:
    """Build a location from a raw ``(key, home)`` pair entered by a user.

    Raises:
        KeyFormatError: If ``key`` contains no ``@`` separator.
    """

    type_id, name = decode_key(key)
    return UnresolvedToolLocation(type_id=type_id, name=name, home=home)


def location_for(descriptor: ToolType, name: str, home: str) -> ResolvedToolLocation:
    """Build a location for a tool type the caller already holds."""

    return ResolvedToolLocation(descriptor=descriptor, name=name, home=home)


__all__ = [
    "ResolvedToolLocation",
    "ToolLocation",
    "UnresolvedToolLocation",
    "decode_key",
    "encode_key",
    "location_for",
    "location_from_key",
]
