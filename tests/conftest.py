# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from toolhome.errors import TypeResolutionError
from toolhome.models import Node, NodeKind, ToolDescriptor, ToolInstallation
from toolhome.nodes import NodeRegistry


class FakeTypeRegistry:
    """Type registry backed by a plain dictionary that tests can edit."""

    def __init__(self, *descriptors: ToolDescriptor) -> None:
        self.types = {descriptor.identifier: descriptor for descriptor in descriptors}
        self.lookups: list[str] = []

    def resolve_type(self, identifier: str) -> ToolDescriptor:
        self.lookups.append(identifier)
        try:
            return self.types[identifier]
        except KeyError:
            raise TypeResolutionError(identifier) from None


@pytest.fixture
def jdk_type() -> ToolDescriptor:
    return ToolDescriptor("JDK", "Java Development Kit")


@pytest.fixture
def maven_type() -> ToolDescriptor:
    return ToolDescriptor("Maven")


@pytest.fixture
def types(jdk_type: ToolDescriptor, maven_type: ToolDescriptor) -> FakeTypeRegistry:
    """Return a registry knowing the JDK and Maven tool types."""
    return FakeTypeRegistry(jdk_type, maven_type)


@pytest.fixture
def jdk8(jdk_type: ToolDescriptor) -> ToolInstallation:
    return ToolInstallation(name="jdk8", descriptor=jdk_type, home="/usr/lib/jvm/jdk8")


@pytest.fixture
def jdk11(jdk_type: ToolDescriptor) -> ToolInstallation:
    return ToolInstallation(name="jdk11", descriptor=jdk_type, home="/usr/lib/jvm/jdk11")


@pytest.fixture
def nodes() -> NodeRegistry:
    """Return a node registry with two agents and the controller."""
    return NodeRegistry(
        [
            Node("agent-1"),
            Node("agent-2"),
            Node("controller", kind=NodeKind.CONTROLLER),
        ],
    )
