# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-node overrides of shared tool installation homes."""

from __future__ import annotations

from .errors import (
    ConfigError,
    ConfigurationError,
    KeyFormatError,
    StoreError,
    ToolHomeError,
    TypeResolutionError,
    UnknownInstallationError,
    UnknownNodeError,
)
from .location import (
    ResolvedToolLocation,
    ToolLocation,
    UnresolvedToolLocation,
    decode_key,
    encode_key,
    location_for,
    location_from_key,
)
from .models import Node, NodeKind, ToolDescriptor, ToolInstallation
from .nodes import NodeRegistry
from .overrides import (
    DISPLAY_NAME,
    NodeToolOverrides,
    OverrideEntry,
    for_node,
    is_applicable,
    key_for,
    list_overrides,
    resolve_home,
    tool_descriptors,
)
from .registry import ToolTypeRegistry

__all__ = [
    "DISPLAY_NAME",
    "ConfigError",
    "ConfigurationError",
    "KeyFormatError",
    "Node",
    "NodeKind",
    "NodeRegistry",
    "NodeToolOverrides",
    "OverrideEntry",
    "ResolvedToolLocation",
    "StoreError",
    "ToolDescriptor",
    "ToolHomeError",
    "ToolInstallation",
    "ToolLocation",
    "ToolTypeRegistry",
    "TypeResolutionError",
    "UnknownInstallationError",
    "UnknownNodeError",
    "UnresolvedToolLocation",
    "decode_key",
    "encode_key",
    "for_node",
    "is_applicable",
    "key_for",
    "list_overrides",
    "location_for",
    "location_from_key",
    "resolve_home",
    "tool_descriptors",
]
