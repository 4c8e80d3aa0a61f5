# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Behavioural tests for node tool overrides and home resolution."""

from __future__ import annotations

import logging

import pytest

from toolhome.errors import ConfigurationError
from toolhome.location import ResolvedToolLocation, UnresolvedToolLocation, location_for, location_from_key
from toolhome.models import Node, NodeKind, ToolInstallation
from toolhome.overrides import (
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
from toolhome.registry import ToolTypeRegistry


def test_missing_collection_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        NodeToolOverrides(None)


def test_override_wins_over_default(nodes, types, jdk8) -> None:
    node = nodes.get("agent-1")
    nodes.attach(node, NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")]))

    assert resolve_home(node, jdk8, nodes=nodes, resolver=types) == "/opt/jdk8"


def test_node_without_overrides_uses_default(nodes, types, jdk8) -> None:
    nodes.attach(nodes.get("agent-1"), NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")]))

    assert resolve_home(nodes.get("agent-2"), jdk8, nodes=nodes, resolver=types) == "/usr/lib/jvm/jdk8"


def test_other_installation_falls_back(nodes, types, jdk11) -> None:
    node = nodes.get("agent-1")
    nodes.attach(node, NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")]))

    assert resolve_home(node, jdk11, nodes=nodes, resolver=types) == "/usr/lib/jvm/jdk11"


def test_same_name_different_type_does_not_interfere(nodes, types, maven_type) -> None:
    node = nodes.get("agent-1")
    nodes.attach(node, NodeToolOverrides.from_pairs([("JDK@shared", "/opt/jdk")]))
    maven = ToolInstallation(name="shared", descriptor=maven_type, home="/usr/share/maven")

    assert resolve_home(node, maven, nodes=nodes, resolver=types) == "/usr/share/maven"


def test_first_matching_entry_wins(types, jdk8) -> None:
    overrides = NodeToolOverrides.from_pairs([("JDK@jdk8", "/first"), ("JDK@jdk8", "/second")])

    assert overrides.home_for(jdk8, types) == "/first"


def test_home_for_returns_none_without_match(types, jdk8) -> None:
    assert NodeToolOverrides(()).home_for(jdk8, types) is None


def test_stale_entry_is_skipped(types, jdk8, caplog: pytest.LogCaptureFixture) -> None:
    overrides = NodeToolOverrides.from_pairs([("Removed@jdk8", "/stale"), ("JDK@jdk8", "/opt/jdk8")])

    with caplog.at_level(logging.DEBUG, logger="toolhome.overrides"):
        assert overrides.home_for(jdk8, types) == "/opt/jdk8"
    assert "Removed@jdk8" in caplog.text


def test_stale_entry_never_matches(types, jdk8) -> None:
    overrides = NodeToolOverrides.from_pairs([("Removed@jdk8", "/stale")])

    assert overrides.home_for(jdk8, types) is None


def test_type_removed_after_configuration(types, jdk8) -> None:
    overrides = NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")])
    del types.types["JDK"]

    entries = list_overrides(overrides, types)

    assert entries == [
        OverrideEntry(key="JDK@jdk8", home="/opt/jdk8", display_name=None, stale=True, error="unknown tool type 'JDK'"),
    ]
    assert overrides.home_for(jdk8, types) is None


def test_list_overrides_preserves_order(types) -> None:
    overrides = NodeToolOverrides.from_pairs(
        [("Maven@mvn3", "/opt/mvn3"), ("Gone@x", "/opt/x"), ("JDK@jdk8", "/opt/jdk8")],
    )

    entries = list_overrides(overrides, types)

    assert [(entry.key, entry.home) for entry in entries] == overrides.pairs()
    assert [entry.display_name for entry in entries] == ["Maven", None, "Java Development Kit"]
    assert [entry.stale for entry in entries] == [False, True, False]


def test_locations_cannot_be_mutated_through_view() -> None:
    source = [location_from_key("JDK@jdk8", "/opt/jdk8")]
    overrides = NodeToolOverrides(source)

    view = overrides.locations
    source.append(location_from_key("JDK@jdk11", "/opt/jdk11"))

    assert isinstance(view, tuple)
    with pytest.raises(AttributeError):
        view.append(location_from_key("JDK@jdk17", "/opt/jdk17"))  # type: ignore[attr-defined]
    assert len(overrides) == 1


def test_resolved_keeps_stale_entries_in_place(types, jdk_type) -> None:
    overrides = NodeToolOverrides.from_pairs([("Gone@x", "/x"), ("JDK@jdk8", "/opt/jdk8")])

    resolved = overrides.resolved(types)

    first, second = resolved.locations
    assert isinstance(first, UnresolvedToolLocation)
    assert isinstance(second, ResolvedToolLocation)
    assert second.descriptor is jdk_type
    assert resolved == overrides
    assert resolved.stale_entries(types) == (first,)


def test_resolved_entries_go_stale_when_type_is_removed(types, jdk8) -> None:
    resolved = NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")]).resolved(types)
    assert resolved.home_for(jdk8, types) == "/opt/jdk8"

    del types.types["JDK"]

    assert resolved.home_for(jdk8, types) is None
    assert resolved.stale_entries(types) == resolved.locations
    (entry,) = list_overrides(resolved, types)
    assert entry.stale
    assert entry.error == "unknown tool type 'JDK'"


def test_varargs_constructor(jdk_type) -> None:
    location = location_for(jdk_type, "jdk8", "/opt/jdk8")

    overrides = NodeToolOverrides.of(location)

    assert overrides.locations == (location,)
    assert repr(overrides) == "NodeToolOverrides(locations=[JDK@jdk8])"


def test_for_node_translates_installation(nodes, types, jdk8) -> None:
    node = nodes.get("agent-1")
    nodes.attach(node, NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")]))

    translated = for_node(jdk8, node, nodes=nodes, resolver=types)

    assert translated.home == "/opt/jdk8"
    assert translated.key == jdk8.key
    assert for_node(jdk8, nodes.get("agent-2"), nodes=nodes, resolver=types) is jdk8


def test_key_for_installation(jdk8) -> None:
    assert key_for(jdk8) == "JDK@jdk8" == jdk8.key


@pytest.mark.parametrize(
    ("kind", "expected"),
    [(NodeKind.AGENT, True), (NodeKind.CONTROLLER, False), ("agent", True), ("controller", False)],
)
def test_controller_cannot_carry_overrides(kind, expected: bool) -> None:
    assert is_applicable(kind) is expected


def test_tool_descriptors_follow_registry_order(jdk_type, maven_type) -> None:
    registry = ToolTypeRegistry([maven_type, jdk_type])

    assert tool_descriptors(registry) == (maven_type, jdk_type)
    assert DISPLAY_NAME == "Tool Locations"


def test_resolution_is_deterministic(nodes, types, jdk8) -> None:
    node = Node("agent-1")
    nodes.attach(node, NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8"), ("JDK@jdk11", "/opt/jdk11")]))

    results = {resolve_home(node, jdk8, nodes=nodes, resolver=types) for _ in range(5)}

    assert results == {"/opt/jdk8"}
