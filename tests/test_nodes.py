# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for :mod:`toolhome.nodes`."""

from __future__ import annotations

import threading

import pytest

from toolhome.errors import ConfigurationError, UnknownNodeError
from toolhome.models import Node
from toolhome.overrides import NodeToolOverrides, resolve_home


def test_attach_replaces_wholesale(nodes) -> None:
    node = nodes.get("agent-1")
    first = NodeToolOverrides.from_pairs([("JDK@jdk8", "/a"), ("JDK@jdk11", "/b")])
    second = NodeToolOverrides.from_pairs([("JDK@jdk11", "/c")])

    nodes.attach(node, first)
    nodes.attach(node, second)

    assert nodes.get_overrides_for(node) is second


def test_controller_rejects_overrides(nodes) -> None:
    with pytest.raises(ConfigurationError):
        nodes.attach(nodes.get("controller"), NodeToolOverrides(()))
    assert nodes.get_overrides_for(nodes.get("controller")) is None


def test_unknown_node(nodes) -> None:
    with pytest.raises(UnknownNodeError) as excinfo:
        nodes.get("agent-9")
    assert str(excinfo.value) == "unknown node 'agent-9'"
    with pytest.raises(UnknownNodeError):
        nodes.attach(Node("agent-9"), NodeToolOverrides(()))


def test_detach_and_remove(nodes, types, jdk8) -> None:
    node = nodes.get("agent-1")
    overrides = NodeToolOverrides.from_pairs([("JDK@jdk8", "/opt/jdk8")])
    nodes.attach(node, overrides)

    assert nodes.detach(node) is overrides
    assert resolve_home(node, jdk8, nodes=nodes, resolver=types) == jdk8.home

    nodes.attach(node, overrides)
    nodes.remove(node)

    assert "agent-1" not in nodes
    assert nodes.get_overrides_for(node) is None


def test_readers_see_complete_sets(nodes, types, jdk8, jdk11) -> None:
    node = nodes.get("agent-1")
    old = NodeToolOverrides.from_pairs([("JDK@jdk8", "/old/8"), ("JDK@jdk11", "/old/11")])
    new = NodeToolOverrides.from_pairs([("JDK@jdk8", "/new/8"), ("JDK@jdk11", "/new/11")])
    nodes.attach(node, old)
    observed: list[tuple[str, str]] = []
    stop = threading.Event()

    def reader() -> None:
        while not stop.is_set():
            snapshot = nodes.get_overrides_for(node)
            if snapshot is not None:
                observed.append((snapshot.home_for(jdk8, types), snapshot.home_for(jdk11, types)))

    thread = threading.Thread(target=reader)
    thread.start()
    for _ in range(200):
        nodes.attach(node, new)
        nodes.attach(node, old)
    stop.set()
    thread.join()

    assert set(observed) <= {("/old/8", "/old/11"), ("/new/8", "/new/11")}
