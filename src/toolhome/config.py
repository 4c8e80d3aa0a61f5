# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Controller configuration describing tool types, installations and nodes."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .location import decode_key
from .models import KEY_SEPARATOR, NodeKind

DEFAULT_CONFIG_FILENAME: Final[str] = "toolhome.toml"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ToolTypeConfig(BaseModel):
    """Declaration of a tool type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    display_name: str = ""


class InstallationConfig(BaseModel):
    """Declaration of a tool installation and its default home."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    name: str
    home: str


class LocationConfig(BaseModel):
    """Node specific home for the installation named by ``key``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str
    home: str

    @field_validator("key")
    @classmethod
    def _require_separator(cls, value: str) -> str:
        decode_key(value)
        return value


class NodeConfig(BaseModel):
    """Declaration of a build node and its inline tool locations."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: NodeKind = NodeKind.AGENT
    labels: tuple[str, ...] = Field(default_factory=tuple)
    tool_locations: tuple[LocationConfig, ...] = Field(default_factory=tuple)


class ControllerConfig(BaseModel):
    """Top-level controller configuration document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    store: Path | None = None
    tool_types: dict[str, ToolTypeConfig] = Field(default_factory=dict)
    installations: tuple[InstallationConfig, ...] = Field(default_factory=tuple)
    nodes: dict[str, NodeConfig] = Field(default_factory=dict)

    @field_validator("tool_types")
    @classmethod
    def _validate_type_ids(cls, value: dict[str, ToolTypeConfig]) -> dict[str, ToolTypeConfig]:
        for identifier in value:
            if not identifier or KEY_SEPARATOR in identifier:
                raise ValueError(f"tool type identifier {identifier!r} must be non-empty and free of {KEY_SEPARATOR!r}")
        return value

    @model_validator(mode="after")
    def _validate_installations(self) -> ControllerConfig:
        seen: set[tuple[str, str]] = set()
        for installation in self.installations:
            if installation.type not in self.tool_types:
                raise ValueError(
                    f"installation {installation.name!r} references undeclared tool type {installation.type!r}",
                )
            identity = (installation.type, installation.name)
            if identity in seen:
                raise ValueError(f"duplicate installation {installation.type}{KEY_SEPARATOR}{installation.name}")
            seen.add(identity)
        return self

    def resolve_store(self, base_dir: Path) -> Path | None:
        """Return the override store path anchored at ``base_dir``."""

        if self.store is None:
            return None
        return self.store if self.store.is_absolute() else base_dir / self.store


def load_config(path: Path, *, env: Mapping[str, str] | None = None) -> ControllerConfig:
    """Parse and validate the controller configuration at ``path``.

    Args:
        path: TOML document to load.
        env: Environment used for ``$VAR`` expansion; defaults to ``os.environ``.

    Returns:
        ControllerConfig: Validated configuration.

    Raises:
        ConfigError: If the file is missing or unreadable, is not TOML, or fails validation.
    """

    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"configuration file {path} does not exist") from exc
    except OSError as exc:
        raise ConfigError(f"configuration file {path} cannot be read: {exc}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"configuration file {path} is not valid TOML: {exc}") from exc
    expanded = _expand_env(data, os.environ if env is None else env)
    try:
        return ControllerConfig.model_validate(expanded)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration in {path}:\n{exc}") from exc


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "ControllerConfig",
    "InstallationConfig",
    "LocationConfig",
    "NodeConfig",
    "ToolTypeConfig",
    "load_config",
]
