# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Type-safe configuration with YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__spacehelmet_config_prefix__"

_ENV_PREFIX = "SPACEHELMET_"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Works with both dataclasses and Pydantic BaseModel subclasses.
    Pydantic models are bound with ``model_validate()`` so invalid values
    fail fast at startup.

    Usage:
        @config_properties(prefix="spacehelmet.server")
        @dataclass
        class ServerProperties:
            ssl_certfile: str | None = None
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (SPACEHELMET_SECTION_KEY format)
    2. Profile overlays (spacehelmet-{profile}.yaml next to the main file)
    3. Configuration dict / YAML / TOML file values
    4. Built-in defaults (spacehelmet-defaults.yaml)
    """

    def __init__(self, data: dict[str, Any] | None = None, active_profiles: list[str] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []
        self._active_profiles = list(active_profiles) if active_profiles else None

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    @property
    def active_profiles(self) -> list[str]:
        """Explicitly requested profiles, else ``spacehelmet.profiles.active``."""
        if self._active_profiles is not None:
            return list(self._active_profiles)
        configured = self.get("spacehelmet.profiles.active", "")
        if isinstance(configured, list):
            return [str(p).strip() for p in configured if str(p).strip()]
        return [p.strip() for p in str(configured or "").split(",") if p.strip()]

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def defaults(cls, active_profiles: list[str] | None = None) -> Config:
        """Configuration holding only the built-in defaults."""
        instance = cls(cls._load_builtin_defaults(), active_profiles=active_profiles)
        instance._loaded_sources = ["spacehelmet-defaults.yaml (built-in defaults)"]
        return instance

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load configuration from a YAML or TOML file.

        Profile overlays named ``{stem}-{profile}{suffix}`` next to *path* are
        merged on top, in the order the profiles are given.
        """
        path = Path(path)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_builtin_defaults()
            sources.append("spacehelmet-defaults.yaml (built-in defaults)")

        if path.exists():
            data = cls._deep_merge(data, cls._load_config_data(path))
            sources.append(str(path))

            for profile in active_profiles or []:
                profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
                if profile_path.exists():
                    data = cls._deep_merge(data, cls._load_config_data(profile_path))
                    sources.append(f"{profile_path} (profile: {profile})")

        instance = cls(data, active_profiles=active_profiles)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_builtin_defaults() -> dict[str, Any]:
        """Load built-in defaults from spacehelmet.resources."""
        defaults_file = importlib.resources.files("spacehelmet.resources").joinpath("spacehelmet-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}``: resolved from environment variables
        - ``${config.key}``: resolved from other config values
        - ``${key:default}``: uses default if key/env not found
        """
        env_val = os.environ.get(self._env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    @staticmethod
    def _env_key(key: str) -> str:
        # spacehelmet.headers.hsts.max_age -> SPACEHELMET_HEADERS_HSTS_MAX_AGE
        return _ENV_PREFIX + key.removeprefix("spacehelmet.").upper().replace(".", "_").replace("-", "_")

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        """Resolve ``${...}`` placeholders, following nested references up to 10 deep."""
        if _depth > 10:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            ref_key, _, default_val = match.group(1).partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            referenced = self._lookup(ref_key)
            if referenced is not None:
                resolved = str(referenced)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if ":" in match.group(1):
                return default_val

            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all raw values under a prefix as a nested dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass or Pydantic model.

        Every field, including those of nested models, is read through
        :meth:`get`, so env var overrides and placeholders apply at any depth.
        Pydantic models validate the collected values; dataclass fields are
        coerced from strings for ``int``, ``float`` and ``bool``.

        Raises:
            ValueError: If the class is not decorated or validation fails.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        try:
            values = self._collect(prefix, config_cls)
            if issubclass(config_cls, BaseModel):
                return cast(T, config_cls.model_validate(values))
            return config_cls(**values)
        except (ValidationError, ValueError) as exc:
            raise ValueError(
                f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
            ) from exc

    def _collect(self, prefix: str, config_cls: type) -> dict[str, Any]:
        is_model = issubclass(config_cls, BaseModel)
        values: dict[str, Any] = {}
        for name, annotation in _field_types(config_cls).items():
            key = f"{prefix}.{name}"
            if is_model and isinstance(annotation, type) and issubclass(annotation, BaseModel):
                values[name] = self._collect(key, annotation)
                continue
            value = self.get(key)
            if value is None:
                continue
            values[name] = value if is_model else _coerce(value, annotation)
        return values


def _field_types(config_cls: type) -> dict[str, Any]:
    if issubclass(config_cls, BaseModel):
        return {name: info.annotation for name, info in config_cls.model_fields.items()}
    hints = get_type_hints(config_cls)
    return {f.name: hints.get(f.name) for f in dataclasses.fields(config_cls) if f.init}  # type: ignore[arg-type]


def _coerce(value: Any, expected_type: Any) -> Any:
    """Convert env var strings for scalar dataclass fields; Pydantic models coerce themselves."""
    if not isinstance(value, str):
        return value
    if expected_type is bool:
        return value.lower() in ("true", "1", "yes")
    if expected_type in (int, float):
        return expected_type(value)
    return value
