"""YAML settings source merging base files with per-environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


CONFIG_DIR_ENV = "APP_CONFIG_DIR"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``override`` merged recursively into ``base``."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_dir(directory: Path) -> dict[str, Any]:
    """Load and deep-merge every ``*.yaml`` file of a directory in name order.

    A missing directory yields an empty mapping.
    """
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        merged = deep_merge(merged, data)
    return merged


def default_config_dir() -> Path:
    """Locate ``config/`` at the project root (``APP_CONFIG_DIR`` overrides)."""
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    # src/app/core/config/yaml_source.py -> project root
    return Path(__file__).resolve().parents[4] / "config"


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load ``config/base`` then overlay ``config/environments/{APP_ENV}``."""

    def __init__(
        self,
        settings_cls: type[Any],
        config_dir: Path | None = None,
        app_env: str | None = None,
    ) -> None:
        super().__init__(settings_cls)
        self._config_dir = config_dir or default_config_dir()
        self._app_env = app_env or os.getenv("APP_ENV", "development")
        base = load_yaml_dir(self._config_dir / "base")
        overrides = load_yaml_dir(self._config_dir / "environments" / self._app_env)
        self._yaml_data = deep_merge(base, overrides)

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
