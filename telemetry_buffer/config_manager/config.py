"""Resolve buffering configuration from a YAML file, environment, and overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from telemetry_buffer.config_manager.buffering_config import DiskBufferingConfig
from telemetry_buffer.config_manager.helpers import get_config_path, parse_bytes
from telemetry_buffer.const import CONFIG_ENCODING

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "enabled": "TB_ENABLED",
    "max_cache_size": "TB_MAX_CACHE_SIZE",
    "max_cache_file_size": "TB_MAX_CACHE_FILE_SIZE",
    "debug_enabled": "TB_DEBUG_ENABLED",
}

_BYTE_FIELDS = {"max_cache_size", "max_cache_file_size"}

YES_CONFIRMATION = {"1", "true", "yes", "y"}


class ConfigLoadError(Exception):
    """Raised when the buffering configuration cannot be loaded or validated."""


class ConfigManager:
    """Build effective buffering configuration from file, env, and overrides."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialise ConfigManager.

        Args:
            config_path: YAML file holding the base configuration. Defaults to
                the location returned by ``get_config_path``.
        """
        self.config_path = config_path or get_config_path()

    def _read_config_file(self) -> dict[str, Any]:
        """Read the base configuration mapping from the YAML file.

        Returns:
            Raw field values, or an empty dict when the file does not exist.

        Raises:
            ConfigLoadError: If the file is not valid YAML or not a mapping.
        """
        try:
            with self.config_path.open("r", encoding=CONFIG_ENCODING) as config_file:
                config_data = yaml.safe_load(config_file) or {}
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as exc:
            raise ConfigLoadError(
                f"Invalid YAML in {str(self.config_path)!r}: {exc}"
            ) from exc

        if not isinstance(config_data, dict):
            raise ConfigLoadError(
                f"Expected a mapping in {str(self.config_path)!r}, "
                f"got {type(config_data).__name__}"
            )

        for field_name in _BYTE_FIELDS:
            raw_value = config_data.get(field_name)
            if raw_value is not None:
                try:
                    config_data[field_name] = parse_bytes(raw_value)
                except ValueError as exc:
                    raise ConfigLoadError(str(exc)) from exc

        return config_data

    def _read_env_overrides(self) -> dict[str, Any]:
        """Read configuration overrides from environment variables.

        Returns:
            A dictionary of configuration field names to override values.
        """
        overrides: dict[str, Any] = {}

        for field_name, env_var_name in _ENV_MAP.items():
            env_value = os.getenv(env_var_name)
            if env_value is None:
                continue

            if field_name in _BYTE_FIELDS:
                try:
                    overrides[field_name] = parse_bytes(env_value)
                except ValueError:
                    logger.warning(
                        "Ignoring invalid %s value %r", env_var_name, env_value
                    )
                    continue
            else:
                overrides[field_name] = env_value.lower() in YES_CONFIRMATION

        return overrides

    def resolve_effective_config(
        self, overrides: dict[str, Any] | None = None
    ) -> DiskBufferingConfig:
        """Resolve the effective buffering configuration.

        Args:
            overrides: Optional explicit overrides applied last.

        Returns:
            The resolved ``DiskBufferingConfig``.

        Raises:
            ConfigLoadError: If the file is invalid or the merged values fail
                validation.
        """
        merged = self._read_config_file()
        merged.update(self._read_env_overrides())
        if overrides is not None:
            merged.update(overrides)

        try:
            return DiskBufferingConfig(**merged)
        except ValidationError as exc:
            raise ConfigLoadError(
                f"Invalid buffering configuration: {exc}"
            ) from exc

    def save_config(self, updates: dict[str, Any]) -> DiskBufferingConfig:
        """Persist updated field values to the YAML file.

        Args:
            updates: Mapping of field names to new values. Fields with a value of
                ``None`` are ignored and do not overwrite existing values.

        Returns:
            The configuration as written to disk.
        """
        merged = self._read_config_file()
        merged.update(
            {name: value for name, value in updates.items() if value is not None}
        )
        try:
            new_config = DiskBufferingConfig(**merged)
        except ValidationError as exc:
            raise ConfigLoadError(
                f"Invalid buffering configuration: {exc}"
            ) from exc

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding=CONFIG_ENCODING) as config_file:
            yaml.safe_dump(new_config.model_dump(), config_file)

        logger.info("Saved buffering configuration to %s", self.config_path)
        return new_config


class BufferingConfigProvider:
    """Live view of the buffering limits, re-resolved on every read.

    Never raises: when the configuration cannot be loaded, the last config
    resolved successfully is used, or the defaults if there is none.
    """

    def __init__(self, config_manager: ConfigManager) -> None:
        """Initialise BufferingConfigProvider.

        Args:
            config_manager: Manager used to resolve the effective config.
        """
        self.config_manager = config_manager
        self._last_good_config = DiskBufferingConfig()

    def _resolve(self) -> DiskBufferingConfig:
        try:
            self._last_good_config = self.config_manager.resolve_effective_config()
        except ConfigLoadError as exc:
            logger.warning("Using last known buffering configuration: %s", exc)
        return self._last_good_config

    @property
    def max_cache_size(self) -> int:
        """Desired maximum bytes shared by all signal folders."""
        return self._resolve().max_cache_size

    @property
    def max_cache_file_size(self) -> int:
        """Maximum bytes of a single buffered file."""
        return self._resolve().max_cache_file_size
