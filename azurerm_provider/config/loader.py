"""
Configuration loader for the provider.

Sources, highest priority first:
    1. Overrides passed by the caller (CLI options)
    2. Environment variables
    3. YAML configuration file
    4. Model defaults

Environment variable names are derived from ``ProviderConfig`` itself:
``AZURERM_PROVIDER_<FIELD>`` for top-level fields and
``AZURERM_PROVIDER_<SECTION>__<FIELD>`` for nested ones, e.g.
``AZURERM_PROVIDER_TIMEOUTS__CREATE=45``. ``ARM_SUBSCRIPTION_ID`` and
``ARM_TENANT_ID`` are read as lower-priority aliases.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Type

import yaml
from pydantic import BaseModel, ValidationError

from .models import ProviderConfig

logger = logging.getLogger(__name__)

ConfigPath = Tuple[str, ...]


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


def _field_paths(
    model: Type[BaseModel], prefix: ConfigPath = ()
) -> Iterator[ConfigPath]:
    """Yield the path of every leaf field, descending into nested models."""
    for name, field in model.model_fields.items():
        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            yield from _field_paths(annotation, prefix + (name,))
        else:
            yield prefix + (name,)


def _assign(target: Dict[str, Any], path: ConfigPath, value: Any) -> None:
    """Set ``value`` at ``path``, replacing anything that is not a mapping on the way."""
    for part in path[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = target[part] = {}
        target = child
    target[path[-1]] = value


class ConfigLoader:
    """Builds a validated ``ProviderConfig`` from file, environment and overrides.

    Values are applied as raw strings where they come from the environment;
    pydantic coerces them ("45" -> 45, "false" -> False) during validation.
    """

    DEFAULT_CONFIG_FILE = Path.home() / ".config" / "azurerm-provider" / "config.yaml"
    ENV_PREFIX = "AZURERM_PROVIDER_"
    CONFIG_PATH_ENV = "AZURERM_PROVIDER_CONFIG_PATH"

    ARM_ALIASES: Dict[str, ConfigPath] = {
        "ARM_SUBSCRIPTION_ID": ("subscription_id",),
        "ARM_TENANT_ID": ("tenant_id",),
    }

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            env_path = os.environ.get(self.CONFIG_PATH_ENV)
            config_path = Path(env_path).expanduser() if env_path else self.DEFAULT_CONFIG_FILE
        self.config_path = config_path

    @classmethod
    def env_keys(cls) -> Dict[str, ConfigPath]:
        """Map every recognised environment variable to its config path.

        Aliases come first so the prefixed variables win when both are set.
        """
        keys = dict(cls.ARM_ALIASES)
        for path in _field_paths(ProviderConfig):
            keys[cls.ENV_PREFIX + "__".join(p.upper() for p in path)] = path
        return keys

    def load(self, overrides: Optional[Mapping[str, Any]] = None) -> ProviderConfig:
        """Load and validate configuration.

        Args:
            overrides: Dotted config paths to values, e.g. ``{"logging.level": "DEBUG"}``.
                ``None`` values are ignored.

        Raises:
            ConfigError: If the file cannot be read or the result is invalid
        """
        raw = self._read_file() if self.config_path.exists() else {}

        for env_key, path in self.env_keys().items():
            value = os.environ.get(env_key)
            if value:
                _assign(raw, path, value)

        for dotted, value in (overrides or {}).items():
            if value is not None:
                _assign(raw, tuple(dotted.split(".")), value)

        try:
            return ProviderConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Configuration validation failed: {e}") from e

    def _read_file(self) -> Dict[str, Any]:
        logger.debug(f"Reading configuration from {self.config_path}")
        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {self.config_path}")
        return data


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ProviderConfig:
    """Load configuration from the default sources plus ``overrides``."""
    return ConfigLoader(config_path).load(overrides)
