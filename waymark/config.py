"""
Config system - Layered routing settings with validation.

Merge precedence (later overrides earlier):
defaults < config files (YAML/JSON) < .env file < environment variables < overrides
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, get_type_hints

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("waymark.config")


class _EnvValue(str):
    """Raw string read from the environment or a .env file, parsed on read."""


@dataclass
class RoutingSettings:
    """
    Scalar routing options.

    Attributes:
        append_trailing_slash: Outbound URLs end with a slash
        auto_generate_route_names: Name routes through the naming strategy
        constrain_translated_routes_by_current_ui_culture: Translated routes
            only match for their own culture
        default_subdomain: Subdomain used when none can be parsed
        inherit_actions_from_base_controller: Include actions declared on
            base controllers
        preserve_case_for_url_parameters: Do not lowercase parameter values
            in generated URLs
        use_lowercase_routes: Generate lowercase URLs
    """
    append_trailing_slash: bool = False
    auto_generate_route_names: bool = False
    constrain_translated_routes_by_current_ui_culture: bool = False
    default_subdomain: str = "www"
    inherit_actions_from_base_controller: bool = False
    preserve_case_for_url_parameters: bool = False
    use_lowercase_routes: bool = False


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Example:
        loader = ConfigLoader.load(paths=["routing.yaml"], env_file=".env")
        settings = loader.routing_settings()
    """

    def __init__(self, env_prefix: str = "WAYMARK_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list] = None,
        env_prefix: str = "WAYMARK_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from every source.

        Args:
            paths: Config file paths (``.yaml``, ``.yml`` or ``.json``)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for path in paths or []:
            loader._load_file(Path(path))

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_file(self, path: Path):
        """Load config from a JSON or YAML file."""
        if not path.exists():
            logger.debug(f"Config file {path} not found, skipping")
            return

        with open(path) as f:
            if path.suffix == ".json":
                data = json.load(f)
            elif path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ConfigInvalidFault(str(path), f"unsupported config file type '{path.suffix}'")

        if data:
            self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        if not Path(path).exists():
            logger.debug(f"Env file {path} not found, skipping")
            return

        for key, value in dotenv_values(path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_nested(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert WAYMARK_ROUTING__DEFAULT_SUBDOMAIN to a nested dict."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nesting levels
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = _EnvValue(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def _resolve(self, value: Any) -> Any:
        """Parse environment strings, recursing into sections."""
        if isinstance(value, _EnvValue):
            return self._parse_value(str(value))
        if isinstance(value, dict):
            return {key: self._resolve(item) for key, item in value.items()}
        return value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return self._resolve(current)

    def routing_settings(self) -> RoutingSettings:
        """
        Build RoutingSettings from the ``routing`` section, or from the
        root keys that name a setting when there is no such section.

        Environment values are parsed per field: string settings keep the
        raw text, so ``WAYMARK_ROUTING__DEFAULT_SUBDOMAIN=no`` stays "no".

        Raises:
            ConfigInvalidFault: If a value has the wrong type
        """
        field_names = {f.name for f in fields(RoutingSettings)}

        if "routing" in self.config_data:
            data = self.config_data["routing"]
            if not isinstance(data, dict):
                raise ConfigInvalidFault("routing", "expected a mapping")
            key_prefix = "routing."

            unknown = set(data) - field_names
            if unknown:
                logger.warning(f"Ignoring unknown routing settings: {', '.join(sorted(unknown))}")
        else:
            data = {k: v for k, v in self.config_data.items() if k in field_names}
            key_prefix = ""

        hints = get_type_hints(RoutingSettings)
        kwargs = {}

        for field_info in fields(RoutingSettings):
            name = field_info.name
            if name not in data:
                continue

            value = data[name]
            expected = hints[name]
            if isinstance(value, _EnvValue):
                value = str(value) if expected is str else self._parse_value(str(value))
            elif expected is str and isinstance(value, (int, float)) and not isinstance(value, bool):
                # YAML reads unquoted labels such as 2024 as numbers
                value = str(value)
            if not isinstance(value, expected):
                raise ConfigInvalidFault(
                    f"{key_prefix}{name}",
                    f"expected {expected.__name__}, got {type(value).__name__}",
                )
            kwargs[name] = value

        return RoutingSettings(**kwargs)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self._resolve(self.config_data)
