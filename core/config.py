"""
Bot configuration.

The bot config is a JSON file (see bots/) naming the bot, the plugins to
load and a config section per plugin. Plugin keys are looked up
case-insensitively with underscores ignored, so `ThreadedReplies` and
`threaded_replies` are the same key. Scalar plugin keys can be overridden
from the environment with `<PLUGIN>_<KEY>`, e.g. SCHOOLCODE_THREADED_REPLIES.
"""

import os
import re
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Relative paths in configuration resolve against the bot root, as main.py does
BOT_ROOT = Path(__file__).parent.parent

DEFAULT_NAME = "prime-sentinel"
DEFAULT_VERSION = "0.0.1"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


def _env_name(plugin_name: str, key: str) -> str:
    # quoteConfigs -> QUOTE_CONFIGS, ThreadedReplies -> THREADED_REPLIES
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key)
    return f"{plugin_name}_{snake}".replace("-", "_").upper()


@dataclass
class PluginConfig:
    """Config section for a single plugin, plus the bot identity."""
    name: str
    values: dict[str, Any] = field(default_factory=dict)
    bot_name: str = DEFAULT_NAME
    bot_version: str = DEFAULT_VERSION

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw value, honoring environment overrides for scalars."""
        env_value = os.getenv(_env_name(self.name, key))
        if env_value is not None:
            return env_value

        wanted = _normalize_key(key)
        for k, v in self.values.items():
            if _normalize_key(k) == wanted:
                return v
        return default

    def get_path(self, key: str) -> Optional[Path]:
        """Get a path value, relative paths resolved against the bot root."""
        value = self.get(key)
        if not value:
            return None
        return BOT_ROOT / Path(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES:
            return True
        if isinstance(value, str) and value.strip().lower() in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"[{self.name}] Expected a boolean for '{key}', got {value!r}"
        )

    def get_list(self, key: str) -> list:
        value = self.get(key, [])
        if value is None:
            return []
        if isinstance(value, str):
            # Lists coming from the environment are JSON encoded
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"[{self.name}] Invalid JSON for '{key}': {e}"
                ) from e
        if not isinstance(value, list):
            raise ConfigurationError(
                f"[{self.name}] Expected a list for '{key}', got {type(value).__name__}"
            )
        return value


@dataclass
class BotConfig:
    """Top-level bot configuration."""
    name: str = DEFAULT_NAME
    version: str = DEFAULT_VERSION
    env_file: Optional[str] = None
    plugins: Optional[list[str]] = None
    plugin_config: dict[str, dict] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "BotConfig":
        if not isinstance(data, dict):
            raise ConfigurationError("Bot config must be a JSON object")

        plugins = data.get("plugins")
        if plugins is not None and not (
            isinstance(plugins, list) and all(isinstance(p, str) for p in plugins)
        ):
            raise ConfigurationError("'plugins' must be a list of plugin names")

        plugin_config = data.get("plugin_config", {}) or {}
        if not isinstance(plugin_config, dict) or not all(
            isinstance(v, dict) for v in plugin_config.values()
        ):
            raise ConfigurationError("'plugin_config' must map plugin names to objects")

        return cls(
            name=data.get("name", DEFAULT_NAME),
            version=str(data.get("version", DEFAULT_VERSION)),
            env_file=data.get("env_file"),
            plugins=plugins,
            plugin_config=plugin_config,
        )

    @classmethod
    def from_file(cls, path: Path) -> "BotConfig":
        """
        Load a bot config from a JSON file.

        Raises:
            ConfigurationError: if the file is missing, unreadable or invalid
        """
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Error loading configuration file [{path}]: {e}") from e

        config = cls.from_dict(data)
        logger.info(f"Loaded bot config: {config.name} from {path}")
        return config

    def for_plugin(self, plugin_name: str) -> PluginConfig:
        """Build the PluginConfig handed to a plugin factory."""
        return PluginConfig(
            name=plugin_name,
            values=dict(self.plugin_config.get(plugin_name, {})),
            bot_name=self.name,
            bot_version=self.version,
        )
