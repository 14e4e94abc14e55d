"""
Plugin loader for dynamically loading plugin modules.
"""

import importlib
import logging
from pathlib import Path
from typing import Optional

from .config import BOT_ROOT, BotConfig
from .errors import ConfigurationError
from .models import BotPlugin, UserInfoFinder

logger = logging.getLogger(__name__)

PLUGINS_DIR = BOT_ROOT / "plugins"
PLUGINS_PACKAGE = "plugins"


class PluginLoader:
    """
    Discovers and loads BotPlugin implementations from subdirectories.

    Each plugin folder must contain:
    - plugin.py with a get_plugin(config, user_info_finder) factory
    """

    def __init__(
        self,
        config: BotConfig | None = None,
        user_info_finder: UserInfoFinder | None = None,
        root_dir: Path | None = None,
        package: str = PLUGINS_PACKAGE
    ):
        self.config = config if config is not None else BotConfig()
        self.user_info_finder = user_info_finder
        self.root_dir = root_dir if root_dir is not None else PLUGINS_DIR
        self.package = package
        self.allowed_plugins = self.config.plugins
        self.excluded_dirs = {'__pycache__', '.git', '.venv', '.tmp'}

    def discover_plugins(self) -> list[str]:
        """
        Find all directories that contain a plugin module.

        Returns:
            Sorted list of plugin directory names
        """
        plugins = []

        for item in self.root_dir.iterdir():
            if not item.is_dir():
                continue
            if item.name in self.excluded_dirs or item.name.startswith('.'):
                continue
            if self.allowed_plugins is not None and item.name not in self.allowed_plugins:
                continue

            if (item / "plugin.py").exists():
                plugins.append(item.name)
                logger.debug(f"Discovered plugin: {item.name}")

        return sorted(plugins)

    def load_plugin(self, name: str) -> Optional[BotPlugin]:
        """
        Load a single plugin by directory name.

        Import problems are logged and skipped. A ConfigurationError raised
        by the plugin factory propagates: a misconfigured plugin must stop
        the bot from starting.

        Args:
            name: Directory name of the plugin

        Returns:
            BotPlugin instance or None if loading fails
        """
        try:
            module = importlib.import_module(f"{self.package}.{name}.plugin")
        except ImportError:
            logger.exception(f"Failed to import plugin '{name}'")
            return None

        if not hasattr(module, 'get_plugin'):
            logger.error(f"No get_plugin() in {name}/plugin.py")
            return None

        plugin = module.get_plugin(self.config.for_plugin(name), self.user_info_finder)
        if not isinstance(plugin, BotPlugin):
            logger.error(f"get_plugin() in {name} did not return BotPlugin")
            return None

        return plugin

    def load_all_plugins(self) -> dict[str, BotPlugin]:
        """
        Load all discovered plugins.

        Returns:
            Dict mapping plugin names to BotPlugin instances

        Raises:
            ConfigurationError: if a plugin rejects its configuration
        """
        plugins = {}

        if self.allowed_plugins is not None:
            found = set(self.discover_plugins())
            missing = [p for p in self.allowed_plugins if p not in found]
            if missing:
                raise ConfigurationError(f"Unknown plugins in config: {', '.join(missing)}")

        for name in self.discover_plugins():
            plugin = self.load_plugin(name)
            if plugin:
                plugins[name] = plugin
                info = plugin.get_info()
                logger.info(f"Loaded plugin: {name} ({info.display_name})")

        return plugins
