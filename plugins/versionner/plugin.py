"""
Versionner - BotPlugin Implementation

Answers `version` with the bot's name and version.
"""

from typing import Optional

from core.config import PluginConfig
from core.models import Action, Answer, BotPlugin, PluginInfo, UserInfoFinder


class VersionnerPlugin(BotPlugin):

    def __init__(self, bot_name: str, bot_version: str):
        super().__init__()
        self.bot_name = bot_name
        self.bot_version = bot_version

        self.add_command(Action(
            matcher=lambda m: m.normalized_text.strip().lower() == "version",
            answerer=lambda m: Answer(text=f"I'm `{self.bot_name}`, version `{self.bot_version}`"),
            usage="version",
            description="Reply with the current version",
        ))

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="versionner",
            display_name="Versionner",
            description="Reports the bot version",
        )


def get_plugin(
    config: PluginConfig,
    user_info_finder: Optional[UserInfoFinder] = None
) -> BotPlugin:
    """Factory function called by plugin loader."""
    return VersionnerPlugin(config.bot_name, config.bot_version)
