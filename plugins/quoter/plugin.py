"""
Quoter - BotPlugin Implementation

Replies with a configured quote when trigger phrases are heard. Each quote
config is registered twice: as a hidden hear action that answers with the
configured frequency, and as a command that always answers when the bot is
addressed directly (mentions and DMs are not routed to hear actions).
"""

import logging
from typing import Optional

from core.config import PluginConfig
from core.errors import ConfigurationError
from core.models import (
    Action,
    Answer,
    BotPlugin,
    IncomingMessage,
    PluginInfo,
    UserInfoFinder,
)
from .tools.models import QuoteConfig
from .tools.selector import select
from .tools.triggers import RegexCache, TriggerMatcher

logger = logging.getLogger(__name__)

QUOTER_PLUGIN_NAME = "quoter"


class QuoterPlugin(BotPlugin):
    """Probabilistic quote replies keyed on trigger phrases."""

    def __init__(
        self,
        quote_configs: list[QuoteConfig],
        user_info_finder: Optional[UserInfoFinder] = None
    ):
        super().__init__()
        self.quote_configs = quote_configs
        self.user_info_finder = user_info_finder
        self.regex_cache = RegexCache()

        for c in self.quote_configs:
            self.add_hear_action(Action(
                matcher=self.matcher(c.triggers, c.frequency),
                answerer=self.answerer(c.responses),
                hidden=True,
            ))
            self.add_command(Action(
                matcher=self.matcher(c.triggers, 1.0),
                answerer=self.answerer(c.responses),
                usage="|".join(c.triggers),
                description="Get a quotable quote",
            ))

    @classmethod
    def from_config(
        cls,
        config: PluginConfig,
        user_info_finder: Optional[UserInfoFinder] = None
    ) -> "QuoterPlugin":
        """
        Build the plugin from its config section.

        Raises:
            ConfigurationError: if any quote config is invalid
        """
        quote_configs = [
            QuoteConfig.from_dict(block) for block in config.get_list("quoteConfigs")
        ]
        if not quote_configs:
            logger.warning(f"[{QUOTER_PLUGIN_NAME}] No quote configs, nothing will be quoted")
        return cls(quote_configs, user_info_finder)

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name=QUOTER_PLUGIN_NAME,
            display_name="Quoter",
            description="Replies with quotable quotes when it hears trigger phrases",
            version="1.0.0"
        )

    def matcher(self, triggers: tuple[str, ...], frequency: float) -> TriggerMatcher:
        """Make a matcher that decides whether to send a quote."""
        return TriggerMatcher(triggers, frequency, self.regex_cache, self.user_info_finder)

    def answerer(self, responses: tuple[str, ...]):
        """Make an answerer that picks a quote."""
        if not responses:
            raise ConfigurationError(f"[{QUOTER_PLUGIN_NAME}] Cannot answer from empty responses")

        def answer(m: IncomingMessage) -> Answer:
            return Answer(text=select(responses, m.timestamp))

        return answer


def get_plugin(
    config: PluginConfig,
    user_info_finder: Optional[UserInfoFinder] = None
) -> BotPlugin:
    """Factory function called by plugin loader."""
    return QuoterPlugin.from_config(config, user_info_finder)
