"""
Central message dispatcher for the Slack bot.

Handles:
- Routing messages addressed to the bot to plugin commands
- Routing ambient channel messages to plugin hear actions
- The built-in help command
- Error handling and logging around every plugin action
"""

import logging
from typing import Optional

from .config import BotConfig
from .models import Action, Answer, BotPlugin, IncomingMessage, UserInfoFinder
from .plugin_loader import PluginLoader

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND_TEXT = "I don't understand. Ask me for `help` to see what I can do."


class Dispatcher:
    """Central dispatcher that routes messages to plugin actions."""

    def __init__(
        self,
        config: BotConfig | None = None,
        user_info_finder: UserInfoFinder | None = None,
        plugins: dict[str, BotPlugin] | None = None
    ):
        self.config = config if config is not None else BotConfig()
        self.plugin_loader = PluginLoader(self.config, user_info_finder)
        self.plugins: dict[str, BotPlugin] = {}

        if plugins is not None:
            self.plugins = plugins
        else:
            self._load_plugins()

        self.help_command = Action(
            matcher=lambda m: m.normalized_text.lower() == "help",
            answerer=lambda m: Answer(text=self.help_text()),
            usage="help",
            description="List the commands I understand",
        )

    def _load_plugins(self) -> None:
        """Discover and load all plugin modules."""
        self.plugins = self.plugin_loader.load_all_plugins()
        logger.info(
            f"Loaded {len(self.plugins)} plugins: {list(self.plugins.keys())}"
        )

    def handle_message(self, message: IncomingMessage, addressed: bool) -> list[Answer]:
        """
        Compute the answers for an incoming message.

        Args:
            message: Normalized incoming message
            addressed: True for DMs and messages starting with a bot mention

        Returns:
            Answers to post, possibly empty
        """
        if addressed:
            return self._handle_command(message)
        return self._handle_ambient(message)

    def _handle_command(self, message: IncomingMessage) -> list[Answer]:
        answers = []

        answer = self._run_action("core", self.help_command, message)
        if answer:
            answers.append(answer)

        for name, plugin in self.plugins.items():
            for action in plugin.commands:
                answer = self._run_action(name, action, message)
                if answer:
                    answers.append(answer)

        if not answers:
            logger.info(f"No command matched message from {message.user}")
            answers.append(Answer(text=UNKNOWN_COMMAND_TEXT))

        return answers

    def _handle_ambient(self, message: IncomingMessage) -> list[Answer]:
        answers = []
        for name, plugin in self.plugins.items():
            for action in plugin.hear_actions:
                answer = self._run_action(name, action, message)
                if answer:
                    answers.append(answer)
        return answers

    def _run_action(
        self,
        plugin_name: str,
        action: Action,
        message: IncomingMessage
    ) -> Optional[Answer]:
        """Run one action; a raising matcher or answerer counts as no answer."""
        try:
            if not action.matcher(message):
                return None
            answer = action.answerer(message)
        except Exception:
            logger.exception(
                f"Error in plugin '{plugin_name}' handling message {message.timestamp}"
            )
            return None

        if answer is not None:
            logger.info(
                f"Plugin '{plugin_name}' answered message {message.timestamp} "
                f"in {message.channel or 'unknown channel'}"
            )
        return answer

    def help_text(self) -> str:
        """Build the help listing of visible commands."""
        lines = ["*Available commands:*\n"]
        lines.append(f"- `{self.help_command.usage}` - {self.help_command.description}")

        for plugin in self.plugins.values():
            visible = [a for a in plugin.commands if not a.hidden]
            if not visible:
                continue
            info = plugin.get_info()
            lines.append(f"\n*{info.display_name}*")
            for action in visible:
                lines.append(f"- `{action.usage}` - {action.description}")

        return "\n".join(lines)
