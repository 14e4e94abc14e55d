"""
Data models and abstract base classes for the Slack bot plugins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class IncomingMessage:
    """A Slack message as seen by plugin actions."""
    text: str
    normalized_text: str
    user: str
    timestamp: str
    channel: str = ""
    thread_timestamp: Optional[str] = None
    is_direct: bool = False


@dataclass
class AnswerOptions:
    """Delivery options for an answer."""
    in_thread: bool = False


@dataclass
class Answer:
    """Text a plugin wants posted back to the conversation."""
    text: str
    options: AnswerOptions = field(default_factory=AnswerOptions)


@dataclass
class UserInfo:
    """Subset of a Slack user profile needed by plugins."""
    user_id: str
    is_bot: bool = False
    name: Optional[str] = None


Matcher = Callable[[IncomingMessage], bool]
Answerer = Callable[[IncomingMessage], Optional[Answer]]


@dataclass
class Action:
    """A matcher/answerer pair registered by a plugin."""
    matcher: Matcher
    answerer: Answerer
    usage: str = ""
    description: str = ""
    hidden: bool = False


@dataclass
class PluginInfo:
    """Metadata about a plugin."""
    name: str
    display_name: str
    description: str
    version: str = "1.0.0"


class UserInfoFinder(ABC):
    """Resolves Slack user IDs to user records."""

    @abstractmethod
    def get_user_info(self, user_id: str) -> UserInfo:
        """
        Look up a user.

        Raises:
            TransientLookupError: if the user could not be resolved
        """
        pass


class BotPlugin(ABC):
    """
    Abstract base class that all plugins must implement.

    A plugin registers two kinds of actions:
    - commands, run for messages addressed to the bot (mentions and DMs)
    - hear actions, run for ambient channel conversation
    """

    def __init__(self):
        self.commands: list[Action] = []
        self.hear_actions: list[Action] = []

    @abstractmethod
    def get_info(self) -> PluginInfo:
        """Return metadata about this plugin."""
        pass

    def add_command(self, action: Action) -> None:
        self.commands.append(action)

    def add_hear_action(self, action: Action) -> None:
        self.hear_actions.append(action)
