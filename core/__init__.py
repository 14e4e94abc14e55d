"""
Core module for the prime-sentinel Slack bot.

Contains shared infrastructure for configuration, routing and plugin loading.
"""

from .models import (
    Action,
    Answer,
    AnswerOptions,
    BotPlugin,
    IncomingMessage,
    PluginInfo,
    UserInfo,
    UserInfoFinder,
)
from .errors import ConfigurationError, TransientLookupError, attempt
from .config import BotConfig, PluginConfig
from .dispatcher import Dispatcher
from .plugin_loader import PluginLoader

__all__ = [
    'Action',
    'Answer',
    'AnswerOptions',
    'BotPlugin',
    'IncomingMessage',
    'PluginInfo',
    'UserInfo',
    'UserInfoFinder',
    'ConfigurationError',
    'TransientLookupError',
    'attempt',
    'BotConfig',
    'PluginConfig',
    'Dispatcher',
    'PluginLoader',
]
