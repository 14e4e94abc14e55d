"""
School Code Lookup - BotPlugin Implementation

Finds school names by 4-digit school code, or school codes by name.
"""

import logging
from typing import Optional

from core.config import PluginConfig
from core.models import (
    Action,
    Answer,
    AnswerOptions,
    BotPlugin,
    IncomingMessage,
    PluginInfo,
    UserInfoFinder,
)
from .tools.lookup import DATA_FILE, SchoolCodeLookup, load_school_table

logger = logging.getLogger(__name__)

SCHOOLCODE_PLUGIN_NAME = "schoolcode"


class SchoolcodePlugin(BotPlugin):
    """School code lookup commands."""

    def __init__(self, lookup: SchoolCodeLookup, threaded_replies: bool = False):
        super().__init__()
        self.lookup = lookup
        # Replies go in a thread when enabled, except in DMs
        self.answer_options = AnswerOptions(in_thread=threaded_replies)

        self.add_command(Action(
            matcher=lambda m: self.lookup.matches_code(m.normalized_text),
            answerer=self.schoolcode_answerer,
            usage="find school 1234",
            description="Find school name for school code 1234",
        ))
        self.add_command(Action(
            matcher=lambda m: self.lookup.matches_string(m.normalized_text),
            answerer=self.schoolstring_answerer,
            usage="find school <string>",
            description="Find school name containing <string> or with exact initials <string>",
        ))

    @classmethod
    def from_config(cls, config: PluginConfig) -> "SchoolcodePlugin":
        schools_file = config.get_path("SchoolsFile")
        table = load_school_table(schools_file or DATA_FILE)
        threaded = config.get_bool("ThreadedReplies", False)
        logger.info(f"[{SCHOOLCODE_PLUGIN_NAME}] Threaded replies: {threaded}")
        return cls(SchoolCodeLookup(table), threaded_replies=threaded)

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name=SCHOOLCODE_PLUGIN_NAME,
            display_name="School Code Lookup",
            description="Look up schools by code, name or initials",
            version="1.0.0"
        )

    def schoolcode_answerer(self, m: IncomingMessage) -> Answer:
        return Answer(
            text=self.lookup.answer_code(m.normalized_text),
            options=self.answer_options,
        )

    def schoolstring_answerer(self, m: IncomingMessage) -> Answer:
        return Answer(
            text=self.lookup.answer_string(m.normalized_text),
            options=self.answer_options,
        )


def get_plugin(
    config: PluginConfig,
    user_info_finder: Optional[UserInfoFinder] = None
) -> BotPlugin:
    """Factory function called by plugin loader."""
    return SchoolcodePlugin.from_config(config)
