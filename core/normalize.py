"""
Turns raw Slack message events into IncomingMessage objects.
"""

import re
from typing import Optional

from .models import IncomingMessage

_MENTION_PREFIX = r"^\s*<@{user_id}(?:\|[^>]*)?>:?\s*"


def is_addressed_to(text: str, bot_user_id: Optional[str]) -> bool:
    """Whether text starts with a mention of the bot."""
    if not bot_user_id:
        return False
    return re.match(_MENTION_PREFIX.format(user_id=re.escape(bot_user_id)), text) is not None


def normalize_text(text: str, bot_user_id: Optional[str]) -> str:
    """Strip a leading bot mention and surrounding whitespace."""
    if bot_user_id:
        text = re.sub(_MENTION_PREFIX.format(user_id=re.escape(bot_user_id)), "", text, count=1)
    return text.strip()


def build_incoming_message(event: dict, bot_user_id: Optional[str]) -> IncomingMessage:
    """
    Build an IncomingMessage from a Slack `message` event.

    For `message_changed` events the edited message is used, which keeps the
    original message timestamp.
    """
    if event.get("subtype") == "message_changed":
        source = event.get("message", {})
    else:
        source = event

    text = source.get("text", "") or ""
    return IncomingMessage(
        text=text,
        normalized_text=normalize_text(text, bot_user_id),
        user=source.get("user", ""),
        timestamp=source.get("ts", ""),
        channel=event.get("channel", ""),
        thread_timestamp=source.get("thread_ts"),
        is_direct=event.get("channel_type") == "im",
    )
