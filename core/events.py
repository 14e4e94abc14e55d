"""
Slack `message` event handling, independent of the Bolt app.
"""

import logging
from typing import Optional

from .dispatcher import Dispatcher
from .normalize import build_incoming_message, is_addressed_to
from .responder import Responder

logger = logging.getLogger(__name__)

HANDLED_SUBTYPES = (None, "message_changed", "thread_broadcast")


def process_event(
    event: dict,
    dispatcher: Dispatcher,
    responder: Responder,
    bot_user_id: Optional[str]
) -> None:
    """
    Dispatch a new or edited message and post, update or delete replies.

    Ignored: other subtypes (joins, bot_message, ...), edits that leave the
    text unchanged (unfurls), the bot's own messages and empty messages.
    """
    subtype = event.get("subtype")
    if subtype not in HANDLED_SUBTYPES:
        return

    if subtype == "message_changed":
        previous = event.get("previous_message", {})
        if previous.get("text") == event.get("message", {}).get("text"):
            # Unfurls and other attachment updates
            return

    message = build_incoming_message(event, bot_user_id)
    if not message.user or message.user == bot_user_id:
        return
    if not message.normalized_text:
        return

    addressed = message.is_direct or is_addressed_to(message.text, bot_user_id)
    answers = dispatcher.handle_message(message, addressed)

    if subtype == "message_changed":
        responder.update(message, answers)
    elif answers:
        responder.send(message, answers)
