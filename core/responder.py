"""
Posts answers back to Slack and keeps them in sync with message edits.

Slack keeps the original `ts` when a message is edited, so an edited message
is re-dispatched and its earlier reply is updated, deleted or posted as
needed.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from slack_sdk.errors import SlackApiError

from .models import Answer, IncomingMessage

logger = logging.getLogger(__name__)

MAX_TRACKED_MESSAGES = 500


class Responder:
    """Sends answers with a Slack WebClient and remembers what was sent."""

    def __init__(self, client, max_tracked: int = MAX_TRACKED_MESSAGES):
        self.client = client
        self.max_tracked = max_tracked
        self._replies: OrderedDict[tuple[str, str], list[str]] = OrderedDict()
        self._lock = threading.Lock()

    def send(self, message: IncomingMessage, answers: list[Answer]) -> None:
        """Post answers for a new message."""
        reply_timestamps = []
        for answer in answers:
            ts = self._post(message, answer)
            if ts:
                reply_timestamps.append(ts)

        if reply_timestamps:
            self._remember(message, reply_timestamps)

    def update(self, message: IncomingMessage, answers: list[Answer]) -> None:
        """Reconcile earlier replies with the answers for an edited message."""
        key = (message.channel, message.timestamp)
        with self._lock:
            previous = self._replies.pop(key, [])

        if not previous:
            self.send(message, answers)
            return

        kept = []
        for i, reply_ts in enumerate(previous):
            if i < len(answers):
                if self._update(message.channel, reply_ts, answers[i]):
                    kept.append(reply_ts)
            else:
                self._delete(message.channel, reply_ts)

        for answer in answers[len(previous):]:
            ts = self._post(message, answer)
            if ts:
                kept.append(ts)

        if kept:
            self._remember(message, kept)

    def thread_for(self, message: IncomingMessage, answer: Answer) -> Optional[str]:
        """Thread to reply in, or None to reply in the channel."""
        if message.thread_timestamp:
            return message.thread_timestamp
        if answer.options.in_thread and not message.is_direct:
            return message.timestamp
        return None

    def _remember(self, message: IncomingMessage, reply_timestamps: list[str]) -> None:
        with self._lock:
            self._replies[(message.channel, message.timestamp)] = reply_timestamps
            while len(self._replies) > self.max_tracked:
                self._replies.popitem(last=False)

    def _post(self, message: IncomingMessage, answer: Answer) -> Optional[str]:
        try:
            response = self.client.chat_postMessage(
                channel=message.channel,
                text=answer.text,
                thread_ts=self.thread_for(message, answer),
            )
        except SlackApiError as e:
            logger.error(f"Failed to post answer in {message.channel}: {e.response.get('error')}")
            return None
        return response.get("ts")

    def _update(self, channel: str, reply_ts: str, answer: Answer) -> bool:
        try:
            self.client.chat_update(channel=channel, ts=reply_ts, text=answer.text)
        except SlackApiError as e:
            logger.error(f"Failed to update reply {reply_ts} in {channel}: {e.response.get('error')}")
            return False
        return True

    def _delete(self, channel: str, reply_ts: str) -> None:
        try:
            self.client.chat_delete(channel=channel, ts=reply_ts)
        except SlackApiError as e:
            logger.error(f"Failed to delete reply {reply_ts} in {channel}: {e.response.get('error')}")
