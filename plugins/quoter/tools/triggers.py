"""
Trigger matching for the quoter plugin.

A message participates when it is not from a bot, contains one of the
triggers as a whole word (case-insensitive), and passes a frequency draw
seeded from the message timestamp. Slack keeps the timestamp of a message
when it is edited, so the draw gives the same result for every edit.
"""

import re
import random
import threading
from typing import Optional, Sequence

from core.errors import attempt
from core.models import IncomingMessage, UserInfo, UserInfoFinder

# Frequencies at or above this always respond
CERTAIN_FREQUENCY = 0.99


def timestamp_seed(timestamp: str) -> int:
    """
    Convert a Slack timestamp ("1565046053.000200") to an integer seed with
    microsecond resolution.

    Raises:
        ValueError: if the timestamp is not numeric
    """
    return int(float(timestamp) * 1000000)


def seeded_random(timestamp: str) -> random.Random:
    """
    Random generator seeded from a message timestamp.

    This is Python's Mersenne Twister, so for the same timestamp the draws
    differ from those of the Go bot's math/rand.
    """
    return random.Random(timestamp_seed(timestamp))


class RegexCache:
    """Compiled trigger patterns, compiled on first use and kept forever."""

    def __init__(self):
        self._patterns: dict[str, re.Pattern] = {}
        self._lock = threading.Lock()

    def get(self, trigger: str) -> re.Pattern:
        """
        Get the word-boundary, case-insensitive pattern for a trigger.

        Raises:
            re.error: if the pattern does not compile
        """
        with self._lock:
            pattern = self._patterns.get(trigger)
            if pattern is None:
                pattern = re.compile(r"(?i)\b%s\b" % re.escape(trigger))
                self._patterns[trigger] = pattern
            return pattern

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)

    def __contains__(self, trigger: str) -> bool:
        with self._lock:
            return trigger in self._patterns


class TriggerMatcher:
    """Decides whether a message should get a quote."""

    def __init__(
        self,
        triggers: Sequence[str],
        frequency: float,
        cache: RegexCache,
        user_info_finder: Optional[UserInfoFinder] = None
    ):
        self.triggers = tuple(triggers)
        self.frequency = frequency
        self.cache = cache
        self.user_info_finder = user_info_finder

    def __call__(self, message: IncomingMessage) -> bool:
        return self.matches(message)

    def matches(self, message: IncomingMessage) -> bool:
        # Ignore bot messages so the bot never quotes itself or its help output
        if self._is_bot(message.user):
            return False

        if not self._has_trigger(message.normalized_text):
            return False

        # Commands force the frequency to 1, no draw needed
        if self.frequency >= CERTAIN_FREQUENCY:
            return True

        rng = attempt(
            seeded_random, None,
            f"Skipping message {message.timestamp!r}, bad timestamp",
            message.timestamp,
            errors=(ValueError, TypeError, OverflowError),
        )
        if rng is None:
            return False

        return rng.random() < self.frequency

    def _is_bot(self, user_id: str) -> bool:
        if self.user_info_finder is None or not user_id:
            return False
        user = attempt(
            self.user_info_finder.get_user_info, None,
            f"Error getting user info for user [{user_id}]",
            user_id,
        )
        return isinstance(user, UserInfo) and user.is_bot

    def _has_trigger(self, text: str) -> bool:
        for trigger in self.triggers:
            pattern = attempt(
                self.cache.get, None,
                f"Error getting regexp for trigger [{trigger}]",
                trigger,
                errors=(re.error,),
            )
            if pattern is not None and pattern.search(text):
                return True
        return False
