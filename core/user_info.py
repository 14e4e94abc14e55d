"""
Slack-backed user lookup.
"""

import time
import logging
import threading

from slack_sdk.errors import SlackApiError

from .errors import TransientLookupError
from .models import UserInfo, UserInfoFinder

logger = logging.getLogger(__name__)

# Seconds before a failed lookup is retried
FAILURE_TTL = 300.0


class SlackUserInfoFinder(UserInfoFinder):
    """
    Looks users up with users.info and caches the result in memory.

    Failed lookups are cached too, for FAILURE_TTL seconds, so a user that
    cannot be resolved (e.g. a Slack Connect member) costs one API call per
    TTL instead of one per action per message.
    """

    def __init__(self, client, failure_ttl: float = FAILURE_TTL, clock=time.monotonic):
        self.client = client
        self.failure_ttl = failure_ttl
        self.clock = clock
        self._cache: dict[str, UserInfo] = {}
        self._failures: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get_user_info(self, user_id: str) -> UserInfo:
        with self._lock:
            cached = self._cache.get(user_id)
            failure = self._failures.get(user_id)
        if cached is not None:
            return cached
        if failure is not None and self.clock() - failure[0] < self.failure_ttl:
            raise TransientLookupError(failure[1])

        try:
            response = self.client.users_info(user=user_id)
        except SlackApiError as e:
            reason = f"users.info failed for user [{user_id}]: {e.response.get('error')}"
            with self._lock:
                self._failures[user_id] = (self.clock(), reason)
            raise TransientLookupError(reason) from e

        user = response.get("user") or {}
        info = UserInfo(
            user_id=user_id,
            is_bot=bool(user.get("is_bot", False)),
            name=user.get("name"),
        )

        with self._lock:
            self._cache[user_id] = info
            self._failures.pop(user_id, None)
        logger.debug(f"Cached user info for {user_id} (bot={info.is_bot})")
        return info
