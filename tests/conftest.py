"""Shared fixtures for the bot tests."""

import pytest

from core.errors import TransientLookupError
from core.models import IncomingMessage, UserInfo, UserInfoFinder


class FakeUserInfoFinder(UserInfoFinder):
    """In-memory user directory; unknown users raise like a failed API call."""

    def __init__(self, bots: set[str] | None = None, known: set[str] | None = None):
        self.bots = bots or set()
        self.known = (known or set()) | self.bots
        self.calls: list[str] = []

    def get_user_info(self, user_id: str) -> UserInfo:
        self.calls.append(user_id)
        if user_id not in self.known:
            raise TransientLookupError(f"user_not_found: {user_id}")
        return UserInfo(user_id=user_id, is_bot=user_id in self.bots)


def make_message(
    text: str,
    user: str = "UHUMAN",
    timestamp: str = "1565046053.000200",
    **kwargs
) -> IncomingMessage:
    return IncomingMessage(
        text=text,
        normalized_text=text,
        user=user,
        timestamp=timestamp,
        channel=kwargs.pop("channel", "C123"),
        **kwargs
    )


@pytest.fixture
def user_finder() -> FakeUserInfoFinder:
    return FakeUserInfoFinder(bots={"UBOT"}, known={"UHUMAN"})


@pytest.fixture
def message():
    """Factory for IncomingMessage objects."""
    return make_message


@pytest.fixture
def failing_finder() -> FakeUserInfoFinder:
    """Finder that knows nobody, so every lookup fails."""
    return FakeUserInfoFinder()
