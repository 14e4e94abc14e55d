"""
Deterministic response selection.

Selections are stable across restarts and platforms, but do not match the
quotes the Go bot picked for the same timestamps (see seeded_random).
"""

import random
from typing import Sequence

from core.errors import attempt
from .triggers import seeded_random


def select(responses: Sequence[str], timestamp: str) -> str:
    """
    Pick a response using a generator seeded from the message timestamp.

    The same timestamp and responses always give the same response, so an
    edited message keeps its quote. A malformed timestamp falls back to
    seed 0. responses must not be empty.
    """
    rng = attempt(
        seeded_random, None,
        f"Bad timestamp {timestamp!r}, using seed 0",
        timestamp,
        errors=(ValueError, TypeError, OverflowError),
    )
    if rng is None:
        rng = random.Random(0)

    return responses[rng.randrange(len(responses))]
