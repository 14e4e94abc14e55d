"""
School code lookups.

Two command shapes are supported:
- "find school 1234": exact lookup by 4-digit school code
- "find school <string>": search by name substring or exact initials
"""

import re
import json
import logging
from pathlib import Path
from typing import Mapping, Optional

from core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).parent.parent / "data" / "schools.json"
MAX_RESULTS = 10

# School codes are always 4 digits
SCHOOLCODE_REGEX = re.compile(r"^find school ([0-9]{4})")

# Leading non-digit keeps this disjoint from the code lookup
SCHOOLSTRING_REGEX = re.compile(r"^find school ([^0-9].*)")


def load_school_table(path: Path = DATA_FILE) -> dict[str, str]:
    """
    Load a code -> name table from a JSON object.

    Raises:
        ConfigurationError: if the file is unreadable or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"[schoolcode] Unable to load school table [{path}]: {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError(f"[schoolcode] School table [{path}] must map codes to names")

    logger.info(f"Loaded {len(data)} schools from {path}")
    return data


def get_initials(name: str) -> str:
    """First character of each whitespace-separated word."""
    return "".join(word[0] for word in name.split())


def format_school(code: str, name: str) -> str:
    return f"`{code}` {name}"


class SchoolCodeLookup:
    """Answers school code queries against a read-only table."""

    def __init__(self, table: Mapping[str, str], max_results: int = MAX_RESULTS):
        self.table = dict(table)
        self.max_results = max_results

    def matches_code(self, text: str) -> bool:
        return SCHOOLCODE_REGEX.match(text) is not None

    def matches_string(self, text: str) -> bool:
        return SCHOOLSTRING_REGEX.match(text) is not None

    def answer(self, normalized_text: str) -> Optional[str]:
        """Answer either command shape, or None if the text is neither."""
        if self.matches_code(normalized_text):
            return self.answer_code(normalized_text)
        if self.matches_string(normalized_text):
            return self.answer_string(normalized_text)
        logger.warning(f"[schoolcode] Missing regexp match on message [{normalized_text}]")
        return None

    def answer_code(self, normalized_text: str) -> str:
        code = SCHOOLCODE_REGEX.match(normalized_text).group(1)

        name = self.table.get(code)
        if name is None:
            return f"No school found with school code {code}."
        return format_school(code, name)

    def answer_string(self, normalized_text: str) -> str:
        # The capture picks up trailing whitespace
        query = SCHOOLSTRING_REGEX.match(normalized_text).group(1).strip().upper()

        results = self.search(query)
        if not results:
            return f"No schools found with string {query}."
        if len(results) > self.max_results:
            return (
                f"There are more than {self.max_results} results. "
                "Please try a more specific query."
            )
        return "\n".join(format_school(code, name) for code, name in results)

    def search(self, query: str) -> list[tuple[str, str]]:
        """All (code, name) pairs whose name contains query or has initials equal to it, sorted by code."""
        results = []
        for code, name in self.table.items():
            if query in name or get_initials(name) == query:
                results.append((code, name))
        return sorted(results)
