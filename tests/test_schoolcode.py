"""Tests for the school code lookup plugin."""

import json
from pathlib import Path

import pytest

from core.config import PluginConfig
from core.errors import ConfigurationError
from plugins.schoolcode.plugin import SchoolcodePlugin, get_plugin
from plugins.schoolcode.tools.lookup import (
    SchoolCodeLookup,
    get_initials,
    load_school_table,
)


@pytest.fixture
def lookup() -> SchoolCodeLookup:
    return SchoolCodeLookup({
        "1234": "Lincoln High",
        "3001": "ALPHA BETA CHARLIE",
        "2001": "NORTH VIEW SCHOOL",
        "2002": "NORTH HILL SCHOOL",
    })


def test_code_lookup_hit(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school 1234") == "`1234` Lincoln High"


def test_code_lookup_miss(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school 9999") == "No school found with school code 9999."


def test_code_lookup_uses_first_four_digits(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school 12345") == "`1234` Lincoln High"


def test_string_lookup_by_initials(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school abc") == "`3001` ALPHA BETA CHARLIE"


def test_string_lookup_by_substring_sorted_by_code(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school north") == (
        "`2001` NORTH VIEW SCHOOL\n`2002` NORTH HILL SCHOOL"
    )


def test_string_lookup_trims_and_uppercases(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school   hill school   ") == "`2002` NORTH HILL SCHOOL"


def test_string_lookup_miss(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school zebra") == "No schools found with string ZEBRA."


def test_string_lookup_initials_must_match_exactly(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("find school ab") == "No schools found with string AB."


def test_string_lookup_is_case_sensitive_after_uppercasing(lookup: SchoolCodeLookup) -> None:
    # Stored name is mixed case, the query is upper-cased
    assert lookup.answer("find school lincoln") == "No schools found with string LINCOLN."


def test_more_than_ten_results() -> None:
    table = {f"{1000 + i}": f"SCHOOL NUMBER {i}" for i in range(11)}
    assert SchoolCodeLookup(table).answer("find school number") == (
        "There are more than 10 results. Please try a more specific query."
    )


def test_exactly_ten_results_are_listed() -> None:
    table = {f"{1000 + i}": f"SCHOOL NUMBER {i}" for i in range(10)}
    lines = SchoolCodeLookup(table).answer("find school number").split("\n")
    assert len(lines) == 10
    assert lines[0] == "`1000` SCHOOL NUMBER 0"
    assert lines[-1] == "`1009` SCHOOL NUMBER 9"


@pytest.mark.parametrize("text,code,string", [
    ("find school 1234", True, False),
    ("find school abc", False, True),
    ("find school 12ab", False, False),
    ("find schools abc", False, False),
    ("please find school abc", False, False),
])
def test_command_shapes_are_disjoint(lookup: SchoolCodeLookup, text: str, code: bool, string: bool) -> None:
    assert lookup.matches_code(text) is code
    assert lookup.matches_string(text) is string


def test_answer_returns_none_for_other_text(lookup: SchoolCodeLookup) -> None:
    assert lookup.answer("hello") is None


def test_get_initials() -> None:
    assert get_initials("ALPHA BETA CHARLIE") == "ABC"
    assert get_initials("  SPACED   OUT  ") == "SO"
    assert get_initials("") == ""


def test_bundled_table_loads() -> None:
    table = load_school_table()
    assert table
    assert all(len(code) == 4 and code.isdigit() for code in table)


def test_load_school_table_rejects_bad_file(tmp_path: Path) -> None:
    bad = tmp_path / "schools.json"
    bad.write_text(json.dumps(["not", "a", "mapping"]))
    with pytest.raises(ConfigurationError):
        load_school_table(bad)
    with pytest.raises(ConfigurationError):
        load_school_table(tmp_path / "missing.json")


def test_plugin_commands(lookup: SchoolCodeLookup, message) -> None:
    plugin = SchoolcodePlugin(lookup)
    code_cmd, string_cmd = plugin.commands
    m = message("find school 1234")

    assert code_cmd.matcher(m)
    assert not string_cmd.matcher(m)
    answer = code_cmd.answerer(m)
    assert answer.text == "`1234` Lincoln High"
    assert not answer.options.in_thread
    assert plugin.hear_actions == []


def test_plugin_threaded_replies_from_config(tmp_path: Path, message) -> None:
    schools = tmp_path / "schools.json"
    schools.write_text(json.dumps({"1234": "Lincoln High"}))
    config = PluginConfig(
        name="schoolcode",
        values={"ThreadedReplies": True, "SchoolsFile": str(schools)},
    )

    plugin = get_plugin(config)
    answer = plugin.commands[1].answerer(message("find school lincoln high"))
    assert answer.options.in_thread
    assert answer.text == "No schools found with string LINCOLN HIGH."


def test_plugin_threaded_replies_env_override(monkeypatch) -> None:
    monkeypatch.setenv("SCHOOLCODE_THREADED_REPLIES", "false")
    plugin = get_plugin(PluginConfig(name="schoolcode", values={"threaded_replies": True}))
    assert not plugin.answer_options.in_thread


def test_relative_schools_file_resolves_against_bot_root(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = PluginConfig(
        name="schoolcode",
        values={"SchoolsFile": "plugins/schoolcode/data/schools.json"},
    )
    plugin = get_plugin(config)
    assert plugin.lookup.table == load_school_table()
