"""Tests for bot and plugin configuration."""

import json
from pathlib import Path

import pytest

from core.config import BOT_ROOT, BotConfig, PluginConfig
from core.errors import ConfigurationError, attempt

BOT_CONFIG = Path(__file__).parent.parent / "bots" / "prime_sentinel.json"


def test_bundled_bot_config_is_valid() -> None:
    config = BotConfig.from_file(BOT_CONFIG)
    assert config.name == "prime-sentinel"
    assert config.plugins == ["quoter", "schoolcode", "versionner"]
    assert config.for_plugin("schoolcode").get_bool("ThreadedReplies") is True


def test_from_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        BotConfig.from_file(tmp_path / "nope.json")


def test_from_file_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bot.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        BotConfig.from_file(path)


@pytest.mark.parametrize("data", [
    [],
    {"plugins": "quoter"},
    {"plugins": [1, 2]},
    {"plugin_config": {"quoter": []}},
])
def test_from_dict_rejects_bad_shapes(data) -> None:
    with pytest.raises(ConfigurationError):
        BotConfig.from_dict(data)


def test_defaults(tmp_path: Path) -> None:
    path = tmp_path / "bot.json"
    path.write_text(json.dumps({}))
    config = BotConfig.from_file(path)
    assert config.name == "prime-sentinel"
    assert config.version == "0.0.1"
    assert config.plugins is None
    assert config.for_plugin("quoter").values == {}


def test_for_plugin_carries_bot_identity() -> None:
    config = BotConfig.from_dict({"name": "bot", "version": "2.0"})
    plugin_config = config.for_plugin("versionner")
    assert plugin_config.bot_name == "bot"
    assert plugin_config.bot_version == "2.0"


def test_keys_are_case_and_underscore_insensitive() -> None:
    config = PluginConfig(name="schoolcode", values={"threaded_replies": True})
    assert config.get("ThreadedReplies") is True
    assert config.get("THREADEDREPLIES") is True
    assert config.get("missing", "default") == "default"


def test_environment_overrides_file_values(monkeypatch) -> None:
    monkeypatch.setenv("SCHOOLCODE_THREADED_REPLIES", "yes")
    config = PluginConfig(name="schoolcode", values={"ThreadedReplies": False})
    assert config.get_bool("ThreadedReplies") is True


def test_get_bool_rejects_garbage() -> None:
    config = PluginConfig(name="schoolcode", values={"ThreadedReplies": "maybe"})
    with pytest.raises(ConfigurationError):
        config.get_bool("ThreadedReplies")


def test_get_list() -> None:
    config = PluginConfig(name="quoter", values={"quoteConfigs": [{"a": 1}], "bad": 3})
    assert config.get_list("quoteConfigs") == [{"a": 1}]
    assert config.get_list("absent") == []
    with pytest.raises(ConfigurationError):
        config.get_list("bad")


def test_get_list_from_invalid_env_json(monkeypatch) -> None:
    monkeypatch.setenv("QUOTER_QUOTE_CONFIGS", "[oops")
    with pytest.raises(ConfigurationError):
        PluginConfig(name="quoter").get_list("quoteConfigs")


def test_attempt_returns_result_or_fallback() -> None:
    assert attempt(int, -1, "parse", "42") == 42
    assert attempt(int, -1, "parse", "forty-two", errors=(ValueError,)) == -1


def test_attempt_propagates_unlisted_errors() -> None:
    with pytest.raises(TypeError):
        attempt(int, -1, "parse", None, errors=(ValueError,))


def test_get_path_resolves_relative_to_bot_root(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = PluginConfig(name="schoolcode", values={"SchoolsFile": "data/schools.json"})
    assert config.get_path("SchoolsFile") == BOT_ROOT / "data" / "schools.json"


def test_get_path_keeps_absolute_paths(tmp_path: Path) -> None:
    config = PluginConfig(name="schoolcode", values={"SchoolsFile": str(tmp_path / "s.json")})
    assert config.get_path("SchoolsFile") == tmp_path / "s.json"
    assert config.get_path("Missing") is None
