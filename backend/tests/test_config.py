import importlib
import logging

import pytest

from scorekeeper import config
from scorekeeper.schemas import GameFormat, MatchFormat

ENV_VARS = (
    "SCORING_DEFAULT_MATCH_FORMAT",
    "SCORING_DEFAULT_GAME_FORMAT",
    "SCORING_STRICT_SNAPSHOTS",
)


@pytest.fixture()
def reload_config(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    def _reload():
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config):
    cfg = reload_config()
    assert cfg.DEFAULT_MATCH_FORMAT == "best-of-3"
    assert cfg.DEFAULT_GAME_FORMAT == "regular"
    assert cfg.STRICT_SNAPSHOTS is True


def test_values_are_normalized(monkeypatch, reload_config):
    monkeypatch.setenv("SCORING_DEFAULT_MATCH_FORMAT", " Best-of-5 ")
    monkeypatch.setenv("SCORING_DEFAULT_GAME_FORMAT", "TIEBREAK-10")
    monkeypatch.setenv("SCORING_STRICT_SNAPSHOTS", "off")
    cfg = reload_config()
    assert cfg.DEFAULT_MATCH_FORMAT == "best-of-5"
    assert cfg.DEFAULT_GAME_FORMAT == "tiebreak-10"
    assert cfg.STRICT_SNAPSHOTS is False


def test_invalid_values_fall_back_with_warning(monkeypatch, reload_config, caplog):
    monkeypatch.setenv("SCORING_DEFAULT_MATCH_FORMAT", "best-of-7")
    monkeypatch.setenv("SCORING_STRICT_SNAPSHOTS", "maybe")
    with caplog.at_level(logging.WARNING):
        cfg = reload_config()
    assert cfg.DEFAULT_MATCH_FORMAT == "best-of-3"
    assert cfg.STRICT_SNAPSHOTS is True
    assert "SCORING_DEFAULT_MATCH_FORMAT must be one of" in caplog.text
    assert "SCORING_STRICT_SNAPSHOTS is not a valid boolean" in caplog.text


def test_format_choices_follow_enums():
    assert config.MATCH_FORMATS == tuple(f.value for f in MatchFormat)
    assert config.GAME_FORMATS == tuple(f.value for f in GameFormat)
    assert config.DEFAULT_MATCH_FORMAT in config.MATCH_FORMATS
    assert config.DEFAULT_GAME_FORMAT in config.GAME_FORMATS
