"""
Tests for environment configuration and per-game options.
"""

import pytest

from .. import config
from ..games.powerplant import GameOptions


class TestEnvReaders:
    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("MEGAWATT_TEST_INT", " 42 ")
        assert config._env_int("MEGAWATT_TEST_INT", 7) == 42

    def test_env_int_fallbacks(self, monkeypatch):
        monkeypatch.delenv("MEGAWATT_TEST_INT", raising=False)
        assert config._env_int("MEGAWATT_TEST_INT", 7) == 7
        monkeypatch.setenv("MEGAWATT_TEST_INT", "lots")
        assert config._env_int("MEGAWATT_TEST_INT", 7) == 7

    def test_env_choice(self, monkeypatch):
        monkeypatch.setenv("MEGAWATT_TEST_CHOICE", "SKIP")
        assert config._env_choice("MEGAWATT_TEST_CHOICE", ("pass", "skip"), "pass") == "skip"
        monkeypatch.setenv("MEGAWATT_TEST_CHOICE", "wait")
        assert config._env_choice("MEGAWATT_TEST_CHOICE", ("pass", "skip"), "pass") == "pass"


class TestGameOptions:
    def test_defaults(self, options):
        assert options.starting_money == 50
        assert options.round_limit == 0
        assert options.starved_auction == "pass"

    def test_from_env(self, monkeypatch):
        monkeypatch.setattr(config, "STARTING_MONEY", 30)
        monkeypatch.setattr(config, "ROUND_LIMIT", 5)
        monkeypatch.setattr(config, "STARVED_AUCTION_POLICY", "skip")
        assert GameOptions.from_env() == GameOptions(starting_money=30, round_limit=5, starved_auction="skip")

    @pytest.mark.parametrize("kwargs", [
        {"starved_auction": "wait"},
        {"starting_money": -1},
        {"round_limit": -2},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameOptions(**kwargs)

    def test_json(self):
        options = GameOptions(starting_money=20, round_limit=3, starved_auction="skip")
        assert options.to_json() == {"startingMoney": 20, "roundLimit": 3, "starvedAuction": "skip"}
        assert GameOptions.from_json(options.to_json()) == options
        assert GameOptions.from_json(None) == GameOptions()

    def test_recorded_in_game_start(self, two_player_game):
        event = two_player_game.log[0].event
        assert event.name == "gamestart"
        assert event["options"] == GameOptions().to_json()
