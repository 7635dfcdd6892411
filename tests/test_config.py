"""Tests for environment-driven configuration."""

import logging

import pytest
from cybersystems.config import configure_logging, log_level_from_env, rules_from_env
from cybersystems.engine import RuleConfig
from cybersystems.engine.rules import DEFAULT_RULES


def test_no_overrides_returns_base():
    assert rules_from_env({}) is DEFAULT_RULES


def test_overrides_are_parsed():
    rules = rules_from_env(
        {
            "CYBERSYSTEMS_MAX_HAND_SIZE": "8",
            "CYBERSYSTEMS_PLAYS_PER_TURN": "2",
            "CYBERSYSTEMS_MALWARE_DESTROYS_INFECTED": "on",
            "UNRELATED": "x",
        }
    )
    assert rules.max_hand_size == 8
    assert rules.plays_per_turn == 2
    assert rules.malware_destroys_infected is True
    assert rules.initial_hand_size == DEFAULT_RULES.initial_hand_size


def test_bad_values_raise():
    with pytest.raises(ValueError, match="CYBERSYSTEMS_MAX_HAND_SIZE"):
        rules_from_env({"CYBERSYSTEMS_MAX_HAND_SIZE": "lots"})
    with pytest.raises(ValueError):
        rules_from_env({"CYBERSYSTEMS_MALWARE_DESTROYS_INFECTED": "maybe"})
    # Parsed fine but inconsistent with the rest of the config.
    with pytest.raises(ValueError):
        rules_from_env({"CYBERSYSTEMS_DISCARD_LIMIT": "6"})


def test_rule_config_validation():
    with pytest.raises(ValueError):
        RuleConfig(initial_hand_size=7)
    with pytest.raises(ValueError):
        RuleConfig(plays_per_turn=0)


def test_log_level():
    assert log_level_from_env({}) == "WARNING"
    assert log_level_from_env({"CYBERSYSTEMS_LOG_LEVEL": "debug"}) == "DEBUG"


def test_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging("info")
    assert calls[0]["level"] == logging.INFO
    with pytest.raises(ValueError):
        configure_logging("chatty")
