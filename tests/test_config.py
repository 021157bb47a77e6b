# tests/test_config.py

import importlib
import logging

import pytest

from hybridseal import config


@pytest.fixture
def reload_config(monkeypatch):
    """Re-import config under a patched environment, then restore it."""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestEnvInt:
    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("HYBRIDSEAL_TEST_INT", raising=False)
        assert config.env_int("HYBRIDSEAL_TEST_INT", 7) == 7

    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("HYBRIDSEAL_TEST_INT", "  ")
        assert config.env_int("HYBRIDSEAL_TEST_INT", 7) == 7

    def test_parses_number(self, monkeypatch):
        monkeypatch.setenv("HYBRIDSEAL_TEST_INT", "4096")
        assert config.env_int("HYBRIDSEAL_TEST_INT", 7) == 4096

    def test_garbage_falls_back_with_warning(self, monkeypatch, caplog):
        monkeypatch.setenv("HYBRIDSEAL_TEST_INT", "lots")
        with caplog.at_level(logging.WARNING, logger="hybridseal.config"):
            assert config.env_int("HYBRIDSEAL_TEST_INT", 7) == 7
        assert "HYBRIDSEAL_TEST_INT" in caplog.text


class TestKeyStrength:
    def test_bad_value_does_not_break_import(self, monkeypatch, reload_config):
        monkeypatch.setenv("HYBRIDSEAL_KEY_STRENGTH", "strong")
        assert reload_config().DEFAULT_KEY_STRENGTH == 2048

    def test_value_from_environment(self, monkeypatch, reload_config):
        monkeypatch.setenv("HYBRIDSEAL_KEY_STRENGTH", "3072")
        assert reload_config().DEFAULT_KEY_STRENGTH == 3072
