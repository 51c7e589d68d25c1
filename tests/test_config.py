from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskhub.config import get_settings, reset_settings_cache


@pytest.fixture()
def fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_settings_are_cached_until_reset(monkeypatch, fresh_settings):
    first = get_settings()
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert get_settings() is first

    reset_settings_cache()
    reloaded = get_settings()

    assert reloaded is not first
    assert reloaded.log_level == "DEBUG"
    assert reloaded.secret_key == "test-secret-key"


def test_unknown_log_level_is_rejected(monkeypatch, fresh_settings):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        get_settings()
