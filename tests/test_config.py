from __future__ import annotations

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env,module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        (" testing ", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
        ("", "config.development"),
    ],
)
def test_settings_module_by_name(env, module):
    assert get_settings_module(env) == module


def test_settings_module_reads_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"
