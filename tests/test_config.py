"""Tests for settings snapshots and timeout parsing."""

import pytest

from portfolio_api.config import DEFAULT_REQUEST_TIMEOUT, SETTING_KEYS, load_settings, request_timeout


class TestRequestTimeout:
    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "0", "-5"])
    def test_unusable_values_fall_back_to_default(self, raw):
        settings = {} if raw is None else {"REQUEST_TIMEOUT": raw}

        assert request_timeout(settings) == DEFAULT_REQUEST_TIMEOUT

    @pytest.mark.parametrize("raw, expected", [("30", 30.0), (" 2.5 ", 2.5)])
    def test_positive_values_are_used(self, raw, expected):
        assert request_timeout({"REQUEST_TIMEOUT": raw}) == expected


class TestLoadSettings:
    def test_keeps_only_known_keys(self):
        environ = {
            "GEMINI_API_KEY": "gem-key",
            "LITELLM_BASE_URL": "https://llm.example.com",
            "PATH": "/usr/bin",
            "HOME": "/root",
        }

        assert load_settings(environ) == {
            "GEMINI_API_KEY": "gem-key",
            "LITELLM_BASE_URL": "https://llm.example.com",
        }

    def test_empty_values_are_kept(self):
        assert load_settings({"LITELLM_MODEL": ""}) == {"LITELLM_MODEL": ""}

    def test_reads_process_environment_by_default(self, monkeypatch):
        for key in SETTING_KEYS:
            monkeypatch.delenv(key, raising=False)
        monkeypatch.setenv("TURNSTILE_SECRET_KEY", "ts-secret")
        monkeypatch.setenv("UNRELATED_SETTING", "x")

        assert load_settings() == {"TURNSTILE_SECRET_KEY": "ts-secret"}
