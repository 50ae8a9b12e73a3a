"""Tests for building the ordered provider candidate list."""

import pytest

from portfolio_api import dispatcher
from portfolio_api.auth import resolve_auth_strategy
from portfolio_api.config import RequestShape
from portfolio_api.errors import ConfigurationError
from portfolio_api.resolver import (
    OFFICIAL_MODEL,
    OFFICIAL_NAME,
    PROXY_DEFAULT_MODEL,
    PROXY_NAME,
    resolve_candidates,
)


class TestMandatoryCredential:
    @pytest.mark.parametrize("settings", [{}, {"GEMINI_API_KEY": ""}, {"GEMINI_API_KEY": "   "}])
    def test_missing_key_raises(self, settings):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            resolve_candidates(settings)

    def test_missing_key_raises_even_with_proxy(self):
        with pytest.raises(ConfigurationError):
            resolve_candidates({"LITELLM_BASE_URL": "https://llm.example.com"})

    @pytest.mark.asyncio
    async def test_entry_point_fails_before_network(self, monkeypatch):
        def _no_session(*args, **kwargs):
            raise AssertionError("no client session should be opened")

        monkeypatch.setattr(dispatcher, "ClientSession", _no_session)

        with pytest.raises(ConfigurationError):
            await dispatcher.call_llm_with_fallback({}, "What is Docker?")


class TestProxyCandidate:
    @pytest.mark.parametrize(
        "base_url",
        [
            None,
            "",
            "   ",
            "https://your-litellm-server.example.com",
            "not a url",
            "ftp://llm.example.com",
            "https://",
        ],
    )
    def test_unusable_proxy_is_skipped(self, base_url):
        settings = {"GEMINI_API_KEY": "gem-key"}
        if base_url is not None:
            settings["LITELLM_BASE_URL"] = base_url

        candidates = resolve_candidates(settings)

        assert len(candidates) == 1
        assert candidates[0].name == OFFICIAL_NAME

    def test_proxy_first_official_last(self):
        candidates = resolve_candidates(
            {"GEMINI_API_KEY": "gem-key", "LITELLM_BASE_URL": "https://llm.example.com/"}
        )

        assert [c.name for c in candidates] == [PROXY_NAME, OFFICIAL_NAME]
        proxy = candidates[0]
        assert proxy.shape is RequestShape.CHAT_COMPLETIONS
        assert proxy.endpoint == "https://llm.example.com/v1/chat/completions"
        assert proxy.model == PROXY_DEFAULT_MODEL
        assert proxy.headers["Authorization"] == "Bearer sk-1234"
        assert proxy.headers["Content-Type"] == "application/json"

    def test_proxy_model_and_key_overrides(self):
        proxy = resolve_candidates(
            {
                "GEMINI_API_KEY": "gem-key",
                "LITELLM_BASE_URL": "http://10.0.0.5:4000",
                "LITELLM_API_KEY": "sk-live",
                "LITELLM_MODEL": "custom-model",
            }
        )[0]

        assert proxy.model == "custom-model"
        assert proxy.headers["Authorization"] == "Bearer sk-live"
        assert proxy.endpoint == "http://10.0.0.5:4000/v1/chat/completions"


class TestOfficialCandidate:
    def test_key_travels_in_query_string(self):
        official = resolve_candidates({"GEMINI_API_KEY": "gem-key"})[-1]

        assert official.shape is RequestShape.GENERATE_CONTENT
        assert official.model == OFFICIAL_MODEL
        assert official.endpoint == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-2.5-flash:generateContent?key=gem-key"
        )
        assert "Authorization" not in official.headers

    def test_headers_are_read_only(self):
        official = resolve_candidates({"GEMINI_API_KEY": "gem-key"})[-1]

        with pytest.raises(TypeError):
            official.headers["X-Extra"] = "1"

    def test_resolution_is_deterministic(self):
        settings = {"GEMINI_API_KEY": "gem-key", "LITELLM_BASE_URL": "https://llm.example.com"}

        assert resolve_candidates(settings) == resolve_candidates(settings)

    def test_candidates_are_hashable(self):
        settings = {"GEMINI_API_KEY": "gem-key", "LITELLM_BASE_URL": "https://llm.example.com"}

        first, second = resolve_candidates(settings), resolve_candidates(settings)

        assert len({*first, *second}) == 2
        assert hash(first[0]) == hash(second[0])


class TestAuthStrategies:
    def test_chat_completions_uses_bearer_header(self):
        auth = resolve_auth_strategy(RequestShape.CHAT_COMPLETIONS, "sk-live")

        assert auth.headers() == {"Authorization": "Bearer sk-live"}
        assert auth.query_params() == {}

    def test_generate_content_uses_key_param(self):
        auth = resolve_auth_strategy(RequestShape.GENERATE_CONTENT, "gem-key")

        assert auth.headers() == {}
        assert auth.query_params() == {"key": "gem-key"}

    def test_unknown_shape_is_rejected(self):
        with pytest.raises(ValueError, match="No auth strategy"):
            resolve_auth_strategy("legacy_completions", "token")
