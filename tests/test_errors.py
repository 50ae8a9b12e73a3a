"""Tests for error taxonomy helpers and secret masking."""

import pytest

from portfolio_api.errors import AllProvidersFailed, CandidateFailure, extract_error_details
from portfolio_api.utils import mask_headers, mask_secret, mask_url


@pytest.mark.parametrize(
    "payload, expected",
    [
        ('{"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}', "API key not valid."),
        ({"error": {"message": "Rate limit reached", "type": "rate_limit_error"}}, "Rate limit reached"),
        ({"error": "model not found"}, "model not found"),
        ({"message": "Invalid Form Body"}, "Invalid Form Body"),
        ("  Bad Gateway  ", "Bad Gateway"),
        ("{broken json", "{broken json"),
    ],
)
def test_extract_error_details(payload, expected):
    assert extract_error_details(payload) == expected


def test_all_providers_failed_keeps_order():
    first = CandidateFailure("LiteLLM Proxy", "LiteLLM Proxy API Error 502: bad gateway", status=502)
    last = CandidateFailure("Google Official", "Google Official returned empty response.")

    err = AllProvidersFailed([first, last])

    assert err.failures == [first, last]
    assert err.last is last
    assert str(err) == "All LLM providers failed. Last error: Google Official returned empty response."


def test_all_providers_failed_without_candidates():
    err = AllProvidersFailed([])

    assert err.last is None
    assert "no providers configured" in str(err)


def test_mask_secret():
    assert mask_secret(None) == ""
    assert mask_secret("short") == "****"
    assert mask_secret("AIzaSyExampleKey1234") == "AIza...1234"


def test_mask_url_hides_key_param_only():
    masked = mask_url("https://example.com/v1beta/models/m:generateContent?key=AIzaSyExampleKey1234&alt=sse")

    assert "AIzaSyExampleKey1234" not in masked
    assert "key=AIza...1234" in masked
    assert "alt=sse" in masked
    assert mask_url("https://example.com/path") == "https://example.com/path"


def test_mask_headers():
    masked = mask_headers({"Authorization": "Bearer sk-live-abcdefgh", "Content-Type": "application/json"})

    assert masked == {"Authorization": "Bear...efgh", "Content-Type": "application/json"}
