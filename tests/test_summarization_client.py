"""
Tests for the Anthropic summarization client and its error mapping.
"""

import asyncio

import anthropic
import httpx
import pytest

from course_eval_api.exceptions import (
    BadRequest,
    ContentDeclined,
    InvalidCredential,
    MalformedSummary,
    ProviderError,
    ProviderTimeout,
    RateLimited,
)
from course_eval_api.services import SummarizationClient
from course_eval_api.services.summarization_client import map_provider_error
from conftest import SAMPLE_SUMMARY, VALID_KEY, FakeProvider, provider_status_error


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def summarizer(test_settings, provider):
    return SummarizationClient(test_settings, client_factory=provider)


class TestSummarize:
    """Tests for successful summarization calls."""

    def test_returns_first_text_block(self, summarizer, provider):
        assert run(summarizer.summarize_text("Great class!", VALID_KEY)) == SAMPLE_SUMMARY
        assert provider.keys == [VALID_KEY]

    def test_sends_fixed_model_parameters(self, summarizer, provider, test_settings):
        run(summarizer.summarize_text("Great class!", VALID_KEY))

        call = provider.calls[0]
        assert call["model"] == test_settings.ANTHROPIC_MODEL == "claude-sonnet-4-20250514"
        assert call["max_tokens"] == 2000
        assert call["temperature"] == 0.3
        assert call["messages"][0]["role"] == "user"
        assert call["messages"][0]["content"].endswith("Great class!")

    def test_document_submission(self, summarizer, provider):
        run(summarizer.summarize_document(b"%PDF-1.7", VALID_KEY))

        content = provider.last_prompt
        assert [block["type"] for block in content] == ["document", "text"]

    def test_client_closed_after_call(self, summarizer, provider):
        run(summarizer.summarize_text("text", VALID_KEY))
        assert provider.closed == 1

    def test_default_client_disables_retries(self, test_settings):
        client = SummarizationClient(test_settings)._default_client(VALID_KEY)
        assert isinstance(client, anthropic.AsyncAnthropic)
        assert client.max_retries == 0
        assert client.api_key == VALID_KEY


class TestFailures:
    """Tests for provider failure handling."""

    def test_refusal_stop_reason(self, test_settings):
        provider = FakeProvider(stop_reason="refusal")
        summarizer = SummarizationClient(test_settings, client_factory=provider)

        with pytest.raises(ContentDeclined):
            run(summarizer.summarize_text("text", VALID_KEY))
        assert provider.closed == 1

    def test_missing_text_block(self, test_settings):
        summarizer = SummarizationClient(test_settings, client_factory=FakeProvider(text=None))
        with pytest.raises(ProviderError):
            run(summarizer.summarize_text("text", VALID_KEY))

    def test_enforced_format_rejects_missing_sections(self, test_settings):
        test_settings.ENFORCE_SUMMARY_FORMAT = True
        summarizer = SummarizationClient(test_settings, client_factory=FakeProvider(text="Just a paragraph."))

        with pytest.raises(MalformedSummary) as exc_info:
            run(summarizer.summarize_text("text", VALID_KEY))
        assert "OVERALL SENTIMENT" in exc_info.value.detail

    def test_enforced_format_accepts_complete_summary(self, test_settings, provider):
        test_settings.ENFORCE_SUMMARY_FORMAT = True
        summarizer = SummarizationClient(test_settings, client_factory=provider)
        assert run(summarizer.summarize_text("text", VALID_KEY)) == SAMPLE_SUMMARY

    @pytest.mark.parametrize(
        "error_cls,status_code,expected",
        [
            (anthropic.AuthenticationError, 401, InvalidCredential),
            (anthropic.RateLimitError, 429, RateLimited),
            (anthropic.BadRequestError, 400, BadRequest),
            (anthropic.InternalServerError, 500, ProviderError),
        ],
    )
    def test_status_errors(self, test_settings, error_cls, status_code, expected):
        provider = FakeProvider(error=provider_status_error(error_cls, status_code))
        summarizer = SummarizationClient(test_settings, client_factory=provider)

        with pytest.raises(expected) as exc_info:
            run(summarizer.summarize_text("text", VALID_KEY))
        assert exc_info.value.status_code == expected.status_code
        assert provider.closed == 1

    def test_no_retries(self, test_settings):
        provider = FakeProvider(error=provider_status_error(anthropic.RateLimitError, 429))
        summarizer = SummarizationClient(test_settings, client_factory=provider)

        with pytest.raises(RateLimited):
            run(summarizer.summarize_text("text", VALID_KEY))
        assert len(provider.calls) == 1

    def test_generic_error_hides_provider_message(self, test_settings):
        provider = FakeProvider(error=provider_status_error(anthropic.InternalServerError, 500, "upstream exploded"))
        summarizer = SummarizationClient(test_settings, client_factory=provider)

        with pytest.raises(ProviderError) as exc_info:
            run(summarizer.summarize_text("text", VALID_KEY))
        assert "upstream exploded" not in exc_info.value.message
        assert "upstream exploded" in exc_info.value.detail


class TestErrorMapping:
    """Tests for map_provider_error function."""

    def test_refusal_text_wins_over_status(self):
        error = provider_status_error(anthropic.BadRequestError, 400, "Output blocked: refusal")
        assert isinstance(map_provider_error(error), ContentDeclined)

    def test_authentication_in_message(self):
        assert isinstance(map_provider_error(RuntimeError("authentication failed")), InvalidCredential)

    def test_timeout(self):
        error = anthropic.APITimeoutError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))
        assert isinstance(map_provider_error(error), ProviderTimeout)

    def test_connection_error(self):
        error = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))
        assert isinstance(map_provider_error(error), ProviderError)

    def test_unknown_error(self):
        mapped = map_provider_error(ValueError("boom"))
        assert isinstance(mapped, ProviderError)
        assert mapped.original is not None


class TestVerifyCredential:
    """Tests for verify_credential method."""

    def test_accepts_on_text_response(self, summarizer, provider):
        assert run(summarizer.verify_credential(VALID_KEY)) is True
        call = provider.calls[0]
        assert call["max_tokens"] == 1
        assert call["messages"] == [{"role": "user", "content": "Hello"}]

    def test_empty_text_block_rejects(self, test_settings):
        summarizer = SummarizationClient(test_settings, client_factory=FakeProvider(text=""))
        assert run(summarizer.verify_credential(VALID_KEY)) is False

    @pytest.mark.parametrize(
        "error",
        [
            provider_status_error(anthropic.AuthenticationError, 401),
            provider_status_error(anthropic.RateLimitError, 429),
            RuntimeError("network down"),
        ],
    )
    def test_any_error_rejects(self, test_settings, error):
        provider = FakeProvider(error=error)
        summarizer = SummarizationClient(test_settings, client_factory=provider)
        assert run(summarizer.verify_credential(VALID_KEY)) is False
        assert provider.closed == 1
