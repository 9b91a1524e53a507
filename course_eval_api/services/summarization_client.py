"""
Summarization Client

Anthropic Messages API gateway. Every call to the model lives here, along
with the mapping from provider failures to application errors.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

import anthropic

from ..config import Settings
from ..exceptions import (
    BadRequest,
    ContentDeclined,
    InvalidCredential,
    MalformedSummary,
    ProviderError,
    ProviderTimeout,
    RateLimited,
    SummarizerError,
)
from ..prompts.evaluation_prompt import SECTION_HEADERS, build_document_content, build_text_prompt
from ..utils.text import missing_sections

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]

REFUSAL_STOP_REASON = "refusal"


def _mentions_refusal(message: str) -> bool:
    lowered = message.lower()
    return "refusal" in lowered or "content declined" in lowered


def map_provider_error(exc: Exception) -> SummarizerError:
    """Translate an exception raised by the Anthropic SDK into an application error

    Args:
        exc: Exception raised while calling the provider

    Returns:
        The matching SummarizerError subclass instance (not raised)
    """
    if isinstance(exc, SummarizerError):
        return exc

    message = str(exc)
    status_code = getattr(exc, "status_code", None)

    if _mentions_refusal(message):
        return ContentDeclined(original=exc)
    if isinstance(exc, anthropic.AuthenticationError) or status_code == 401 or "authentication" in message.lower():
        return InvalidCredential(original=exc)
    if isinstance(exc, anthropic.RateLimitError) or status_code == 429:
        return RateLimited(original=exc)
    if isinstance(exc, anthropic.BadRequestError) or status_code == 400:
        return BadRequest(original=exc)
    if isinstance(exc, anthropic.APITimeoutError):
        return ProviderTimeout(original=exc)
    return ProviderError(original=exc)


def first_text_block(response: Any) -> Optional[str]:
    """Text of the first text block in a Messages API response, if any"""
    for block in getattr(response, "content", None) or []:
        if getattr(block, "type", None) == "text":
            return block.text
    return None


class SummarizationClient:
    """Sends evaluation prompts to Claude and returns the raw summary text"""

    def __init__(self, settings: Settings, client_factory: Optional[ClientFactory] = None):
        """Initialize the summarization client

        Args:
            settings: Application settings (model, token budgets, timeout)
            client_factory: Builds a provider client for a given API key.
                Defaults to a new AsyncAnthropic per call.
        """
        self.settings = settings
        self.client_factory = client_factory or self._default_client

    def _default_client(self, api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=self.settings.PROVIDER_TIMEOUT,
            max_retries=0,
        )

    async def summarize_text(self, text: str, api_key: str) -> str:
        """Summarize extracted evaluation text

        Args:
            text: Extracted (and already truncated) PDF text
            api_key: Caller's Anthropic API key

        Returns:
            Summary text from the model

        Raises:
            SummarizerError: Mapped provider failure
        """
        return await self._summarize(build_text_prompt(text), api_key)

    async def summarize_document(self, pdf_bytes: bytes, api_key: str) -> str:
        """Summarize a PDF sent to the model as a document attachment

        Args:
            pdf_bytes: Raw PDF content
            api_key: Caller's Anthropic API key

        Returns:
            Summary text from the model

        Raises:
            SummarizerError: Mapped provider failure
        """
        return await self._summarize(build_document_content(pdf_bytes), api_key)

    async def _summarize(self, content: Union[str, List[Dict]], api_key: str) -> str:
        client = self.client_factory(api_key)
        try:
            logger.info(f"Sending evaluation to {self.settings.ANTHROPIC_MODEL} for analysis")
            response = await client.messages.create(
                model=self.settings.ANTHROPIC_MODEL,
                max_tokens=self.settings.SUMMARY_MAX_TOKENS,
                temperature=self.settings.SUMMARY_TEMPERATURE,
                messages=[{"role": "user", "content": content}],
            )

            if getattr(response, "stop_reason", None) == REFUSAL_STOP_REASON:
                raise ContentDeclined()

            summary = first_text_block(response)
            if summary is None:
                raise ProviderError(detail="Response contained no text block")

            if self.settings.ENFORCE_SUMMARY_FORMAT:
                missing = missing_sections(summary, SECTION_HEADERS)
                if missing:
                    raise MalformedSummary(detail=f"Missing sections: {', '.join(missing)}")

            logger.info(f"Analysis complete ({len(summary)} chars)")
            return summary

        except Exception as e:
            error = map_provider_error(e)
            logger.error(
                f"Summarization failed: {error.kind} "
                f"(status={getattr(e, 'status_code', None)}, type={type(e).__name__}): {str(e)}"
            )
            if error is e:
                raise
            raise error from e
        finally:
            await client.close()

    async def verify_credential(self, api_key: str) -> bool:
        """Confirm a key with the smallest possible request

        Any provider error counts as rejection.

        Args:
            api_key: Anthropic API key to test

        Returns:
            True if the provider answered with a non-empty text block
        """
        client = self.client_factory(api_key)
        try:
            response = await client.messages.create(
                model=self.settings.ANTHROPIC_MODEL,
                max_tokens=self.settings.KEY_CHECK_MAX_TOKENS,
                messages=[{"role": "user", "content": "Hello"}],
            )
            return bool(first_text_block(response))
        except Exception as e:
            logger.warning(f"API key test failed: {type(e).__name__}: {str(e)}")
            return False
        finally:
            await client.close()
