"""
Key Validator

Local format check for Anthropic API keys, plus an optional live check
against the provider.
"""

import logging
from typing import Optional

from ..exceptions import FormatInvalid, InvalidCredential
from .summarization_client import SummarizationClient

logger = logging.getLogger(__name__)

KEY_PREFIX = "sk-ant-"
MIN_KEY_LENGTH = 20

FORMAT_ERROR = "Please provide a valid Anthropic API key (starts with sk-ant-)"
REJECTED_ERROR = "Invalid API key. Please check your key and try again."


def is_valid_key_format(api_key: Optional[str]) -> bool:
    """Non-empty, carries the provider prefix and is longer than MIN_KEY_LENGTH"""
    return bool(api_key) and api_key.startswith(KEY_PREFIX) and len(api_key) > MIN_KEY_LENGTH


class KeyValidator:
    """Validates caller credentials before they are used"""

    def __init__(self, client: SummarizationClient):
        self.client = client

    def check_format(self, api_key: Optional[str], message: str = FORMAT_ERROR) -> str:
        """Raise FormatInvalid unless the key is well-formed; no network use"""
        if not is_valid_key_format(api_key):
            raise FormatInvalid(message)
        return api_key

    async def validate(self, api_key: Optional[str], live: bool = True) -> bool:
        """Validate a key's format and, optionally, that the provider accepts it

        Args:
            api_key: Key supplied by the caller
            live: Also send a minimal request to the provider

        Returns:
            True when the key passed every requested check

        Raises:
            FormatInvalid: Malformed key (no provider call is made)
            InvalidCredential: Provider did not accept the key
        """
        self.check_format(api_key)
        if not live:
            return True

        logger.info("Testing API key against provider")
        if not await self.client.verify_credential(api_key):
            raise InvalidCredential(REJECTED_ERROR)
        return True
