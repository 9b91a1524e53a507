"""
Request Models

Pydantic models for API requests.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class KeyValidationRequest(BaseModel):
    """Request model for credential validation"""
    model_config = ConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(default=None, alias="apiKey", description="Anthropic API key to validate")
