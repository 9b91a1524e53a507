"""
Response Models

Pydantic models for API responses.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SummaryResponse(BaseModel):
    """Response model for a completed evaluation summary"""
    result: str = Field(..., description="Summary text exactly as returned by the model")


class KeyValidationResponse(BaseModel):
    """Response model for credential validation"""
    valid: bool = Field(..., description="Whether the key was accepted")
    error: Optional[str] = Field(None, description="Reason the key was rejected")


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="Service status")
    model: str = Field(..., description="Anthropic model used for summaries")
    submission_mode: str = Field(..., description="How PDFs are sent to the model (text or document)")
    service_key_configured: bool = Field(..., description="Whether a service-wide API key is set")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    stack: Optional[str] = Field(None, description="Stack trace (development only)")
