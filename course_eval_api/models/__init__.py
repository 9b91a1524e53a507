"""
Data models module for the Course Evaluation Summarizer API
"""

from .request_models import KeyValidationRequest
from .response_models import (
    ErrorResponse,
    HealthResponse,
    KeyValidationResponse,
    SummaryResponse,
)
from .upload_models import ParsedForm, UploadedFile

__all__ = [
    # Request models
    "KeyValidationRequest",
    # Response models
    "ErrorResponse",
    "HealthResponse",
    "KeyValidationResponse",
    "SummaryResponse",
    # Upload descriptors
    "ParsedForm",
    "UploadedFile",
]
