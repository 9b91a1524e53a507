"""
Application Exceptions

Every failure the summarization pipeline can produce, each carrying the
HTTP status and the user-facing message it maps to.
"""

from typing import Optional


class SummarizerError(Exception):
    """Base exception for all pipeline errors"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        original: Optional[Exception] = None,
        detail: Optional[str] = None
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.original = original
        self.detail = detail or (str(original) if original else None)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self):
        if self.original:
            return f"{self.message} (caused by: {self.original})"
        return self.message


class FormatInvalid(SummarizerError):
    """Malformed credential or missing/unparseable request fields"""
    status_code = 400
    default_message = "Valid Anthropic API key required"


class FileMissing(SummarizerError):
    status_code = 400
    default_message = "No file uploaded"


class FileTooLarge(SummarizerError):
    status_code = 413
    default_message = "Uploaded file is too large"


class UnsupportedFileType(SummarizerError):
    status_code = 400
    default_message = "Please upload a PDF file"


class FileUnreadable(SummarizerError):
    status_code = 500
    default_message = "Unable to access uploaded file"


class ExtractionFailed(SummarizerError):
    status_code = 500
    default_message = "Failed to extract text from PDF"


class EmptyDocument(SummarizerError):
    status_code = 400
    default_message = "No text found in PDF"


class InvalidCredential(SummarizerError):
    status_code = 401
    default_message = "Invalid API key. Please check your Anthropic API key."


class RateLimited(SummarizerError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class BadRequest(SummarizerError):
    """Provider rejected the request as malformed"""
    status_code = 400
    default_message = "Invalid request. The PDF might be corrupted or in an unsupported format."


class ContentDeclined(SummarizerError):
    status_code = 422
    default_message = "The AI declined to process this content for safety reasons."


class ProviderTimeout(SummarizerError):
    status_code = 504
    default_message = "The AI provider took too long to respond. Please try again."


class ProviderError(SummarizerError):
    """Catch-all provider failure; the provider message stays in `detail`"""
    status_code = 500
    default_message = "Failed to process PDF with AI. Please try again."


class MalformedSummary(SummarizerError):
    status_code = 502
    default_message = "The AI response did not follow the expected summary format."


class ServiceMisconfigured(SummarizerError):
    status_code = 500
    default_message = "Anthropic API key not configured"


class InternalError(SummarizerError):
    status_code = 500
    default_message = "Internal server error"
