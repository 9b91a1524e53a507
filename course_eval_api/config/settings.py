"""
Application Settings and Configuration

Centralized configuration management using environment variables.
"""

import os
import tempfile
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables"""

    # Anthropic Configuration
    ANTHROPIC_API_KEY: Optional[str] = os.getenv("ANTHROPIC_API_KEY") or None
    ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
    SUMMARY_MAX_TOKENS: int = int(os.getenv("SUMMARY_MAX_TOKENS", "2000"))
    SUMMARY_TEMPERATURE: float = float(os.getenv("SUMMARY_TEMPERATURE", "0.3"))
    KEY_CHECK_MAX_TOKENS: int = int(os.getenv("KEY_CHECK_MAX_TOKENS", "1"))
    PROVIDER_TIMEOUT: float = float(os.getenv("PROVIDER_TIMEOUT", "60"))

    # Where the credential comes from: "request", "environment" or "auto"
    KEY_SOURCE: str = os.getenv("KEY_SOURCE", "request").lower()

    # "text" extracts locally and embeds the text, "document" attaches the PDF
    SUBMISSION_MODE: str = os.getenv("SUBMISSION_MODE", "text").lower()

    # Reject summaries missing any of the required section headers
    ENFORCE_SUMMARY_FORMAT: bool = _env_bool("ENFORCE_SUMMARY_FORMAT")

    # Upload Configuration
    MAX_UPLOAD_SIZE_MB: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "4"))
    MAX_TEXT_CHARS: int = int(os.getenv("MAX_TEXT_CHARS", "50000"))
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "uploads"))

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_VERSION: str = "1.0.0"
    API_TITLE: str = "Course Evaluation Summarizer API"
    API_DESCRIPTION: str = "API for summarizing course evaluation PDFs with Claude"
    CORS_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    # "development" adds error detail and stack traces to 500 responses
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production").lower()

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def max_upload_bytes(self) -> int:
        """Upload ceiling in bytes"""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_service_key_configured(self) -> bool:
        """Check if a service-wide Anthropic key is configured"""
        return bool(self.ANTHROPIC_API_KEY)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def cors_headers(self) -> dict:
        """CORS headers for plain OPTIONS responses"""
        origin = "*" if not self.CORS_ORIGINS or "*" in self.CORS_ORIGINS else self.CORS_ORIGINS[0]
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def __repr__(self) -> str:
        """String representation (hiding sensitive data)"""
        return (
            f"Settings("
            f"MODEL={self.ANTHROPIC_MODEL}, "
            f"SERVICE_KEY={'configured' if self.is_service_key_configured else 'not configured'}, "
            f"KEY_SOURCE={self.KEY_SOURCE}, "
            f"SUBMISSION_MODE={self.SUBMISSION_MODE}, "
            f"API_PORT={self.API_PORT}"
            f")"
        )


# Global settings instance
settings = Settings()
