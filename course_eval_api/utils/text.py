"""
Text helpers for preparing extracted text and checking summaries.
"""

from typing import Iterable, List

TRUNCATION_MARKER = "\n\n[... text truncated due to length ...]"


def truncate_text(text: str, max_chars: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cap text at max_chars, ending with the marker when cut.

    The marker counts toward the limit, so a truncated result is exactly
    max_chars long and truncating it again changes nothing.
    """
    if len(text) <= max_chars:
        return text
    if max_chars <= len(marker):
        return text[:max_chars]
    return text[:max_chars - len(marker)] + marker


def missing_sections(summary: str, headers: Iterable[str]) -> List[str]:
    """Return the headers that do not appear in the summary, in order."""
    upper = summary.upper()
    return [header for header in headers if header.upper() not in upper]
