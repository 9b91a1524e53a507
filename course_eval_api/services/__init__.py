"""
Services module for the Course Evaluation Summarizer API
"""

from .evaluation_service import EvaluationSummaryService, RequestStage, SummaryJob
from .form_parser import FormParser
from .key_validator import KeyValidator, is_valid_key_format
from .summarization_client import SummarizationClient

__all__ = [
    "EvaluationSummaryService",
    "FormParser",
    "KeyValidator",
    "RequestStage",
    "SummarizationClient",
    "SummaryJob",
    "is_valid_key_format",
]
