"""
Controllers module for the Course Evaluation Summarizer API
"""

from .health_controller import router as health_router
from .key_controller import router as key_router
from .summary_controller import router as summary_router

__all__ = [
    "health_router",
    "key_router",
    "summary_router",
]
