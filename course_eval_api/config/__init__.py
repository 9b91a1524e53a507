"""
Configuration module for the Course Evaluation Summarizer API
"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
