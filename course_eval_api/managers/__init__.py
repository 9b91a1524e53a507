"""
Managers module for the Course Evaluation Summarizer API
"""

from .file_manager import FileManager

__all__ = [
    "FileManager",
]
