"""
Processors module for the Course Evaluation Summarizer API
"""

from .pdf_text_extractor import PDFTextExtractor

__all__ = ["PDFTextExtractor"]
