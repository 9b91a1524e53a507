"""
PDF Text Extractor

Wrapper around PyMuPDF for pulling plain text out of evaluation PDFs.
"""

import logging
from typing import Optional

import pymupdf

from ..exceptions import ExtractionFailed

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """Extracts the concatenated text of every page in a PDF"""

    def _open(self, path: Optional[str] = None, data: Optional[bytes] = None) -> pymupdf.Document:
        if path is None and data is None:
            raise ExtractionFailed("No valid file path or buffer found")
        try:
            if data is not None:
                doc = pymupdf.open(stream=data, filetype="pdf")
            else:
                doc = pymupdf.open(path, filetype="pdf")
        except Exception as e:
            logger.error(f"Failed to open PDF: {str(e)}")
            raise ExtractionFailed(original=e)

        if doc.needs_pass:
            doc.close()
            raise ExtractionFailed("The PDF is password protected")
        return doc

    def extract_text(self, path: Optional[str] = None, data: Optional[bytes] = None) -> str:
        """Extract text from all pages of a PDF

        Args:
            path: Path to the PDF file
            data: PDF content as bytes (used instead of path when given)

        Returns:
            Text of all pages joined by newlines

        Raises:
            ExtractionFailed: If the file cannot be opened or parsed as a PDF
        """
        doc = self._open(path, data)
        try:
            pages = [page.get_text() for page in doc]
        except Exception as e:
            logger.error(f"Error extracting PDF text: {str(e)}")
            raise ExtractionFailed(original=e)
        finally:
            doc.close()

        text = "\n".join(pages)
        logger.info(f"Extracted {len(text)} characters from {len(pages)} page(s)")
        return text

    def page_count(self, path: Optional[str] = None, data: Optional[bytes] = None) -> int:
        """Number of pages in a PDF

        Raises:
            ExtractionFailed: If the file cannot be opened as a PDF
        """
        doc = self._open(path, data)
        try:
            return doc.page_count
        finally:
            doc.close()
