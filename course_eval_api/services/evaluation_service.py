"""
Evaluation Summary Service

Main service class that orchestrates the upload → extract → summarize
workflow for a single request.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from fastapi import Request

from ..config import Settings
from ..exceptions import (
    EmptyDocument,
    FileMissing,
    FileUnreadable,
    InternalError,
    ServiceMisconfigured,
    SummarizerError,
    UnsupportedFileType,
)
from ..managers import FileManager
from ..models import ParsedForm, UploadedFile
from ..processors import PDFTextExtractor
from ..utils.text import truncate_text
from .form_parser import FormParser
from .key_validator import KeyValidator
from .summarization_client import SummarizationClient

logger = logging.getLogger(__name__)

API_KEY_FIELD = "apiKey"
PDF_CONTENT_TYPE = "application/pdf"
UPLOAD_KEY_ERROR = "Valid Anthropic API key required"


class RequestStage(str, Enum):
    """Stages a summary request moves through"""
    RECEIVED = "received"
    FORM_PARSED = "form_parsed"
    KEY_VALIDATED = "key_validated"
    FILE_VALIDATED = "file_validated"
    TEXT_EXTRACTED = "text_extracted"
    SUMMARIZED = "summarized"
    RESPONDED = "responded"
    ERRORED = "errored"


@dataclass
class SummaryJob:
    """Progress of one upload request"""
    job_id: str
    created_at: str
    stage: RequestStage = RequestStage.RECEIVED
    history: List[RequestStage] = field(default_factory=lambda: [RequestStage.RECEIVED])
    file: Optional[UploadedFile] = None
    text_length: Optional[int] = None
    truncated: bool = False
    result: Optional[str] = None
    error: Optional[str] = None
    file_removed: bool = False

    def advance(self, stage: RequestStage):
        self.stage = stage
        self.history.append(stage)
        logger.debug(f"Job {self.job_id}: {stage.value}")

    def fail(self, error: SummarizerError):
        self.error = error.kind
        self.advance(RequestStage.ERRORED)
        logger.error(f"Job {self.job_id} failed at {self.history[-2].value}: {error}")


class EvaluationSummaryService:
    """Main service for course evaluation summaries"""

    def __init__(
        self,
        settings: Settings,
        summarization_client: Optional[SummarizationClient] = None,
        file_manager: Optional[FileManager] = None,
        extractor: Optional[PDFTextExtractor] = None
    ):
        """Initialize the evaluation summary service

        Args:
            settings: Application settings
            summarization_client: Provider gateway (built from settings if omitted)
            file_manager: File manager instance
            extractor: PDF text extractor instance
        """
        self.settings = settings
        self.client = summarization_client or SummarizationClient(settings)
        self.file_manager = file_manager or FileManager(settings.UPLOAD_DIR)
        self.extractor = extractor or PDFTextExtractor()
        self.form_parser = FormParser(self.file_manager, settings.max_upload_bytes)
        self.key_validator = KeyValidator(self.client)

    def resolve_api_key(self, form: ParsedForm) -> Optional[str]:
        """Pick the credential for this request according to KEY_SOURCE

        Raises:
            ServiceMisconfigured: If the service key is required but not set
        """
        source = self.settings.KEY_SOURCE
        if source == "environment":
            if not self.settings.is_service_key_configured:
                raise ServiceMisconfigured()
            return self.settings.ANTHROPIC_API_KEY
        request_key = form.get(API_KEY_FIELD)
        if source == "auto":
            return request_key or self.settings.ANTHROPIC_API_KEY
        return request_key

    def _check_file(self, upload: Optional[UploadedFile]) -> UploadedFile:
        if upload is None:
            raise FileMissing()
        if not self.file_manager.is_readable(upload.filepath):
            raise FileUnreadable()
        if upload.extension != ".pdf" and upload.content_type != PDF_CONTENT_TYPE:
            raise UnsupportedFileType()
        return upload

    async def summarize_upload(self, request: Request) -> SummaryJob:
        """Run the full pipeline for an upload request

        The uploaded file is removed before this returns or raises.

        Args:
            request: Multipart request with `file` and `apiKey` fields

        Returns:
            SummaryJob holding the summary in `result`

        Raises:
            SummarizerError: First failing gate or provider failure
        """
        job = SummaryJob(job_id=str(uuid.uuid4()), created_at=datetime.now().isoformat())
        logger.info(f"Request {job.job_id} received, parsing form...")

        try:
            form = await self.form_parser.parse(request)
            job.file = form.file
            job.advance(RequestStage.FORM_PARSED)

            api_key = self.resolve_api_key(form)
            self.key_validator.check_format(api_key, UPLOAD_KEY_ERROR)
            job.advance(RequestStage.KEY_VALIDATED)

            upload = self._check_file(form.file)
            job.advance(RequestStage.FILE_VALIDATED)
            logger.info(
                f"Processing file: {upload.original_filename} "
                f"({upload.content_type or 'unknown type'}, {upload.size} bytes)"
            )

            if self.settings.SUBMISSION_MODE == "document":
                job.result = await self._summarize_document(job, upload, api_key)
            else:
                job.result = await self._summarize_text(job, upload, api_key)
            job.advance(RequestStage.SUMMARIZED)

        except SummarizerError as e:
            job.fail(e)
            raise
        except Exception as e:
            error = InternalError(original=e)
            job.fail(error)
            raise error from e
        finally:
            self._cleanup(job)

        job.advance(RequestStage.RESPONDED)
        logger.info(f"Request {job.job_id} complete")
        return job

    async def _summarize_text(self, job: SummaryJob, upload: UploadedFile, api_key: str) -> str:
        text = await asyncio.to_thread(self.extractor.extract_text, upload.filepath)
        if not text or not text.strip():
            raise EmptyDocument()
        job.advance(RequestStage.TEXT_EXTRACTED)

        job.text_length = len(text)
        prepared = truncate_text(text, self.settings.MAX_TEXT_CHARS)
        job.truncated = prepared != text
        if job.truncated:
            logger.info(f"Truncated extracted text from {len(text)} to {len(prepared)} characters")

        return await self.client.summarize_text(prepared, api_key)

    async def _summarize_document(self, job: SummaryJob, upload: UploadedFile, api_key: str) -> str:
        data = await asyncio.to_thread(self.file_manager.read_bytes, upload.filepath)
        # Open locally first so a corrupt file fails the same way in both modes
        pages = await asyncio.to_thread(self.extractor.page_count, None, data)
        logger.info(f"Attaching {pages}-page PDF ({len(data)} bytes) as a document")
        job.advance(RequestStage.TEXT_EXTRACTED)

        return await self.client.summarize_document(data, api_key)

    def _cleanup(self, job: SummaryJob):
        if job.file is None:
            return
        try:
            job.file_removed = self.file_manager.cleanup_temp_file(job.file.filepath)
        except Exception as e:
            logger.error(f"File cleanup error: {str(e)}")

    async def validate_credential(self, api_key: Optional[str]) -> bool:
        """Check a key's format, then confirm it with the provider

        Raises:
            FormatInvalid: Malformed key
            InvalidCredential: Provider rejected the key
        """
        return await self.key_validator.validate(api_key, live=True)

    def get_service_info(self) -> dict:
        """Get information about the service

        Returns:
            Dictionary with service information
        """
        return {
            "model": self.settings.ANTHROPIC_MODEL,
            "submission_mode": self.settings.SUBMISSION_MODE,
            "key_source": self.settings.KEY_SOURCE,
            "service_key_configured": self.settings.is_service_key_configured,
            "max_upload_mb": self.settings.MAX_UPLOAD_SIZE_MB,
            "max_text_chars": self.settings.MAX_TEXT_CHARS,
            "upload_dir": self.file_manager.upload_dir,
        }
