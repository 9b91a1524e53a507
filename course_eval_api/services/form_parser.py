"""
Form Parser

Decodes multipart upload requests into a ParsedForm with one value per
field and at most one file written to the uploads directory.
"""

import asyncio
import logging

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from ..exceptions import FileTooLarge, FormatInvalid
from ..managers import FileManager
from ..models import ParsedForm, UploadedFile

logger = logging.getLogger(__name__)

FILE_FIELD = "file"


class FormParser:
    """Parses upload forms and stores the uploaded file"""

    def __init__(self, file_manager: FileManager, max_upload_bytes: int):
        """Initialize the form parser

        Args:
            file_manager: Where uploaded files are written
            max_upload_bytes: Size ceiling for the uploaded file
        """
        self.file_manager = file_manager
        self.max_upload_bytes = max_upload_bytes

    @property
    def limit_message(self) -> str:
        return f"File exceeds the {self.max_upload_bytes // (1024 * 1024)} MB upload limit"

    def _check_content_length(self, request: Request):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            # Multipart framing adds a little overhead around the file itself
            if int(content_length) > self.max_upload_bytes + 64 * 1024:
                raise FileTooLarge(self.limit_message)

    async def parse(self, request: Request) -> ParsedForm:
        """Parse a multipart request

        Args:
            request: Incoming request

        Returns:
            ParsedForm with first-wins field values and the stored file, if any

        Raises:
            FileTooLarge: If the request or the file exceeds the upload limit
            FormatInvalid: If the multipart body cannot be decoded
        """
        self._check_content_length(request)

        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException) as e:
            logger.error(f"Form parsing error: {str(e)}")
            raise FormatInvalid("Unable to parse upload form", original=e)

        try:
            parsed = ParsedForm()
            for name in form.keys():
                text_values = [v for v in form.getlist(name) if isinstance(v, str)]
                if text_values:
                    parsed.fields[name] = text_values[0]

            uploads = [v for v in form.getlist(FILE_FIELD) if isinstance(v, UploadFile)]
            if uploads:
                parsed.file = await self._store(uploads[0])

            logger.info(
                f"Form parsed successfully: fields={sorted(parsed.fields)}, "
                f"file={parsed.file.original_filename if parsed.file else None}, "
                f"size={parsed.file.size if parsed.file else None}"
            )
            return parsed
        finally:
            await form.close()

    async def _store(self, upload: UploadFile) -> UploadedFile:
        original_filename = upload.filename or ""
        await upload.seek(0)
        filename, filepath, size = await asyncio.to_thread(
            self.file_manager.save_stream, upload.file, original_filename, self.max_upload_bytes
        )
        return UploadedFile(
            field_name=FILE_FIELD,
            filename=filename,
            filepath=filepath,
            original_filename=original_filename,
            content_type=upload.content_type or "",
            size=size,
        )
