"""
File Manager

Handles temporary storage of uploaded evaluation files.
"""

import logging
import os
import secrets
import time
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from ..exceptions import FileTooLarge

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class FileManager:
    """Handles writing, reading and removing uploaded files"""

    def __init__(self, upload_dir: str):
        """Initialize file manager

        Args:
            upload_dir: Directory for uploaded files (created if missing)
        """
        self.upload_dir = upload_dir

    def ensure_upload_dir(self) -> str:
        """Create the uploads directory if it does not exist yet

        Returns:
            Path to the uploads directory
        """
        os.makedirs(self.upload_dir, exist_ok=True)
        return self.upload_dir

    def generate_filename(self, original_filename: Optional[str]) -> str:
        """Build a collision-resistant name keeping the original extension

        Args:
            original_filename: Client-supplied filename

        Returns:
            Name of the form ``<epoch-millis>-<random><ext>``
        """
        suffix = Path(original_filename or "").suffix.lower()
        return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{suffix}"

    def save_stream(self, source: BinaryIO, original_filename: Optional[str], max_bytes: int) -> Tuple[str, str, int]:
        """Copy an upload stream into the uploads directory

        Args:
            source: Readable binary stream positioned at the start of the upload
            original_filename: Client-supplied filename
            max_bytes: Size ceiling; exceeding it aborts the copy

        Returns:
            Tuple of (generated filename, path, bytes written)

        Raises:
            FileTooLarge: If the stream is larger than max_bytes
        """
        self.ensure_upload_dir()
        filename = self.generate_filename(original_filename)
        temp_path = os.path.join(self.upload_dir, filename)

        written = 0
        try:
            with open(temp_path, 'wb') as f:
                while True:
                    chunk = source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise FileTooLarge(
                            f"File exceeds the {max_bytes // (1024 * 1024)} MB upload limit"
                        )
                    f.write(chunk)
        except Exception:
            self.cleanup_temp_file(temp_path)
            raise

        logger.info(f"Saved upload to temporary file: {temp_path} ({written} bytes)")
        return filename, temp_path, written

    def is_readable(self, file_path: Optional[str]) -> bool:
        """Check that a file exists and can be opened for reading"""
        return bool(file_path) and os.path.isfile(file_path) and os.access(file_path, os.R_OK)

    def read_bytes(self, file_path: str) -> bytes:
        """Read a whole file into memory"""
        with open(file_path, 'rb') as f:
            return f.read()

    def cleanup_temp_file(self, file_path: Optional[str]) -> bool:
        """Clean up a temporary file

        Args:
            file_path: Path to the temporary file

        Returns:
            True if successfully deleted, False otherwise
        """
        if not file_path:
            return False
        try:
            if os.path.exists(file_path):
                os.unlink(file_path)
                logger.info(f"Cleaned up temporary file: {file_path}")
                return True
            return False
        except OSError as e:
            logger.error(f"Error cleaning up temp file: {str(e)}")
            return False
