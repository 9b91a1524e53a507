"""
Upload Models

Normalized descriptors produced by the form parser.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class UploadedFile:
    """A request file written to the uploads directory"""
    field_name: str
    filename: str
    filepath: str
    original_filename: str
    content_type: str
    size: int

    @property
    def extension(self) -> str:
        _, dot, ext = self.original_filename.rpartition(".")
        return f".{ext.lower()}" if dot else ""


@dataclass
class ParsedForm:
    """Decoded multipart payload: one value per field, at most one file"""
    fields: Dict[str, str] = field(default_factory=dict)
    file: Optional[UploadedFile] = None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(name, default)
