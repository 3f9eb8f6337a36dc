"""
Upload validation for Open Transform.

Checks an uploaded file against an allow-list of MIME patterns and a size
ceiling before anything is decoded or rendered.

Supported patterns:
- Exact MIME types, e.g. 'image/png'
- Wildcard prefixes, e.g. 'image/*'
- 'application/pdf', which also matches a '.pdf' file name

Classes:
    UploadedFile: Name, MIME type, size and content of an upload
    FileValidator: Applies the allow-list and size ceiling

Functions:
    matches_type: Check a file against a single MIME pattern
    is_image_file: Whether a file declares an image MIME type
    is_pdf_file: Whether a file is a PDF by MIME type or extension
"""

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from OT_Libs.constants import BYTES_PER_MB, IMAGE_MIME_PREFIX, PDF_EXTENSION, PDF_MIME_TYPE
from OT_Libs.editor_config import EditorConfig
from OT_Libs.errors import FileTooLarge, InvalidFileType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """A single uploaded file.

    Attributes:
        name: Original file name
        mime_type: Declared MIME type ('' if unknown)
        content: Raw file bytes
        size: Byte size (defaults to len(content))
    """
    name: str
    mime_type: str
    content: bytes = field(repr=False)
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            object.__setattr__(self, "size", len(self.content))
        if self.size < 0:
            raise ValueError(f"size must be >= 0, got {self.size}")

    @property
    def extension(self) -> str:
        """Lower-case extension including the dot, e.g. '.pdf'."""
        return Path(self.name).suffix.lower()

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "UploadedFile":
        """
        Read a file from disk as an upload.

        Args:
            path: File to read
            mime_type: Declared type; guessed from the extension when omitted

        Raises:
            FileNotFoundError: If path does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)

        return cls(name=path.name, mime_type=mime_type or "", content=path.read_bytes())


def matches_type(uploaded: UploadedFile, pattern: str) -> bool:
    """Check one allow-list pattern against an uploaded file."""
    mime_type = uploaded.mime_type.lower()
    pattern = pattern.strip().lower()

    if pattern.endswith("/*"):
        return mime_type.startswith(pattern[:-1])
    if pattern == PDF_MIME_TYPE:
        return mime_type == PDF_MIME_TYPE or uploaded.extension == PDF_EXTENSION
    return mime_type == pattern


def is_image_file(uploaded: UploadedFile) -> bool:
    return uploaded.mime_type.lower().startswith(IMAGE_MIME_PREFIX)


def is_pdf_file(uploaded: UploadedFile) -> bool:
    return matches_type(uploaded, PDF_MIME_TYPE)


class FileValidator:
    """
    Validates uploads against accepted types and a size ceiling.

    Example:
        >>> validator = FileValidator(accepted_types=["image/*"], max_size_mb=10)
        >>> validator.validate(UploadedFile("a.png", "image/png", b"..."))
    """

    def __init__(
        self,
        accepted_types: Optional[Iterable[str]] = None,
        max_size_mb: Optional[float] = None,
        config: Optional[EditorConfig] = None,
    ):
        config = config or EditorConfig()
        self.accepted_types = tuple(
            accepted_types if accepted_types is not None else config.accepted_types
        )
        self.max_size_mb = max_size_mb if max_size_mb is not None else config.max_size_mb

        if self.max_size_mb <= 0:
            raise ValueError(f"max_size_mb must be > 0, got {self.max_size_mb}")

    def validate(self, uploaded: UploadedFile) -> UploadedFile:
        """
        Validate an upload.

        Args:
            uploaded: File to check

        Returns:
            The same file, unchanged

        Raises:
            InvalidFileType: If no accepted pattern matches
            FileTooLarge: If the file exceeds max_size_mb
        """
        if not any(matches_type(uploaded, pattern) for pattern in self.accepted_types):
            logger.warning(f"Rejected {uploaded.name}: type {uploaded.mime_type!r}")
            raise InvalidFileType(
                uploaded.name,
                "Invalid file type. Please upload a supported file format "
                f"({', '.join(self.accepted_types)}).",
            )

        size_mb = uploaded.size / BYTES_PER_MB
        if size_mb > self.max_size_mb:
            logger.warning(f"Rejected {uploaded.name}: {size_mb:.1f}MB")
            raise FileTooLarge(
                uploaded.name,
                f"File size exceeds the limit of {self.max_size_mb:g}MB.",
            )

        logger.debug(f"Accepted {uploaded.name} ({uploaded.mime_type}, {uploaded.size} bytes)")
        return uploaded

    def is_valid(self, uploaded: UploadedFile) -> bool:
        """Return True if validate() would accept the file."""
        try:
            self.validate(uploaded)
        except (InvalidFileType, FileTooLarge):
            return False
        return True
