"""
Source image loading for Open Transform.

Decodes a validated upload into an immutable SourceImage and ties the
resources of that load to a SourceHandle, which releases them exactly once.

Classes:
    SourceHandle: Scoped owner of one decoded source

Functions:
    decode_source: Decode upload bytes into a SourceImage
    open_source: Decode and wrap in a SourceHandle
"""

import io
import logging
from typing import Optional

from OT_Libs.constants import BUFFER_MODE
from OT_Libs.errors import DecodeFailure
from OT_Libs.pillow_compat import DecompressionBombError, Image
from OT_Libs.FileIOLib.file_validator import UploadedFile
from OT_Libs.ImageEditingLib.image_models import SourceImage

logger = logging.getLogger(__name__)


def decode_source(uploaded: UploadedFile) -> SourceImage:
    """
    Decode an uploaded image into an RGBA SourceImage.

    Args:
        uploaded: A file that already passed validation

    Returns:
        SourceImage holding a fully loaded RGBA copy of the pixels

    Raises:
        DecodeFailure: If the bytes are not a decodable, non-empty image
    """
    try:
        with Image.open(io.BytesIO(uploaded.content)) as img:
            img.load()
            decoded = img.convert(BUFFER_MODE) if img.mode != BUFFER_MODE else img.copy()
    except (OSError, ValueError, SyntaxError, DecompressionBombError) as e:
        raise DecodeFailure(f"Failed to decode image {uploaded.name}: {e}") from e

    if decoded.width <= 0 or decoded.height <= 0:
        decoded.close()
        raise DecodeFailure(f"Image {uploaded.name} has no pixels")

    logger.debug(f"Decoded {uploaded.name}: {decoded.width}x{decoded.height}")
    return SourceImage(
        file_name=uploaded.name,
        declared_format=uploaded.mime_type,
        image=decoded,
    )


class SourceHandle:
    """
    Owns the resources of one loaded source file.

    The handle keeps the upload bytes (the preview resource) and the decoded
    image. release() frees both and is safe to call any number of times; only
    the first call does anything. Use as a context manager to release on
    every exit path.

    Example:
        >>> with open_source(uploaded) as handle:
        ...     store = ParameterStore(handle.source)
    """

    def __init__(self, uploaded: UploadedFile, source: SourceImage):
        self.uploaded = uploaded
        self._source: Optional[SourceImage] = source
        self._preview: Optional[io.BytesIO] = io.BytesIO(uploaded.content)
        self.release_count = 0

    @property
    def released(self) -> bool:
        return self._source is None

    @property
    def source(self) -> SourceImage:
        if self._source is None:
            raise RuntimeError(f"Source {self.uploaded.name} has been released")
        return self._source

    @property
    def preview(self) -> io.BytesIO:
        """In-memory view of the original bytes, for showing the original."""
        if self._preview is None:
            raise RuntimeError(f"Source {self.uploaded.name} has been released")
        return self._preview

    def release(self) -> bool:
        """Free the decoded image and preview buffer. Returns True the first time."""
        if self._source is None:
            return False

        self._source.image.close()
        self._preview.close()
        self._source = None
        self._preview = None
        self.release_count += 1
        logger.debug(f"Released source {self.uploaded.name}")
        return True

    def __enter__(self) -> "SourceHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def open_source(uploaded: UploadedFile) -> SourceHandle:
    """Decode an upload and return a handle that owns the result."""
    return SourceHandle(uploaded, decode_source(uploaded))
