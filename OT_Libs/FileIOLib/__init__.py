"""
FileIOLib - Upload validation and source decoding

This module checks uploads against the accepted types and size ceiling
and decodes accepted images into SourceImage objects.
"""

from OT_Libs.FileIOLib.file_validator import (
    UploadedFile,
    FileValidator,
    matches_type,
    is_image_file,
    is_pdf_file,
)
from OT_Libs.FileIOLib.source_loader import SourceHandle, decode_source, open_source

__all__ = [
    "UploadedFile",
    "FileValidator",
    "matches_type",
    "is_image_file",
    "is_pdf_file",
    "SourceHandle",
    "decode_source",
    "open_source",
]
