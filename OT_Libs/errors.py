"""
Error types for Open Transform.

Every failure the editing pipeline can report derives from
OpenTransformError and also from the builtin exception a caller would
naturally expect (ValueError for rejected uploads, OSError for I/O-like
decode and encode failures).

Classes:
    OpenTransformError: Base class for all pipeline errors
    FileValidationError: Upload rejected before any processing
    InvalidFileType: Upload MIME type not in the allow-list
    FileTooLarge: Upload exceeds the configured size ceiling
    DecodeFailure: Source bytes could not be decoded into an image
    EncodingFailure: Render target could not be encoded for export
"""


class OpenTransformError(Exception):
    """Base class for Open Transform errors."""


class FileValidationError(OpenTransformError, ValueError):
    """An uploaded file was rejected by the validator.

    Attributes:
        file_name: Name of the rejected file
        reason: Human-readable rejection notice
    """

    def __init__(self, file_name: str, reason: str):
        super().__init__(f"{file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class InvalidFileType(FileValidationError):
    """The file's MIME type does not match any accepted pattern."""


class FileTooLarge(FileValidationError):
    """The file is larger than the configured megabyte ceiling."""


class DecodeFailure(OpenTransformError, IOError):
    """The source file could not be decoded into an image."""


class EncodingFailure(OpenTransformError, OSError):
    """The render target could not be encoded in the requested format."""
