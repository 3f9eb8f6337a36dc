"""
Unit tests for the file_validator module.

Tests MIME pattern matching, the size ceiling, and UploadedFile helpers.
"""

import pytest

from OT_Libs.errors import FileTooLarge, FileValidationError, InvalidFileType
from OT_Libs.FileIOLib.file_validator import (
    FileValidator,
    UploadedFile,
    is_image_file,
    is_pdf_file,
    matches_type,
)

MB = 1024 * 1024


def upload(name="photo.png", mime_type="image/png", size=1024):
    return UploadedFile(name=name, mime_type=mime_type, content=b"", size=size)


class TestMatchesType:
    """Tests for matches_type."""

    def test_wildcard_prefix(self):
        assert matches_type(upload(mime_type="image/webp"), "image/*")
        assert not matches_type(upload(mime_type="application/pdf"), "image/*")

    def test_exact_match(self):
        assert matches_type(upload(mime_type="image/png"), "image/png")
        assert not matches_type(upload(mime_type="image/jpeg"), "image/png")

    def test_pdf_by_mime_or_extension(self):
        assert matches_type(upload("a.bin", "application/pdf"), "application/pdf")
        assert matches_type(upload("report.PDF", ""), "application/pdf")
        assert not matches_type(upload("report.txt", "text/plain"), "application/pdf")

    def test_helpers(self):
        assert is_image_file(upload(mime_type="image/gif"))
        assert not is_image_file(upload("a.pdf", "application/pdf"))
        assert is_pdf_file(upload("a.pdf", ""))


class TestFileValidator:
    """Tests for FileValidator."""

    def test_defaults(self):
        validator = FileValidator()
        assert validator.accepted_types == ("image/*", "application/pdf")
        assert validator.max_size_mb == 10

    def test_accepts_valid_image(self):
        uploaded = upload()
        assert FileValidator().validate(uploaded) is uploaded

    def test_file_too_large(self):
        """A 12MB file against the default 10MB ceiling is rejected."""
        with pytest.raises(FileTooLarge) as exc_info:
            FileValidator().validate(upload(size=12 * MB))
        assert "10MB" in exc_info.value.reason

    def test_exactly_at_ceiling_is_accepted(self):
        FileValidator().validate(upload(size=10 * MB))

    def test_pdf_rejected_for_image_only_list(self):
        """application/pdf against ['image/*'] is an invalid type."""
        validator = FileValidator(accepted_types=["image/*"])
        with pytest.raises(InvalidFileType):
            validator.validate(upload("doc.pdf", "application/pdf"))

    def test_type_checked_before_size(self):
        validator = FileValidator(accepted_types=["image/*"])
        with pytest.raises(InvalidFileType):
            validator.validate(upload("doc.pdf", "application/pdf", size=50 * MB))

    def test_custom_ceiling(self):
        validator = FileValidator(max_size_mb=1)
        with pytest.raises(FileTooLarge):
            validator.validate(upload(size=2 * MB))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            FileValidator(accepted_types=["image/png"]).validate(upload(mime_type="image/gif"))

    def test_error_carries_file_name(self):
        with pytest.raises(FileValidationError) as exc_info:
            FileValidator(accepted_types=["image/*"]).validate(upload("x.pdf", "application/pdf"))
        assert exc_info.value.file_name == "x.pdf"

    def test_is_valid(self):
        validator = FileValidator()
        assert validator.is_valid(upload())
        assert not validator.is_valid(upload(size=11 * MB))

    def test_rejects_bad_ceiling(self):
        with pytest.raises(ValueError):
            FileValidator(max_size_mb=0)


class TestUploadedFile:
    """Tests for UploadedFile."""

    def test_size_defaults_to_content_length(self):
        assert UploadedFile("a.png", "image/png", b"12345").size == 5

    def test_extension(self):
        assert UploadedFile("Report.Final.PDF", "", b"").extension == ".pdf"

    def test_from_path_guesses_type(self, tmp_path):
        path = tmp_path / "picture.png"
        path.write_bytes(b"not really a png")

        uploaded = UploadedFile.from_path(path)

        assert uploaded.name == "picture.png"
        assert uploaded.mime_type == "image/png"
        assert uploaded.content == b"not really a png"
        assert uploaded.size == 16

    def test_from_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UploadedFile.from_path(tmp_path / "missing.png")
