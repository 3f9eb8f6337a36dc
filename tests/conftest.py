"""
Pytest configuration and shared fixtures for Open Transform tests.

This module provides image and upload factories used across
multiple test modules.
"""

import io

import pytest
from PIL import Image

from OT_Libs.FileIOLib.file_validator import UploadedFile
from OT_Libs.ImageEditingLib.image_models import SourceImage


def encode_image(image, fmt="PNG") -> bytes:
    """Encode a PIL image into file bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_source():
    """
    Provide a factory for in-memory SourceImage objects.

    Returns:
        Callable (width, height, color, name, mime_type) -> SourceImage
    """
    def factory(width=40, height=20, color=(255, 0, 0, 255),
                name="photo.png", mime_type="image/png"):
        image = Image.new("RGBA", (width, height), color)
        return SourceImage(file_name=name, declared_format=mime_type, image=image)

    return factory


@pytest.fixture
def make_upload():
    """
    Provide a factory for UploadedFile objects holding real image bytes.

    Returns:
        Callable (width, height, color, name, mime_type, fmt) -> UploadedFile
    """
    def factory(width=40, height=20, color=(255, 0, 0, 255),
                name="photo.png", mime_type="image/png", fmt="PNG"):
        mode = "RGB" if fmt == "JPEG" else "RGBA"
        image = Image.new(mode, (width, height), color[:3] if mode == "RGB" else color)
        return UploadedFile(name=name, mime_type=mime_type, content=encode_image(image, fmt))

    return factory


@pytest.fixture
def pdf_upload():
    """Provide a minimal PDF upload (content is never parsed)."""
    return UploadedFile(
        name="report.pdf",
        mime_type="application/pdf",
        content=b"%PDF-1.4\n%%EOF\n",
    )
