"""
Image editing data models for Open Transform.

This module defines core data structures used throughout the image editing system.

Classes:
    SourceImage: Immutable decoded source image and its origin
    EditState: Current user-adjustable transform and export parameters
    RenderTarget: Pixel buffer produced from a SourceImage and an EditState
    ExportArtifact: Encoded output bytes plus suggested file name
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

from OT_Libs.pillow_compat import Image


@dataclass(frozen=True)
class SourceImage:
    """A decoded source image. Never modified after loading.

    Attributes:
        file_name: Name of the uploaded file
        declared_format: MIME type declared by the upload (e.g. 'image/png')
        image: Decoded Pillow image in RGBA mode
    """
    file_name: str
    declared_format: str
    image: 'Image.Image'

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def aspect_ratio(self) -> float:
        """Natural width divided by natural height."""
        return self.width / self.height

    @property
    def format_subtype(self) -> str:
        """MIME subtype of the declared format ('png' for 'image/png')."""
        _, _, subtype = self.declared_format.partition("/")
        return subtype.lower()


@dataclass
class EditState:
    """Mutable edit parameters. Only the ParameterStore should assign fields."""
    target_width: int
    target_height: int
    rotation_deg: int
    scale_percent: float
    brightness_percent: float
    output_format: str
    output_quality: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class RenderTarget:
    """A rendered RGBA buffer sized exactly to the target dimensions."""
    image: 'Image.Image'

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size


@dataclass(frozen=True)
class ExportArtifact:
    """Encoded output of an export request.

    Attributes:
        data: Encoded file bytes
        file_name: Suggested name, '<stem>-edited.<format>'
        output_format: Format the bytes are encoded in
        mime_type: MIME type matching output_format
    """
    data: bytes
    file_name: str
    output_format: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def save_to(self, directory: Path) -> Path:
        """
        Write the artifact into a directory under its suggested name.

        Args:
            directory: Existing directory to write into

        Returns:
            Path of the written file

        Raises:
            OSError: If directory is missing or the file cannot be written
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise OSError(f"Output directory does not exist: {directory}")

        output_path = directory / self.file_name
        output_path.write_bytes(self.data)
        return output_path
