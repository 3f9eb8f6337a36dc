"""
Export Engine for Open Transform.

Encodes a RenderTarget into file bytes. Lossy formats (JPEG, WebP) take the
output quality as a normalized 0-1 factor; PNG ignores quality and always
produces the same bytes for the same pixels.

Classes:
    ExportSettings: Format and quality for one export request

Functions:
    suggest_file_name: Derive '<stem>-edited.<format>' from a source name
    encode_render_target: Encode a RenderTarget to bytes
    export_render_target: Encode and wrap into an ExportArtifact
"""

import io
import logging
from dataclasses import dataclass
from typing import Any, Dict

from OT_Libs.constants import (
    EDITED_SUFFIX,
    FALLBACK_IMAGE_STEM,
    FORMAT_JPEG,
    JPEG_BACKGROUND,
    LOSSY_FORMATS,
    PIL_FORMAT_NAMES,
)
from OT_Libs.errors import EncodingFailure
from OT_Libs.pillow_compat import Image
from OT_Libs.ImageEditingLib.image_models import ExportArtifact, RenderTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportSettings:
    """Settings for one export.

    Attributes:
        output_format: 'jpeg', 'png' or 'webp'
        output_quality: 10-100; only used by lossy formats
    """
    output_format: str
    output_quality: float

    @property
    def is_lossy(self) -> bool:
        return self.output_format in LOSSY_FORMATS

    @property
    def quality_factor(self) -> float:
        """Quality normalized to 0.0-1.0."""
        return max(0.0, min(1.0, self.output_quality / 100.0))

    @property
    def mime_type(self) -> str:
        return f"image/{self.output_format}"

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs for this format."""
        try:
            kwargs: Dict[str, Any] = {"format": PIL_FORMAT_NAMES[self.output_format]}
        except KeyError:
            raise EncodingFailure(f"Unsupported output format: {self.output_format!r}")

        if self.is_lossy:
            # Pillow's encoders take quality on a 0-100 scale
            kwargs["quality"] = int(round(self.quality_factor * 100))
        return kwargs


def suggest_file_name(source_name: str, output_format: str,
                      fallback_stem: str = FALLBACK_IMAGE_STEM) -> str:
    """
    Build the suggested export name for a source file.

    Args:
        source_name: Original upload name, e.g. 'holiday.photo.png'
        output_format: Extension to use, e.g. 'jpeg'
        fallback_stem: Stem used when the name has nothing before its extension

    Returns:
        '<stem>-edited.<format>', e.g. 'holiday.photo-edited.jpeg'
    """
    stem = source_name.rsplit(".", 1)[0] if "." in source_name else source_name
    stem = stem.strip() or fallback_stem
    return f"{stem}{EDITED_SUFFIX}.{output_format}"


def _prepare_for_format(image: 'Image.Image', output_format: str) -> 'Image.Image':
    if output_format == FORMAT_JPEG and image.mode in ("RGBA", "LA", "P"):
        # JPEG has no alpha; transparent areas become the background color
        rgba = image.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, JPEG_BACKGROUND)
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        return flattened
    return image


def encode_render_target(target: RenderTarget, settings: ExportSettings) -> bytes:
    """
    Encode a render target into file bytes.

    Args:
        target: Rendered buffer to encode
        settings: Output format and quality

    Returns:
        The encoded bytes

    Raises:
        EncodingFailure: If the encoder fails or produces no data
    """
    kwargs = settings.get_save_kwargs()
    image = _prepare_for_format(target.image, settings.output_format)

    buffer = io.BytesIO()
    try:
        image.save(buffer, **kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise EncodingFailure(
            f"Failed to encode {target.width}x{target.height} image "
            f"as {settings.output_format}: {e}"
        ) from e

    data = buffer.getvalue()
    if not data:
        raise EncodingFailure(f"Encoder produced no data for {settings.output_format}")
    return data


def export_render_target(
    target: RenderTarget,
    settings: ExportSettings,
    source_name: str,
) -> ExportArtifact:
    """
    Encode a render target and name the result after its source.

    Args:
        target: Rendered buffer to encode
        settings: Output format and quality
        source_name: Name of the uploaded source file

    Returns:
        ExportArtifact with the bytes and suggested file name

    Raises:
        EncodingFailure: If encoding fails
    """
    data = encode_render_target(target, settings)
    artifact = ExportArtifact(
        data=data,
        file_name=suggest_file_name(source_name, settings.output_format),
        output_format=settings.output_format,
        mime_type=settings.mime_type,
    )
    logger.info(f"Exported {artifact.file_name} ({artifact.size} bytes)")
    return artifact
