"""
PDF editor placeholder for Open Transform.

Holds the page settings a PDF editing view would offer (page size in points,
scale, compression, output format) without transforming the document. Export
hands back the original bytes under an edited name.

Classes:
    PdfEditState: Placeholder PDF settings
    PdfEditSession: One PDF file with its settings
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from OT_Libs.constants import (
    FALLBACK_PDF_STEM,
    PDF_DEFAULT_COMPRESSION,
    PDF_DEFAULT_HEIGHT,
    PDF_DEFAULT_SCALE,
    PDF_DEFAULT_WIDTH,
    PDF_MIME_TYPE,
    PDF_OUTPUT_FORMAT,
)
from OT_Libs.editor_config import EditorConfig
from OT_Libs.FileIOLib.file_validator import FileValidator, UploadedFile
from OT_Libs.ImageEditingLib.export_engine import suggest_file_name
from OT_Libs.ImageEditingLib.image_models import ExportArtifact

logger = logging.getLogger(__name__)


@dataclass
class PdfEditState:
    """Placeholder PDF settings (A4 page by default)."""
    page_width: int = PDF_DEFAULT_WIDTH
    page_height: int = PDF_DEFAULT_HEIGHT
    scale_percent: int = PDF_DEFAULT_SCALE
    compression_level: int = PDF_DEFAULT_COMPRESSION
    output_format: str = PDF_OUTPUT_FORMAT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


class PdfEditSession:
    """A PDF file held for the placeholder editor."""

    def __init__(self, uploaded: UploadedFile, config: Optional[EditorConfig] = None):
        FileValidator(config=config).validate(uploaded)
        self.uploaded = uploaded
        self.state = PdfEditState()

    def set_page_width(self, points: int) -> bool:
        """Set page width; ignored unless a positive integer. No aspect lock."""
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            return False
        self.state.page_width = points
        return True

    def set_page_height(self, points: int) -> bool:
        """Set page height; ignored unless a positive integer. No aspect lock."""
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            return False
        self.state.page_height = points
        return True

    def reset(self) -> None:
        self.state = PdfEditState()

    def export(self) -> ExportArtifact:
        """Return the original document unchanged under '<stem>-edited.pdf'."""
        artifact = ExportArtifact(
            data=self.uploaded.content,
            file_name=suggest_file_name(
                self.uploaded.name, self.state.output_format, FALLBACK_PDF_STEM
            ),
            output_format=self.state.output_format,
            mime_type=PDF_MIME_TYPE,
        )
        logger.info(f"Exported {artifact.file_name} without changes")
        return artifact
