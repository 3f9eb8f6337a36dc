"""
View routing for Open Transform.

Tracks which view is active (landing, file selection, image editing, PDF
editing) and owns the session of the active editor. Every failure routes
back to the landing view with the active session closed, so no error leaves
the application in a half-loaded state.

Classes:
    AppState: The four views
    AppRouter: Routes uploads to the matching editor
"""

import logging
from enum import Enum
from typing import Optional, Union

from OT_Libs.editor_config import EditorConfig
from OT_Libs.errors import DecodeFailure, FileValidationError
from OT_Libs.FileIOLib.file_validator import (
    FileValidator,
    UploadedFile,
    is_image_file,
    is_pdf_file,
)
from OT_Libs.SessionLib.editor_session import EditorSession
from OT_Libs.SessionLib.pdf_editor import PdfEditSession

logger = logging.getLogger(__name__)


class AppState(Enum):
    LANDING = "landing"
    FILE_SELECTION = "file_selection"
    IMAGE_EDITING = "image_editing"
    PDF_EDITING = "pdf_editing"


class AppRouter:
    """
    Navigation state machine for a single uploaded file.

    Example:
        >>> router = AppRouter()
        >>> router.select_file(uploaded)
        True
        >>> router.open_image_editor()
        True
        >>> router.image_session.store.rotate(90)
        True
        >>> router.go_back()
    """

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.validator = FileValidator(config=self.config)
        self.state = AppState.LANDING
        self.selected_file: Optional[UploadedFile] = None
        self.session: Optional[Union[EditorSession, PdfEditSession]] = None
        self.last_error: Optional[Exception] = None

    @property
    def image_session(self) -> Optional[EditorSession]:
        return self.session if isinstance(self.session, EditorSession) else None

    @property
    def pdf_session(self) -> Optional[PdfEditSession]:
        return self.session if isinstance(self.session, PdfEditSession) else None

    def select_file(self, uploaded: UploadedFile) -> bool:
        """
        Accept an upload and move to file selection.

        Returns:
            True if the file was accepted; False if it was rejected, in which
            case the router stays on the landing view and last_error holds the
            rejection.
        """
        self._close_session()
        try:
            self.validator.validate(uploaded)
        except FileValidationError as e:
            logger.warning(f"Upload rejected: {e.reason}")
            self._to_landing(e)
            return False

        self.selected_file = uploaded
        self.last_error = None
        self.state = AppState.FILE_SELECTION
        logger.info(f"File uploaded successfully: {uploaded.name}")
        return True

    def open_image_editor(self) -> bool:
        """Open the selected file in the image editor, if it is an image."""
        if self.selected_file is None or not is_image_file(self.selected_file):
            logger.warning("Image editor needs an image file; returning to landing")
            self._to_landing()
            return False

        self._close_session()
        try:
            self.session = EditorSession(self.selected_file, self.config)
        except (FileValidationError, DecodeFailure) as e:
            logger.warning(f"Could not open {self.selected_file.name}: {e}")
            self._to_landing(e)
            return False

        self.state = AppState.IMAGE_EDITING
        return True

    def open_pdf_editor(self) -> bool:
        """Open the selected file in the PDF placeholder, if it is a PDF."""
        if self.selected_file is None or not is_pdf_file(self.selected_file):
            logger.warning("PDF editor needs a PDF file; returning to landing")
            self._to_landing()
            return False

        self._close_session()
        try:
            self.session = PdfEditSession(self.selected_file, self.config)
        except FileValidationError as e:
            logger.warning(f"Could not open {self.selected_file.name}: {e}")
            self._to_landing(e)
            return False

        self.state = AppState.PDF_EDITING
        return True

    def open_editor(self) -> bool:
        """Open whichever editor matches the selected file's type."""
        if self.selected_file is not None and is_image_file(self.selected_file):
            return self.open_image_editor()
        return self.open_pdf_editor()

    def go_back(self) -> None:
        """Leave any editor and return to the landing view."""
        self._to_landing()

    def _close_session(self) -> None:
        if isinstance(self.session, EditorSession):
            self.session.close()
        self.session = None

    def _to_landing(self, error: Optional[Exception] = None) -> None:
        self._close_session()
        self.selected_file = None
        self.last_error = error
        self.state = AppState.LANDING
