"""
SessionLib - Editing sessions and view routing

This module ties validation, decoding, rendering and export together
for one file at a time.
"""

from OT_Libs.SessionLib.editor_session import EditorSession
from OT_Libs.SessionLib.pdf_editor import PdfEditState, PdfEditSession
from OT_Libs.SessionLib.app_router import AppState, AppRouter

__all__ = [
    "EditorSession",
    "PdfEditState",
    "PdfEditSession",
    "AppState",
    "AppRouter",
]
