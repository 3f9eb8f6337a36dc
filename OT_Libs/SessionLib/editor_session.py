"""
Image editor session for Open Transform.

Binds one loaded source image to its ParameterStore and keeps the RenderTarget
current: the render is rebuilt after every committed change that touches a
field in RENDER_DEPENDENCIES, and left alone for format or quality changes.
Exports are produced only when export() is called.

Classes:
    EditorSession: One image being edited, from load to close
"""

import logging
from typing import FrozenSet, Optional

from OT_Libs.editor_config import EditorConfig
from OT_Libs.FileIOLib.file_validator import FileValidator, UploadedFile
from OT_Libs.FileIOLib.source_loader import SourceHandle, open_source
from OT_Libs.ImageEditingLib.export_engine import ExportSettings, export_render_target
from OT_Libs.ImageEditingLib.image_models import (
    EditState,
    ExportArtifact,
    RenderTarget,
    SourceImage,
)
from OT_Libs.ImageEditingLib.parameter_store import ParameterStore
from OT_Libs.ImageEditingLib.render_engine import needs_render, render

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Editing session for a single image file.

    The session validates and decodes the upload, then exposes the parameter
    store as `store`. Closing the session (or leaving its `with` block)
    releases the source exactly once.

    Example:
        >>> with EditorSession(uploaded) as session:
        ...     session.store.set_width(600)
        ...     session.store.rotate(90)
        ...     artifact = session.export()

    Raises on construction:
        InvalidFileType / FileTooLarge: If the upload fails validation
        DecodeFailure: If the upload cannot be decoded
    """

    def __init__(self, uploaded: UploadedFile, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.validator = FileValidator(config=self.config)
        self._handle: Optional[SourceHandle] = None
        self._store: Optional[ParameterStore] = None
        self._target: Optional[RenderTarget] = None
        self.render_count = 0
        self.load(uploaded)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, uploaded: UploadedFile) -> None:
        """
        Replace the current source with a new upload.

        The new file is validated and decoded before the old one is released,
        so a failed load leaves the previous session state intact.
        """
        self.validator.validate(uploaded)
        handle = open_source(uploaded)

        self._release_current()
        self._handle = handle
        self._store = ParameterStore(handle.source, self.config)
        self._store.subscribe(self._on_state_changed)
        self._rerender()
        logger.info(f"Loaded {uploaded.name} ({handle.source.width}x{handle.source.height})")

    def close(self) -> None:
        """Release the loaded source. Safe to call more than once."""
        self._release_current()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _release_current(self) -> None:
        if self._store is not None:
            self._store.unsubscribe(self._on_state_changed)
        if self._handle is not None:
            self._handle.release()
        self._handle = None
        self._store = None
        self._target = None

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if self._handle is None:
            raise RuntimeError("Editor session is closed")

    @property
    def handle(self) -> SourceHandle:
        self._require_open()
        return self._handle

    @property
    def source(self) -> SourceImage:
        return self.handle.source

    @property
    def store(self) -> ParameterStore:
        self._require_open()
        return self._store

    @property
    def state(self) -> EditState:
        return self.store.state

    @property
    def render_target(self) -> RenderTarget:
        """The current rendered buffer, always in sync with the edit state."""
        self._require_open()
        return self._target

    # ------------------------------------------------------------------
    # Rendering and export
    # ------------------------------------------------------------------

    def _on_state_changed(self, changed: FrozenSet[str]) -> None:
        if needs_render(changed):
            self._rerender()

    def _rerender(self) -> None:
        self._target = render(self._handle.source, self._store.state)
        self.render_count += 1

    def export(self) -> ExportArtifact:
        """
        Encode the current render target with the current format and quality.

        Raises:
            EncodingFailure: If encoding fails; the session stays usable
        """
        self._require_open()
        state = self._store.state
        settings = ExportSettings(
            output_format=state.output_format,
            output_quality=state.output_quality,
        )
        return export_render_target(self._target, settings, self.source.file_name)
