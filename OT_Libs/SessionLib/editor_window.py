from pathlib import Path
from typing import Any, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPixmap
from PyQt5.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from OT_Libs.editor_config import EditorConfig
from OT_Libs.errors import EncodingFailure
from OT_Libs.FileIOLib.file_validator import UploadedFile
from OT_Libs.SessionLib.app_router import AppRouter, AppState

# QSpinBox holds a signed 32-bit int
SPIN_MAX = 2 ** 31 - 1


class OpenTransformEditorWindow(QMainWindow):
    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.setWindowTitle("Open Transform")
        self.resize(1200, 800)

        self.router = AppRouter(config)
        self._syncing = False

        self._build_ui()
        self._connect_signals()
        self._refresh_controls()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()

        config = self.router.config

        self.btn_open = QPushButton("Open File")
        self.btn_back = QPushButton("Back")
        self.label_file = QLabel("No file loaded")

        self.spin_width = QSpinBox()
        self.spin_height = QSpinBox()
        for spin in (self.spin_width, self.spin_height):
            spin.setRange(1, SPIN_MAX)

        self.slider_brightness = self._make_slider(config.brightness_bounds)
        self.slider_scale = self._make_slider(config.scale_bounds)
        self.slider_quality = self._make_slider(config.quality_bounds)
        self.label_brightness = QLabel()
        self.label_scale = QLabel()
        self.label_quality = QLabel()

        self.btn_rotate_left = QPushButton("Rotate Left")
        self.btn_rotate_right = QPushButton("Rotate Right")

        self.combo_format = QComboBox()
        self.combo_format.addItems(config.output_formats)

        self.btn_reset = QPushButton("Reset")
        self.btn_download = QPushButton("Download")

        self.label_preview = QLabel("Open an image to start editing")
        self.label_preview.setAlignment(Qt.AlignCenter)
        self.label_preview.setMinimumSize(600, 600)
        self.label_preview.setStyleSheet("border: 1px solid #888;")

        controls_col.addWidget(self.btn_open)
        controls_col.addWidget(self.label_file)
        controls_col.addWidget(QLabel("Width (px)"))
        controls_col.addWidget(self.spin_width)
        controls_col.addWidget(QLabel("Height (px)"))
        controls_col.addWidget(self.spin_height)
        controls_col.addWidget(self.label_brightness)
        controls_col.addWidget(self.slider_brightness)
        controls_col.addWidget(self.label_scale)
        controls_col.addWidget(self.slider_scale)
        controls_col.addWidget(self.btn_rotate_left)
        controls_col.addWidget(self.btn_rotate_right)
        controls_col.addWidget(self.label_quality)
        controls_col.addWidget(self.slider_quality)
        controls_col.addWidget(QLabel("Output Format"))
        controls_col.addWidget(self.combo_format)
        controls_col.addStretch(1)
        controls_col.addWidget(self.btn_reset)
        controls_col.addWidget(self.btn_download)
        controls_col.addWidget(self.btn_back)

        root.addLayout(controls_col, stretch=1)
        root.addWidget(self.label_preview, stretch=3)

    def _make_slider(self, bounds) -> QSlider:
        slider = QSlider(Qt.Horizontal)
        slider.setRange(int(bounds[0]), int(bounds[1]))
        return slider

    def _connect_signals(self) -> None:
        self.btn_open.clicked.connect(self.open_file)
        self.btn_back.clicked.connect(self.go_back)
        self.spin_width.valueChanged.connect(lambda v: self._edit("set_width", v))
        self.spin_height.valueChanged.connect(lambda v: self._edit("set_height", v))
        self.slider_brightness.valueChanged.connect(lambda v: self._edit("set_brightness", v))
        self.slider_scale.valueChanged.connect(lambda v: self._edit("set_scale", v))
        self.slider_quality.valueChanged.connect(lambda v: self._edit("set_quality", v))
        self.combo_format.currentTextChanged.connect(lambda v: self._edit("set_output_format", v))
        self.btn_rotate_left.clicked.connect(lambda: self._edit("rotate", -90))
        self.btn_rotate_right.clicked.connect(lambda: self._edit("rotate", 90))
        self.btn_reset.clicked.connect(self.reset)
        self.btn_download.clicked.connect(self.download)

    def open_file(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image or PDF",
            "",
            "Images and PDFs (*.png *.jpg *.jpeg *.webp *.bmp *.gif *.pdf)",
        )
        if not path_str:
            return

        try:
            uploaded = UploadedFile.from_path(Path(path_str))
        except OSError as e:
            QMessageBox.warning(self, "Upload Rejected", f"Cannot read file: {e}")
            return

        if not self.router.select_file(uploaded) or not self.router.open_editor():
            reason = getattr(self.router.last_error, "reason", None) or str(
                self.router.last_error or "Unsupported file."
            )
            QMessageBox.warning(self, "Upload Rejected", reason)

        self._refresh_controls()

    def go_back(self) -> None:
        self.router.go_back()
        self._refresh_controls()

    def reset(self) -> None:
        if self.router.pdf_session is not None:
            self.router.pdf_session.reset()
        elif self.router.image_session is not None:
            self.router.image_session.store.reset()
        self._refresh_controls()

    def _edit(self, setter: str, *args: Any) -> None:
        session = self.router.image_session
        if self._syncing or session is None:
            return
        getattr(session.store, setter)(*args)
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        session = self.router.image_session
        editing = self.router.state in (AppState.IMAGE_EDITING, AppState.PDF_EDITING)
        for widget in (self.btn_reset, self.btn_download, self.btn_back):
            widget.setEnabled(editing)
        for widget in (
            self.spin_width, self.spin_height, self.slider_brightness,
            self.slider_scale, self.slider_quality, self.combo_format,
            self.btn_rotate_left, self.btn_rotate_right,
        ):
            widget.setEnabled(session is not None)

        if self.router.pdf_session is not None:
            self.label_file.setText(f"Edit PDF: {self.router.pdf_session.uploaded.name}")
            self.label_preview.setText("PDF preview is not available")
            return
        if session is None:
            self.label_file.setText("No file loaded")
            self.label_preview.setText("Open an image to start editing")
            return

        state = session.state
        self._syncing = True
        try:
            self.spin_width.setValue(min(state.target_width, SPIN_MAX))
            self.spin_height.setValue(min(state.target_height, SPIN_MAX))
            self.slider_brightness.setValue(int(state.brightness_percent))
            self.slider_scale.setValue(int(state.scale_percent))
            self.slider_quality.setValue(int(state.output_quality))
            self.combo_format.setCurrentText(state.output_format)
        finally:
            self._syncing = False

        self.label_file.setText(f"Edit Image: {session.source.file_name}")
        self.label_brightness.setText(f"Brightness: {state.brightness_percent:g}%")
        self.label_scale.setText(f"Scale: {state.scale_percent:g}%")
        self.label_quality.setText(f"Quality: {state.output_quality:g}%")
        self._set_preview(session.render_target.image)

    def download(self) -> None:
        session = self.router.session
        if session is None:
            return

        folder = QFileDialog.getExistingDirectory(self, "Select Save Directory")
        if not folder:
            return

        try:
            saved_path = session.export().save_to(Path(folder))
        except (EncodingFailure, OSError) as e:
            QMessageBox.warning(self, "Export Failed", f"Failed to generate file: {e}")
            return

        QMessageBox.information(self, "Success", f"Saved {saved_path.name}")

    def _set_preview(self, image: Any) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(self._to_png_bytes(image), "PNG"):
            self.label_preview.setText("Preview failed")
            return

        scaled = pixmap.scaled(
            self.label_preview.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.label_preview.setPixmap(scaled)

    def _to_png_bytes(self, image: Any) -> bytes:
        from io import BytesIO

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
