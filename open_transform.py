"""
Open Transform entry point.

With no arguments the PyQt5 editor window is opened. With an input file the
edits given on the command line are applied and the export is written to the
output directory:

    python open_transform.py photo.png --width 600 --rotate 90 --format webp
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from OT_Libs.editor_config import EditorConfig
from OT_Libs.errors import OpenTransformError
from OT_Libs.FileIOLib.file_validator import UploadedFile
from OT_Libs.SessionLib.app_router import AppRouter

logger = logging.getLogger("open_transform")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resize, rotate, scale, brighten and re-encode one image."
    )
    parser.add_argument("input", nargs="?", type=Path, help="Image or PDF to edit")
    size = parser.add_mutually_exclusive_group()
    size.add_argument("--width", type=int, help="Target width; height follows the aspect ratio")
    size.add_argument("--height", type=int, help="Target height; width follows the aspect ratio")
    parser.add_argument("--rotate", type=int, action="append", default=[],
                        metavar="DEG", help="Rotate clockwise by DEG (repeatable)")
    parser.add_argument("--scale", type=float, help="Scale percent (10-200)")
    parser.add_argument("--brightness", type=float, help="Brightness percent (0-200)")
    parser.add_argument("--format", dest="output_format", help="jpeg, png or webp")
    parser.add_argument("--quality", type=float, help="Lossy quality percent (10-100)")
    parser.add_argument("--max-size-mb", type=float, default=EditorConfig.max_size_mb,
                        help="Upload size ceiling in MB")
    parser.add_argument("--output-dir", type=Path, default=Path("."),
                        help="Directory for the exported file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_cli(args: argparse.Namespace) -> int:
    config = EditorConfig(max_size_mb=args.max_size_mb)
    router = AppRouter(config)

    try:
        uploaded = UploadedFile.from_path(args.input)
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    if not router.select_file(uploaded) or not router.open_editor():
        logger.error(f"Cannot edit {uploaded.name}: {router.last_error or 'unsupported file'}")
        return 1

    try:
        session = router.image_session
        if session is not None:
            store = session.store
            if args.width is not None:
                store.set_width(args.width)
            if args.height is not None:
                store.set_height(args.height)
            for degrees in args.rotate:
                store.rotate(degrees)
            if args.scale is not None:
                store.set_scale(args.scale)
            if args.brightness is not None:
                store.set_brightness(args.brightness)
            if args.output_format is not None and not store.set_output_format(args.output_format):
                logger.error(f"Unsupported output format: {args.output_format}")
                return 1
            if args.quality is not None:
                store.set_quality(args.quality)
            logger.debug(f"Edit state: {store.state.to_dict()}")

        artifact = router.session.export()
        output_path = artifact.save_to(args.output_dir)
    except (OpenTransformError, OSError) as e:
        logger.error(f"Export failed: {e}")
        return 1
    finally:
        router.go_back()

    print(output_path)
    return 0


def run_gui() -> int:
    from PyQt5.QtWidgets import QApplication

    from OT_Libs.SessionLib.editor_window import OpenTransformEditorWindow

    app = QApplication(sys.argv)
    window = OpenTransformEditorWindow()
    window.show()
    return app.exec_()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.input is None:
        return run_gui()
    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
