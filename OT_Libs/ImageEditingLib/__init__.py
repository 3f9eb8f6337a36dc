"""
ImageEditingLib - Core image editing functionality

This module provides the edit state, parameter store, render engine and
export engine for a single image.
"""

from OT_Libs.ImageEditingLib.image_models import (
    SourceImage,
    EditState,
    RenderTarget,
    ExportArtifact,
)
from OT_Libs.ImageEditingLib.parameter_store import ParameterStore, round_half_up
from OT_Libs.ImageEditingLib.render_engine import (
    RENDER_DEPENDENCIES,
    apply_brightness,
    build_affine_coefficients,
    needs_render,
    render,
)
from OT_Libs.ImageEditingLib.export_engine import (
    ExportSettings,
    encode_render_target,
    export_render_target,
    suggest_file_name,
)

__all__ = [
    "SourceImage",
    "EditState",
    "RenderTarget",
    "ExportArtifact",
    "ParameterStore",
    "round_half_up",
    "RENDER_DEPENDENCIES",
    "apply_brightness",
    "build_affine_coefficients",
    "needs_render",
    "render",
    "ExportSettings",
    "encode_render_target",
    "export_render_target",
    "suggest_file_name",
]
