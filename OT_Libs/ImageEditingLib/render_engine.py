"""
Render Engine for Open Transform.

Produces a RenderTarget from a SourceImage and an EditState. The output buffer
is always exactly target_width x target_height and is rebuilt from scratch on
every call.

Rendering order:
    1. Allocate a transparent RGBA buffer of the target size
    2. Put the origin at the buffer center
    3. Rotate clockwise by rotation_deg
    4. Scale uniformly by scale_percent / 100
    5. Offset by half the source size so the source center lands on the origin
    6. Multiply color channels by brightness_percent / 100
    7. Composite the transformed source into the buffer

Steps 2-5 form one affine matrix; the source is resampled exactly once.

Functions:
    build_affine_coefficients: Inverse affine mapping buffer -> source pixels
    apply_brightness: Color-multiply filter on an RGBA image
    render: Compose a RenderTarget from SourceImage + EditState
    needs_render: Whether a set of changed fields invalidates the render

Constants:
    RENDER_DEPENDENCIES: EditState fields whose change invalidates the render
"""

import logging
import math
from typing import Iterable, Tuple

import numpy as np

from OT_Libs.constants import BUFFER_MODE, CLEAR_COLOR
from OT_Libs.pillow_compat import AFFINE, BILINEAR, Image
from OT_Libs.ImageEditingLib.image_models import EditState, RenderTarget, SourceImage

logger = logging.getLogger(__name__)

RENDER_DEPENDENCIES = frozenset({
    "target_width",
    "target_height",
    "rotation_deg",
    "scale_percent",
    "brightness_percent",
})

AffineCoefficients = Tuple[float, float, float, float, float, float]


def needs_render(changed_fields: Iterable[str]) -> bool:
    """Return True if any changed field affects the rendered pixels."""
    return not RENDER_DEPENDENCIES.isdisjoint(changed_fields)


def _rotation_terms(rotation_deg: float) -> Tuple[float, float]:
    # Quarter turns are exact so 90/180/270 do not smear edge pixels
    if rotation_deg % 90 == 0:
        quarter = int(rotation_deg // 90) % 4
        return ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0))[quarter]
    radians = math.radians(rotation_deg)
    return math.cos(radians), math.sin(radians)


def build_affine_coefficients(
    source_size: Tuple[int, int],
    target_size: Tuple[int, int],
    rotation_deg: float,
    scale: float,
) -> AffineCoefficients:
    """
    Build Pillow AFFINE coefficients for the composed transform.

    The forward transform maps a source point p to buffer point
    T(target_center) . R(rotation) . S(scale) . T(-source_center) . p, with
    R clockwise-positive in y-down screen coordinates. Pillow samples by
    mapping each buffer pixel back into the source, so this returns the
    inverse transform.

    Args:
        source_size: (width, height) of the source image
        target_size: (width, height) of the output buffer
        rotation_deg: Clockwise rotation in degrees
        scale: Uniform scale factor (1.0 = unchanged)

    Returns:
        (a, b, c, d, e, f) such that source = (a*x + b*y + c, d*x + e*y + f)

    Raises:
        ValueError: If scale is not positive
    """
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale}")

    cos_t, sin_t = _rotation_terms(rotation_deg)
    src_cx, src_cy = source_size[0] / 2.0, source_size[1] / 2.0
    dst_cx, dst_cy = target_size[0] / 2.0, target_size[1] / 2.0

    a = cos_t / scale
    b = sin_t / scale
    d = -sin_t / scale
    e = cos_t / scale
    c = src_cx - (a * dst_cx + b * dst_cy)
    f = src_cy - (d * dst_cx + e * dst_cy)
    return a, b, c, d, e, f


def apply_brightness(image: 'Image.Image', brightness_percent: float) -> 'Image.Image':
    """
    Multiply the RGB channels of an RGBA image by brightness_percent / 100.

    Values are clamped to the 0-255 channel range; alpha is left unchanged.

    Args:
        image: PIL Image in RGBA mode
        brightness_percent: 100 leaves the image unchanged

    Returns:
        A new PIL Image (or the input itself when brightness is 100)
    """
    if brightness_percent == 100:
        return image

    factor = brightness_percent / 100.0
    pixels = np.asarray(image, dtype=np.float32)
    rgb = np.clip(np.rint(pixels[..., :3] * factor), 0, 255)
    out = np.empty(pixels.shape, dtype=np.uint8)
    out[..., :3] = rgb.astype(np.uint8)
    out[..., 3] = pixels[..., 3].astype(np.uint8)
    return Image.fromarray(out)


def render(source: SourceImage, state: EditState) -> RenderTarget:
    """
    Render the source image through the edit state into a new buffer.

    Args:
        source: Decoded source image
        state: Current edit parameters (target size must be positive)

    Returns:
        RenderTarget of exactly (state.target_width, state.target_height)

    Raises:
        ValueError: If the target size is not positive
    """
    target_size = (int(state.target_width), int(state.target_height))
    if target_size[0] <= 0 or target_size[1] <= 0:
        raise ValueError(f"Target size must be positive, got {target_size}")

    buffer = Image.new(BUFFER_MODE, target_size, CLEAR_COLOR)

    coefficients = build_affine_coefficients(
        source.size,
        target_size,
        state.rotation_deg,
        state.scale_percent / 100.0,
    )
    layer = source.image
    if layer.mode != BUFFER_MODE:
        layer = layer.convert(BUFFER_MODE)

    layer = layer.transform(
        target_size,
        AFFINE,
        coefficients,
        resample=BILINEAR,
        fillcolor=CLEAR_COLOR,
    )
    layer = apply_brightness(layer, state.brightness_percent)

    buffer.alpha_composite(layer)

    logger.debug(
        f"Rendered {source.file_name} at {target_size[0]}x{target_size[1]} "
        f"(rotation={state.rotation_deg}, scale={state.scale_percent}%, "
        f"brightness={state.brightness_percent}%)"
    )
    return RenderTarget(image=buffer)
