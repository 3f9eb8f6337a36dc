"""
Parameter Store for the image editor.

Holds the EditState for one SourceImage and exposes validated setters. Every
setter either commits a valid value or leaves the state untouched, so the
store can never hold a zero or negative target size, an out-of-range
percentage, or an unknown output format.

Setters return True when they changed the state. Subscribers registered with
subscribe() are called after each committed change with the set of field
names that changed.

Classes:
    ParameterStore: Validated, observable holder of an EditState

Functions:
    round_half_up: Round to the nearest integer, halves away from zero
    normalize_output_format: Map a user-supplied format name to a known one
"""

import logging
import math
from numbers import Real
from typing import Any, Callable, FrozenSet, List, Optional

from OT_Libs.constants import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_ROTATION,
    DEFAULT_SCALE,
    FORMAT_ALIASES,
    FULL_TURN_DEGREES,
    OUTPUT_FORMATS,
)
from OT_Libs.editor_config import EditorConfig
from OT_Libs.ImageEditingLib.image_models import EditState, SourceImage

logger = logging.getLogger(__name__)

ChangeListener = Callable[[FrozenSet[str]], None]


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, .5 rounding up."""
    return int(math.floor(value + 0.5))


def normalize_output_format(fmt: Any, allowed=None) -> Optional[str]:
    """
    Map a user-supplied format name onto a known output format.

    Args:
        fmt: Format name such as 'png', 'JPEG' or 'jpg'
        allowed: Iterable of accepted formats (default: all output formats)

    Returns:
        The canonical lower-case format, or None if not accepted
    """
    if not isinstance(fmt, str):
        return None
    if allowed is None:
        allowed = OUTPUT_FORMATS
    name = fmt.strip().lower()
    name = FORMAT_ALIASES.get(name, name)
    return name if name in allowed else None


def _coerce_positive_int(value: Any) -> Optional[int]:
    # Accepts 600, 600.0 and "600"; rejects bools, fractions, zero and negatives
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if isinstance(value, Real):
        if isinstance(value, float) and not value.is_integer():
            return None
        value = int(value)
    else:
        return None
    return value if value > 0 else None


def _coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, Real) or math.isnan(value):
        return None
    return value


def _clamp(value: float, bounds) -> float:
    low, high = bounds
    return max(low, min(high, value))


class ParameterStore:
    """
    Validated holder of the EditState for one source image.

    Example:
        >>> store = ParameterStore(source)        # 1200x800 source
        >>> store.set_width(600)
        True
        >>> store.state.target_height
        400
        >>> store.rotate(-90)
        True
        >>> store.state.rotation_deg
        270
    """

    def __init__(self, source: SourceImage, config: Optional[EditorConfig] = None):
        """Create a store with defaults derived from the source image."""
        self.source = source
        self.config = config or EditorConfig()
        self._listeners: List[ChangeListener] = []
        self._state = self.default_state()

    @property
    def state(self) -> EditState:
        """The live EditState. Treat as read-only; mutate through setters."""
        return self._state

    def default_state(self) -> EditState:
        """Build the source-derived default EditState."""
        output_format = normalize_output_format(
            self.source.format_subtype, self.config.output_formats
        )
        if output_format is None:
            output_format = (
                DEFAULT_OUTPUT_FORMAT
                if DEFAULT_OUTPUT_FORMAT in self.config.output_formats
                else self.config.output_formats[0]
            )
        return EditState(
            target_width=self.source.width,
            target_height=self.source.height,
            rotation_deg=DEFAULT_ROTATION,
            scale_percent=DEFAULT_SCALE,
            brightness_percent=DEFAULT_BRIGHTNESS,
            output_format=output_format,
            output_quality=self.config.default_quality,
        )

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        """Call listener with the changed field names after each change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> bool:
        """Remove a listener. Returns False if it was not subscribed."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def _commit(self, **changes: Any) -> bool:
        changed = frozenset(
            name for name, value in changes.items()
            if getattr(self._state, name) != value
        )
        if not changed:
            return False

        for name in changed:
            setattr(self._state, name, changes[name])
        logger.debug(f"Edit state changed: {sorted(changed)}")

        for listener in list(self._listeners):
            listener(changed)
        return True

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def set_width(self, px: Any) -> bool:
        """
        Set the target width and derive the height from the source ratio.

        Args:
            px: New width in pixels; ignored unless a positive integer

        Returns:
            True if the state changed
        """
        width = _coerce_positive_int(px)
        if width is None:
            logger.debug(f"Ignoring invalid width: {px!r}")
            return False

        height = round_half_up(width / self.source.aspect_ratio)
        if height <= 0:
            logger.debug(f"Ignoring width {width}: derived height would be {height}")
            return False

        return self._commit(target_width=width, target_height=height)

    def set_height(self, px: Any) -> bool:
        """
        Set the target height and derive the width from the source ratio.

        Args:
            px: New height in pixels; ignored unless a positive integer

        Returns:
            True if the state changed
        """
        height = _coerce_positive_int(px)
        if height is None:
            logger.debug(f"Ignoring invalid height: {px!r}")
            return False

        width = round_half_up(height * self.source.aspect_ratio)
        if width <= 0:
            logger.debug(f"Ignoring height {height}: derived width would be {width}")
            return False

        return self._commit(target_width=width, target_height=height)

    def rotate(self, delta_deg: int) -> bool:
        """Add delta_deg to the rotation, normalized into [0, 360)."""
        if isinstance(delta_deg, bool) or not isinstance(delta_deg, Real):
            logger.debug(f"Ignoring invalid rotation: {delta_deg!r}")
            return False
        rotation = (self._state.rotation_deg + int(delta_deg)) % FULL_TURN_DEGREES
        return self._commit(rotation_deg=rotation)

    def set_scale(self, percent: Any) -> bool:
        value = _coerce_number(percent)
        if value is None:
            return False
        return self._commit(scale_percent=_clamp(value, self.config.scale_bounds))

    # ------------------------------------------------------------------
    # Photometry and export
    # ------------------------------------------------------------------

    def set_brightness(self, percent: Any) -> bool:
        value = _coerce_number(percent)
        if value is None:
            return False
        return self._commit(
            brightness_percent=_clamp(value, self.config.brightness_bounds)
        )

    def set_quality(self, percent: Any) -> bool:
        value = _coerce_number(percent)
        if value is None:
            return False
        return self._commit(output_quality=_clamp(value, self.config.quality_bounds))

    def set_output_format(self, fmt: str) -> bool:
        """Select jpeg, png or webp. Any other value is ignored."""
        output_format = normalize_output_format(fmt, self.config.output_formats)
        if output_format is None:
            logger.warning(f"Ignoring unsupported output format: {fmt!r}")
            return False
        return self._commit(output_format=output_format)

    def reset(self) -> bool:
        """Restore every field to its source-derived default."""
        return self._commit(**self.default_state().to_dict())
