"""
Editor configuration for Open Transform.

Classes:
    EditorConfig: Upload limits and edit parameter bounds
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from OT_Libs.constants import (
    BRIGHTNESS_BOUNDS,
    BYTES_PER_MB,
    DEFAULT_ACCEPTED_TYPES,
    DEFAULT_MAX_SIZE_MB,
    DEFAULT_QUALITY,
    OUTPUT_FORMATS,
    QUALITY_BOUNDS,
    SCALE_BOUNDS,
)


@dataclass
class EditorConfig:
    """Configuration shared by the validator, parameter store and router.

    Attributes:
        accepted_types: MIME patterns accepted on upload ("image/*" style
                        wildcards, exact types, or "application/pdf")
        max_size_mb: Upload size ceiling in megabytes (default: 10)
        output_formats: Output formats offered for export
        quality_bounds: Inclusive (min, max) for output quality
        scale_bounds: Inclusive (min, max) for scale percent
        brightness_bounds: Inclusive (min, max) for brightness percent
        default_quality: Quality assigned to a freshly loaded image
    """
    accepted_types: Tuple[str, ...] = DEFAULT_ACCEPTED_TYPES
    max_size_mb: float = DEFAULT_MAX_SIZE_MB
    output_formats: Tuple[str, ...] = OUTPUT_FORMATS
    quality_bounds: Tuple[int, int] = QUALITY_BOUNDS
    scale_bounds: Tuple[int, int] = SCALE_BOUNDS
    brightness_bounds: Tuple[int, int] = BRIGHTNESS_BOUNDS
    default_quality: int = DEFAULT_QUALITY

    def __post_init__(self):
        """Validate configuration values."""
        self.accepted_types = tuple(self.accepted_types)
        self.output_formats = tuple(fmt.lower() for fmt in self.output_formats)

        if self.max_size_mb <= 0:
            raise ValueError(f"max_size_mb must be > 0, got {self.max_size_mb}")

        unknown = set(self.output_formats) - set(OUTPUT_FORMATS)
        if unknown or not self.output_formats:
            raise ValueError(
                f"output_formats must be a non-empty subset of {OUTPUT_FORMATS}, "
                f"got {self.output_formats}"
            )

        for name in ("quality_bounds", "scale_bounds", "brightness_bounds"):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} must be (min, max), got ({low}, {high})")
            setattr(self, name, (low, high))

        low, high = self.quality_bounds
        if not (low <= self.default_quality <= high):
            raise ValueError(
                f"default_quality must be within {self.quality_bounds}, "
                f"got {self.default_quality}"
            )

    @property
    def max_size_bytes(self) -> float:
        """Upload ceiling in bytes."""
        return self.max_size_mb * BYTES_PER_MB

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for key in ("accepted_types", "output_formats", "quality_bounds",
                    "scale_bounds", "brightness_bounds"):
            if key in filtered:
                filtered[key] = tuple(filtered[key])
        return cls(**filtered)
