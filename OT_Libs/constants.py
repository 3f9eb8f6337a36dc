"""
Constants and configuration values for Open Transform.

This module centralizes all constant values, bounds, and
configuration defaults used throughout the application.
"""

# Upload validation
DEFAULT_ACCEPTED_TYPES = ("image/*", "application/pdf")
DEFAULT_MAX_SIZE_MB = 10
BYTES_PER_MB = 1024 * 1024
PDF_MIME_TYPE = "application/pdf"
PDF_EXTENSION = ".pdf"
IMAGE_MIME_PREFIX = "image/"

# Output formats
FORMAT_JPEG = "jpeg"
FORMAT_PNG = "png"
FORMAT_WEBP = "webp"
OUTPUT_FORMATS = (FORMAT_JPEG, FORMAT_PNG, FORMAT_WEBP)
LOSSY_FORMATS = {FORMAT_JPEG, FORMAT_WEBP}
DEFAULT_OUTPUT_FORMAT = FORMAT_JPEG
FORMAT_ALIASES = {"jpg": FORMAT_JPEG}

# Pillow encoder names for each output format
PIL_FORMAT_NAMES = {
    FORMAT_JPEG: "JPEG",
    FORMAT_PNG: "PNG",
    FORMAT_WEBP: "WEBP",
}

# Edit parameter bounds (inclusive)
QUALITY_BOUNDS = (10, 100)
SCALE_BOUNDS = (10, 200)
BRIGHTNESS_BOUNDS = (0, 200)

# Edit parameter defaults
DEFAULT_QUALITY = 90
DEFAULT_SCALE = 100
DEFAULT_BRIGHTNESS = 100
DEFAULT_ROTATION = 0
FULL_TURN_DEGREES = 360

# Rendering
BUFFER_MODE = "RGBA"
CLEAR_COLOR = (0, 0, 0, 0)
JPEG_BACKGROUND = (0, 0, 0)

# File naming
EDITED_SUFFIX = "-edited"
FALLBACK_IMAGE_STEM = "edited-image"
FALLBACK_PDF_STEM = "document"

# PDF placeholder defaults (A4 in points)
PDF_DEFAULT_WIDTH = 595
PDF_DEFAULT_HEIGHT = 842
PDF_DEFAULT_SCALE = 100
PDF_DEFAULT_COMPRESSION = 80
PDF_OUTPUT_FORMAT = "pdf"
