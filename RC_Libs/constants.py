"""
Constants and configuration values for Redact Canvas.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Brush constants (diameter in buffer pixels)
BRUSH_MIN_SIZE = 5
BRUSH_MAX_SIZE = 100
BRUSH_SIZE_STEP = 5
DEFAULT_BRUSH_SIZE = 20

# Box blur half-width sampled around each brushed pixel.
# Independent of brush size: size controls footprint, not strength.
BRUSH_SAMPLE_WINDOW_RADIUS = 8

# Gaussian radius for the rectangular region blur
REGION_BLUR_RADIUS = 8

# Floating toolbar footprint (pixels)
TOOLBAR_WIDTH = 360
TOOLBAR_HEIGHT = 48
DEFAULT_TOOLBAR_X = 20
DEFAULT_TOOLBAR_Y = 20

# UI constants
DEFAULT_WINDOW_WIDTH = 1200
DEFAULT_WINDOW_HEIGHT = 800
TOAST_DURATION_MS = 2500
CANVAS_BACKGROUND_COLOR = "#f5f5f5"
CANVAS_HINT_TEXT = "No image pasted yet. Copy an image and press Ctrl+V, or open a file."
SELECTION_OUTLINE_COLOR = "#1e90ff"
BRUSH_OUTLINE_COLOR = "#ff0000"

# Pixel buffer layout
BUFFER_CHANNELS = 4
BUFFER_MODE = "RGBA"

# Export
DEFAULT_OUTPUT_FORMAT = "PNG"
EXPORT_MIME_TYPE = "image/png"
DEFAULT_EXPORT_FILENAME = "redacted.png"

# Ingest
IMAGE_MIME_PREFIX = "image/"
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
STANDARD_IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"
PNG_FILTER = "PNG Images (*.png)"

# Logging
LOG_LEVEL_ENV_VAR = "REDACT_CANVAS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
