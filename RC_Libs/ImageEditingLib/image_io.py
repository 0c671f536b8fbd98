"""
Image ingest and export for Redact Canvas.

Ingest decodes pasted or uploaded image data into an RGBA pixel buffer at
the image's native size and captures the matching baseline snapshot.
Export serializes the live buffer to lossless PNG.

Functions:
    ingest: Decode image bytes into (buffer, baseline)
    read_image_file: Read an uploaded file and resolve its mime type
    ingest_file: Read and decode an image file chosen by the user
    guess_mime_type: Mime type for a file path based on its extension
    buffer_to_image: Wrap a pixel buffer as a PIL Image
    export_png: Encode the buffer as PNG bytes
    save_png: Write the buffer to a PNG file
"""

import io
import logging
import mimetypes
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from RC_Libs.constants import (
    BUFFER_CHANNELS,
    BUFFER_MODE,
    DEFAULT_OUTPUT_FORMAT,
    IMAGE_MIME_PREFIX,
    SUPPORTED_STANDARD_IMAGES,
)
from RC_Libs.errors import DecodeError, ExportFailure, UnsupportedFormat
from RC_Libs.ImageEditingLib.baseline_store import BaselineStore
from RC_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


def decode_image(data: bytes, mime_type: str) -> PixelBuffer:
    """
    Decode image bytes into a writable RGBA buffer.

    Args:
        data: Raw encoded image data
        mime_type: Declared mime type, must be an image/* type

    Returns:
        numpy array of shape (height, width, 4), dtype uint8

    Raises:
        UnsupportedFormat: If mime_type is not an image type
        DecodeError: If the data cannot be decoded
    """
    if not mime_type or not mime_type.lower().startswith(IMAGE_MIME_PREFIX):
        raise UnsupportedFormat(f"Not an image type: {mime_type!r}")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            rgba = img.convert(BUFFER_MODE)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Could not decode {mime_type} data: {e}") from e

    return np.array(rgba, dtype=np.uint8)


def ingest(data: bytes, mime_type: str) -> Tuple[PixelBuffer, PixelBuffer]:
    """
    Decode image data and capture its baseline.

    Returns:
        (buffer, baseline) with identical dimensions; baseline is read-only

    Raises:
        UnsupportedFormat: If mime_type is not an image type
        DecodeError: If the data cannot be decoded
    """
    buffer = decode_image(data, mime_type)
    baseline = BaselineStore().capture(buffer)
    logger.info(f"Ingested {mime_type} image {buffer.shape[1]}x{buffer.shape[0]}")
    return buffer, baseline


def guess_mime_type(path: Path) -> str:
    """Mime type for ``path`` by extension, empty string when unknown."""
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_STANDARD_IMAGES:
        return ""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or f"{IMAGE_MIME_PREFIX}{path.suffix.lower().lstrip('.')}"


def read_image_file(path: Path) -> Tuple[bytes, str]:
    """
    Read an uploaded image file.

    Returns:
        (data, mime_type)

    Raises:
        UnsupportedFormat: If the extension is not a supported image format
        DecodeError: If the file cannot be read
    """
    path = Path(path)
    mime_type = guess_mime_type(path)
    if not mime_type:
        raise UnsupportedFormat(f"Unsupported file type: {path.suffix or path.name}")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Could not read {path}: {e}") from e
    return data, mime_type


def ingest_file(path: Path) -> Tuple[PixelBuffer, PixelBuffer]:
    """Read an image file and ingest it."""
    return ingest(*read_image_file(path))


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Wrap a pixel buffer as an RGBA PIL Image (copies the data)."""
    if buffer is None or buffer.ndim != 3 or buffer.shape[2] != BUFFER_CHANNELS:
        raise ValueError("Expected an (H, W, 4) pixel buffer")
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))


def export_png(buffer: PixelBuffer) -> bytes:
    """
    Encode the live buffer as PNG.

    Returns:
        PNG-encoded bytes
    """
    out = io.BytesIO()
    buffer_to_image(buffer).save(out, format=DEFAULT_OUTPUT_FORMAT)
    return out.getvalue()


def save_png(buffer: PixelBuffer, output_path: Path) -> Path:
    """
    Save the live buffer to disk in PNG format.

    Args:
        buffer: Pixel buffer to save
        output_path: Destination file

    Returns:
        The path written

    Raises:
        ExportFailure: If the file cannot be written
    """
    output_path = Path(output_path)
    if not output_path.parent.is_dir():
        raise ExportFailure(f"Output directory does not exist: {output_path.parent}")

    try:
        output_path.write_bytes(export_png(buffer))
    except OSError as e:
        raise ExportFailure(f"Could not write {output_path}: {e}") from e

    logger.info(f"Saved redacted image to {output_path}")
    return output_path
