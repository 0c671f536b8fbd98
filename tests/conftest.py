"""
Pytest configuration and shared fixtures for Redact Canvas tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import io
import os

import numpy as np
import pytest
from PIL import Image

from RC_Libs.ImageEditingLib.editing_session import EditingSession

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_buffer(width, height, color=(0, 0, 0, 255)):
    """Solid RGBA buffer of the given size."""
    buffer = np.zeros((height, width, 4), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def encode_png(buffer):
    """Encode a pixel buffer to PNG bytes with Pillow."""
    out = io.BytesIO()
    Image.fromarray(buffer).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def red_buffer():
    """
    Provide a 100x100 solid red opaque buffer.

    Returns:
        numpy array of shape (100, 100, 4)
    """
    return make_buffer(100, 100, (255, 0, 0, 255))


@pytest.fixture
def square_buffer():
    """
    Provide a 100x100 black buffer with a white 50x50 square at (25, 25).

    Returns:
        numpy array of shape (100, 100, 4)
    """
    buffer = make_buffer(100, 100, (0, 0, 0, 255))
    buffer[25:75, 25:75] = (255, 255, 255, 255)
    return buffer


@pytest.fixture
def noise_buffer():
    """
    Provide a deterministic 80x60 opaque noise buffer.

    Returns:
        numpy array of shape (60, 80, 4)
    """
    rng = np.random.default_rng(1234)
    buffer = rng.integers(0, 256, size=(60, 80, 4), dtype=np.uint8)
    buffer[:, :, 3] = 255
    return buffer


@pytest.fixture
def empty_session():
    """Provide an EditingSession with no image loaded."""
    return EditingSession()


@pytest.fixture
def loaded_session(square_buffer):
    """Provide an EditingSession with the square image loaded."""
    session = EditingSession()
    session.load_buffer(square_buffer)
    return session
