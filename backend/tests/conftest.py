"""
Test configuration and fixtures for Palette Studio tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from palette_studio.api.v1 import reset_session
from palette_studio.services.palette_store import PaletteStore
from palette_studio.services.session import MemoryClipboard, PaletteSession


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_session():
    """Give every test its own seeded API session."""
    session = PaletteSession(PaletteStore.with_defaults(capacity=10), clipboard=MemoryClipboard(),
                             raise_errors=True)
    reset_session(session)
    yield session
    reset_session(None)


def encode_png(pixels: np.ndarray) -> bytes:
    """Encode a uint8 array as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(pixels.astype(np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def two_block_png() -> bytes:
    """60% red (left) and 40% blue (right), 10x10."""
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:, :6] = (255, 0, 0)
    img[:, 6:] = (0, 0, 255)
    return encode_png(img)


@pytest.fixture
def gradient_png() -> bytes:
    """Horizontal hue-ish gradient with many distinct colors."""
    x = np.linspace(0, 255, 64, dtype=np.float32)
    img = np.zeros((32, 64, 3), dtype=np.uint8)
    img[:, :, 0] = x.astype(np.uint8)
    img[:, :, 1] = (255 - x).astype(np.uint8)
    img[:, :, 2] = np.linspace(0, 255, 32, dtype=np.float32).astype(np.uint8)[:, None]
    return encode_png(img)


@pytest.fixture
def png_encoder():
    """Expose PNG encoding to tests that build their own images."""
    return encode_png
