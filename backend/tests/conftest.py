"""
Test configuration and fixtures for PaletteCut tests.
"""

import numpy as np
import pytest
from fastapi.testclient import TestClient

# Import the main app
from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palettecut.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def red_blue_pixels():
    """1000 pure red and 1000 pure blue pixels."""
    return np.vstack([
        np.full((1000, 3), [255, 0, 0], dtype=np.uint8),
        np.full((1000, 3), [0, 0, 255], dtype=np.uint8)
    ])


@pytest.fixture
def red_blue_image():
    """40x20 RGB array: left half red, right half blue."""
    img = np.zeros((20, 40, 3), dtype=np.uint8)
    img[:, :20] = (255, 0, 0)
    img[:, 20:] = (0, 0, 255)
    return img
