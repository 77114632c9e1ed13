"""Pytest configuration and shared fixtures."""

import cv2
import numpy as np
import pytest

from chalkboard.io_utils.timing import Timer


@pytest.fixture(autouse=True)
def _reset_timer():
    Timer.reset()
    yield
    Timer.reset()


@pytest.fixture
def uniform_image():
    """Flat mid-grey image: no edges anywhere."""
    return np.full((12, 16), 128, dtype=np.uint8)


@pytest.fixture
def step_image():
    """10x10 image, black on the left half (cols 0-4), 200 on the right."""
    img = np.zeros((10, 10), dtype=np.uint8)
    img[:, 5:] = 200
    return img


@pytest.fixture
def noisy_image():
    """Reproducible random texture."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(24, 32), dtype=np.uint8)


@pytest.fixture
def write_png(tmp_path):
    """Write an array to *tmp_path* / name and return the path."""

    def _write(name, img):
        dst = tmp_path / name
        assert cv2.imwrite(str(dst), img)
        return dst

    return _write
