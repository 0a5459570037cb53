import numpy as np
import pytest


def _make_disk(shape=(21, 21), center=(10, 10), radius=6, foreground=255, background=0):
    """uint8 image holding a filled disk; center is (row, col)."""
    rows, cols = np.mgrid[0:shape[0], 0:shape[1]]
    inside = (rows - center[0]) ** 2 + (cols - center[1]) ** 2 <= radius ** 2
    image = np.full(shape, background, dtype=np.uint8)
    image[inside] = foreground
    return image


@pytest.fixture
def make_disk():
    return _make_disk


@pytest.fixture
def random_image():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(40, 30)).astype(np.uint8)


