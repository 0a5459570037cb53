from typing import Dict

import numpy as np
import cv2

from ..core import InvalidParameterError

# Map operation / structuring element names (lowercase, from config) to OpenCV flags
MORPH_OPERATION_MAP: Dict[str, int] = {
    "erode": cv2.MORPH_ERODE,
    "dilate": cv2.MORPH_DILATE,
    "open": cv2.MORPH_OPEN,
    "close": cv2.MORPH_CLOSE,
}

MORPH_SHAPE_MAP: Dict[str, int] = {
    "rect": cv2.MORPH_RECT,
    "cross": cv2.MORPH_CROSS,
    "ellipse": cv2.MORPH_ELLIPSE,
}


def _lookup(table: Dict[str, int], name: str, kind: str) -> int:
    flag = table.get(str(name).lower())
    if flag is None:
        raise InvalidParameterError(f"Unknown morphology {kind}: '{name}' (expected one of {sorted(table)})")
    return flag


def structuring_element(shape: str = "rect", size: int = 3) -> np.ndarray:
    """Returns a size x size structuring element; even sizes are bumped to odd."""
    if size < 1:
        raise InvalidParameterError(f"structuring element size must be positive, got {size}")
    size = size if size % 2 else size + 1
    return cv2.getStructuringElement(_lookup(MORPH_SHAPE_MAP, shape, "shape"), (size, size))


def bw_morph(image: np.ndarray, operation: str, shape: str = "rect", size: int = 3,
             iterations: int = 1) -> np.ndarray:
    """
    Applies a morphological operation and returns a new image.

    Args:
        image (np.ndarray): Input image, preferably a uint8 mask.
        operation (str): 'erode', 'dilate', 'open' or 'close'.
        shape (str): Structuring element shape: 'rect', 'cross' or 'ellipse'.
        size (int): Structuring element size (forced odd).
        iterations (int): Number of times the operation is applied.

    Raises:
        InvalidParameterError: For an unknown operation or shape, or a
                               non-positive size / iteration count.
    """
    op_flag = _lookup(MORPH_OPERATION_MAP, operation, "operation")
    if iterations < 1:
        raise InvalidParameterError(f"iterations must be positive, got {iterations}")
    element = structuring_element(shape, size)
    return cv2.morphologyEx(image, op_flag, element, anchor=(-1, -1), iterations=iterations)
