from typing import Optional, Tuple

import numpy as np
import cv2

from ..core import InvalidParameterError


def binarize(image: np.ndarray, threshold: Optional[float] = None) -> Tuple[float, np.ndarray]:
    """
    Applies a global threshold to a uint8 image.

    Args:
        image (np.ndarray): uint8 single-channel image.
        threshold (Optional[float]): Fixed threshold in [0, 255]. If None,
                                     Otsu's method picks it.

    Returns:
        Tuple[float, np.ndarray]: The threshold used and a 0/255 uint8 mask of
                                  pixels strictly above it.
    """
    if image.dtype != np.uint8:
        raise InvalidParameterError(f"binarize expects a uint8 image, got {image.dtype}")

    if threshold is None:
        used, binary = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
    else:
        threshold = float(threshold)
        if not 0.0 <= threshold <= 255.0:
            raise InvalidParameterError(f"threshold must lie in [0, 255], got {threshold}")
        used, binary = cv2.threshold(image, threshold, 255, cv2.THRESH_BINARY)
    return float(used), binary
