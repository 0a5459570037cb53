import numpy as np
import cv2

from ..utils import scale_to_uint


def normalize_to_uint8(score: np.ndarray) -> np.ndarray:
    """
    Min-max stretches a score map to [0, 255] uint8.

    A constant map (including the all-zero output of a constant image)
    maps to all zeros.
    """
    score = np.asarray(score, dtype=np.float64)
    if score.size == 0:
        return np.zeros(score.shape, dtype=np.uint8)
    stretched = cv2.normalize(score, None, 0.0, 1.0, cv2.NORM_MINMAX)
    return scale_to_uint(stretched, np.uint8)
