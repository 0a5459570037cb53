import math
from typing import Tuple

import numpy as np
import cv2


def gaussian_kernel_size(radius: int) -> int:
    """ceil(radius / 2), bumped to the next odd number; never below 1."""
    ksize = int(math.ceil(radius / 2.0))
    if ksize % 2 == 0:
        ksize += 1
    return max(1, ksize)


def smooth_and_crop(score: np.ndarray, radius: int, std_factor: float,
                    image_shape: Tuple[int, int]) -> np.ndarray:
    """
    Blurs the padded score with a radius-scaled Gaussian and crops the padding.

    Args:
        score (np.ndarray): Padded (H + 2r) x (W + 2r) score canvas.
        radius (int): Transform radius; sets kernel size and padding offset.
        std_factor (float): Gaussian sigma as a fraction of the radius.
        image_shape (Tuple[int, int]): (H, W) of the source image.

    Returns:
        np.ndarray: A new H x W float64 array.
    """
    ksize = gaussian_kernel_size(radius)
    sigma = radius * std_factor
    blurred = cv2.GaussianBlur(score.astype(np.float64), ksize=(ksize, ksize), sigmaX=sigma)

    height, width = image_shape
    return blurred[radius:radius + height, radius:radius + width].copy()
