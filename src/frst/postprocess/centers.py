import logging
from typing import List, Tuple

import numpy as np
import cv2

logger = logging.getLogger(__name__)


def find_centers(binary: np.ndarray) -> List[Tuple[float, float]]:
    """
    Finds the centroid of every external contour in a binary mask.

    The centroid is (m10 / m00, m01 / m00) of the contour moments. Contours
    enclosing no area (a single pixel or a one pixel wide line) use the mean
    of their points instead.

    Returns:
        List[Tuple[float, float]]: (x, y) centers sorted by row, then column.
    """
    mask = (np.asarray(binary) > 0).astype(np.uint8)
    if not np.any(mask):
        return []

    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    centers = []
    for contour in contours:
        moments = cv2.moments(contour)
        if moments['m00'] > 0:
            cx = moments['m10'] / moments['m00']
            cy = moments['m01'] / moments['m00']
        else:
            points = contour.reshape(-1, 2).astype(np.float64)
            cx, cy = points.mean(axis=0)
            logger.debug(f"Zero-area contour, using point mean ({cx:.1f}, {cy:.1f})")
        centers.append((float(cx), float(cy)))

    centers.sort(key=lambda c: (c[1], c[0]))
    return centers
