from typing import Iterable, Tuple
import numpy as np
import cv2


def draw_centers(
    image: np.ndarray,
    centers: Iterable[Tuple[float, float]],
    radius: int = 2,
    color: Tuple[int, int, int] = (0, 255, 0)
) -> np.ndarray:
    """
    Draws a filled dot at every (x, y) center.

    Args:
        image (np.ndarray): Grayscale or BGR uint8 image. Not modified.
        centers (Iterable[Tuple[float, float]]): Points in (x, y) pixel coordinates.
        radius (int): Dot radius in pixels.
        color (Tuple[int, int, int]): BGR color of the dots.

    Returns:
        np.ndarray: A BGR uint8 copy with the markers drawn.
    """
    if image.ndim == 2:
        overlay = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    else:
        overlay = image.copy()

    color = tuple(int(c) for c in color)
    for x, y in centers:
        cv2.circle(overlay, (int(round(x)), int(round(y))), int(radius), color, thickness=-1, lineType=cv2.LINE_8)
    return overlay
