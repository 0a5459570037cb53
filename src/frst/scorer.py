import numpy as np

from .core import VoteCanvas


def normalize_abs_max(values: np.ndarray) -> np.ndarray:
    """Returns |values| / max(|values|); an all-zero input stays all zero."""
    magnitude = np.abs(values)
    peak = magnitude.max() if magnitude.size else 0.0
    if peak <= 0:
        return np.zeros_like(magnitude)
    return magnitude / peak


def score_symmetry(canvas: VoteCanvas, alpha: float) -> np.ndarray:
    """
    Combines the vote canvases into one symmetry score.

    The count and magnitude canvases are normalized independently, the
    normalized count is raised to ``alpha`` and multiplied by the normalized
    magnitude. The result keeps the padded canvas shape.
    """
    count = normalize_abs_max(canvas.count)
    magnitude = normalize_abs_max(canvas.magnitude)
    return np.power(count, alpha) * magnitude
