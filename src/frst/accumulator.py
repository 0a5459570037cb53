import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

import numpy as np

from .core import GradientField, VoteCanvas, InvalidParameterError

logger = logging.getLogger(__name__)


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Rounds to the nearest integer, ties away from zero (np.round ties to even)."""
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


def projection_offsets(gradients: GradientField, radius: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Computes the integer vote offsets of every pixel with a nonzero gradient.

    Returns:
        Tuple of 1D arrays (rows, cols, k_row, k_col, norm) for the voting pixels.
        The row offset follows the vertical gradient and the column offset the
        horizontal one, so a vote always lands along the gradient direction.
    """
    norm = gradients.magnitude()
    rows, cols = np.nonzero(norm > 0)
    norm = norm[rows, cols]
    k_row = round_half_away(gradients.vertical[rows, cols] / norm * radius)
    k_col = round_half_away(gradients.horizontal[rows, cols] / norm * radius)
    return rows, cols, k_row, k_col, norm


def _accumulate_band(gradients: GradientField, radius: int, bright: bool, dark: bool,
                     row_start: int, row_stop: int) -> VoteCanvas:
    """Accumulates the votes of source rows [row_start, row_stop) into a private canvas."""
    canvas = VoteCanvas.zeros(gradients.shape, radius)
    band = GradientField(horizontal=gradients.horizontal[row_start:row_stop],
                         vertical=gradients.vertical[row_start:row_stop])
    rows, cols, k_row, k_col, norm = projection_offsets(band, radius)
    rows = rows + row_start

    # np.add.at is unbuffered: repeated target cells all receive their votes
    if bright:
        target = (rows + k_row + radius, cols + k_col + radius)
        np.add.at(canvas.count, target, 1.0)
        np.add.at(canvas.magnitude, target, norm)
    if dark:
        target = (rows - k_row + radius, cols - k_col + radius)
        np.add.at(canvas.count, target, -1.0)
        np.add.at(canvas.magnitude, target, -norm)
    return canvas


def _row_bands(height: int, workers: int) -> List[Tuple[int, int]]:
    edges = np.linspace(0, height, min(workers, height) + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def accumulate_votes(gradients: GradientField, radius: int, bright: bool, dark: bool,
                     workers: int = 1) -> VoteCanvas:
    """
    Casts one radial vote per pixel with a nonzero gradient.

    Bright votes add +1 / +|g| at the pixel the gradient points toward
    (``p + round(g/|g| * r)``); dark votes add -1 / -|g| at the opposite
    pixel (``p - round(g/|g| * r)``). Both polarities write into the same
    pair of canvases, which are padded by ``radius`` on every side so no
    vote can fall outside.

    Args:
        gradients (GradientField): Gradients of the source image.
        radius (int): Projection distance in pixels (> 0).
        bright (bool): Cast forward (positive) votes.
        dark (bool): Cast backward (negative) votes.
        workers (int): Number of row bands accumulated concurrently. Each band
                       owns a private canvas; the partial canvases are summed.

    Returns:
        VoteCanvas: count and magnitude accumulators of shape (H + 2r, W + 2r).
    """
    if workers < 1:
        raise InvalidParameterError(f"workers must be at least 1, got {workers}")

    height = gradients.shape[0]
    if workers == 1 or height < 2:
        canvas = _accumulate_band(gradients, radius, bright, dark, 0, height)
    else:
        bands = _row_bands(height, workers)
        logger.debug(f"Accumulating votes in {len(bands)} row bands")
        canvas = VoteCanvas.zeros(gradients.shape, radius)
        with ThreadPoolExecutor(max_workers=len(bands)) as executor:
            partials = executor.map(
                lambda band: _accumulate_band(gradients, radius, bright, dark, *band), bands)
            for partial in partials:
                canvas += partial

    if not canvas.has_votes():
        logger.debug("No votes cast (constant image); canvases stay zero")
    return canvas
