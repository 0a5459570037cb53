import logging
import numpy as np

from .core import GradientField, InvalidParameterError

logger = logging.getLogger(__name__)


def as_intensity(image: np.ndarray) -> np.ndarray:
    """
    Validates a single-channel image and returns it as float64.

    Raises:
        InvalidParameterError: If the image is not a non-empty 2D real array.
    """
    image = np.asarray(image)
    if image.ndim != 2:
        raise InvalidParameterError(f"image must be a single-channel 2D array, got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidParameterError(f"image must not be empty, got shape {image.shape}")
    if not (np.issubdtype(image.dtype, np.integer) or np.issubdtype(image.dtype, np.floating)):
        raise InvalidParameterError(f"image must hold real intensities, got dtype {image.dtype}")
    return image.astype(np.float64)


def compute_gradients(image: np.ndarray) -> GradientField:
    """
    Computes central-difference gradients (next - previous) / 2.

    Border samples without both neighbours along an axis stay zero in that
    axis' gradient; there is no wraparound or reflection.

    Args:
        image (np.ndarray): H x W intensity image (uint8 or any real dtype).

    Returns:
        GradientField: horizontal (along columns) and vertical (along rows)
                       gradients, both H x W float64.
    """
    intensity = as_intensity(image)

    horizontal = np.zeros_like(intensity)
    vertical = np.zeros_like(intensity)
    # Slices are empty (no-op) when the axis has fewer than three samples
    horizontal[:, 1:-1] = (intensity[:, 2:] - intensity[:, :-2]) / 2.0
    vertical[1:-1, :] = (intensity[2:, :] - intensity[:-2, :]) / 2.0

    logger.debug(f"Gradients computed for {intensity.shape[0]}x{intensity.shape[1]} image")
    return GradientField(horizontal=horizontal, vertical=vertical)
