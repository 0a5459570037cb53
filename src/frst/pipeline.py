import logging
import time
from typing import Any, Dict, Optional, Union

import numpy as np

from .core import (Mode, TransformParameters, DetectionResult, FrstError, TransformResult)
from .gradient import as_intensity, compute_gradients
from .accumulator import accumulate_votes
from .scorer import score_symmetry
from .smoother import smooth_and_crop
from .config_loader import DEFAULT_CONFIG, merge_configs, get_transform_parameters
from .postprocess import normalize_to_uint8, binarize, bw_morph, find_centers

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attaches console (and optionally file) handlers to the package logger.

    Re-running replaces the handlers installed by a previous call.
    """
    package_logger = logging.getLogger("frst")
    package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG)
    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)

    log_formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(log_formatter)
    package_logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(log_formatter)
        package_logger.addHandler(file_handler)

    return package_logger


def transform(image: np.ndarray, radius: int, alpha: float = 2.0, std_factor: float = 0.1,
              mode: Union[Mode, str, int] = Mode.DARK, workers: int = 1) -> np.ndarray:
    """
    Applies the Fast Radial Symmetry Transform to a single-channel image.

    See Loy, G., & Zelinsky, A. (2002). A fast radial symmetry transform for
    detecting points of interest. ECCV 2002.

    Args:
        image (np.ndarray): H x W intensity image, typically uint8.
        radius (int): Projection radius in pixels (> 0). Also scales the blur.
        alpha (float): Radial strictness (>= 1); higher values suppress
                       diffuse symmetry.
        std_factor (float): Gaussian sigma as a fraction of ``radius`` (> 0).
        mode (Mode | str | int): 'bright', 'dark' or 'both'.
        workers (int): Row bands used for vote accumulation.

    Returns:
        np.ndarray: Unnormalized H x W float64 score map. A constant image
                    yields all zeros.

    Raises:
        InvalidParameterError: For an unknown mode or out-of-range parameters,
                               before any canvas is allocated.
    """
    params = TransformParameters(radius=radius, alpha=alpha, std_factor=std_factor, mode=mode)
    intensity = as_intensity(image)

    start_time = time.time()
    gradients = compute_gradients(intensity)
    canvas = accumulate_votes(gradients, params.radius, params.mode.bright, params.mode.dark,
                              workers=workers)
    score = score_symmetry(canvas, params.alpha)
    result = smooth_and_crop(score, params.radius, params.std_factor, intensity.shape)

    logger.debug(f"Transform {params.to_dict()} on {intensity.shape[0]}x{intensity.shape[1]} "
                 f"took {time.time() - start_time:.4f}s")
    return result


def try_transform(image: np.ndarray, radius: int, alpha: float = 2.0, std_factor: float = 0.1,
                  mode: Union[Mode, str, int] = Mode.DARK, workers: int = 1) -> TransformResult:
    """Like ``transform`` but reports package errors as a failed TransformResult."""
    try:
        return TransformResult.success(
            transform(image, radius, alpha=alpha, std_factor=std_factor, mode=mode, workers=workers))
    except FrstError as e:
        logger.debug(f"Transform failed: {e}")
        return TransformResult.failure(e)


def detect_centers(image: np.ndarray, config: Optional[Dict[str, Any]] = None) -> DetectionResult:
    """
    Runs the point detection chain on a grayscale image.

    transform -> min-max stretch to uint8 -> global threshold (Otsu by default)
    -> morphology (close with an ellipse by default) -> external contours ->
    centroids.

    Args:
        image (np.ndarray): H x W uint8 grayscale image.
        config (Optional[Dict[str, Any]]): Configuration dictionary (see
            ``config_loader.DEFAULT_CONFIG``); missing keys use the defaults.

    Returns:
        DetectionResult: All intermediate images and the detected (x, y) centers.
    """
    config = merge_configs(DEFAULT_CONFIG, config or {})
    params = get_transform_parameters(config)
    post_conf = config.get('postprocess', {})
    morph_conf = post_conf.get('morphology', {})

    result = DetectionResult(parameters=params)

    logger.info(f"Applying transform with {params.to_dict()}")
    result.score = transform(image, params.radius, params.alpha, params.std_factor, params.mode,
                             workers=int(config.get('workers', 1)))

    logger.info("Normalizing and binarizing score...")
    result.normalized = normalize_to_uint8(result.score)
    result.threshold, result.binary = binarize(result.normalized, post_conf.get('threshold'))

    if morph_conf.get('enabled', True):
        logger.info(f"Applying morphology '{morph_conf.get('operation', 'close')}'...")
        result.markers = bw_morph(result.binary,
                                  morph_conf.get('operation', 'close'),
                                  shape=morph_conf.get('shape', 'ellipse'),
                                  size=int(morph_conf.get('size', 5)),
                                  iterations=int(morph_conf.get('iterations', 1)))
    else:
        result.markers = result.binary.copy()

    result.centers = find_centers(result.markers)
    logger.info(f"Found {len(result.centers)} centers")

    result.metadata = {
        "image_shape": list(np.asarray(image).shape),
        "parameters": params.to_dict(),
        "threshold": result.threshold,
        "score_min": float(result.score.min()),
        "score_max": float(result.score.max()),
        "centers": [[float(x), float(y)] for x, y in result.centers],
    }
    return result
