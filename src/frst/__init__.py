__version__ = "0.1.0"

# Expose the transform and the detection chain
from .pipeline import transform, try_transform, detect_centers, setup_logging
from .config_loader import load_config, DEFAULT_CONFIG

from .core import (Mode, TransformParameters, GradientField, VoteCanvas, DetectionResult,
                   FrstError, InvalidParameterError, ImageLoadError, TransformResult)
from .gradient import compute_gradients
from .accumulator import accumulate_votes
from .scorer import score_symmetry, normalize_abs_max
from .smoother import gaussian_kernel_size, smooth_and_crop

__all__ = [
    "transform",
    "try_transform",
    "detect_centers",
    "setup_logging",
    "load_config",
    "DEFAULT_CONFIG",
    "Mode",
    "TransformParameters",
    "GradientField",
    "VoteCanvas",
    "DetectionResult",
    "FrstError",
    "InvalidParameterError",
    "ImageLoadError",
    "TransformResult",
    "compute_gradients",
    "accumulate_votes",
    "score_symmetry",
    "normalize_abs_max",
    "gaussian_kernel_size",
    "smooth_and_crop",
    "__version__",
]
