from .datatypes import Mode, TransformParameters, GradientField, VoteCanvas, DetectionResult
from .errors import FrstError, InvalidParameterError, ImageLoadError, TransformResult

__all__ = [
    "Mode",
    "TransformParameters",
    "GradientField",
    "VoteCanvas",
    "DetectionResult",
    "FrstError",
    "InvalidParameterError",
    "ImageLoadError",
    "TransformResult",
]
