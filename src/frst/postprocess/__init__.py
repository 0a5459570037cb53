from .normalize import normalize_to_uint8
from .threshold import binarize
from .morphology import bw_morph, structuring_element, MORPH_OPERATION_MAP, MORPH_SHAPE_MAP
from .centers import find_centers

__all__ = [
    "normalize_to_uint8",
    "binarize",
    "bw_morph",
    "structuring_element",
    "MORPH_OPERATION_MAP",
    "MORPH_SHAPE_MAP",
    "find_centers",
]
