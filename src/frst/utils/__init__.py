from .io_utils import (save_image, save_npy, save_metadata, ensure_dir_exists, scale_to_uint,
                       load_grayscale, to_grayscale)
from .vis_utils import draw_centers


__all__ = [
    "save_image",
    "save_npy",
    "save_metadata",
    "ensure_dir_exists",
    "scale_to_uint",
    "load_grayscale",
    "to_grayscale",
    "draw_centers",
]
