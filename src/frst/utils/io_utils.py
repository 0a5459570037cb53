import os
import json
import numpy as np
import cv2
from typing import Dict, Any, Union

from ..core import ImageLoadError


def ensure_dir_exists(path: str):
    """Creates a directory if it doesn't exist."""
    if not path:
        raise ValueError("Attempted to create directory with an empty path.")
    os.makedirs(path, exist_ok=True)


def scale_to_uint(img: np.ndarray, dtype: Union[np.uint8, np.uint16]) -> np.ndarray:
    """Scales float image [0, 1] to uint8/uint16 range."""
    if not np.issubdtype(img.dtype, np.floating):
        if img.dtype == dtype:
            return img
        return img.astype(dtype)

    if dtype == np.uint8:
        max_val = 255
    elif dtype == np.uint16:
        max_val = 65535
    else:
        raise ValueError("Unsupported dtype for scaling. Use uint8 or uint16.")

    return (np.clip(img, 0.0, 1.0) * max_val).astype(dtype)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Converts a decoded BGR/BGRA image to single-channel gray; gray passes through."""
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 1:
        return image[..., 0]
    if image.ndim == 3 and image.shape[2] == 4:
        # lose the alpha channel
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    raise ValueError(f"Unsupported image shape for grayscale conversion: {image.shape}")


def load_grayscale(filepath: str) -> np.ndarray:
    """
    Loads an image file as a single-channel uint8 array.

    Raises:
        FileNotFoundError: If the file does not exist.
        ImageLoadError: If OpenCV cannot decode the file.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Image file not found: {filepath}")
    image = cv2.imread(filepath, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError(filepath)
    gray = to_grayscale(image)
    if gray.dtype != np.uint8:
        # 16-bit sources are reduced to the 8-bit range the transform expects
        gray = cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    return gray


def save_image(img: np.ndarray, filepath: str):
    """Saves numpy array as an image file; float images are scaled from [0, 1]."""
    directory = os.path.dirname(filepath)
    if directory:
        ensure_dir_exists(directory)

    save_data = img
    if np.issubdtype(img.dtype, np.floating):
        save_data = scale_to_uint(img, np.uint8)

    success = cv2.imwrite(filepath, save_data)
    if not success:
        raise IOError(f"cv2.imwrite failed for {filepath}")


def save_npy(data: np.ndarray, filepath: str):
    """Saves the raw array (e.g. the unnormalized score) in NumPy format."""
    directory = os.path.dirname(filepath)
    if directory:
        ensure_dir_exists(directory)
    np.save(filepath, data)


def save_metadata(metadata: Dict[str, Any], filepath: str):
    """Saves metadata dictionary as a JSON file."""
    directory = os.path.dirname(filepath)
    if directory:
        ensure_dir_exists(directory)
    with open(filepath, 'w') as f:
        # default=str handles numpy scalars
        json.dump(metadata, f, indent=4, default=str)
