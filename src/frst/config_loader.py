import copy
import json
import os
from typing import Dict, Any, Optional

from .core import TransformParameters

# Transform defaults follow the reference demo: r=12, alpha=2, stdFactor=0.1, dark mode
DEFAULT_CONFIG = {
    "transform": {
        "radius": 12,
        "alpha": 2.0,
        "std_factor": 0.1,
        "mode": "dark"
    },
    "workers": 1,
    "postprocess": {
        "threshold": None,  # None -> Otsu
        "morphology": {
            "enabled": True,
            "operation": "close",
            "shape": "ellipse",
            "size": 5,
            "iterations": 1
        }
    },
    "overlay": {
        "marker_radius": 2,
        "marker_color": [0, 255, 0]  # BGR
    },
    "output_dir": "./output",
    "output_options": {
        "save_score_npy": True,
        "save_normalized": True,
        "save_binary": True,
        "save_markers": True,
        "save_overlay": True,
        "save_metadata": True,
        "image_format": "png"
    }
}


def merge_configs(default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merges user config into default config."""
    merged = copy.deepcopy(default)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads configuration from a JSON file, merges with defaults.

    Args:
        config_path (Optional[str]): Path to the user's JSON config file.
                                      If None, returns the default config.

    Returns:
        Dict[str, Any]: The final configuration dictionary.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        json.JSONDecodeError: If the config file is not valid JSON.
        ValueError: If the file does not hold a JSON object.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path, 'r') as f:
            try:
                user_config = json.load(f)
            except json.JSONDecodeError as e:
                raise json.JSONDecodeError(f"Error decoding JSON from {config_path}: {e.msg}", e.doc, e.pos)
        if not isinstance(user_config, dict):
            raise ValueError(f"Configuration in {config_path} must be a JSON object")
        final_config = merge_configs(final_config, user_config)

    return final_config


def get_transform_parameters(config: Dict[str, Any]) -> TransformParameters:
    """
    Builds validated transform parameters from the 'transform' section.

    Raises:
        InvalidParameterError: If a value is out of range or the mode is unknown.
    """
    transform_conf = merge_configs(DEFAULT_CONFIG['transform'], config.get('transform', {}))
    return TransformParameters(
        radius=transform_conf['radius'],
        alpha=transform_conf['alpha'],
        std_factor=transform_conf['std_factor'],
        mode=transform_conf['mode'],
    )
