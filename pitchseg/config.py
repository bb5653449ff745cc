"""
Configuration management for pitchseg
"""

import copy
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from pitchseg.exceptions import ConfigurationError


DEFAULT_CONFIG = {
    "frame": {
        "width": 640,
        "height": 480
    },
    "segmentation": {
        "accum_size": 10,
        "bins": 64,
        "smooth_size": -1,
        "apply_morphologic": False,
        "diagnostic_log_size": 0
    },
    "histogram": {
        "filter_sigma": 1.0,
        "mask_min_ratio": 0.05
    },
    "scene": {
        "strategy": "always",
        "threshold": 0.5
    }
}

# Process-wide frame size as (width, height)
FRAME_SIZE = (DEFAULT_CONFIG["frame"]["width"], DEFAULT_CONFIG["frame"]["height"])


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file on top of DEFAULT_CONFIG.
    
    Args:
        path: Path to YAML file
        
    Returns:
        Merged configuration dictionary
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    
    if data is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    
    return _merge(DEFAULT_CONFIG, data)
