"""
Settings Module for barline

Provides persistent scanner configuration using JSON.
Settings are stored in barline.json in the working directory unless
another path is given.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("barline.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "threshold": "simple",
    "bias": 0.15,
    "midpoint": 127,
    "clamp_window": True,
    "strip_rows": 2,
    "scan_points": [1, 9, 2, 8, 3, 7, 4, 6, 5],
    "acquisition": "local",
    "request_timeout": 10.0,
    "debug_enabled": False,
}

PathLike = Union[str, Path]


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE

    if not settings_file.exists():
        logger.debug(f"Settings file {settings_file} not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("top level must be an object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[PathLike] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default: SETTINGS_FILE)
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
