"""
Settings Module for Tile Match Helper

Provides persistent storage for solver preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "rows": 14,
    "cols": 10,
    "strategy_name": "retry",
    "retry_budget": 20,
    "move_highlight_ms": 500,
    "moved_highlight_ms": 200,
    "eliminate_highlight_ms": 200,
    "debug_enabled": False,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (default: SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE

    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning(f"Settings file {path} does not hold an object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default: SETTINGS_FILE)
    """
    path = Path(path) if path is not None else SETTINGS_FILE

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
