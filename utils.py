# utils.py
"""
Utility functions for the confetti demo.

Logging setup and configuration loading live here. They are shared by the
entry point and the tests but belong to neither the particle core nor the
renderer.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

from constants import (
    BACKGROUND_COLOR, DEFAULT_FALL_DURATION, DEFAULT_PIECE_COUNT,
    DEFAULT_STYLE, DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH, FPS,
)

# Values used for any key config.json leaves out.
DEFAULT_SECTIONS: Dict[str, Dict[str, Any]] = {
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(levelname)s - %(message)s',
        'log_file': 'logs/confetti.log',
    },
    'effect': {
        'piece_count': DEFAULT_PIECE_COUNT,
        'fall_duration': DEFAULT_FALL_DURATION,
        'style': DEFAULT_STYLE,
        'from_all_sides': False,
        'activate_on_start': True,
    },
    'visualization': {
        'window_width': DEFAULT_WINDOW_WIDTH,
        'window_height': DEFAULT_WINDOW_HEIGHT,
        'fps': FPS,
        'background_color': list(BACKGROUND_COLOR),
    },
    'run_control': {
        'max_steps': 0,
        'log_throttle_steps': 120,
    },
}

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Side Effects: Configures the root Python logger with a console
#     handler and a rotating file handler. Creates the log directory.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON document.
#   - Errors: FileNotFoundError and json.JSONDecodeError are logged and
#     re-raised.
#
# get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
#   - Outputs: A new dict, DEFAULT_SECTIONS[name] overlaid with config[name].


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = get_section(config, 'logging')
    log_level = str(log_config['level']).upper()
    log_format = log_config['format']
    log_file_path = log_config['log_file']

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Returns one config section with defaults filled in."""
    section = dict(DEFAULT_SECTIONS.get(name, {}))
    overrides = config.get(name) or {}
    if not isinstance(overrides, dict):
        logging.warning(f"Config section '{name}' is not an object. Using defaults.")
        return section
    section.update(overrides)
    return section
