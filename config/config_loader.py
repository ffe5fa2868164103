"""
Configuration loading for Cadastral Map Creator.

This module handles loading and validation of the zone configuration JSON file.

Constants:
    PROJECT_ROOT: Root directory of the project
    CONFIG_DIR: Configuration files directory
    DATA_DIR: Feature source files directory
    OUTPUT_DIR: Output files directory

Functions:
    load_config: Load and validate zone configuration from JSON
    load_geometry_filter_settings: Geometry pre-filter thresholds with defaults
    load_generator_settings: Synthetic parcel generator settings with defaults
    resolve_source_path: Resolve a configured source file name to a path
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
DATA_DIR = PROJECT_ROOT / 'data'
OUTPUT_DIR = PROJECT_ROOT / 'outputs'


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load zone configuration from JSON file.

    Reads the zones_config.json file and validates basic structure.

    Parameters:
    -----------
    config_path : Optional[Path]
        Alternate configuration file. Defaults to CONFIG_DIR/zones_config.json

    Returns:
    --------
    Dict
        Configuration dictionary with 'sources' and 'settings' keys

    Raises:
    -------
    FileNotFoundError
        If configuration file doesn't exist
    json.JSONDecodeError
        If configuration file contains invalid JSON
    KeyError
        If required configuration keys are missing
    """
    if config_path is None:
        config_path = CONFIG_DIR / 'zones_config.json'

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = json.load(f)

    # Validate required keys
    if 'sources' not in config:
        raise KeyError("Configuration missing required 'sources' key")
    if 'settings' not in config:
        raise KeyError("Configuration missing required 'settings' key")

    return config


def load_geometry_filter_settings(config: Dict = None) -> Dict:
    """
    Load geometry pre-filter thresholds from configuration.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Dictionary with geometry filter settings

    Defaults:
        - max_area: 0.0005 (square degrees)
        - max_rectangle_area: 0.00001 (square degrees)
        - rectangle_tolerance: 0.0001 (degrees)

    Note:
        Returns defaults if 'geometry_filter' section is missing.
    """
    if config is None:
        config = load_config()

    defaults = {
        'max_area': 0.0005,
        'max_rectangle_area': 0.00001,
        'rectangle_tolerance': 0.0001
    }

    # Config values override defaults
    return {**defaults, **config.get('geometry_filter', {})}


def load_generator_settings(config: Dict = None) -> Dict:
    """
    Load synthetic parcel generator settings from configuration.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Dictionary with 'num_zones', 'radius' and 'seed' keys
    """
    if config is None:
        config = load_config()

    defaults = {
        'num_zones': 250,
        'radius': 0.02,
        'seed': None
    }

    return {**defaults, **config.get('generator', {})}


def resolve_source_path(source: Union[str, Path]) -> Path:
    """
    Resolve a configured feature source to a filesystem path.

    Relative names are looked up in DATA_DIR; absolute paths are kept.
    """
    path = Path(source)
    if path.is_absolute():
        return path
    return DATA_DIR / path
