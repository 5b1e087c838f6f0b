"""
Configuration Loader

Loads YAML configuration for the console tools (tag automation defaults,
importer pacing, extractor cache, proxy server address).
"""

import copy
from pathlib import Path
from typing import Any, Dict

import yaml

CONSOLE_CONFIG = 'console.yaml'

DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    'tagging': {
        'default_prefix': 'cus-',
        'output_filename': 'Master_Updated_With_Tags.csv',
        'require_title_or_tags': True,
    },
    'importer': {
        'api_version': '2025-01',
        'delay_seconds': 0.5,
    },
    'extractor': {
        'limit': 250,
        'timeout': 30,
        'cache_file': '.extracted_collections.json',
    },
    'server': {
        'host': '127.0.0.1',
        'port': 8787,
    },
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'console.yaml')

    Returns:
        Parsed YAML content as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _load_section(section: str) -> Dict[str, Any]:
    """
    Load one section of console.yaml over its built-in defaults.

    A missing config file or section yields the defaults unchanged.
    """
    settings = copy.deepcopy(DEFAULT_SETTINGS[section])
    try:
        config = load_config(CONSOLE_CONFIG)
    except FileNotFoundError:
        return settings

    overrides = config.get(section) or {}
    settings.update(overrides)
    return settings


def load_tagging_settings() -> Dict[str, Any]:
    """
    Load tag automation settings.

    Example:
        {
            'default_prefix': 'cus-',
            'output_filename': 'Master_Updated_With_Tags.csv',
            'require_title_or_tags': True,
        }
    """
    return _load_section('tagging')


def load_importer_settings() -> Dict[str, Any]:
    """Load collection importer settings (API version, delay between POSTs)."""
    return _load_section('importer')


def load_extractor_settings() -> Dict[str, Any]:
    """Load collection extractor settings (page limit, timeout, cache file)."""
    return _load_section('extractor')


def load_server_settings() -> Dict[str, Any]:
    """Load proxy server bind address."""
    return _load_section('server')
