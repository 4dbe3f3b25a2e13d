#!/usr/bin/env python3
# filename: defaults.py
# Version: 1.1.0 (Converter argument defaults)
"""
Default configuration values - single source of truth.
"""

DEFAULT_REGION_MAPPING_URI = './region_mapping.json'
DEFAULT_TEXT_OUTPUT_DIR = './output/text'
DEFAULT_TEXT_OUTPUT_EXTENSION = '.txt'

DEFAULT_CONFIG = {
    'logging': {
        'level': 'INFO',
        'enable_console': True,
        'console_timestamp': False,
        'enable_file': False,
        'file_path': './geoip_builder.log'
    },
    'input': [],
    'output': []
}

# Per-converter argument defaults, keyed by converter type
CONVERTER_DEFAULTS = {
    'regionMapping': {
        'uri': DEFAULT_REGION_MAPPING_URI,
        'wantedList': [],
        'onlyIPType': ''
    },
    'text': {
        'wantedList': [],
        'onlyIPType': ''
    }
}

OUTPUT_DEFAULTS = {
    'text': {
        'outputDir': DEFAULT_TEXT_OUTPUT_DIR,
        'outputExtension': DEFAULT_TEXT_OUTPUT_EXTENSION,
        'wantedList': [],
        'onlyIPType': ''
    }
}


def merge_with_defaults(config: dict) -> dict:
    """
    Merge user configuration with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration with defaults filled in
    """
    import copy

    # Start with defaults
    merged = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in config.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            # Deep merge for nested dicts
            merged[key] = _deep_merge(merged[key], value)
        else:
            # Direct replacement for non-dicts (including the converter lists)
            merged[key] = value

    return merged


def converter_args(type_name: str, args: dict, defaults_table: dict = None) -> dict:
    """Fill missing or empty converter args from the per-type defaults."""
    table = CONVERTER_DEFAULTS if defaults_table is None else defaults_table
    result = dict(table.get(type_name, {}))
    for key, value in (args or {}).items():
        if value is None or value == '':
            continue
        result[key] = value
    return result


def _deep_merge(base: dict, overlay: dict) -> dict:
    """Recursively merge overlay into base"""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
