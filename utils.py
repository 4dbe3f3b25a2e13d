#!/usr/bin/env python3
# filename: utils.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.1.0 (Name normalization helpers)
# -----------------------------------------------------------------------------
"""
Logging setup and small shared helpers.
"""

import logging

# Global logger dictionary
_loggers = {}

ROOT_LOGGER_NAME = 'GeoIPBuilder'


def setup_logger(config):
    """Configure logging based on config."""
    log_config = config.get('logging', {})
    level_str = log_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler
    if log_config.get('enable_console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)

        if log_config.get('console_timestamp', False):
            formatter = logging.Formatter('%(asctime)s [%(levelname)s] [%(name)s] %(message)s', datefmt='%H:%M:%S')
        else:
            formatter = logging.Formatter('[%(levelname)s] [%(name)s] %(message)s')

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # File handler
    if log_config.get('enable_file', False):
        file_path = log_config.get('file_path', './geoip_builder.log')
        try:
            file_handler = logging.FileHandler(file_path)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s [%(levelname)s] [%(name)s] %(message)s')
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"Failed to setup file logging: {e}")


def get_logger(name):
    """Get or create a logger with the given name."""
    full_name = f"{ROOT_LOGGER_NAME}.{name}"
    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)
    return _loggers[full_name]


def normalize_name(name) -> str:
    """
    Normalize an entry, region or country name to its canonical form.

    Examples:
        >>> normalize_name("  eu ")
        'EU'
        >>> normalize_name("   ")
        ''
    """
    if not name:
        return ""
    return name.strip().upper()


def build_want_set(wanted) -> set:
    """
    Build the allowlist of names from a raw config list.
    Empty or blank items are dropped; an empty result means "everything".
    """
    want = set()
    for item in wanted or []:
        if not isinstance(item, str):
            continue
        name = normalize_name(item)
        if name:
            want.add(name)
    return want
