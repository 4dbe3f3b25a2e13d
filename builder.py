#!/usr/bin/env python3
# filename: builder.py
# Version: 1.2.0 (Region export)
"""
Command line entry point: load config, validate, run the converter pipeline.
"""

import argparse
import os
import sys
from typing import List, Optional

import yaml

from config_validator import validate_config
from defaults import DEFAULT_CONFIG, merge_with_defaults
from errors import ConfigurationError, ConverterError
from geo_regions import BUILTIN_REGIONS, get_region_countries, write_region_mapping
from pipeline import Pipeline, describe_converters
from utils import get_logger, setup_logger

logger = get_logger("Builder")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GeoIP List Builder")
    parser.add_argument("-c", "--config", default="config.yaml", help="Path to YAML config file")
    parser.add_argument("--validate-only", action="store_true", help="Validate configuration and exit")
    parser.add_argument("--skip-validation", action="store_true", help="Skip configuration validation")
    parser.add_argument("--list", action="store_true", help="List available converter types and built-in regions, then exit")
    parser.add_argument("--export-regions", metavar="PATH", help="Write the built-in region mapping to PATH and exit")
    return parser.parse_args(argv)


def load_config(path: str) -> dict:
    """Read a YAML (or JSON) config file and fill in defaults."""
    with open(path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return merge_with_defaults(config)


def print_converters():
    for section, converters in describe_converters().items():
        print(f"{section.capitalize()} converters:")
        for type_name, desc in sorted(converters.items()):
            print(f"  - {type_name} ({desc})")

    print("Built-in regions (--export-regions):")
    for region_name in BUILTIN_REGIONS:
        print(f"  - {region_name}: {', '.join(get_region_countries(region_name))}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)

    if args.list:
        print_converters()
        return 0

    setup_logger(DEFAULT_CONFIG)

    if args.export_regions:
        try:
            write_region_mapping(args.export_regions)
        except OSError as e:
            logger.error(f"Failed to export regions: {e}")
            return 1
        return 0

    logger.info(">>> Phase 1: Configuration Loading")
    if not os.path.exists(args.config):
        print(f"FATAL: Config not found at {args.config}")
        return 1

    try:
        config = load_config(args.config)
        logger.info(f"Loaded configuration from {args.config}")
    except (OSError, yaml.YAMLError, ConfigurationError) as e:
        print(f"FATAL: Error loading config file: {e}")
        return 1

    if not args.skip_validation:
        logger.info(">>> Phase 1.5: Configuration Validation")
        is_valid, errors, warnings = validate_config(config)
        if not is_valid:
            logger.error("Configuration validation failed!")
            return 1
        if args.validate_only:
            print("\n✅ Configuration validation PASSED")
            return 0
    else:
        logger.warning("Configuration validation SKIPPED (--skip-validation)")

    setup_logger(config)

    logger.info(">>> Phase 2: Building Pipeline")
    try:
        pipeline = Pipeline().build(config)
        logger.info(">>> Phase 3: Running Converters")
        pipeline.run()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except ConverterError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
