#!/usr/bin/env python3
# filename: config_validator.py
# Version: 1.1.0 (Region mapping arguments)
"""
Configuration Validation Module for the converter pipeline
"""

import os
from typing import Dict, List, Tuple, Any
from converters import uri_to_path
from entry import IPType
from utils import get_logger

logger = get_logger("ConfigValidator")

INPUT_TYPES = ['text', 'regionMapping']
OUTPUT_TYPES = ['text']
INPUT_ACTIONS = ['add', 'remove']
OUTPUT_ACTIONS = ['output']


class ConfigValidator:
    """Validates pipeline configuration for common errors and inconsistencies"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self, config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """
        Validate entire configuration.

        Returns:
            (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        if not isinstance(config, dict):
            self.errors.append("Configuration must be a dictionary")
            return False, self.errors, self.warnings

        self._validate_logging(config.get('logging', {}))
        self._validate_converters('input', config.get('input', []), INPUT_TYPES, INPUT_ACTIONS)
        self._validate_converters('output', config.get('output', []), OUTPUT_TYPES, OUTPUT_ACTIONS)

        if not config.get('input'):
            self.warnings.append("input: No input converters configured, nothing to do")

        is_valid = len(self.errors) == 0

        if self.errors:
            print("\n❌ CONFIGURATION ERRORS:")
            for i, err in enumerate(self.errors, 1):
                print(f"  {i}. {err}")

        if self.warnings:
            print("\n⚠️  CONFIGURATION WARNINGS:")
            for i, warn in enumerate(self.warnings, 1):
                print(f"  {i}. {warn}")

        if is_valid:
            logger.info("Configuration validation PASSED")
        else:
            logger.error(f"Configuration validation FAILED with {len(self.errors)} error(s)")

        if self.warnings:
            logger.warning(f"Configuration has {len(self.warnings)} warning(s)")

        return is_valid, self.errors, self.warnings

    # =========================================================================
    # LOGGING SECTION
    # =========================================================================
    def _validate_logging(self, log_cfg: Dict[str, Any]):
        """Validate logging configuration"""
        if not isinstance(log_cfg, dict):
            if log_cfg is not None:
                self.errors.append("logging: Must be a dictionary")
            return

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        level = log_cfg.get('level', 'INFO')
        if isinstance(level, str):
            if level.upper() not in valid_levels:
                self.errors.append(f"logging.level: Invalid level '{level}', must be one of {valid_levels}")
        else:
            self.errors.append(f"logging.level: Must be a string, got {type(level).__name__}")

        for bool_key in ['enable_console', 'console_timestamp', 'enable_file']:
            val = log_cfg.get(bool_key)
            if val is not None and not isinstance(val, bool):
                self.errors.append(f"logging.{bool_key}: Must be boolean, got {type(val).__name__}")

        file_path = log_cfg.get('file_path')
        if file_path is not None:
            if not isinstance(file_path, str):
                self.errors.append("logging.file_path: Must be string")
            elif log_cfg.get('enable_file', False):
                parent_dir = os.path.dirname(file_path) or '.'
                if not os.path.isdir(parent_dir):
                    self.warnings.append(f"logging.file_path: Directory '{parent_dir}' does not exist")

    # =========================================================================
    # CONVERTER SECTIONS
    # =========================================================================
    def _validate_converters(self, section: str, items: Any, valid_types: List[str], valid_actions: List[str]):
        """Validate the input or output converter list"""
        if items is None:
            return
        if not isinstance(items, list):
            self.errors.append(f"{section}: Must be a list")
            return

        for i, item in enumerate(items):
            where = f"{section}[{i}]"
            if not isinstance(item, dict):
                self.errors.append(f"{where}: Must be a dictionary")
                continue

            conv_type = item.get('type')
            if conv_type not in valid_types:
                self.errors.append(f"{where}.type: Invalid type '{conv_type}', must be one of {valid_types}")
                continue

            action = item.get('action')
            if not isinstance(action, str) or action.lower() not in valid_actions:
                self.errors.append(f"{where}.action: Invalid action '{action}', must be one of {valid_actions}")

            args = item.get('args', {})
            if args is None:
                args = {}
            if not isinstance(args, dict):
                self.errors.append(f"{where}.args: Must be a dictionary")
                continue

            self._validate_common_args(where, args)
            if section == 'input' and conv_type == 'regionMapping':
                self._validate_region_mapping_args(where, args)
            elif section == 'input' and conv_type == 'text':
                self._validate_text_in_args(where, args)
            elif section == 'output' and conv_type == 'text':
                self._validate_text_out_args(where, args)

    def _validate_common_args(self, where: str, args: Dict[str, Any]):
        """wantedList / onlyIPType are shared by every converter"""
        wanted = args.get('wantedList')
        if wanted is not None:
            if not isinstance(wanted, list):
                self.errors.append(f"{where}.args.wantedList: Must be a list")
            elif not all(isinstance(w, str) for w in wanted):
                self.errors.append(f"{where}.args.wantedList: All items must be strings")

        only_ip_type = args.get('onlyIPType')
        if only_ip_type is not None:
            try:
                IPType.parse(only_ip_type)
            except ValueError:
                self.errors.append(f"{where}.args.onlyIPType: Must be 'ipv4' or 'ipv6', got '{only_ip_type}'")

    def _validate_region_mapping_args(self, where: str, args: Dict[str, Any]):
        uri = args.get('uri')
        if uri is None:
            return
        if not isinstance(uri, str):
            self.errors.append(f"{where}.args.uri: Must be string")
        elif uri:
            path = self._local_path(f"{where}.args.uri", uri)
            if path is not None and not path.exists():
                self.warnings.append(f"{where}.args.uri: File not found '{uri}'")

    def _validate_text_in_args(self, where: str, args: Dict[str, Any]):
        uri = args.get('uri')
        input_dir = args.get('inputDir')

        for key, val in (('name', args.get('name')), ('uri', uri), ('inputDir', input_dir)):
            if val is not None and not isinstance(val, str):
                self.errors.append(f"{where}.args.{key}: Must be string")

        if bool(uri) == bool(input_dir):
            self.errors.append(f"{where}.args: Exactly one of 'uri' or 'inputDir' must be set")
        elif uri and not args.get('name'):
            self.errors.append(f"{where}.args.name: Required when 'uri' is set")
        elif isinstance(input_dir, str) and input_dir:
            path = self._local_path(f"{where}.args.inputDir", input_dir)
            if path is not None and not path.is_dir():
                self.warnings.append(f"{where}.args.inputDir: Directory not found '{input_dir}'")

    def _local_path(self, where: str, uri: str):
        try:
            return uri_to_path(uri)
        except OSError as e:
            self.errors.append(f"{where}: {e}")
            return None

    def _validate_text_out_args(self, where: str, args: Dict[str, Any]):
        for key in ('outputDir', 'outputExtension'):
            val = args.get(key)
            if val is not None and not isinstance(val, str):
                self.errors.append(f"{where}.args.{key}: Must be string")


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
    """
    Convenience function to validate configuration.

    Returns:
        (is_valid, errors, warnings)
    """
    validator = ConfigValidator()
    return validator.validate(config)
