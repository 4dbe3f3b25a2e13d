#!/usr/bin/env python3
# filename: errors.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.0.0
# -----------------------------------------------------------------------------
"""
Converter error hierarchy.
Every converter error names the converter type and action it came from.
"""


class ConfigurationError(Exception):
    """Raised when pipeline or converter configuration is unusable."""
    pass


class ConverterError(Exception):
    """Base class for fatal errors raised while a converter runs."""
    kind = "ConverterFailure"

    def __init__(self, type_name: str, action, message: str):
        self.type = type_name
        self.action = getattr(action, 'value', action)
        self.message = message
        super().__init__(f"❌ [type {self.type} | action {self.action}] {message}")


class ResourceReadError(ConverterError):
    kind = "IOFailure"


class MappingDecodeError(ConverterError):
    kind = "DecodeFailure"


class SerializeError(ConverterError):
    kind = "SerializeFailure"


class InvalidPrefixError(ConverterError):
    kind = "InvalidPrefix"


class CollectionMutationError(ConverterError):
    kind = "CollectionMutationFailure"


class OutputWriteError(ConverterError):
    kind = "IOFailure"
