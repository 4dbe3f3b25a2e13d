#!/usr/bin/env python3
# filename: converters.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.1.0 (Local file:// URIs)
# -----------------------------------------------------------------------------
"""
Converter contract shared by all input and output converters.

Input converters read something and mutate the shared Container.
Output converters render the Container somewhere. Each converter module
exposes a TYPE_* name, a DESC_* description and a new_*(action, args)
factory; the pipeline owns the table that maps type names to factories.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse, unquote

from container import Container
from errors import ConfigurationError


class Action(Enum):
    ADD = "add"
    REMOVE = "remove"
    OUTPUT = "output"

    @classmethod
    def parse(cls, value) -> "Action":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(f"invalid action '{value}', must be one of {[a.value for a in cls]}")

    def __str__(self):
        return self.value


INPUT_ACTIONS = (Action.ADD, Action.REMOVE)


class InputConverter:
    type: str = ""
    description: str = ""

    def __init__(self, action: Action):
        self.action = action

    def get_type(self) -> str:
        return self.type

    def get_action(self) -> Action:
        return self.action

    def get_description(self) -> str:
        return self.description

    def input(self, container: Container) -> Container:
        raise NotImplementedError


class OutputConverter:
    type: str = ""
    description: str = ""

    def __init__(self, action: Action = Action.OUTPUT):
        self.action = action

    def get_type(self) -> str:
        return self.type

    def get_action(self) -> Action:
        return self.action

    def get_description(self) -> str:
        return self.description

    def output(self, container: Container):
        raise NotImplementedError


def require_args(type_name: str, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return converter args as a dict, rejecting anything else."""
    if args is None:
        return {}
    if not isinstance(args, dict):
        raise ConfigurationError(f"[type {type_name}] args must be a mapping, got {type(args).__name__}")
    return args


def uri_to_path(uri: str) -> Path:
    """
    Resolve a local URI (plain path or file://) to a filesystem path.

    Raises:
        OSError: the URI points at a non-local scheme
    """
    parsed = urlparse(uri)
    if parsed.scheme == 'file':
        if parsed.netloc in ('', 'localhost'):
            return Path(unquote(parsed.path))
        # file://relative/path keeps its first segment
        return Path(unquote(parsed.netloc + parsed.path))
    # Single-letter schemes are Windows drive letters
    if parsed.scheme and len(parsed.scheme) > 1:
        raise OSError(f"unsupported URI scheme '{parsed.scheme}' (only local files are supported)")
    return Path(uri)


def read_uri(uri: str) -> bytes:
    """Read the raw bytes behind a local URI."""
    with open(uri_to_path(uri), 'rb') as f:
        return f.read()
