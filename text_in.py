#!/usr/bin/env python3
# filename: text_in.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.1.0 (Directory input)
# -----------------------------------------------------------------------------
"""
Plain-text CIDR list input converter.

Either a single file loaded into one named entry (name + uri), or a
directory where every file becomes an entry named after the file stem
(inputDir). One IP or CIDR per line; '#' and '//' start comments.
"""

from pathlib import Path
from typing import Dict, List, Optional

from container import CaseRemove, Container, ContainerError
from converters import INPUT_ACTIONS, Action, InputConverter, read_uri, require_args, uri_to_path
from defaults import converter_args
from entry import Entry, IPType, PrefixError, ignore_option_for
from errors import CollectionMutationError, ConfigurationError, InvalidPrefixError, ResourceReadError
from utils import build_want_set, get_logger, normalize_name

TYPE_TEXT_IN = "text"
DESC_TEXT_IN = "Convert plaintext IP & CIDR to other formats"

logger = get_logger("TextIn")


def parse_text_lines(text: str) -> List[str]:
    """Extract IP/CIDR tokens from list content, dropping blanks and comments."""
    prefixes = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(('#', '//')):
            continue

        for marker in ('#', '//'):
            if marker in line:
                line = line.split(marker, 1)[0].strip()
        if not line:
            continue

        prefixes.append(line.split()[0])
    return prefixes


def new_text_in(action, args: Optional[dict] = None) -> "TextIn":
    action = Action.parse(action)
    if action not in INPUT_ACTIONS:
        raise ConfigurationError(f"[type {TYPE_TEXT_IN}] unsupported action '{action}'")

    args = converter_args(TYPE_TEXT_IN, require_args(TYPE_TEXT_IN, args))

    name = args.get('name', '')
    uri = args.get('uri', '')
    input_dir = args.get('inputDir', '')

    if bool(uri) == bool(input_dir):
        raise ConfigurationError(f"[type {TYPE_TEXT_IN}] exactly one of uri or inputDir must be set")
    if uri and not normalize_name(name):
        raise ConfigurationError(f"[type {TYPE_TEXT_IN}] name is required together with uri")

    wanted = args.get('wantedList') or []
    if not isinstance(wanted, list):
        raise ConfigurationError(f"[type {TYPE_TEXT_IN}] wantedList must be a list")

    try:
        only_ip_type = IPType.parse(args.get('onlyIPType'))
    except ValueError as e:
        logger.warning(f"{e}, using both IPv4 and IPv6")
        only_ip_type = IPType.ANY

    return TextIn(action, name=name, uri=uri, input_dir=input_dir,
                  want=build_want_set(wanted), only_ip_type=only_ip_type)


class TextIn(InputConverter):
    type = TYPE_TEXT_IN
    description = DESC_TEXT_IN

    def __init__(self, action: Action, name: str = "", uri: str = "", input_dir: str = "",
                 want: set = None, only_ip_type: IPType = IPType.ANY):
        super().__init__(action)
        self.name = normalize_name(name)
        self.uri = uri
        self.input_dir = input_dir
        self.want = frozenset(want or ())
        self.only_ip_type = only_ip_type

    def input(self, container: Container) -> Container:
        entries: Dict[str, Entry] = {}

        if self.uri:
            self._load_file(self.name, self.uri, entries)
        else:
            self._load_dir(entries)

        ignore = ignore_option_for(self.only_ip_type)
        for name, entry in entries.items():
            try:
                if self.action == Action.ADD:
                    container.add(entry, ignore)
                else:
                    container.remove(entry, CaseRemove.PREFIX, ignore)
            except ContainerError as e:
                raise CollectionMutationError(self.type, self.action, f"failed to {self.action.value} entry {name}: {e}") from e

        logger.info(f"✓ {self.action.value}: {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
        return container

    def _load_dir(self, entries: Dict[str, Entry]):
        try:
            directory = uri_to_path(self.input_dir)
        except OSError as e:
            raise ResourceReadError(self.type, self.action, str(e)) from e
        if not directory.is_dir():
            raise ResourceReadError(self.type, self.action, f"input directory not found: {self.input_dir}")

        for path in sorted(directory.iterdir()):
            if not path.is_file() or path.name.startswith('.'):
                continue
            self._load_file(path.stem, str(path), entries)

    def _load_file(self, name: str, uri: str, entries: Dict[str, Entry]):
        name = normalize_name(name)
        if self.want and name not in self.want:
            return

        try:
            content = read_uri(uri).decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceReadError(self.type, self.action, f"failed to read {uri}: {e}") from e

        entry = entries.get(name)
        if entry is None:
            entry = entries[name] = Entry(name)

        for prefix in parse_text_lines(content):
            try:
                entry.add_prefix(prefix)
            except PrefixError as e:
                raise InvalidPrefixError(self.type, self.action, f"{Path(uri).name}: {e}") from e

        logger.debug(f"Loaded {name} from {uri}")
