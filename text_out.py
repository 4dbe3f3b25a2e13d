#!/usr/bin/env python3
# filename: text_out.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.0.1
# -----------------------------------------------------------------------------
"""
Plain-text output converter: one file per entry, one CIDR per line.
"""

from pathlib import Path
from typing import Optional

from container import Container
from converters import Action, OutputConverter, require_args
from defaults import OUTPUT_DEFAULTS, converter_args
from entry import IPType, ignore_option_for
from errors import ConfigurationError, OutputWriteError
from utils import build_want_set, get_logger

TYPE_TEXT_OUT = "text"
DESC_TEXT_OUT = "Convert data to plaintext CIDR format"

logger = get_logger("TextOut")


def new_text_out(action, args: Optional[dict] = None) -> "TextOut":
    action = Action.parse(action)
    if action != Action.OUTPUT:
        raise ConfigurationError(f"[type {TYPE_TEXT_OUT}] unsupported action '{action}'")

    args = converter_args(TYPE_TEXT_OUT, require_args(TYPE_TEXT_OUT, args), OUTPUT_DEFAULTS)

    wanted = args.get('wantedList') or []
    if not isinstance(wanted, list):
        raise ConfigurationError(f"[type {TYPE_TEXT_OUT}] wantedList must be a list")

    try:
        only_ip_type = IPType.parse(args.get('onlyIPType'))
    except ValueError as e:
        logger.warning(f"{e}, writing both IPv4 and IPv6")
        only_ip_type = IPType.ANY

    return TextOut(
        output_dir=args['outputDir'],
        extension=args['outputExtension'],
        want=build_want_set(wanted),
        only_ip_type=only_ip_type
    )


class TextOut(OutputConverter):
    type = TYPE_TEXT_OUT
    description = DESC_TEXT_OUT

    def __init__(self, output_dir: str, extension: str = ".txt", want: set = None,
                 only_ip_type: IPType = IPType.ANY):
        super().__init__(Action.OUTPUT)
        self.output_dir = Path(output_dir)
        self.extension = extension
        self.want = frozenset(want or ())
        self.only_ip_type = only_ip_type

    def output(self, container: Container):
        ignore = ignore_option_for(self.only_ip_type)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(self.type, self.action, f"failed to create {self.output_dir}: {e}") from e

        written = 0
        for entry in container.loop():
            name = entry.get_name()
            if not name:
                logger.debug("Skipping entry without a name")
                continue
            if self.want and name not in self.want:
                continue

            cidrs = entry.marshal_text(ignore)
            if not cidrs:
                logger.debug(f"Entry {name} has nothing to write, skipping")
                continue

            path = self.output_dir / f"{name.lower()}{self.extension}"
            try:
                with open(path, 'w', encoding='utf-8') as f:
                    f.write('\n'.join(cidrs) + '\n')
            except OSError as e:
                raise OutputWriteError(self.type, self.action, f"failed to write {path}: {e}") from e

            logger.debug(f"Wrote {len(cidrs)} prefixes to {path}")
            written += 1

        logger.info(f"✓ Wrote {written} file(s) to {self.output_dir}")
