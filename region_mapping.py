#!/usr/bin/env python3
# filename: region_mapping.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.3.0 (Family-aware removal)
# -----------------------------------------------------------------------------
"""
Region mapping input converter.

Reads a JSON object of region name -> list of country codes and synthesizes
one entry per region whose ranges are the union of its member countries'
entries already present in the container. The synthesized entries are then
added to, or removed from, the container.

Config args:
  uri         - mapping file (default ./region_mapping.json)
  wantedList  - only process these regions (default: all)
  onlyIPType  - 'ipv4' or 'ipv6' to restrict both reading and removal
"""

import logging
from typing import Dict, List, Optional

import orjson as json

from container import CaseRemove, Container, ContainerError
from converters import INPUT_ACTIONS, Action, InputConverter, read_uri, require_args
from defaults import converter_args
from entry import Entry, IPType, PrefixError, ignore_option_for
from errors import (
    CollectionMutationError, ConfigurationError, InvalidPrefixError,
    MappingDecodeError, ResourceReadError, SerializeError
)
from utils import build_want_set, get_logger, normalize_name

TYPE_REGION_MAPPING_IN = "regionMapping"
DESC_REGION_MAPPING_IN = "Convert region mapping to other formats"

logger = get_logger("RegionMapping")


def decode_region_mapping(content: bytes) -> Dict[str, List[str]]:
    """
    Decode raw mapping bytes, preserving the source order of regions.

    Raises:
        ValueError: malformed JSON, or not an object of string arrays
    """
    data = json.loads(content)

    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    for region, countries in data.items():
        if not isinstance(countries, list):
            raise ValueError(f"region '{region}': expected an array of country codes, got {type(countries).__name__}")
        for country in countries:
            if not isinstance(country, str):
                raise ValueError(f"region '{region}': country codes must be strings, got {country!r}")

    return data


def load_region_mapping(uri: str) -> Dict[str, List[str]]:
    """
    Read and decode a region mapping resource.

    Raises:
        OSError: the resource can not be read
        ValueError: the resource is not a valid region mapping
    """
    return decode_region_mapping(read_uri(uri))


def new_region_mapping_in(action, args: Optional[dict] = None) -> "RegionMappingIn":
    """Factory used by the pipeline's converter table."""
    action = Action.parse(action)
    if action not in INPUT_ACTIONS:
        raise ConfigurationError(f"[type {TYPE_REGION_MAPPING_IN}] unsupported action '{action}'")

    args = converter_args(TYPE_REGION_MAPPING_IN, require_args(TYPE_REGION_MAPPING_IN, args))

    uri = args['uri']
    if not isinstance(uri, str):
        raise ConfigurationError(f"[type {TYPE_REGION_MAPPING_IN}] uri must be a string")

    wanted = args.get('wantedList') or []
    if not isinstance(wanted, list):
        raise ConfigurationError(f"[type {TYPE_REGION_MAPPING_IN}] wantedList must be a list")

    try:
        only_ip_type = IPType.parse(args.get('onlyIPType'))
    except ValueError as e:
        logger.warning(f"{e}, using both IPv4 and IPv6")
        only_ip_type = IPType.ANY

    return RegionMappingIn(action, uri, build_want_set(wanted), only_ip_type)


class RegionMappingIn(InputConverter):
    type = TYPE_REGION_MAPPING_IN
    description = DESC_REGION_MAPPING_IN

    def __init__(self, action: Action, uri: str, want: set, only_ip_type: IPType = IPType.ANY):
        super().__init__(action)
        self.uri = uri
        self.want = frozenset(want)
        self.only_ip_type = only_ip_type

    def input(self, container: Container) -> Container:
        try:
            region_mapping = load_region_mapping(self.uri)
        except OSError as e:
            raise ResourceReadError(self.type, self.action, f"failed to read region mapping file: {e}") from e
        except ValueError as e:
            raise MappingDecodeError(self.type, self.action, f"failed to parse region mapping JSON: {e}") from e

        logger.info(f"Loaded {len(region_mapping)} regions from {self.uri}")

        # Index once, not per region
        entry_map = {normalize_name(entry.get_name()): entry for entry in container.loop()}
        ignore = ignore_option_for(self.only_ip_type)

        processed = 0
        for region_name, country_codes in region_mapping.items():
            region_name = normalize_name(region_name)

            if self.want and region_name not in self.want:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f"Skipping unwanted region '{region_name}'")
                continue

            region_entry = self._merge_region(region_name, country_codes, entry_map, ignore)
            self._apply(container, region_entry, ignore)
            processed += 1

        logger.info(f"✓ {self.action.value}: {processed} region(s) from {self.uri}")
        return container

    def _merge_region(self, region_name: str, country_codes: List[str],
                      entry_map: Dict[str, Entry], ignore: Optional[IPType]) -> Entry:
        region_entry = Entry(region_name)
        found = 0

        for country_code in country_codes:
            country_code = normalize_name(country_code)
            if not country_code:
                continue

            country_entry = entry_map.get(country_code)
            if country_entry is None:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f"  - {region_name}: country {country_code} not loaded, skipping")
                continue

            try:
                cidrs = country_entry.marshal_text(ignore)
            except Exception as e:
                raise SerializeError(self.type, self.action, f"failed to marshal country {country_code}: {e}") from e

            for cidr in cidrs:
                try:
                    region_entry.add_prefix(cidr)
                except PrefixError as e:
                    raise InvalidPrefixError(
                        self.type, self.action,
                        f"failed to add CIDR {cidr} to region {region_name}: {e}"
                    ) from e
            found += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Region {region_name}: merged {found}/{len(country_codes)} countries")
        return region_entry

    def _apply(self, container: Container, region_entry: Entry, ignore: Optional[IPType]):
        region_name = region_entry.get_name()

        if self.action == Action.ADD:
            try:
                container.add(region_entry)
            except ContainerError as e:
                raise CollectionMutationError(self.type, self.action, f"failed to add region {region_name}: {e}") from e
        elif self.action == Action.REMOVE:
            try:
                container.remove(region_entry, CaseRemove.ENTRY, ignore)
            except ContainerError as e:
                raise CollectionMutationError(self.type, self.action, f"failed to remove region {region_name}: {e}") from e
