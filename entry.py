#!/usr/bin/env python3
# filename: entry.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.2.0 (IntervalTree-backed range sets)
# -----------------------------------------------------------------------------
"""
Named IP range sets.

An Entry keeps one IntervalTree per address family. Prefixes are stored as
half-open integer intervals [network, broadcast + 1), so overlapping and
adjacent prefixes collapse into a single interval and removals are a chop.
Intervals are turned back into a minimal list of CIDRs on marshal.
"""

import ipaddress
from enum import Enum
from typing import Dict, List, Optional

from intervaltree import IntervalTree

from utils import normalize_name
from validation import parse_prefix


class IPType(Enum):
    ANY = ""
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @classmethod
    def parse(cls, value) -> "IPType":
        """
        Parse a config value ('ipv4', 'v4', '4', 'ipv6', ...).
        None or an empty string means ANY.

        Raises:
            ValueError: unrecognized value
        """
        if value is None:
            return cls.ANY
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ('', 'any', 'all', 'both'):
            return cls.ANY
        if text in ('ipv4', 'v4', '4'):
            return cls.IPV4
        if text in ('ipv6', 'v6', '6'):
            return cls.IPV6
        raise ValueError(f"invalid IP type '{value}'")


_VERSIONS = {IPType.IPV4: 4, IPType.IPV6: 6}
_ADDRESS_CLASSES = {4: ipaddress.IPv4Address, 6: ipaddress.IPv6Address}


def ignore_option_for(only_ip_type: IPType) -> Optional[IPType]:
    """Map an 'only this family' filter to the family that must be ignored."""
    if only_ip_type == IPType.IPV4:
        return IPType.IPV6
    if only_ip_type == IPType.IPV6:
        return IPType.IPV4
    return None


def _ignored_version(ignore: Optional[IPType]) -> Optional[int]:
    if ignore is None or ignore == IPType.ANY:
        return None
    if ignore not in _VERSIONS:
        raise ValueError(f"invalid ignore option {ignore!r}")
    return _VERSIONS[ignore]


class PrefixError(ValueError):
    """Raised when a string is not a valid IP address or CIDR."""
    pass


class Entry:
    __slots__ = ('name', '_ranges', '_dirty')

    def __init__(self, name: str):
        self.name = normalize_name(name)
        self._ranges: Dict[int, IntervalTree] = {4: IntervalTree(), 6: IntervalTree()}
        self._dirty = False

    def __repr__(self):
        return f"Entry({self.name!r}, ipv4={len(self._ranges[4])}, ipv6={len(self._ranges[6])})"

    def get_name(self) -> str:
        return self.name

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def add_prefix(self, text: str):
        """Add a CIDR or bare IP address."""
        network = self._parse(text)
        begin = int(network.network_address)
        end = int(network.broadcast_address) + 1
        self._ranges[network.version].addi(begin, end)
        self._dirty = True

    def remove_prefix(self, text: str):
        """Remove a CIDR or bare IP address; ranges outside the entry are ignored."""
        network = self._parse(text)
        begin = int(network.network_address)
        end = int(network.broadcast_address) + 1
        self._ranges[network.version].chop(begin, end)

    def merge(self, other: "Entry", ignore: Optional[IPType] = None):
        """Union another entry's ranges into this one."""
        skip = _ignored_version(ignore)
        for version, tree in other._ranges.items():
            if version == skip or tree.is_empty():
                continue
            self._ranges[version].update(tree)
            self._dirty = True

    def subtract(self, other: "Entry", ignore: Optional[IPType] = None):
        """Remove another entry's ranges from this one."""
        skip = _ignored_version(ignore)
        for version, tree in other._ranges.items():
            if version == skip:
                continue
            target = self._ranges[version]
            for interval in list(tree):
                target.chop(interval.begin, interval.end)

    def clear(self, ip_type: IPType = IPType.ANY):
        """Drop all ranges of one family, or of both for ANY."""
        if ip_type == IPType.ANY:
            for tree in self._ranges.values():
                tree.clear()
        else:
            self._ranges[_VERSIONS[ip_type]].clear()

    def copy(self, ignore: Optional[IPType] = None) -> "Entry":
        clone = Entry(self.name)
        clone.merge(self, ignore)
        return clone

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------
    def has_ipv4(self) -> bool:
        return not self._ranges[4].is_empty()

    def has_ipv6(self) -> bool:
        return not self._ranges[6].is_empty()

    def is_empty(self) -> bool:
        return not (self.has_ipv4() or self.has_ipv6())

    def marshal_text(self, ignore: Optional[IPType] = None) -> List[str]:
        """
        Render the entry as a minimal, sorted list of CIDR strings.
        IPv4 comes first. `ignore` drops one family from the output.
        """
        skip = _ignored_version(ignore)
        self._compact()

        cidrs = []
        for version in (4, 6):
            if version == skip:
                continue
            address_cls = _ADDRESS_CLASSES[version]
            for interval in sorted(self._ranges[version], key=lambda iv: iv.begin):
                first = address_cls(interval.begin)
                last = address_cls(interval.end - 1)
                cidrs.extend(str(net) for net in ipaddress.summarize_address_range(first, last))
        return cidrs

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _parse(self, text):
        try:
            return parse_prefix(text)
        except ValueError as e:
            raise PrefixError(f"invalid prefix '{text}' for entry {self.name}: {e}") from e

    def _compact(self):
        if not self._dirty:
            return
        for tree in self._ranges.values():
            tree.merge_overlaps(strict=False)
        self._dirty = False
