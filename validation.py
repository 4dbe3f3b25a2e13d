#!/usr/bin/env python3
# filename: validation.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.0.0
# -----------------------------------------------------------------------------
"""
Prefix parsing and validation utilities.
"""

import ipaddress
from typing import Union

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def parse_prefix(text: str) -> IPNetwork:
    """
    Parse CIDR notation or a bare IP address into a network.

    Host bits are tolerated ("10.1.2.3/8" -> 10.0.0.0/8), brackets around
    IPv6 are stripped, and IPv4-mapped IPv6 addresses are unwrapped to IPv4.

    Args:
        text: CIDR or IP string

    Returns:
        IPv4Network or IPv6Network

    Raises:
        ValueError: text is not a valid IP or CIDR
    """
    if not isinstance(text, str):
        raise ValueError(f"prefix must be a string, got {type(text).__name__}")

    cleaned = text.strip().strip('[]')
    if not cleaned:
        raise ValueError("empty prefix")

    if '/' in cleaned:
        network = ipaddress.ip_network(cleaned, strict=False)
    else:
        address = ipaddress.ip_address(cleaned)
        network = ipaddress.ip_network(address)

    if network.version == 6 and network.network_address.ipv4_mapped is not None and network.prefixlen >= 96:
        mapped = network.network_address.ipv4_mapped
        network = ipaddress.ip_network(f"{mapped}/{network.prefixlen - 96}", strict=False)

    return network


def is_valid_prefix(text: str) -> bool:
    """True if text parses as an IP address or CIDR."""
    try:
        parse_prefix(text)
        return True
    except ValueError:
        return False
