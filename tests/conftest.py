"""Shared pytest fixtures for the GeoIP list builder tests."""
import orjson
import pytest

from container import Container
from entry import Entry


def make_entry(name, *prefixes):
    entry = Entry(name)
    for prefix in prefixes:
        entry.add_prefix(prefix)
    return entry


@pytest.fixture
def country_container():
    """Container pre-populated with a few per-country entries."""
    container = Container()
    container.add(make_entry("DE", "10.0.0.0/8", "2001:db8::/32"))
    container.add(make_entry("FR", "192.168.0.0/16"))
    container.add(make_entry("JP", "2001:db8:1000::/36"))
    return container


@pytest.fixture
def write_mapping(tmp_path):
    """Write a region mapping JSON file and return its path as a string."""
    def _write(mapping, name="region_mapping.json"):
        path = tmp_path / name
        if isinstance(mapping, (bytes, str)):
            path.write_bytes(mapping.encode() if isinstance(mapping, str) else mapping)
        else:
            path.write_bytes(orjson.dumps(mapping))
        return str(path)
    return _write
