#!/usr/bin/env python3
# filename: container.py
# -----------------------------------------------------------------------------
# Project: GeoIP List Builder
# Version: 1.1.0 (Family-restricted removal)
# -----------------------------------------------------------------------------
"""
The shared collection of named entries that converters read and mutate.
Not thread-safe: callers run converters one after another.
"""

import logging
from collections import OrderedDict
from enum import Enum
from typing import Iterator, Optional

from entry import Entry, IPType
from utils import get_logger, normalize_name

logger = get_logger("Container")


class CaseRemove(Enum):
    PREFIX = "prefix"
    ENTRY = "entry"


class ContainerError(Exception):
    """Raised when an entry is rejected by the container."""
    pass


class Container:
    def __init__(self):
        self.entries: "OrderedDict[str, Entry]" = OrderedDict()

    def __len__(self):
        return len(self.entries)

    def __contains__(self, name):
        return normalize_name(name) in self.entries

    def loop(self) -> Iterator[Entry]:
        """Iterate over a snapshot of the entries, in insertion order."""
        return iter(list(self.entries.values()))

    def get_entry(self, name: str) -> Optional[Entry]:
        return self.entries.get(normalize_name(name))

    def add(self, entry: Entry, ignore: Optional[IPType] = None):
        """
        Add an entry, merging into an existing entry of the same name.
        `ignore` drops one family of the incoming entry.
        """
        name = self._check(entry)

        existing = self.entries.get(name)
        if existing is None:
            self.entries[name] = entry.copy(ignore)
            logger.debug(f"Added entry {name}")
        else:
            existing.merge(entry, ignore)
            logger.debug(f"Merged into existing entry {name}")

    def remove(self, entry: Entry, case: CaseRemove, ignore: Optional[IPType] = None):
        """
        Remove an entry or part of it.

        CaseRemove.ENTRY drops the whole entry; with `ignore` set only the
        other family is dropped (ignore=IPV6 removes the IPv4 ranges).
        CaseRemove.PREFIX subtracts the given entry's ranges instead.
        Removing an entry that does not exist is a no-op.
        """
        name = self._check(entry)

        existing = self.entries.get(name)
        if existing is None:
            logger.debug(f"Entry {name} not found, nothing to remove")
            return

        if case == CaseRemove.ENTRY:
            if ignore == IPType.IPV6:
                existing.clear(IPType.IPV4)
            elif ignore == IPType.IPV4:
                existing.clear(IPType.IPV6)
            else:
                existing.clear()
        elif case == CaseRemove.PREFIX:
            existing.subtract(entry, ignore)
        else:
            raise ContainerError(f"unknown remove case {case!r} for entry {name}")

        if existing.is_empty():
            del self.entries[name]
            logger.debug(f"Removed entry {name}")
        elif logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Removed {case.value} ranges from entry {name}")

    def _check(self, entry) -> str:
        if not isinstance(entry, Entry):
            raise ContainerError(f"expected Entry, got {type(entry).__name__}")
        # An empty name is a valid key; outputs decide whether to write it
        return normalize_name(entry.get_name())
