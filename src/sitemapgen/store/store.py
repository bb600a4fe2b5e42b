"""Append-only store of sitemap URL entries."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import ValidationError

from sitemapgen.errors import InvalidArgumentError, MissingArgumentError
from sitemapgen.store.models import (
    MAX_PRIORITY,
    MAX_URL_LENGTH,
    MIN_PRIORITY,
    ChangeFrequency,
    UrlEntry,
    format_lastmod,
)

logger = logging.getLogger(__name__)

LastMod = Union[datetime, date, str]
UrlRow = Union[Sequence[Any], Mapping[str, Any]]

_ROW_KEYS = ("loc", "lastmod", "changefreq", "priority")

# Anything outside the XML 1.0 Char production, lone surrogates included
_INVALID_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def validate_url(
    loc: Optional[str],
    lastmod: Optional[LastMod] = None,
    changefreq: Optional[Union[str, ChangeFrequency]] = None,
    priority: Optional[Union[float, int, str]] = None,
) -> UrlEntry:
    """Check raw URL values and build a UrlEntry.

    Raises:
        MissingArgumentError: loc is None
        InvalidArgumentError: any value violates its constraint
    """
    if loc is None:
        raise MissingArgumentError("URL is mandatory. At least the location must be given.")
    if not isinstance(loc, str):
        raise InvalidArgumentError(f"URL must be a string, got {type(loc).__name__}")
    if loc == "":
        raise InvalidArgumentError("URL cannot be empty.")

    # len() on str counts characters, not UTF-8 bytes
    if len(loc) > MAX_URL_LENGTH:
        raise InvalidArgumentError(
            f"URL length can't be bigger than {MAX_URL_LENGTH} characters "
            f"(got {len(loc)}): {loc[:64]}..."
        )

    invalid = _INVALID_XML_CHARS.search(loc)
    if invalid:
        raise InvalidArgumentError(
            f"URL contains character U+{ord(invalid.group()):04X} at position {invalid.start()}, "
            "which is not allowed in XML or cannot be encoded as UTF-8."
        )

    lastmod_text = None
    if lastmod is not None:
        try:
            lastmod_text = format_lastmod(lastmod)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Invalid last modified value {lastmod!r}: {e}", original_error=e) from e

    frequency = None
    if changefreq is not None:
        try:
            frequency = ChangeFrequency(changefreq)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Invalid change frequency {changefreq!r}. "
                f"Must be one of: {', '.join(ChangeFrequency.values())}",
                original_error=e,
            ) from e

    priority_value = None
    if priority is not None:
        try:
            priority_value = float(priority)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Priority must be a number, got {priority!r}", original_error=e) from e
        if math.isnan(priority_value) or not MIN_PRIORITY <= priority_value <= MAX_PRIORITY:
            raise InvalidArgumentError(
                f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {priority_value}"
            )

    try:
        return UrlEntry(loc=loc, lastmod=lastmod_text, changefreq=frequency, priority=priority_value)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid URL entry {loc!r}: {e}", original_error=e) from e


class UrlStore:
    """Ordered, append-only collection of UrlEntry objects.

    Slots grow by doubling, so ``capacity`` may exceed the number of stored
    entries. ``len(store)`` is always the occupied count.

    Usage:
        store = UrlStore()
        store.append("/about", changefreq="monthly", priority=0.8)
        for entry in store:
            print(entry.loc)
    """

    def __init__(self):
        self._slots: list[Optional[UrlEntry]] = []
        self._count = 0

    def append(
        self,
        loc: Optional[str],
        lastmod: Optional[LastMod] = None,
        changefreq: Optional[Union[str, ChangeFrequency]] = None,
        priority: Optional[Union[float, int, str]] = None,
    ) -> int:
        """Validate and store one URL.

        Returns:
            Position of the new entry

        Raises:
            MissingArgumentError: loc is None
            InvalidArgumentError: any value violates its constraint
        """
        entry = validate_url(loc, lastmod, changefreq, priority)
        return self.append_entry(entry)

    def append_entry(self, entry: UrlEntry) -> int:
        """Store an already validated entry and return its position."""
        if self._count == len(self._slots):
            self._grow()
        position = self._count
        self._slots[position] = entry
        self._count += 1
        logger.debug("Stored URL #%d: %s", position, entry.loc)
        return position

    def extend(self, rows: Iterable[UrlRow]) -> int:
        """Append many URLs given as sequences or mappings.

        A sequence row holds 1 to 4 values in the order
        (loc, lastmod, changefreq, priority); a mapping uses those keys.
        Stops at the first invalid row; rows before it stay stored.

        Returns:
            Number of rows appended
        """
        added = 0
        for row in rows:
            if isinstance(row, Mapping):
                values = [row.get(key) for key in _ROW_KEYS]
            elif isinstance(row, Sequence) and not isinstance(row, str):
                if len(row) > len(_ROW_KEYS):
                    raise InvalidArgumentError(f"URL row has {len(row)} fields, at most 4 allowed: {row!r}")
                values = list(row) + [None] * (len(_ROW_KEYS) - len(row))
            else:
                raise InvalidArgumentError(f"URL row must be a sequence or mapping, got {type(row).__name__}")
            self.append(*values)
            added += 1
        return added

    def _grow(self) -> None:
        new_capacity = max(1, len(self._slots) * 2)
        self._slots.extend([None] * (new_capacity - len(self._slots)))

    @property
    def capacity(self) -> int:
        """Number of allocated slots, occupied or not."""
        return len(self._slots)

    def legacy_count(self) -> int:
        """Slot capacity, the URL count reported by earlier releases.

        Over-counts whenever capacity is not full; prefer len(store).
        """
        return self.capacity

    def slots(self) -> Iterator[Optional[UrlEntry]]:
        """Iterate every slot, yielding None for unoccupied ones."""
        return iter(list(self._slots))

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[UrlEntry]:
        for position in range(self._count):
            entry = self._slots[position]
            if entry is not None:
                yield entry

    def __getitem__(self, position: int) -> UrlEntry:
        if position < 0:
            position += self._count
        if not 0 <= position < self._count:
            raise IndexError(f"URL position {position} out of range")
        return self._slots[position]

    def __bool__(self) -> bool:
        return self._count > 0

    def to_dicts(self) -> list[dict[str, Any]]:
        """All entries as dicts with only their populated keys."""
        return [entry.to_dict() for entry in self]
