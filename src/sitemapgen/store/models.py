"""Pydantic models for sitemap URL entries."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ChangeFrequency(str, Enum):
    """How often a page is expected to change."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


MAX_URL_LENGTH = 2048
MIN_PRIORITY = 0.0
MAX_PRIORITY = 1.0


def format_lastmod(value: datetime | date | str) -> str:
    """Render a timestamp as ISO-8601 with offset (2024-01-15T00:00:00+00:00).

    Naive datetimes are taken as UTC, plain dates as midnight UTC, and
    microseconds are dropped. Strings are parsed with datetime.fromisoformat.
    """
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat only accepts a "Z" suffix from Python 3.11
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        raise TypeError(f"Unsupported lastmod type: {type(value).__name__}")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.replace(microsecond=0).isoformat()


def format_priority(value: float) -> str:
    """Render a priority with one decimal unless more precision is needed."""
    if round(value, 1) == value:
        return f"{value:.1f}"
    return repr(value)


class UrlEntry(BaseModel):
    """One page listed in a sitemap.

    Optional fields left as None are omitted from the serialized <url>.
    Construct through UrlStore.append, which validates the raw values.
    """

    loc: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH, description="Path relative to base URL")
    lastmod: Optional[str] = Field(None, description="ISO-8601 date-time with offset")
    changefreq: Optional[ChangeFrequency] = Field(None, description="Expected change cadence")
    priority: Optional[float] = Field(None, ge=MIN_PRIORITY, le=MAX_PRIORITY, description="Relative importance")

    model_config = {"frozen": True}

    def populated_fields(self) -> list[str]:
        """Names of the supplied fields, in <url> child order."""
        return [name for name in ("loc", "lastmod", "changefreq", "priority") if getattr(self, name) is not None]

    def to_dict(self) -> dict[str, Any]:
        """Entry as a dict containing only populated keys."""
        data: dict[str, Any] = {"loc": self.loc}
        if self.lastmod is not None:
            data["lastmod"] = self.lastmod
        if self.changefreq is not None:
            data["changefreq"] = self.changefreq.value
        if self.priority is not None:
            data["priority"] = self.priority
        return data
