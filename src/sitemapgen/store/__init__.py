"""URL store - validated, ordered sitemap entries."""

from sitemapgen.store.models import ChangeFrequency, UrlEntry, format_lastmod, format_priority
from sitemapgen.store.store import UrlStore, validate_url

__all__ = [
    "ChangeFrequency",
    "UrlEntry",
    "UrlStore",
    "format_lastmod",
    "format_priority",
    "validate_url",
]
