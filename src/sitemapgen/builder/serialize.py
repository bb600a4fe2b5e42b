"""XML serialization for sitemaps and sitemap indexes."""

from __future__ import annotations

import html
from collections.abc import Iterable
from datetime import datetime

from sitemapgen.store.models import UrlEntry, format_priority

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SITEMAP_XSD = f"{SITEMAP_NS}/sitemap.xsd"
SITEINDEX_XSD = f"{SITEMAP_NS}/siteindex.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def escape(text: str) -> str:
    """Escape & < > " ' for element content."""
    return html.escape(text, quote=True)


def generator_comment(generated_at: datetime, generator: str) -> str:
    return f'<!-- generated-on="{generated_at.isoformat()}" generator="{generator}" -->'


def _root_open(tag: str, schema: str) -> str:
    return (
        f'<{tag} xmlns:xsi="{XSI_NS}" '
        f'xsi:schemaLocation="{SITEMAP_NS} {schema}" '
        f'xmlns="{SITEMAP_NS}">'
    )


def join_url(base_url: str, loc: str) -> str:
    """Join a base URL and a relative location with exactly one slash."""
    return base_url.rstrip("/") + "/" + loc.lstrip("/")


def url_element(base_url: str, entry: UrlEntry) -> str:
    """One <url> element on a single line; children in loc, lastmod, changefreq, priority order."""
    parts = ["<url>", f"<loc>{escape(join_url(base_url, entry.loc))}</loc>"]
    if entry.lastmod is not None:
        parts.append(f"<lastmod>{entry.lastmod}</lastmod>")
    if entry.changefreq is not None:
        parts.append(f"<changefreq>{entry.changefreq.value}</changefreq>")
    if entry.priority is not None:
        parts.append(f"<priority>{format_priority(entry.priority)}</priority>")
    parts.append("</url>")
    return "".join(parts)


def sitemap_element(loc: str, lastmod: str) -> str:
    return f"<sitemap><loc>{escape(loc)}</loc><lastmod>{lastmod}</lastmod></sitemap>"


def render_urlset(
    base_url: str,
    entries: Iterable[UrlEntry],
    generated_at: datetime,
    generator: str,
) -> str:
    """Serialize entries as a complete <urlset> document."""
    lines = [
        XML_DECLARATION,
        generator_comment(generated_at, generator),
        _root_open("urlset", SITEMAP_XSD),
    ]
    lines.extend(url_element(base_url, entry) for entry in entries)
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def render_sitemap_index(
    locations: Iterable[str],
    generated_at: datetime,
    generator: str,
) -> str:
    """Serialize absolute sitemap URLs as a complete <sitemapindex> document."""
    lastmod = generated_at.isoformat()
    lines = [
        XML_DECLARATION,
        generator_comment(generated_at, generator),
        _root_open("sitemapindex", SITEINDEX_XSD),
    ]
    lines.extend(sitemap_element(loc, lastmod) for loc in locations)
    lines.append("</sitemapindex>")
    return "\n".join(lines) + "\n"
