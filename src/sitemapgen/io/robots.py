"""Insert or replace Sitemap directives in robots.txt."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Union

from sitemapgen.errors import SitemapIOError

logger = logging.getLogger(__name__)

SITEMAP_DIRECTIVE = "Sitemap:"
DEFAULT_ROBOTS = "User-agent: *\nAllow: /"


def render_robots(existing: str | None, sitemap_urls: Iterable[str]) -> str:
    """Return robots.txt content with Sitemap lines replaced by sitemap_urls.

    Lines starting with "Sitemap:" are dropped from existing content; when
    there is no existing content a permissive default body is used.
    """
    directives = [f"{SITEMAP_DIRECTIVE} {url}" for url in sitemap_urls]

    if existing is None:
        return DEFAULT_ROBOTS + "\n\n" + "\n".join(directives) + "\n"

    kept = [line for line in existing.split("\n") if not line.startswith(SITEMAP_DIRECTIVE)]
    body = "\n".join(kept)
    if body and not body.endswith("\n"):
        body += "\n"
    return body + "\n".join(directives) + "\n"


def update_robots(path: Union[str, Path], sitemap_urls: Iterable[str]) -> Path:
    """Rewrite or create a robots file so it points at sitemap_urls.

    Raises:
        SitemapIOError: If the file cannot be read or written
    """
    path = Path(path)
    urls = list(dict.fromkeys(sitemap_urls))
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else None
        path.write_text(render_robots(existing, urls), encoding="utf-8")
    except OSError as e:
        raise SitemapIOError(f"Cannot update robots file: {path}", path=str(path), original_error=e) from e

    logger.info(f"Updated {path} with {len(urls)} sitemap directive(s)")
    return path
