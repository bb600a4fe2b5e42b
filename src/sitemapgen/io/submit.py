"""Ping search engines with a sitemap URL."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional
from urllib.parse import quote_plus, urlparse

from pydantic import BaseModel, Field

from sitemapgen.errors import CapabilityUnavailableError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_TAG_RE = re.compile(r"<[^>]*>")


class SubmissionResult(BaseModel):
    """Outcome of one ping request."""

    site: str = Field(..., description="Short site label, e.g. 'google.com'")
    full_url: str = Field(..., description="Requested ping URL")
    status_code: int = Field(..., description="HTTP status, 0 when the request failed")
    message: str = Field(default="", description="Response body without markup")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def site_label(endpoint: str) -> str:
    """Last two labels of the endpoint host: www.google.com -> google.com."""
    host = urlparse(endpoint).hostname or ""
    labels = host.split(".")
    return ".".join(labels[-2:])


def strip_markup(body: str) -> str:
    """Remove tags and collapse newlines to spaces."""
    return _TAG_RE.sub("", body).replace("\r\n", " ").replace("\n", " ")


def _import_httpx():
    try:
        import httpx
    except ImportError as e:
        raise CapabilityUnavailableError(
            "httpx is required to submit sitemaps. Install with: pip install httpx",
            original_error=e,
        ) from e
    return httpx


def submit_sitemap(
    sitemap_url: str,
    endpoints: Iterable[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional["httpx.Client"] = None,
) -> list[SubmissionResult]:
    """Send the sitemap URL to each ping endpoint.

    Args:
        sitemap_url: Canonical sitemap URL
        endpoints: Ping URL prefixes; the percent-encoded sitemap URL is appended
        timeout: Request timeout in seconds
        client: Optional httpx.Client to reuse (not closed here)

    Returns:
        One SubmissionResult per endpoint, in order

    Raises:
        CapabilityUnavailableError: httpx is not installed
    """
    httpx = _import_httpx()

    encoded = quote_plus(sitemap_url)
    results: list[SubmissionResult] = []

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        for endpoint in endpoints:
            full_url = endpoint + encoded
            try:
                response = client.get(full_url, timeout=timeout)
                status_code = response.status_code
                message = strip_markup(response.text)
            except httpx.RequestError as e:
                logger.warning(f"Sitemap ping failed for {full_url}: {e}")
                status_code = 0
                message = str(e)

            results.append(
                SubmissionResult(
                    site=site_label(endpoint),
                    full_url=full_url,
                    status_code=status_code,
                    message=message,
                )
            )
            logger.info(f"Pinged {site_label(endpoint)}: HTTP {status_code}")
    finally:
        if owns_client:
            client.close()

    return results
