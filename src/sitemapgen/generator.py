"""Single-use sitemap generator tying store, builder and I/O together."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from pydantic import ValidationError

from sitemapgen import __version__
from sitemapgen.builder import BuildResult, SitemapBuilder
from sitemapgen.builder.serialize import join_url
from sitemapgen.config import GeneratorConfig
from sitemapgen.errors import InvalidConfigurationError, PreconditionError
from sitemapgen.io import SubmissionResult, submit_sitemap, update_robots, write_documents
from sitemapgen.store import UrlStore
from sitemapgen.store.store import LastMod, UrlRow

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class SitemapGenerator:
    """Collects URLs, builds sitemaps and publishes them.

    A generator is used once: add URLs, call build(), then export, write,
    update robots.txt or submit. Building twice, or adding URLs after
    building, raises PreconditionError.

    Usage:
        generator = SitemapGenerator("https://example.com", base_path="public")
        generator.add_url("/", lastmod=datetime.now(timezone.utc), changefreq="daily", priority=1.0)
        generator.add_urls([("/about",), ("/blog", None, "weekly", 0.9)])
        generator.build()
        generator.write_sitemap()
        generator.update_robots()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        base_path: Optional[str] = None,
        *,
        config: Optional[GeneratorConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
        **options: Any,
    ):
        """Initialize generator.

        Args:
            base_url: Site URL; a trailing slash is added if missing
            base_path: Directory for sitemap and robots files
            config: Full configuration (base_url/base_path/options override it)
            clock: Generation time source, for reproducible output
            **options: Any other GeneratorConfig field

        Raises:
            InvalidConfigurationError: an option is unknown or a value is invalid
        """
        unknown = sorted(set(options) - set(GeneratorConfig.model_fields))
        if unknown:
            raise InvalidConfigurationError(f"Unknown generator option(s): {', '.join(unknown)}")

        values = config.model_dump() if config is not None else {}
        if base_url is not None:
            values["base_url"] = base_url
        if base_path is not None:
            values["base_path"] = base_path
        values.update(options)
        try:
            self.config = GeneratorConfig(**values)
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid generator configuration: {e}", original_error=e) from e
        self.store = UrlStore()
        self.builder = SitemapBuilder(self.config, clock=clock)
        self._result: Optional[BuildResult] = None

    @property
    def version(self) -> str:
        return __version__

    @property
    def result(self) -> BuildResult:
        """The build result; raises PreconditionError before build()."""
        return self._require_built("access build results")

    @property
    def sitemap_url(self) -> str:
        """Canonical sitemap URL (index URL when an index exists)."""
        return self._require_built("get the sitemap URL").sitemap_url

    def add_url(
        self,
        loc: Optional[str],
        lastmod: Optional[LastMod] = None,
        changefreq: Optional[str] = None,
        priority: Optional[Union[float, str]] = None,
    ) -> int:
        """Validate and add one URL path (relative to base_url)."""
        self._require_not_built()
        return self.store.append(loc, lastmod, changefreq, priority)

    def add_urls(self, rows: Iterable[UrlRow]) -> int:
        """Add many URLs given as (loc, lastmod, changefreq, priority) rows or dicts."""
        self._require_not_built()
        return self.store.extend(rows)

    def get_urls(self) -> list[dict[str, Any]]:
        """Added URLs as dicts with only their populated keys."""
        return self.store.to_dicts()

    def count_urls(self) -> int:
        """Number of URLs added."""
        return len(self.store)

    url_count = count_urls

    def build(self) -> BuildResult:
        """Build sitemap documents from the added URLs.

        Raises:
            PreconditionError: no URLs added, or already built
            InvalidConfigurationError: max_urls_per_sitemap above 50000
            SizeExceededError: a sitemap or the index exceeds protocol limits
        """
        if self._result is not None:
            raise PreconditionError("Sitemap already built. Create a new generator for another URL set.")
        self._result = self.builder.build(self.store)
        logger.info(f"Sitemap ready at {self._result.sitemap_url}")
        return self._result

    def export(self) -> list[tuple[str, str]]:
        """Built documents as (filename, xml) pairs, index first."""
        return self._require_built("export sitemaps").to_pairs()

    def write_sitemap(self, directory: Optional[Union[str, Path]] = None) -> list[Path]:
        """Write built documents to directory (default: config.base_path)."""
        result = self._require_built("write sitemap")
        target = Path(directory) if directory is not None else self.config.get_output_dir()
        return write_documents(result, target, compress=self.config.create_gzip_file)

    def robots_sitemap_urls(self) -> list[str]:
        """URLs to publish in robots.txt."""
        result = self._require_built("update robots.txt")
        urls = [result.sitemap_url]
        if not result.has_index and self.config.create_gzip_file:
            urls.append(join_url(self.config.base_url, result.sitemaps[0].filename))
        return urls

    def update_robots(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Point robots.txt (default: base_path/robots_file_name) at the sitemap."""
        urls = self.robots_sitemap_urls()
        target = Path(path) if path is not None else self.config.get_robots_path()
        return update_robots(target, urls)

    def submit_sitemap(
        self,
        endpoints: Optional[Iterable[str]] = None,
        client: Optional["httpx.Client"] = None,
    ) -> list[SubmissionResult]:
        """Ping search engines (default: config.search_engines) with the sitemap URL."""
        result = self._require_built("submit sitemap")
        return submit_sitemap(
            result.sitemap_url,
            endpoints if endpoints is not None else self.config.search_engines,
            timeout=self.config.submit_timeout,
            client=client,
        )

    def _require_built(self, action: str) -> BuildResult:
        if self._result is None:
            raise PreconditionError(f"To {action}, call build() first.")
        return self._result

    def _require_not_built(self) -> None:
        if self._result is not None:
            raise PreconditionError("Cannot add URLs after build(). Create a new generator instead.")
