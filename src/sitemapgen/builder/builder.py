"""Partition URL entries into bounded sitemap documents."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from sitemapgen import __version__
from sitemapgen.builder.models import BuildResult, SitemapDocument
from sitemapgen.builder.serialize import join_url, render_sitemap_index, render_urlset
from sitemapgen.config import GeneratorConfig
from sitemapgen.errors import InvalidConfigurationError, PreconditionError, SizeExceededError
from sitemapgen.store import UrlStore

logger = logging.getLogger(__name__)

GENERATOR_NAME = "sitemapgen"
GZIP_SUFFIX = ".gz"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def chunk_file_name(file_name: str, number: int) -> str:
    """Insert a 1-based chunk number before the .xml extension.

    sitemap.xml -> sitemap1.xml; names without .xml get the number appended.
    """
    if file_name.endswith(".xml"):
        return f"{file_name[:-4]}{number}.xml"
    return f"{file_name}{number}"


def public_file_name(file_name: str, gzip: bool) -> str:
    """File name as published: with .gz when compressed files are created."""
    return file_name + GZIP_SUFFIX if gzip else file_name


class SitemapBuilder:
    """Builds sitemap documents (and an index when needed) from a UrlStore.

    Documents hold at most ``config.max_urls_per_sitemap`` entries and at
    most MAX_FILE_SIZE bytes each. More than one document produces an index
    named ``config.sitemap_index_file_name``.

    Usage:
        builder = SitemapBuilder(GeneratorConfig(base_url="https://example.com"))
        result = builder.build(store)
        for filename, xml in result.to_pairs():
            ...
    """

    MAX_FILE_SIZE = GeneratorConfig.MAX_FILE_SIZE

    def __init__(
        self,
        config: GeneratorConfig,
        clock: Optional[Callable[[], datetime]] = None,
        generator: Optional[str] = None,
    ):
        """Initialize builder.

        Args:
            config: Generator configuration
            clock: Returns the generation time; read once per build
            generator: Name/version written into the header comment
        """
        self.config = config
        self.clock = clock or utc_now
        self.generator = generator or f"{GENERATOR_NAME}/{__version__}"

    def validate_config(self) -> None:
        """Raise InvalidConfigurationError if limits exceed the protocol maximums."""
        limit = GeneratorConfig.MAX_URLS_PER_SITEMAP
        if self.config.max_urls_per_sitemap > limit:
            raise InvalidConfigurationError(
                f"More than {limit} URLs per single sitemap is not allowed "
                f"(max_urls_per_sitemap={self.config.max_urls_per_sitemap})."
            )

    def build(self, store: UrlStore) -> BuildResult:
        """Serialize every entry of the store into sitemap documents.

        Raises:
            InvalidConfigurationError: max_urls_per_sitemap above 50000
            PreconditionError: the store is empty
            SizeExceededError: a document above MAX_FILE_SIZE, or more
                documents than config.max_sitemaps
        """
        self.validate_config()

        total = len(store)
        if total == 0:
            raise PreconditionError("No URLs added. Cannot create empty sitemap.")

        per_sitemap = self.config.max_urls_per_sitemap
        chunks = math.ceil(total / per_sitemap)
        generated_at = self._now()
        base_url = self.config.base_url

        logger.info(f"Building {chunks} sitemap(s) for {total} URLs ({per_sitemap} per sitemap)")

        entries = list(store)
        contents: list[tuple[str, int]] = []
        for chunk in range(chunks):
            start = chunk * per_sitemap
            end = min(start + per_sitemap, total)
            xml = render_urlset(base_url, entries[start:end], generated_at, self.generator)
            self._check_size(xml, chunk + 1)
            contents.append((xml, end - start))
            logger.debug(f"Serialized chunk {chunk + 1}/{chunks}: URLs {start}..{end - 1}")

        if len(contents) > self.config.max_sitemaps:
            raise SizeExceededError(
                f"Sitemap index can contain {self.config.max_sitemaps} sitemaps, "
                f"but {len(contents)} were produced. You are trying to submit too many maps.",
                size=len(contents),
                limit=self.config.max_sitemaps,
            )

        gzip = self.config.create_gzip_file

        if len(contents) == 1:
            xml, count = contents[0]
            sitemap = SitemapDocument(filename=self.config.sitemap_file_name, content=xml, url_count=count)
            return BuildResult(
                sitemaps=[sitemap],
                index=None,
                sitemap_url=join_url(base_url, public_file_name(sitemap.filename, gzip)),
                generated_at=generated_at,
            )

        sitemaps = [
            SitemapDocument(
                filename=chunk_file_name(self.config.sitemap_file_name, number),
                content=xml,
                url_count=count,
            )
            for number, (xml, count) in enumerate(contents, start=1)
        ]
        index_xml = render_sitemap_index(
            (join_url(base_url, public_file_name(doc.filename, gzip)) for doc in sitemaps),
            generated_at,
            self.generator,
        )
        index = SitemapDocument(
            filename=self.config.sitemap_index_file_name,
            content=index_xml,
            is_index=True,
            url_count=len(sitemaps),
        )
        logger.info(f"Built sitemap index {index.filename} referencing {len(sitemaps)} sitemaps")

        return BuildResult(
            sitemaps=sitemaps,
            index=index,
            sitemap_url=join_url(base_url, index.filename),
            generated_at=generated_at,
        )

    def _now(self) -> datetime:
        moment = self.clock()
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.replace(microsecond=0)

    def _check_size(self, xml: str, number: int) -> None:
        size = len(xml.encode("utf-8"))
        if size > self.MAX_FILE_SIZE:
            raise SizeExceededError(
                f"Sitemap {number} size ({size} bytes) exceeds 10MB limit "
                f"({self.MAX_FILE_SIZE} bytes). Please decrease max_urls_per_sitemap.",
                size=size,
                limit=self.MAX_FILE_SIZE,
            )
