"""Sitemap builder - chunking, serialization and index assembly."""

from sitemapgen.builder.builder import SitemapBuilder, chunk_file_name, public_file_name
from sitemapgen.builder.models import BuildResult, SitemapDocument

__all__ = [
    "BuildResult",
    "SitemapBuilder",
    "SitemapDocument",
    "chunk_file_name",
    "public_file_name",
]
