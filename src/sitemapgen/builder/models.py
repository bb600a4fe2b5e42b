"""Pydantic models for built sitemap documents."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SitemapDocument(BaseModel):
    """A named, fully serialized sitemap or sitemap index."""

    filename: str = Field(..., description="Public file name, without .gz suffix")
    content: str = Field(..., description="Serialized XML")
    is_index: bool = Field(False, description="True for the sitemap index document")
    url_count: int = Field(0, ge=0, description="Entries (or child sitemaps) described")

    model_config = {"frozen": True}

    def encode(self) -> bytes:
        return self.content.encode("utf-8")

    @property
    def size(self) -> int:
        """Serialized size in UTF-8 bytes."""
        return len(self.encode())


class BuildResult(BaseModel):
    """Documents produced by one SitemapBuilder.build() call."""

    sitemaps: list[SitemapDocument] = Field(default_factory=list)
    index: Optional[SitemapDocument] = Field(None, description="Present only for more than one sitemap")
    sitemap_url: str = Field(..., description="Canonical URL published to robots.txt and search engines")
    generated_at: datetime = Field(..., description="Generation timestamp used in every document")

    model_config = {"frozen": True}

    @property
    def has_index(self) -> bool:
        return self.index is not None

    def documents(self) -> list[SitemapDocument]:
        """Index first (if any), then sitemaps in chunk order."""
        if self.index is not None:
            return [self.index, *self.sitemaps]
        return list(self.sitemaps)

    def to_pairs(self) -> list[tuple[str, str]]:
        """Documents as (filename, xml) pairs, index first."""
        return [(doc.filename, doc.content) for doc in self.documents()]
