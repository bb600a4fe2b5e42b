"""XML sitemap generation following the sitemaps.org protocol.

This module provides:
- Store: validated, ordered URL entries (UrlStore, UrlEntry)
- Builder: chunking into bounded sitemaps plus a sitemap index
- IO: file writing (plain/gzip), robots.txt updates, search-engine pings
- SitemapGenerator: single-use facade over all of the above
"""

__version__ = "2.0.0"

from sitemapgen.config import GeneratorConfig as GeneratorConfig
from sitemapgen.config import load_config as load_config
from sitemapgen.errors import CapabilityUnavailableError as CapabilityUnavailableError
from sitemapgen.errors import InvalidArgumentError as InvalidArgumentError
from sitemapgen.errors import InvalidConfigurationError as InvalidConfigurationError
from sitemapgen.errors import MissingArgumentError as MissingArgumentError
from sitemapgen.errors import PreconditionError as PreconditionError
from sitemapgen.errors import SitemapError as SitemapError
from sitemapgen.errors import SitemapIOError as SitemapIOError
from sitemapgen.errors import SizeExceededError as SizeExceededError
from sitemapgen.generator import SitemapGenerator as SitemapGenerator
from sitemapgen.store import ChangeFrequency as ChangeFrequency
from sitemapgen.store import UrlEntry as UrlEntry
from sitemapgen.store import UrlStore as UrlStore
