"""
Root pytest configuration for sitemapgen.

Provides a fixed clock, generator factories and CLI testing fixtures.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest
from click.testing import CliRunner

from sitemapgen.builder import SitemapBuilder
from sitemapgen.config import GeneratorConfig
from sitemapgen.generator import SitemapGenerator

FIXED_TIME = datetime(2024, 1, 20, 12, 30, 45, tzinfo=timezone.utc)


# ============================================================================
# Clock / Builder Fixtures
# ============================================================================


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig(base_url="https://example.com")


@pytest.fixture
def builder(config: GeneratorConfig, fixed_clock) -> SitemapBuilder:
    return SitemapBuilder(config, clock=fixed_clock)


@pytest.fixture
def make_generator(tmp_path, fixed_clock) -> Callable[..., SitemapGenerator]:
    """
    Factory for generators writing into tmp_path with a fixed clock.

    Usage:
        def test_something(make_generator):
            generator = make_generator(max_urls_per_sitemap=2)
    """

    def _make(base_url: str = "https://example.com", **options) -> SitemapGenerator:
        options.setdefault("base_path", str(tmp_path))
        return SitemapGenerator(base_url, clock=fixed_clock, **options)

    return _make


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def cli_runner_isolated(cli_runner: CliRunner):
    """Create a Click CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner
