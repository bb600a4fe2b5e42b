"""Tests for GeneratorConfig and sitemap.config loading."""

import pytest
from pydantic import ValidationError

from sitemapgen.config import (
    GeneratorConfig,
    config_file_exists,
    create_config,
    get_config_file_path,
    get_config_or_default,
    load_config,
    read_config_values,
)


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig(base_url="https://example.com")

        assert config.base_url == "https://example.com/"
        assert config.base_path == "."
        assert config.sitemap_file_name == "sitemap.xml"
        assert config.sitemap_index_file_name == "sitemap-index.xml"
        assert config.robots_file_name == "robots.txt"
        assert config.max_urls_per_sitemap == 50000
        assert config.max_sitemaps == 50000
        assert config.create_gzip_file is False
        assert config.search_engines == GeneratorConfig.DEFAULT_SEARCH_ENGINES
        assert config.submit_timeout == 30.0

    def test_search_engines_not_shared(self):
        first = GeneratorConfig(base_url="https://a.example")
        first.search_engines.append("https://x.example/?u=")

        assert GeneratorConfig(base_url="https://b.example").search_engines == GeneratorConfig.DEFAULT_SEARCH_ENGINES

    @pytest.mark.parametrize("base_url", ["", "   "])
    def test_empty_base_url(self, base_url):
        with pytest.raises(ValidationError, match="Base URL cannot be empty"):
            GeneratorConfig(base_url=base_url)

    def test_base_url_stripped(self):
        assert GeneratorConfig(base_url="  https://example.com/blog  ").base_url == "https://example.com/blog/"

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("yes", True), ("false", False), (0, False)])
    def test_gzip_flag_parsing(self, value, expected):
        assert GeneratorConfig(base_url="https://e.com", create_gzip_file=value).create_gzip_file is expected

    def test_search_engines_from_string(self):
        config = GeneratorConfig(base_url="https://e.com", search_engines="https://a/?u=, https://b/?u=,")
        assert config.search_engines == ["https://a/?u=", "https://b/?u="]

    def test_max_sitemaps_bounds(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(base_url="https://e.com", max_sitemaps=50001)
        with pytest.raises(ValidationError):
            GeneratorConfig(base_url="https://e.com", max_sitemaps=0)

    def test_max_urls_lower_bound(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(base_url="https://e.com", max_urls_per_sitemap=0)

    def test_validate_assignment(self):
        config = GeneratorConfig(base_url="https://e.com")
        config.base_url = "https://other.example"
        assert config.base_url == "https://other.example/"

    def test_paths(self, tmp_path):
        config = GeneratorConfig(base_url="https://e.com", base_path=str(tmp_path), robots_file_name="r.txt")
        assert config.get_output_dir() == tmp_path
        assert config.get_robots_path() == tmp_path / "r.txt"


class TestConfigFile:
    def test_read_values(self, tmp_path):
        path = tmp_path / "sitemap.config"
        path.write_text(
            "# comment\n"
            "\n"
            'BASE_URL="https://example.com"\n'
            "max_urls_per_sitemap=100\n"
            "CREATE_GZIP_FILE='true'\n"
            "NOT_A_LINE\n",
            encoding="utf-8",
        )

        assert read_config_values(path) == {
            "base_url": "https://example.com",
            "max_urls_per_sitemap": "100",
            "create_gzip_file": "true",
        }

    def test_read_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_config_values(tmp_path / "sitemap.config")

    def test_load_with_overrides(self, tmp_path):
        path = tmp_path / "sitemap.config"
        path.write_text('BASE_URL="https://example.com"\nMAX_URLS_PER_SITEMAP=100\nUNKNOWN_KEY=1\n', encoding="utf-8")

        config = load_config(path, max_urls_per_sitemap=10, base_path=None)

        assert config.base_url == "https://example.com/"
        assert config.max_urls_per_sitemap == 10
        assert config.base_path == "."

    def test_create_round_trip(self, tmp_path):
        original = GeneratorConfig(
            base_url="https://example.com",
            base_path="public",
            max_urls_per_sitemap=1000,
            create_gzip_file=True,
            search_engines=["https://a/?u=", "https://b/?u="],
        )
        path = create_config(original, tmp_path / "nested" / "sitemap.config")

        content = path.read_text(encoding="utf-8")
        assert 'BASE_URL="https://example.com/"' in content
        assert "CREATE_GZIP_FILE=True" in content
        assert load_config(path) == original

    def test_cwd_lookup(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert get_config_file_path() == tmp_path / "sitemap.config"
        assert not config_file_exists()
        assert get_config_or_default(base_url="https://e.com", base_path=None).base_path == "."

        (tmp_path / "sitemap.config").write_text('BASE_URL="https://file.example"\nBASE_PATH=out\n', encoding="utf-8")

        assert config_file_exists()
        config = get_config_or_default(base_url=None)
        assert config.base_url == "https://file.example/"
        assert config.base_path == "out"
