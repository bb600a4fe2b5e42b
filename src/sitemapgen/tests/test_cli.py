"""Tests for the sitemapgen CLI."""

import io
import json
from pathlib import Path

from sitemapgen import __version__
from sitemapgen.cli import main, read_url_rows

URLS_CSV = "loc,lastmod,changefreq,priority\n/,2024-01-15,daily,1.0\n/about,,,\n\n# skipped\n/blog,,weekly,0.8\n"


class TestReadUrlRows:
    def test_parses_rows(self):
        rows = list(read_url_rows(io.StringIO(URLS_CSV)))

        assert rows == [
            ["/", "2024-01-15", "daily", "1.0"],
            ["/about", None, None, None],
            ["/blog", None, "weekly", "0.8"],
        ]

    def test_header_only_skipped_on_first_line(self):
        rows = list(read_url_rows(io.StringIO("/a\nloc\n")))
        assert rows == [["/a"], ["loc"]]


class TestMain:
    def test_help(self, cli_runner):
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestGenerate:
    def test_generate_text(self, cli_runner_isolated):
        result = cli_runner_isolated.invoke(
            main, ["generate", "https://example.com", "--out", "public"], input=URLS_CSV
        )

        assert result.exit_code == 0, result.output
        assert "Built 1 sitemap(s) for 3 URL(s)" in result.output
        assert "Sitemap URL: https://example.com/sitemap.xml" in result.output
        xml = Path("public/sitemap.xml").read_text(encoding="utf-8")
        assert "<url><loc>https://example.com/about</loc></url>" in xml
        assert "<lastmod>2024-01-15T00:00:00+00:00</lastmod>" in xml

    def test_generate_json_with_index(self, cli_runner_isolated):
        rows = "".join(f"/p{i}\n" for i in range(5))
        result = cli_runner_isolated.invoke(
            main,
            ["generate", "https://example.com", "--max-urls", "2", "--gzip", "--format", "json"],
            input=rows,
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "ok"
        assert data["sitemap_url"] == "https://example.com/sitemap-index.xml"
        assert data["url_count"] == 5
        assert data["sitemaps"] == 3
        assert data["index"] == "sitemap-index.xml"
        assert data["files"] == ["sitemap-index.xml", "sitemap1.xml.gz", "sitemap2.xml.gz", "sitemap3.xml.gz"]
        assert data["robots"] is None
        assert data["submissions"] == []

    def test_generate_from_file_with_robots(self, cli_runner_isolated):
        Path("urls.csv").write_text("/a\n/b\n", encoding="utf-8")

        result = cli_runner_isolated.invoke(
            main,
            ["generate", "https://example.com", "--input", "urls.csv", "--sitemap-name", "map.xml", "--robots"],
        )

        assert result.exit_code == 0, result.output
        assert Path("map.xml").exists()
        assert Path("robots.txt").read_text(encoding="utf-8") == (
            "User-agent: *\nAllow: /\n\nSitemap: https://example.com/map.xml\n"
        )

    def test_generate_from_file_with_bom(self, cli_runner_isolated):
        Path("urls.csv").write_text("loc,lastmod\n/a,\n", encoding="utf-8-sig")

        result = cli_runner_isolated.invoke(
            main, ["generate", "https://example.com", "--input", "urls.csv", "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["url_count"] == 1
        xml = Path("sitemap.xml").read_text(encoding="utf-8")
        assert "<url><loc>https://example.com/a</loc></url>" in xml
        assert "loc</loc>" not in xml

    def test_generate_uses_config_file(self, cli_runner_isolated):
        Path("sitemap.config").write_text(
            'BASE_URL="https://config.example"\nBASE_PATH="site"\nSITEMAP_INDEX_FILE_NAME="idx.xml"\n',
            encoding="utf-8",
        )

        result = cli_runner_isolated.invoke(
            main, ["generate", "--max-urls", "1", "--format", "json"], input="/a\n/b\n"
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["sitemap_url"] == "https://config.example/idx.xml"
        assert Path("site/idx.xml").exists()

    def test_generate_submit(self, cli_runner_isolated, httpx_mock):
        Path("sitemap.config").write_text(
            'BASE_URL="https://example.com"\nSEARCH_ENGINES="https://ping.example.org/?u="\n',
            encoding="utf-8",
        )
        httpx_mock.add_response(url="https://ping.example.org/?u=https%3A%2F%2Fexample.com%2Fsitemap.xml")

        result = cli_runner_isolated.invoke(main, ["generate", "--submit", "--format", "json"], input="/a\n")

        assert result.exit_code == 0, result.output
        submissions = json.loads(result.output)["submissions"]
        assert len(submissions) == 1
        assert submissions[0]["site"] == "example.org"
        assert submissions[0]["status_code"] == 200

    def test_missing_base_url(self, cli_runner_isolated):
        result = cli_runner_isolated.invoke(main, ["generate"], input="/a\n")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "base_url" in result.output

    def test_invalid_row(self, cli_runner_isolated):
        result = cli_runner_isolated.invoke(
            main, ["generate", "https://example.com", "--format", "json"], input="/a,,,7\n"
        )

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["status"] == "error"
        assert "between 0.0 and 1.0" in data["message"]
        assert not Path("sitemap.xml").exists()

    def test_no_urls(self, cli_runner_isolated):
        result = cli_runner_isolated.invoke(main, ["generate", "https://example.com"], input="")

        assert result.exit_code == 1
        assert "No URLs added" in result.output

    def test_max_urls_above_limit(self, cli_runner_isolated):
        result = cli_runner_isolated.invoke(
            main, ["generate", "https://example.com", "--max-urls", "50001"], input="/a\n"
        )

        assert result.exit_code == 1
        assert "50000" in result.output
