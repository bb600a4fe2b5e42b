"""Sitemapgen CLI - generate sitemaps, update robots.txt, ping search engines."""

from __future__ import annotations

import csv
import json
import logging
import sys
from typing import Any, Iterator, NoReturn, Optional, TextIO

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sitemapgen import __version__
from sitemapgen.config import get_config_or_default
from sitemapgen.errors import SitemapError
from sitemapgen.generator import SitemapGenerator

console = Console()
format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default="text",
    help="Output format (json for scripts, text for humans)",
)


def print_json(data: Any) -> None:
    """Print JSON output for scripts."""
    click.echo(json.dumps(data, indent=2, default=str))


def read_url_rows(stream: TextIO) -> Iterator[list[Optional[str]]]:
    """
    Read CSV rows of loc[,lastmod[,changefreq[,priority]]].

    Blank lines, lines starting with '#' and a leading "loc" header are
    skipped. Empty cells become None.
    """
    for line_number, row in enumerate(csv.reader(stream), start=1):
        if not row or not row[0].strip() or row[0].lstrip().startswith("#"):
            continue
        if line_number == 1 and row[0].strip().lower() == "loc":
            continue
        yield [cell.strip() or None for cell in row]


@click.group()
@click.version_option(version=__version__, prog_name="sitemapgen")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """
    Sitemapgen - XML sitemap generator.

    Builds sitemaps.org sitemaps (with an index when needed) from a URL list.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@main.command("generate")
@click.argument("base_url", required=False)
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8-sig"),
    default="-",
    help="CSV file of loc,lastmod,changefreq,priority rows (default: stdin)",
)
@click.option("--out", "out_dir", help="Output directory (default: BASE_PATH from sitemap.config or '.')")
@click.option("--gzip/--no-gzip", "gzip", default=None, help="Also write gzip-compressed sitemaps")
@click.option("--max-urls", type=int, help="URLs per sitemap file (max 50000)")
@click.option("--sitemap-name", help="Sitemap file name (default: sitemap.xml)")
@click.option("--index-name", help="Sitemap index file name (default: sitemap-index.xml)")
@click.option("--robots", is_flag=True, help="Insert Sitemap: lines into robots.txt")
@click.option("--submit", is_flag=True, help="Ping search engines with the sitemap URL")
@format_option
def generate_cmd(
    base_url: str | None,
    input_file: TextIO,
    out_dir: str | None,
    gzip: bool | None,
    max_urls: int | None,
    sitemap_name: str | None,
    index_name: str | None,
    robots: bool,
    submit: bool,
    output_format: str,
):
    """
    Build sitemap files from a list of URL paths.

    \b
    Examples:
        sitemapgen generate https://example.com --input urls.csv --out public
        cat urls.csv | sitemapgen generate https://example.com --gzip --robots
        sitemapgen generate --format json   # BASE_URL from sitemap.config
    """
    try:
        config = get_config_or_default(
            base_url=base_url,
            base_path=out_dir,
            create_gzip_file=gzip,
            max_urls_per_sitemap=max_urls,
            sitemap_file_name=sitemap_name,
            sitemap_index_file_name=index_name,
        )
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}", output_format)

    try:
        generator = SitemapGenerator(config=config)
        generator.add_urls(read_url_rows(input_file))
        result = generator.build()
        written = generator.write_sitemap()
        robots_path = generator.update_robots() if robots else None
        submissions = generator.submit_sitemap() if submit else []
    except SitemapError as e:
        _fail(e.message, output_format)

    if output_format == "json":
        print_json(
            {
                "status": "ok",
                "sitemap_url": result.sitemap_url,
                "url_count": generator.url_count(),
                "sitemaps": len(result.sitemaps),
                "index": result.index.filename if result.index else None,
                "files": [str(path) for path in written],
                "robots": str(robots_path) if robots_path else None,
                "submissions": [s.model_dump() for s in submissions],
            }
        )
        return

    console.print(
        f"[green]✓[/green] Built {len(result.sitemaps)} sitemap(s) "
        f"for {generator.url_count()} URL(s)"
    )
    for path in written:
        console.print(f"  [dim]{path}[/dim]")
    console.print(f"[dim]Sitemap URL: {result.sitemap_url}[/dim]")
    if robots_path:
        console.print(f"[green]✓[/green] Updated {robots_path}")
    for submission in submissions:
        mark = "[green]✓[/green]" if submission.ok else "[red]✗[/red]"
        console.print(f"{mark} {submission.site}: HTTP {submission.status_code}")


def _fail(message: str, output_format: str) -> NoReturn:
    if output_format == "json":
        print_json({"status": "error", "message": message})
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


if __name__ == "__main__":
    main()
