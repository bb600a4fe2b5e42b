"""
Sitemap generator configuration.

Settings may be passed directly to GeneratorConfig or loaded from a
sitemap.config file in the current directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, field_validator


class GeneratorConfig(BaseModel):
    """Configuration consumed by the URL store, builder and I/O helpers."""

    # Protocol limits (ClassVar to avoid treating as fields)
    MAX_URLS_PER_SITEMAP: ClassVar[int] = 50000
    MAX_SITEMAPS_PER_INDEX: ClassVar[int] = 50000
    MAX_FILE_SIZE: ClassVar[int] = 10 * 1024 * 1024

    DEFAULT_SEARCH_ENGINES: ClassVar[list[str]] = [
        "http://www.google.com/webmasters/tools/ping?sitemap=",
        "http://www.bing.com/webmaster/ping.aspx?siteMap=",
    ]

    base_url: str = Field(..., description="Site URL; always stored with one trailing slash")
    base_path: str = Field(
        default=".",
        description="Directory where sitemap and robots files are written",
    )
    sitemap_file_name: str = Field(default="sitemap.xml", min_length=1)
    sitemap_index_file_name: str = Field(default="sitemap-index.xml", min_length=1)
    robots_file_name: str = Field(default="robots.txt", min_length=1)
    # Upper bound is checked at build time so that it surfaces as a configuration error
    max_urls_per_sitemap: int = Field(
        default=MAX_URLS_PER_SITEMAP,
        ge=1,
        description="URLs per sitemap file (protocol maximum 50000)",
    )
    max_sitemaps: int = Field(
        default=MAX_SITEMAPS_PER_INDEX,
        ge=1,
        le=MAX_SITEMAPS_PER_INDEX,
        description="Sitemap files per index file",
    )
    create_gzip_file: bool = Field(
        default=False,
        description="Also write .xml.gz files and publish the compressed name",
    )
    search_engines: list[str] = Field(
        default_factory=lambda: list(GeneratorConfig.DEFAULT_SEARCH_ENGINES),
        description="Ping URL prefixes; the encoded sitemap URL is appended",
    )
    submit_timeout: float = Field(default=30.0, gt=0, description="Ping request timeout in seconds")

    model_config = {"validate_assignment": True}

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Base URL cannot be empty")
        return v.rstrip("/") + "/"

    @field_validator("create_gzip_file", mode="before")
    @classmethod
    def parse_bool(cls, v: Any) -> bool:
        """Accept "true"/"1"/"yes"/"on" strings from config files."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes", "on")
        return bool(v)

    @field_validator("search_engines", mode="before")
    @classmethod
    def split_search_engines(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    def get_output_dir(self) -> Path:
        return Path(self.base_path)

    def get_robots_path(self) -> Path:
        return self.get_output_dir() / self.robots_file_name


# Keys written by create_config, in file order
_CONFIG_KEYS = (
    "base_url",
    "base_path",
    "sitemap_file_name",
    "sitemap_index_file_name",
    "robots_file_name",
    "max_urls_per_sitemap",
    "max_sitemaps",
    "create_gzip_file",
    "search_engines",
    "submit_timeout",
)


def get_config_file_path() -> Path:
    """Get the path to the sitemap configuration file."""
    return Path.cwd() / "sitemap.config"


def config_file_exists() -> bool:
    """Check if sitemap.config exists in the current directory."""
    return get_config_file_path().exists()


def read_config_values(path: Optional[Path] = None) -> dict[str, str]:
    """
    Parse a sitemap.config file into a dict of field name -> raw string value.

    The file contains KEY=VALUE lines:

    # Where the site lives
    BASE_URL="https://example.com"
    MAX_URLS_PER_SITEMAP=10000
    SEARCH_ENGINES="https://a.example/ping?u=,https://b.example/ping?u="

    Keys are case-insensitive. Keys that match no field are ignored by
    GeneratorConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    config_file = path or get_config_file_path()

    if not config_file.exists():
        raise FileNotFoundError(f"Sitemap configuration file not found: {config_file}")

    values: dict[str, str] = {}
    with open(config_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                values[key.strip().lower()] = value.strip().strip('"').strip("'")
    return values


def load_config(path: Optional[Path] = None, **overrides: Any) -> GeneratorConfig:
    """
    Load GeneratorConfig from sitemap.config, applying keyword overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall through to the file value or the model default.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If a value is invalid
    """
    values: dict[str, Any] = dict(read_config_values(path))
    values.update({k: v for k, v in overrides.items() if v is not None})
    return GeneratorConfig(**values)


def get_config_or_default(**overrides: Any) -> GeneratorConfig:
    """Load sitemap.config if present, otherwise build config from overrides alone."""
    if config_file_exists():
        return load_config(**overrides)
    return GeneratorConfig(**{k: v for k, v in overrides.items() if v is not None})


def create_config(config: GeneratorConfig, path: Optional[Path] = None) -> Path:
    """
    Write config to a sitemap.config file.

    Returns:
        Path of the written file
    """
    config_file = path or get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, "w", encoding="utf-8") as f:
        f.write("# Sitemap Generator Configuration\n\n")
        for key in _CONFIG_KEYS:
            value = getattr(config, key)
            if isinstance(value, list):
                value = ",".join(value)
            if isinstance(value, (bool, int, float)):
                f.write(f"{key.upper()}={value}\n")
            else:
                f.write(f'{key.upper()}="{value}"\n')

    return config_file
