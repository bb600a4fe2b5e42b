"""Write built sitemap documents to disk."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Union

from sitemapgen.builder import BuildResult, SitemapDocument
from sitemapgen.builder.builder import GZIP_SUFFIX
from sitemapgen.errors import SitemapIOError

logger = logging.getLogger(__name__)


def write_file(content: bytes, path: Path, compress: bool = False) -> Path:
    """Write bytes to path, gzip-encoded (path + .gz) when compress is set.

    Returns:
        The path actually written

    Raises:
        SitemapIOError: If the file cannot be opened or written
    """
    target = path.with_name(path.name + GZIP_SUFFIX) if compress else path
    try:
        if compress:
            with gzip.open(target, "wb") as f:
                f.write(content)
        else:
            with open(target, "wb") as f:
                f.write(content)
    except OSError as e:
        raise SitemapIOError(f"Cannot open file for writing: {target}", path=str(target), original_error=e) from e
    logger.debug(f"Wrote {len(content)} bytes to {target}")
    return target


def write_document(document: SitemapDocument, directory: Path, compress: bool = False) -> Path:
    return write_file(document.encode(), directory / document.filename, compress=compress)


def write_documents(
    result: BuildResult,
    directory: Union[str, Path],
    compress: bool = False,
) -> list[Path]:
    """Write every document of a build.

    The index is always written plain. Sitemaps behind an index are written
    gzip-compressed when compress is set. A lone sitemap is written plain and,
    when compress is set, also as .gz.

    Returns:
        Written paths, index first

    Raises:
        SitemapIOError: If a file cannot be written
    """
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SitemapIOError(f"Cannot create output directory: {directory}", path=str(directory), original_error=e) from e

    written: list[Path] = []
    if result.index is not None:
        written.append(write_document(result.index, directory))
        for sitemap in result.sitemaps:
            written.append(write_document(sitemap, directory, compress=compress))
    else:
        sitemap = result.sitemaps[0]
        written.append(write_document(sitemap, directory))
        if compress:
            written.append(write_document(sitemap, directory, compress=True))

    logger.info(f"Wrote {len(written)} sitemap file(s) to {directory}")
    return written
