"""I/O collaborators: file writer, robots updater, search-engine submitter."""

from sitemapgen.io.robots import render_robots, update_robots
from sitemapgen.io.submit import SubmissionResult, site_label, strip_markup, submit_sitemap
from sitemapgen.io.writer import write_documents, write_file

__all__ = [
    "SubmissionResult",
    "render_robots",
    "site_label",
    "strip_markup",
    "submit_sitemap",
    "update_robots",
    "write_documents",
    "write_file",
]
