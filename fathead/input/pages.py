"""
Page discovery and loading.

Pages are HTML files under a docs directory. Each one is identified by its
path relative to that directory, which also gives its canonical URL under
the configured base URL. Pages are always returned in lexicographic order so
that "first wins" duplicate handling is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup

from ..config import NormalizeConfig
from ..parse.normalizer import normalize_document


@dataclass(frozen=True)
class Page:
    """A source page.

    Attributes:
        path: Filesystem location of the page
        key: Path relative to the docs directory, with forward slashes
    """

    path: Path
    key: str


def discover_pages(docs_dir: Path, pattern: str = "**/*.html") -> list[Page]:
    """List pages under `docs_dir` matching `pattern`, sorted by relative path."""
    pages = [
        Page(path=path, key=path.relative_to(docs_dir).as_posix())
        for path in docs_dir.glob(pattern)
        if path.is_file()
    ]
    return sorted(pages, key=lambda page: page.key)


def page_url(base_url: str, key: str) -> str:
    """Build the canonical URL of a page from its relative key."""
    if not base_url.endswith("/"):
        base_url = base_url + "/"
    return urljoin(base_url, quote(key, safe="/"))


def load_document(
    path: Path,
    base_url: str,
    parser: str = "html.parser",
    cfg: NormalizeConfig | None = None,
) -> BeautifulSoup:
    """Read and parse a page, then normalize it against its URL.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    html = path.read_text(encoding="utf-8")
    soup = BeautifulSoup(html, parser)
    return normalize_document(soup, base_url, cfg)
