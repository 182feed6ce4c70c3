"""
Document and article normalization.

Before extraction every page is rewritten so that text extraction is stable:
- relative links become absolute against the page's canonical URL
- presentation-only wrappers (e.g. <strong>) are unwrapped in place
- a link that merely repeats its enclosing <code> text collapses to plain code

After extraction, article text is flattened onto one line because the output
format is newline delimited.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..config import NormalizeConfig
from ..core.types import ArticleCandidate, ParseResult

logger = logging.getLogger(__name__)


def normalize_document(
    soup: BeautifulSoup, base_url: str, cfg: NormalizeConfig | None = None
) -> BeautifulSoup:
    """Normalize a parsed page in place.

    Running this twice with the same base URL leaves the tree unchanged.

    Args:
        soup: The parsed page
        base_url: Canonical absolute URL of the page
        cfg: Normalization settings (defaults when omitted)

    Returns:
        The same soup, for chaining
    """
    cfg = cfg or NormalizeConfig()
    normalize_links(soup, base_url)

    for name in cfg.strip_tags:
        for tag in soup.find_all(name):
            tag.unwrap()

    if cfg.collapse_code_links:
        for link in soup.select("code > a"):
            if link.parent.get_text() == link.get_text():
                link.unwrap()

    return soup


def normalize_links(soup: BeautifulSoup, base_url: str) -> None:
    """Rewrite every href to an absolute URL. Unparseable values are kept."""
    for link in soup.find_all("a", href=True):
        href = link["href"]
        try:
            link["href"] = urljoin(base_url, href)
        except ValueError as exc:
            logger.debug(f"Leaving unresolvable link {href!r} as is: {exc}")


def normalize_article(candidate: ArticleCandidate) -> ArticleCandidate:
    return replace(candidate, text=candidate.text.replace("\n", " "))


def normalize_parse_result(parsed: ParseResult) -> ParseResult:
    """Apply `normalize_article` to every article of a parse result."""
    return replace(parsed, articles=[normalize_article(a) for a in parsed.articles])
