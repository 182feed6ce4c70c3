"""
Run-scoped extraction state.

A Corpus collects articles, aliases and source-declared disambiguations while
pages are parsed. Calling `seal()` ends the extraction phase; the resolver only
accepts a sealed corpus, so nothing can be added while aliases are resolved.
"""

from __future__ import annotations

import logging

from .aliases import AliasGraph
from .errors import ExtractionClosedError
from .registry import ArticleRegistry
from .types import Article, Disambiguation, ParseResult

logger = logging.getLogger(__name__)


class Corpus:
    """Articles, aliases and disambiguations gathered from every page."""

    def __init__(self) -> None:
        self.registry = ArticleRegistry()
        self.aliases = AliasGraph()
        self.disambiguations: list[Disambiguation] = []
        self._disambiguation_titles: set[str] = set()

    @property
    def sealed(self) -> bool:
        return self.aliases.sealed

    def add_page(self, page_url: str, parsed: ParseResult) -> int:
        """Register everything one page produced.

        Args:
            page_url: Canonical URL of the page
            parsed: The page's (already normalized) parse result

        Returns:
            Number of articles accepted into the registry
        """
        if self.sealed:
            raise ExtractionClosedError(f"Cannot add page {page_url}: corpus is sealed")

        accepted = 0
        for candidate in parsed.articles:
            if self.registry.register(Article.from_candidate(candidate, page_url)):
                accepted += 1
        for new, orig in parsed.aliases:
            self.aliases.add(new, orig)
        for disambiguation in parsed.disambiguations:
            self.disambiguations.append(disambiguation)
            self._disambiguation_titles.add(disambiguation.title)
        return accepted

    def is_disambiguation(self, title: str) -> bool:
        return title in self._disambiguation_titles

    def seal(self) -> None:
        self.aliases.seal()
        logger.info(
            "Extraction phase complete",
            extra={
                "event": "extraction_sealed",
                "articles": len(self.registry),
                "aliases": len(self.aliases),
                "disambiguations": len(self.disambiguations),
            },
        )
