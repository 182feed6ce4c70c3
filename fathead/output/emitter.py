"""
Conversion of resolved records into Fathead output rows.

Articles keep their extracted markup as the abstract, except that links to
other extracted articles are rewritten to internal query links, so cross
references no longer depend on the original documentation URLs.

Multi-value fields are flattened with the literal two-character sequence
`\\n` between items; cross references use `[[Title]]`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable

from bs4 import BeautifulSoup

from ..core.corpus import Corpus
from ..core.registry import ArticleRegistry
from ..core.resolver import ResolutionResult
from ..core.types import (
    ARTICLE,
    DISAMBIGUATION,
    REDIRECT,
    Article,
    Disambiguation,
    DisambiguationEntry,
    OutputRow,
    Redirect,
)

logger = logging.getLogger(__name__)

ITEM_SEPARATOR = "\\n"
DEFAULT_LINK_TEMPLATE = "/?q={title}&ia=about"


def rewrite_links(text: str, registry: ArticleRegistry, link_template: str = DEFAULT_LINK_TEMPLATE) -> str:
    """Point links at registered article URLs to their internal query link.

    Text without any matching link is returned unchanged.
    """
    if "<a" not in text:
        return text
    soup = BeautifulSoup(text, "html.parser")
    changed = False
    for link in soup.find_all("a", href=True):
        title = registry.title_for_url(link["href"])
        if title is None:
            continue
        link["href"] = link_template.format(title=title)
        changed = True
    return str(soup) if changed else text


def format_categories(categories: Iterable[str]) -> str:
    return ITEM_SEPARATOR.join(categories)


def format_related(related: Iterable[str]) -> str:
    return ITEM_SEPARATOR.join(f"[[{title}]]" for title in related)


def format_disambiguation(entries: Iterable[DisambiguationEntry]) -> str:
    return ITEM_SEPARATOR.join(f"*[[{entry.link}]], {entry.description}." for entry in entries)


@dataclass
class EmitStats:
    articles: int = 0
    skipped: int = 0
    redirects: int = 0
    disambiguations: int = 0
    dropped: int = 0


class RecordEmitter:
    """Builds output rows for articles, redirects and disambiguations."""

    def __init__(self, registry: ArticleRegistry, link_template: str = DEFAULT_LINK_TEMPLATE):
        self._registry = registry
        self._link_template = link_template

    def article_row(self, article: Article) -> OutputRow | None:
        """Return the `A` row of an article, or None if it has no abstract."""
        if not article.text:
            logger.warning(
                f"No text for '{article.title}'",
                extra={"event": "missing_abstract", "title": article.title, "url": article.url},
            )
            return None
        return OutputRow(
            title=article.title,
            type=ARTICLE,
            categories=format_categories(article.categories),
            related=format_related(article.related),
            abstract=rewrite_links(article.text, self._registry, self._link_template),
            sourceurl=article.url,
        )

    def redirect_row(self, redirect: Redirect) -> OutputRow:
        return OutputRow(title=redirect.title, type=REDIRECT, alias=redirect.target)

    def disambiguation_row(self, disambiguation: Disambiguation) -> OutputRow:
        entries = [
            DisambiguationEntry(
                link=entry.link,
                description=rewrite_links(entry.description, self._registry, self._link_template),
            )
            for entry in disambiguation.entries
        ]
        return OutputRow(
            title=disambiguation.title,
            type=DISAMBIGUATION,
            disambiguation=format_disambiguation(entries),
        )

    def emit(
        self,
        corpus: Corpus,
        resolution: ResolutionResult,
        write: Callable[[OutputRow], None],
    ) -> EmitStats:
        """Write every row of the run through `write`.

        Order: articles (registry order), source-declared disambiguations,
        then resolved aliases. A resolved alias is dropped when a row with
        its title was already written, or when it only leads to articles
        that were not written.
        """
        stats = EmitStats()
        written: set[str] = set()
        for article in corpus.registry:
            row = self.article_row(article)
            if row is None:
                stats.skipped += 1
                continue
            write(row)
            written.add(article.title)
            stats.articles += 1

        for disambiguation in corpus.disambiguations:
            write(self.disambiguation_row(disambiguation))
            written.add(disambiguation.title)
            stats.disambiguations += 1

        reachable = _reachable_titles(written, resolution)
        for record in resolution.records:
            if record.title in written:
                logger.warning(
                    f"Alias '{record.title}' is shadowed by an existing record",
                    extra={"event": "shadowed_alias", "title": record.title},
                )
                stats.dropped += 1
                continue

            if isinstance(record, Redirect):
                terminal = resolution.terminals.get(record.title, record.target)
                if terminal not in reachable:
                    _warn_dangling(record.title, [terminal])
                    stats.dropped += 1
                    continue
                write(self.redirect_row(record))
                stats.redirects += 1
                continue

            entries = [entry for entry in record.entries if entry.link in reachable]
            if not entries:
                _warn_dangling(record.title, [entry.link for entry in record.entries])
                stats.dropped += 1
                continue
            write(self.disambiguation_row(replace(record, entries=entries)))
            stats.disambiguations += 1
        return stats


def _reachable_titles(written: set[str], resolution: ResolutionResult) -> set[str]:
    """Titles a resolved record may lead to.

    These are the rows already written plus every resolved disambiguation that
    keeps at least one reachable entry.
    """
    pending = {d.title: d for d in resolution.disambiguations if d.title not in written}
    reachable = written | set(pending)
    changed = True
    while changed:
        changed = False
        for title, disambiguation in list(pending.items()):
            if not any(entry.link in reachable for entry in disambiguation.entries):
                reachable.discard(title)
                del pending[title]
                changed = True
    return reachable


def _warn_dangling(alias: str, targets: list[str]) -> None:
    logger.warning(
        f"Alias '{alias}' only leads to records that were not written",
        extra={"event": "dangling_redirect", "alias": alias, "targets": targets},
    )
