"""
Core data types for the fathead compiler.

This module defines the records that flow through the pipeline:
- ArticleCandidate: an entry extracted from one list group, not yet placed
- Article: a candidate with its source URL, owned by the ArticleRegistry
- Redirect / Disambiguation: alias records produced by extraction or resolution
- ParseResult: everything one page contributed
- OutputRow: a flat row of the Fathead output file
"""

from __future__ import annotations

from dataclasses import dataclass, field

ARTICLE = "A"
REDIRECT = "R"
DISAMBIGUATION = "D"

# Column order of the Fathead output file. The null columns are reserved.
OUTPUT_FIELDS = (
    "title",
    "type",
    "alias",
    "null1",
    "categories",
    "null2",
    "related",
    "null3",
    "links",
    "disambiguation",
    "image",
    "abstract",
    "sourceurl",
)


@dataclass
class ArticleCandidate:
    """An article extracted from a list group.

    Attributes:
        title: The primary title of the group
        anchor: In-page fragment id of the entry, if the source has one
        text: Raw extracted markup used as the abstract
        categories: Ordered category names
        related: Ordered titles of related articles
    """

    title: str
    anchor: str | None = None
    text: str = ""
    categories: list[str] = field(default_factory=list)
    related: list[str] = field(default_factory=list)


@dataclass
class Article:
    """A candidate placed at its source URL (page URL plus optional anchor)."""

    title: str
    url: str
    anchor: str | None = None
    text: str = ""
    categories: list[str] = field(default_factory=list)
    related: list[str] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: ArticleCandidate, page_url: str) -> "Article":
        url = page_url
        if candidate.anchor:
            url = f"{page_url}#{candidate.anchor}"
        return cls(
            title=candidate.title,
            url=url,
            anchor=candidate.anchor,
            text=candidate.text,
            categories=list(candidate.categories),
            related=list(candidate.related),
        )


@dataclass(frozen=True)
class Redirect:
    """An alias resolved unambiguously to one target title."""

    title: str
    target: str


@dataclass(frozen=True)
class DisambiguationEntry:
    link: str
    description: str = ""


@dataclass
class Disambiguation:
    """A title that maps to several distinct articles."""

    title: str
    entries: list[DisambiguationEntry] = field(default_factory=list)


@dataclass
class ParseResult:
    """Everything extracted from a single page, in extraction order.

    Attributes:
        articles: Accepted article candidates
        aliases: (new, orig) pairs where `new` should resolve to `orig`
        disambiguations: Disambiguations declared directly by the source
    """

    articles: list[ArticleCandidate] = field(default_factory=list)
    aliases: list[tuple[str, str]] = field(default_factory=list)
    disambiguations: list[Disambiguation] = field(default_factory=list)


@dataclass
class OutputRow:
    """One line of the Fathead output file."""

    title: str
    type: str
    alias: str = ""
    categories: str = ""
    related: str = ""
    links: str = ""
    disambiguation: str = ""
    image: str = ""
    abstract: str = ""
    sourceurl: str = ""

    def values(self) -> list[str]:
        """Return field values in OUTPUT_FIELDS order."""
        return [getattr(self, name, "") for name in OUTPUT_FIELDS]
