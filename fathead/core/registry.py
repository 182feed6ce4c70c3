"""
Title-keyed store of accepted articles.

The first article registered under a title wins; later duplicates are
dropped with a warning. The registry also remembers which source URL each
article came from so the emitter can turn absolute links into internal ones.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .types import Article

logger = logging.getLogger(__name__)


class ArticleRegistry:
    """Insertion-ordered mapping of title -> Article.

    Attributes:
        duplicates: Number of registrations rejected because of a title clash
    """

    def __init__(self) -> None:
        self._articles: dict[str, Article] = {}
        self._links: dict[str, str] = {}
        self.duplicates = 0

    def register(self, article: Article) -> bool:
        """Store an article unless its title is already taken.

        Args:
            article: The article to store

        Returns:
            True if the article was stored, False if it was a duplicate
        """
        if article.title in self._articles:
            self.duplicates += 1
            logger.warning(
                f"Duplicate article with title '{article.title}' detected",
                extra={
                    "event": "duplicate_article",
                    "title": article.title,
                    "url": article.url,
                    "kept_url": self._articles[article.title].url,
                },
            )
            return False
        self._links[article.url] = article.title
        self._articles[article.title] = article
        return True

    def lookup(self, title: str) -> Article | None:
        return self._articles.get(title)

    def title_for_url(self, url: str) -> str | None:
        return self._links.get(url)

    def __contains__(self, title: object) -> bool:
        return title in self._articles

    def __iter__(self) -> Iterator[Article]:
        return iter(self._articles.values())

    def __len__(self) -> int:
        return len(self._articles)
