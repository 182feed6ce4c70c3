"""
Selector-driven list-group rules.

Builds a ListGroupConfig from the declarative `extract` section of the
configuration so a new documentation source can be described in YAML:

    extract:
      lists_selector: "div.decls > ul"
      title_selector: "code.signature"
      alias_selector: "span.alias"
      categories: ["Idris functions"]
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..config import ExtractConfig
from ..core.types import ArticleCandidate
from .list_groups import ListGroupConfig, text_from_selector


def _clean(text: str) -> str:
    return " ".join(text.split())


def own_text(item: Tag) -> str:
    """Return the first non-empty direct child text of an item."""
    for child in item.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = _clean(str(child))
        elif isinstance(child, Tag):
            text = _clean(child.get_text(" "))
        else:
            continue
        if text:
            return text
    return ""


def build_list_group_config(rules: ExtractConfig) -> ListGroupConfig:
    """Translate selector rules into list-group hooks."""

    def title_of(item: Tag) -> str:
        if not rules.title_selector:
            return own_text(item)
        element = item.select_one(rules.title_selector)
        if element is None:
            return ""
        return _clean(element.get_text(" "))

    def link_of(item: Tag) -> str | None:
        anchor = item.find("a", attrs={rules.link_attribute: True})
        if anchor is None:
            return None
        return anchor.get(rules.link_attribute)

    def text_of(item: Tag) -> str:
        return text_from_selector(item, rules.text_selector)

    def is_group_boundary(item: Tag) -> bool:
        return item.select_one(rules.boundary_selector) is not None

    def lists(soup: BeautifulSoup) -> list[Tag]:
        if not rules.lists_selector:
            return []
        return soup.select(rules.lists_selector)

    def aliases_of(item: Tag, title: str) -> list[str]:
        if not rules.alias_selector:
            return []
        return [_clean(el.get_text(" ")) for el in item.select(rules.alias_selector)]

    def categories_of(item: Tag, article: ArticleCandidate) -> list[str]:
        return list(rules.categories)

    def related_of(item: Tag, article: ArticleCandidate) -> list[str]:
        if not rules.related_selector:
            return []
        related = []
        for el in item.select(rules.related_selector):
            name = _clean(el.get_text(" "))
            if name and name != article.title and name not in related:
                related.append(name)
        return related

    return ListGroupConfig(
        title_of=title_of,
        link_of=link_of,
        text_of=text_of,
        is_group_boundary=is_group_boundary,
        lists=lists,
        main_selector=rules.main_selector,
        item_tag=rules.item_tag,
        aliases_of=aliases_of,
        categories_of=categories_of,
        related_of=related_of,
    )
