"""
Generic list-group extraction.

Documentation indexes often render entries as list items, where several
consecutive items can share one trailing description:

    <ul>
      <li><code>foldl</code></li>
      <li><code>foldr</code><p>Fold a structure.</p></li>
    </ul>

Items are collated into groups, each closed by an item that carries the
description (a "boundary" item). The last item of a group is the primary
entry, the others are secondary titles that become aliases of it.

How a title, anchor or description is read from an item is source specific,
so every step is a hook on ListGroupConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Union

from bs4 import BeautifulSoup, Tag

from ..core.aliases import make_aliases
from ..core.types import ArticleCandidate, Disambiguation, ParseResult

logger = logging.getLogger(__name__)

DEFAULT_TEXT_SELECTOR = "p, pre"

ListsSpec = Union[Callable[[BeautifulSoup], Iterable[Tag]], Sequence[Tag], None]


def text_from_selector(item: Tag, selector: str = DEFAULT_TEXT_SELECTOR) -> str:
    """Produce the abstract from the item's direct children matching `selector`."""
    return "".join(str(child) for child in item.select(selector) if child.parent is item)


def default_link_of(item: Tag) -> str | None:
    anchor = item.find("a")
    if anchor is None:
        return None
    return anchor.get("name")


def default_text_of(item: Tag) -> str:
    return text_from_selector(item)


def default_is_group_boundary(item: Tag) -> bool:
    return item.find("p") is not None


def _no_aliases(item: Tag, title: str) -> list[str]:
    return []


def _no_values(item: Tag, article: ArticleCandidate) -> list[str]:
    return []


def _no_redirect(item: Tag, article: ArticleCandidate) -> str | None:
    return None


def _no_disambiguation(item: Tag, article: ArticleCandidate) -> Disambiguation | None:
    return None


@dataclass
class ListGroupConfig:
    """Hooks controlling how list groups are read from a page.

    Attributes:
        title_of: Reads the title of an item (required)
        link_of: Reads the in-page anchor of the primary item
        text_of: Reads the description markup of the primary item
        is_group_boundary: True if the item closes its group
        lists: Callable returning the list containers, or a fixed sequence of them
        main_selector: If set, the only container is the first `ul` following
            the element matching this selector
        item_tag: Tag name of list items, taken from direct children only
        aliases_of: Extra inline aliases declared for a title of the group
        categories_of: Categories of the candidate
        related_of: Related titles of the candidate
        redirect_of: Target title if the group is a pure redirect
        disambiguation_of: Disambiguation if the group declares one
    """

    title_of: Callable[[Tag], str]
    link_of: Callable[[Tag], str | None] = default_link_of
    text_of: Callable[[Tag], str] = default_text_of
    is_group_boundary: Callable[[Tag], bool] = default_is_group_boundary
    lists: ListsSpec = None
    main_selector: str | None = None
    item_tag: str = "li"
    aliases_of: Callable[[Tag, str], Iterable[str]] = _no_aliases
    categories_of: Callable[[Tag, ArticleCandidate], Iterable[str]] = _no_values
    related_of: Callable[[Tag, ArticleCandidate], Iterable[str]] = _no_values
    redirect_of: Callable[[Tag, ArticleCandidate], str | None] = _no_redirect
    disambiguation_of: Callable[[Tag, ArticleCandidate], Disambiguation | None] = (
        _no_disambiguation
    )

    def containers(self, soup: BeautifulSoup) -> list[Tag]:
        """Return the list containers of a page."""
        if self.main_selector:
            start = soup.select_one(self.main_selector)
            if start is None:
                return []
            following = start.find_next_sibling("ul")
            return [following] if following is not None else []
        if self.lists is None:
            return []
        if callable(self.lists):
            return list(self.lists(soup))
        return list(self.lists)


def collate_items(items: Sequence[Tag], is_group_boundary: Callable[[Tag], bool]) -> list[list[Tag]]:
    """Partition list items into contiguous groups.

    Given
        - a
        - b
        - c
          description for all
    this produces [[a, b, c]]. Every boundary item closes a group; items after
    the last boundary form a final group of their own, so no item is dropped.
    """
    groups: list[list[Tag]] = []
    run: list[Tag] = []
    for item in items:
        run.append(item)
        if not is_group_boundary(item):
            continue
        groups.append(run)
        run = []
    if run:
        groups.append(run)
    return groups


def extract_list_groups(soup: BeautifulSoup, config: ListGroupConfig) -> ParseResult:
    """Extract articles, aliases and disambiguations from a page's lists.

    Results keep list order, which later decides which duplicate wins.
    """
    result = ParseResult()
    for container in config.containers(soup):
        items = container.find_all(config.item_tag, recursive=False)
        for group in collate_items(items, config.is_group_boundary):
            _extract_group(group, config, result)
    return result


def _extract_group(group: list[Tag], config: ListGroupConfig, result: ParseResult) -> None:
    item = group[-1]
    title = config.title_of(item)
    if not title:
        logger.warning(
            "Skipping list group without a title",
            extra={"event": "untitled_group", "items": len(group)},
        )
        return

    secondary_titles = [config.title_of(other) for other in group[:-1]]
    result.aliases.extend(make_aliases(title, [t for t in secondary_titles if t]))
    for subtitle in [title, *secondary_titles]:
        result.aliases.extend(make_aliases(title, config.aliases_of(item, subtitle)))

    candidate = ArticleCandidate(
        title=title,
        anchor=config.link_of(item),
        text=config.text_of(item),
    )
    candidate.categories = list(config.categories_of(item, candidate))
    candidate.related = list(config.related_of(item, candidate))

    disambiguation = config.disambiguation_of(item, candidate)
    if disambiguation is not None:
        result.disambiguations.append(disambiguation)
        return

    redirect = config.redirect_of(item, candidate)
    if redirect:
        result.aliases.extend(make_aliases(redirect, [title]))
        return

    result.articles.append(candidate)
