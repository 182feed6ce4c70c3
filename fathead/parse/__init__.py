"""
Page parsing: normalization and list-group extraction.
"""

from .list_groups import (
    ListGroupConfig,
    collate_items,
    extract_list_groups,
    text_from_selector,
)
from .normalizer import (
    normalize_article,
    normalize_document,
    normalize_links,
    normalize_parse_result,
)
from .selectors import build_list_group_config

__all__ = [
    "ListGroupConfig",
    "collate_items",
    "extract_list_groups",
    "text_from_selector",
    "normalize_article",
    "normalize_document",
    "normalize_links",
    "normalize_parse_result",
    "build_list_group_config",
]
