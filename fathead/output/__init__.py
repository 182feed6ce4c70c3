"""Output row building and writing."""

from .emitter import (
    DEFAULT_LINK_TEMPLATE,
    EmitStats,
    RecordEmitter,
    format_categories,
    format_disambiguation,
    format_related,
    rewrite_links,
)
from .writer import TsvWriter

__all__ = [
    "DEFAULT_LINK_TEMPLATE",
    "EmitStats",
    "RecordEmitter",
    "format_categories",
    "format_disambiguation",
    "format_related",
    "rewrite_links",
    "TsvWriter",
]
