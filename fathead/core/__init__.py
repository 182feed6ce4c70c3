"""
Core domain models and resolution logic.

This package contains the records, the run-scoped stores and the alias
resolver. Nothing here touches the filesystem or parses HTML.
"""

from .aliases import AliasGraph, make_aliases
from .corpus import Corpus
from .errors import (
    DanglingAliasError,
    ExtractionClosedError,
    FatheadError,
    RedirectCycleError,
    ResolutionError,
)
from .registry import ArticleRegistry
from .resolver import AliasResolver, ResolutionResult, Terminal, resolve_aliases
from .types import (
    ARTICLE,
    DISAMBIGUATION,
    OUTPUT_FIELDS,
    REDIRECT,
    Article,
    ArticleCandidate,
    Disambiguation,
    DisambiguationEntry,
    OutputRow,
    ParseResult,
    Redirect,
)

__all__ = [
    "ARTICLE",
    "REDIRECT",
    "DISAMBIGUATION",
    "OUTPUT_FIELDS",
    "Article",
    "ArticleCandidate",
    "Disambiguation",
    "DisambiguationEntry",
    "OutputRow",
    "ParseResult",
    "Redirect",
    "AliasGraph",
    "make_aliases",
    "ArticleRegistry",
    "Corpus",
    "AliasResolver",
    "ResolutionResult",
    "Terminal",
    "resolve_aliases",
    "FatheadError",
    "ExtractionClosedError",
    "ResolutionError",
    "DanglingAliasError",
    "RedirectCycleError",
]
