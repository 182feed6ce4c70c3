"""
fathead - compile HTML reference documentation into a flat record store.

This package extracts articles from list-based documentation pages,
resolves aliases and redirects, and writes a tab-separated Fathead
output file keyed by title.

Main entry point is the CLI via `fathead run` command.

Example:
    $ fathead run -d download/docs/current -o output.txt -c idris.yaml
"""

__all__ = [
    "__version__",
    "Corpus",
    "ListGroupConfig",
    "extract_list_groups",
    "resolve_aliases",
    "run_pipeline",
]
__version__ = "0.1.0"

from .core.corpus import Corpus
from .core.resolver import resolve_aliases
from .parse.list_groups import ListGroupConfig, extract_list_groups
from .runner import run_pipeline
