"""Exception types raised by the fathead pipeline."""

from __future__ import annotations


class FatheadError(Exception):
    """Base class for all fathead errors."""


class ExtractionClosedError(FatheadError):
    """Raised when extraction state is written after it has been sealed."""


class ResolutionError(FatheadError):
    """Base class for run-fatal errors found while resolving aliases."""


class DanglingAliasError(ResolutionError):
    def __init__(self, alias: str, title: str):
        self.alias = alias
        self.title = title
        super().__init__(f"Alias '{alias}' points at unknown title '{title}'")


class RedirectCycleError(ResolutionError):
    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__("Redirect cycle detected: " + " -> ".join(self.chain))
