"""
Alias graph accumulated across all pages of a run.

Each alias title maps to the ordered list of titles it was seen pointing at.
Targets are never deduplicated here: the same target recorded twice is
collapsed later by the resolver, which compares resolved identities.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .errors import ExtractionClosedError


def make_aliases(title: str, aliases: Iterable[str]) -> list[tuple[str, str]]:
    """Build (new, orig) alias pairs pointing at `title`.

    Self-aliases are dropped.

    Examples:
        >>> make_aliases("map", ["fmap", "map"])
        [('fmap', 'map')]
    """
    return [(alias, title) for alias in aliases if alias != title]


class AliasGraph:
    """Ordered multimap from alias title to target titles."""

    def __init__(self) -> None:
        self._targets: dict[str, list[str]] = {}
        self._sealed = False

    def add(self, alias: str, target: str) -> None:
        if self._sealed:
            raise ExtractionClosedError(
                f"Cannot add alias '{alias}' -> '{target}': extraction phase is over"
            )
        self._targets.setdefault(alias, []).append(target)

    def targets(self, alias: str) -> list[str]:
        return list(self._targets.get(alias, []))

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for alias, targets in self._targets.items():
            yield alias, list(targets)

    def __contains__(self, alias: object) -> bool:
        return alias in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)
