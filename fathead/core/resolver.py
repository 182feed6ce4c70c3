"""
Alias and disambiguation resolution.

Runs after every page has been extracted. Each alias key of the corpus is
turned into exactly one record:

- a Redirect when all of its targets lead to the same terminal record, keeping
  the first raw target as the redirect target;
- a Disambiguation listing every distinct terminal record otherwise.

Targets are chased through the chain follower: articles are terminal, source
declared disambiguations are terminal, aliases are followed. A title that is
neither is a dangling alias; a title seen twice in one chase is a cycle. Both
abort the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from .corpus import Corpus
from .errors import DanglingAliasError, RedirectCycleError
from .types import Disambiguation, DisambiguationEntry, Redirect

logger = logging.getLogger(__name__)

AliasRecord = Union[Redirect, Disambiguation]


@dataclass(frozen=True)
class Terminal:
    """Where a chain of aliases ends.

    Attributes:
        title: Title of the terminal record
        description: Abstract of the terminal article, empty for disambiguations
        steps: Number of alias dereferences needed to get there
    """

    title: str
    description: str
    steps: int


@dataclass
class ResolutionResult:
    """Resolved alias records in alias insertion order.

    Attributes:
        records: One Redirect or Disambiguation per alias key
        terminals: Terminal title each redirect ends at, keyed by alias
    """

    records: list[AliasRecord] = field(default_factory=list)
    terminals: dict[str, str] = field(default_factory=dict)

    @property
    def redirects(self) -> list[Redirect]:
        return [r for r in self.records if isinstance(r, Redirect)]

    @property
    def disambiguations(self) -> list[Disambiguation]:
        return [r for r in self.records if isinstance(r, Disambiguation)]


class AliasResolver:
    """Resolves the alias graph of a sealed corpus."""

    def __init__(self, corpus: Corpus):
        if not corpus.sealed:
            raise ValueError("Corpus must be sealed before aliases are resolved")
        self._corpus = corpus
        self._decisions: dict[str, AliasRecord] = {}
        self._terminals: dict[str, str] = {}
        self._in_progress: list[str] = []

    def follow_chain(self, title: str, alias: str | None = None) -> Terminal:
        """Chase `title` through the alias graph to its terminal record.

        Args:
            title: The title to start from
            alias: The alias being resolved, for error reporting

        Raises:
            DanglingAliasError: If a title on the chain is unknown
            RedirectCycleError: If the chain revisits a title
        """
        registry = self._corpus.registry
        chain = [title]
        current = title
        steps = 0
        while True:
            article = registry.lookup(current)
            if article is not None:
                return Terminal(current, article.text, steps)
            if self._corpus.is_disambiguation(current):
                return Terminal(current, "", steps)

            targets = self._corpus.aliases.targets(current)
            if not targets:
                raise DanglingAliasError(alias or title, current)

            following = self._next_hop(current, targets)
            if following is None:
                # Ambiguous alias: it becomes a disambiguation record itself.
                return Terminal(current, "", steps)
            steps += 1
            if following in chain:
                raise RedirectCycleError(chain + [following])
            chain.append(following)
            current = following

    def chain_length(self, title: str) -> int:
        return self.follow_chain(title).steps

    def resolve_alias(self, alias: str) -> AliasRecord:
        """Decide whether `alias` is a redirect or a disambiguation."""
        decided = self._decisions.get(alias)
        if decided is not None:
            return decided
        if alias in self._in_progress:
            start = self._in_progress.index(alias)
            raise RedirectCycleError(self._in_progress[start:] + [alias])

        targets = self._corpus.aliases.targets(alias)
        self._in_progress.append(alias)
        try:
            terminals = [self.follow_chain(target, alias=alias) for target in targets]
        finally:
            self._in_progress.pop()

        distinct: dict[str, Terminal] = {}
        for terminal in terminals:
            distinct.setdefault(terminal.title, terminal)

        record: AliasRecord
        if len(distinct) == 1:
            record = Redirect(title=alias, target=targets[0])
            self._terminals[alias] = next(iter(distinct))
        else:
            record = Disambiguation(
                title=alias,
                entries=[
                    DisambiguationEntry(link=t.title, description=t.description)
                    for t in distinct.values()
                ],
            )
            logger.debug(
                f"Alias '{alias}' is ambiguous between {len(distinct)} articles",
                extra={"event": "ambiguous_alias", "alias": alias, "targets": list(distinct)},
            )
        self._decisions[alias] = record
        return record

    def resolve(self) -> ResolutionResult:
        """Resolve every alias key in insertion order."""
        result = ResolutionResult()
        for alias in self._corpus.aliases:
            result.records.append(self.resolve_alias(alias))
        result.terminals = dict(self._terminals)
        logger.info(
            "Alias resolution complete",
            extra={
                "event": "resolution_done",
                "redirects": len(result.redirects),
                "disambiguations": len(result.disambiguations),
            },
        )
        return result

    def _next_hop(self, alias: str, targets: list[str]) -> str | None:
        if len(targets) == 1:
            return targets[0]
        record = self.resolve_alias(alias)
        if isinstance(record, Redirect):
            return record.target
        return None


def resolve_aliases(corpus: Corpus) -> ResolutionResult:
    """Resolve all aliases of a sealed corpus."""
    return AliasResolver(corpus).resolve()
