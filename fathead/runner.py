"""
Main pipeline orchestration for the fathead compiler.

The run has two strictly ordered phases:
1. Extraction: every page is loaded, normalized and parsed in lexicographic
   order; articles, aliases and disambiguations accumulate in a Corpus.
2. Resolution: the corpus is sealed, aliases are resolved, and every record
   is written to the output file.

A page that cannot be read or parsed is logged and skipped. Resolution errors (dangling
aliases, redirect cycles) abort the run before anything is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from .config import AppConfig
from .core.corpus import Corpus
from .core.resolver import resolve_aliases
from .core.types import ParseResult
from .input.pages import Page, discover_pages, load_document, page_url
from .logging_utils import log_event, setup_logging
from .output.emitter import RecordEmitter
from .output.writer import TsvWriter
from .parse.list_groups import ListGroupConfig, extract_list_groups
from .parse.normalizer import normalize_parse_result
from .parse.selectors import build_list_group_config

_logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    """Statistics collected over one run.

    Attributes:
        pages: Number of pages discovered
        pages_failed: Pages skipped because loading or extraction failed
        articles: Articles accepted into the registry
        duplicates: Articles dropped because their title was taken
        aliases: Distinct alias titles collected
        rows: Rows written to the output file
        skipped: Articles not written because they had no abstract
        redirects: Redirect rows written
        disambiguations: Disambiguation rows written
        dropped: Resolved aliases not written (shadowed or ending at an unwritten article)
    """

    pages: int = 0
    pages_failed: int = 0
    articles: int = 0
    duplicates: int = 0
    aliases: int = 0
    rows: int = 0
    skipped: int = 0
    redirects: int = 0
    disambiguations: int = 0
    dropped: int = 0


def parse_page(page: Page, cfg: AppConfig, rules: ListGroupConfig) -> tuple[str, ParseResult]:
    """Load, normalize and extract a single page.

    Returns:
        The page's canonical URL and its normalized parse result
    """
    url = page_url(cfg.source.base_url, page.key)
    soup = load_document(page.path, url, cfg.source.parser, cfg.normalize)
    parsed = extract_list_groups(soup, rules)
    return url, normalize_parse_result(parsed)


def compile_corpus(
    pages: Sequence[Page],
    cfg: AppConfig,
    rules: ListGroupConfig,
    logger: logging.Logger | None = None,
    on_page: Callable[[Page], None] | None = None,
) -> tuple[Corpus, RunStats]:
    """Run the extraction phase over `pages` and seal the resulting corpus.

    A page whose loading or extraction raises is logged, counted in
    `pages_failed` and skipped; the other pages are still compiled.
    """
    logger = logger or _logger
    corpus = Corpus()
    stats = RunStats(pages=len(pages))

    for page in sorted(pages, key=lambda p: p.key):
        try:
            url, parsed = parse_page(page, cfg, rules)
        except Exception as exc:  # noqa: BLE001
            stats.pages_failed += 1
            logger.error(
                f"Failed to parse page {page.key}: {exc}",
                exc_info=True,
                extra={"event": "page_failed", "page": page.key, "error": str(exc)},
            )
        else:
            accepted = corpus.add_page(url, parsed)
            log_event(
                logger,
                "Page parsed",
                event="page_parsed",
                page=page.key,
                url=url,
                articles=len(parsed.articles),
                accepted=accepted,
                aliases=len(parsed.aliases),
                disambiguations=len(parsed.disambiguations),
            )
        if on_page is not None:
            on_page(page)

    corpus.seal()
    stats.articles = len(corpus.registry)
    stats.duplicates = corpus.registry.duplicates
    stats.aliases = len(corpus.aliases)
    return corpus, stats


def run_pipeline(
    docs_dir: Path,
    output_path: Path,
    cfg: AppConfig,
    rules: ListGroupConfig | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> RunStats:
    """Compile all pages under `docs_dir` into a Fathead output file.

    Args:
        docs_dir: Directory holding the source pages
        output_path: Path of the output file to write
        cfg: Application configuration
        rules: List-group hooks; built from `cfg.extract` when omitted
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        Statistics of the run

    Raises:
        ResolutionError: If aliases cannot be resolved consistently
    """
    console = console or Console()
    logger = setup_logging(cfg.logging, output_path.parent)
    rules = rules or build_list_group_config(cfg.extract)
    pages = discover_pages(docs_dir, cfg.source.pattern)

    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        docs_dir=str(docs_dir),
        output=str(output_path),
        pages=len(pages),
    )

    if show_progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Parsing pages", total=len(pages))
            corpus, stats = compile_corpus(
                pages, cfg, rules, logger, on_page=lambda _page: progress.advance(task)
            )
    else:
        corpus, stats = compile_corpus(pages, cfg, rules, logger)

    resolution = resolve_aliases(corpus)

    emitter = RecordEmitter(corpus.registry, cfg.output.link_template)
    with TsvWriter(output_path, header=cfg.output.header) as writer:
        emitted = emitter.emit(corpus, resolution, writer.write)

    stats.rows = writer.rows_written
    stats.skipped = emitted.skipped
    stats.redirects = emitted.redirects
    stats.disambiguations = emitted.disambiguations
    stats.dropped = emitted.dropped

    log_event(
        logger,
        "Pipeline done",
        event="pipeline_done",
        output=str(output_path),
        rows=stats.rows,
        articles=stats.articles,
        redirects=stats.redirects,
        disambiguations=stats.disambiguations,
    )
    _render_stats(stats, console)
    return stats


def _render_stats(stats: RunStats, console: Console) -> None:
    console.print(
        "[bold]Compile summary[/bold]: "
        f"pages={stats.pages}, failed={stats.pages_failed}, articles={stats.articles}, "
        f"duplicates={stats.duplicates}, redirects={stats.redirects}, "
        f"disambiguations={stats.disambiguations}, skipped={stats.skipped}, "
        f"dropped={stats.dropped}"
    )
