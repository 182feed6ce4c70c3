"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SourceConfig: where the documentation pages live and their canonical URL
- NormalizeConfig: document normalization settings
- ExtractConfig: selector rules for the list-group extractor
- OutputConfig: output file settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class SourceConfig:
    """Configuration for locating source pages.

    Attributes:
        docs_dir: Directory holding the downloaded HTML pages
        base_url: Canonical URL the docs directory is published under
        pattern: Glob pattern (relative to docs_dir) selecting pages
        parser: BeautifulSoup tree builder ("html.parser", "lxml", "html5lib")
    """

    docs_dir: str = "download/docs/current"
    base_url: str = "http://www.idris-lang.org/docs/current/"
    pattern: str = "**/*.html"
    parser: str = "html.parser"


@dataclass
class NormalizeConfig:
    """Configuration for document normalization.

    Attributes:
        strip_tags: Presentation-only tags unwrapped in place
        collapse_code_links: Turn `code > a` duplicating the code text into plain code
    """

    strip_tags: list[str] = field(default_factory=lambda: ["strong"])
    collapse_code_links: bool = True


@dataclass
class ExtractConfig:
    """Selector rules for the list-group extractor.

    Attributes:
        lists_selector: CSS selector for list containers
        main_selector: If set, the container is the first `ul` after this element
        item_tag: Tag name of list items (direct children of the container)
        title_selector: Element inside an item holding the title (empty = the item)
        text_selector: Direct children of an item that form the abstract
        boundary_selector: An item containing a match closes its group
        alias_selector: Elements inside an item holding extra inline aliases
        related_selector: Links inside an item naming related articles
        link_attribute: Attribute of the first anchor used as the in-page anchor
        categories: Categories assigned to every article
    """

    lists_selector: str | None = None
    main_selector: str | None = None
    item_tag: str = "li"
    title_selector: str = ""
    text_selector: str = "p, pre"
    boundary_selector: str = "p"
    alias_selector: str | None = None
    related_selector: str | None = None
    link_attribute: str = "name"
    categories: list[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        path: Output file path
        link_template: Internal link format for cross references, `{title}` is substituted
        header: Whether to write a header line with the field names
    """

    path: str = "output.txt"
    link_template: str = "/?q={title}&ia=about"
    header: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "fathead.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    source: SourceConfig = field(default_factory=SourceConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_FORMATS = {"jsonl", "plain"}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    Raises:
        ValueError: If the file is not valid YAML, is not a mapping, or holds
            invalid values
    """
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    cfg = _merge_config(DEFAULT_CONFIG, raw)
    validate_config(cfg)
    return cfg


def validate_config(cfg: AppConfig) -> None:
    """Check option values that would otherwise fail deep inside the pipeline."""
    for name, value in [
        ("source.docs_dir", cfg.source.docs_dir),
        ("source.base_url", cfg.source.base_url),
        ("source.pattern", cfg.source.pattern),
        ("source.parser", cfg.source.parser),
        ("extract.item_tag", cfg.extract.item_tag),
        ("extract.text_selector", cfg.extract.text_selector),
        ("extract.boundary_selector", cfg.extract.boundary_selector),
        ("extract.link_attribute", cfg.extract.link_attribute),
        ("output.path", cfg.output.path),
        ("output.link_template", cfg.output.link_template),
        ("logging.level", cfg.logging.level),
        ("logging.format", cfg.logging.format),
        ("logging.filename", cfg.logging.filename),
    ]:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    for name, value in [
        ("extract.lists_selector", cfg.extract.lists_selector),
        ("extract.main_selector", cfg.extract.main_selector),
        ("extract.alias_selector", cfg.extract.alias_selector),
        ("extract.related_selector", cfg.extract.related_selector),
    ]:
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{name} must be a string, got {value!r}")
    if not isinstance(cfg.extract.title_selector, str):
        raise ValueError(f"extract.title_selector must be a string, got {cfg.extract.title_selector!r}")
    for name, values in [
        ("normalize.strip_tags", cfg.normalize.strip_tags),
        ("extract.categories", cfg.extract.categories),
    ]:
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"{name} must be a list of strings, got {values!r}")

    if cfg.logging.level.upper() not in _LOG_LEVELS:
        raise ValueError(f"Unknown logging level: {cfg.logging.level}")
    if cfg.logging.format not in _LOG_FORMATS:
        raise ValueError(f"Unknown log format: {cfg.logging.format}")
    if "{title}" not in cfg.output.link_template:
        raise ValueError("output.link_template must contain '{title}'")


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ValueError(f"Config section '{key}' must be a mapping, got {value!r}")
        unknown = set(value) - set(data[key])
        if unknown:
            raise ValueError(f"Unknown option(s) in '{key}': {', '.join(sorted(map(str, unknown)))}")
        data[key].update(value)
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "source": {
            "docs_dir": cfg.source.docs_dir,
            "base_url": cfg.source.base_url,
            "pattern": cfg.source.pattern,
            "parser": cfg.source.parser,
        },
        "normalize": {
            "strip_tags": list(cfg.normalize.strip_tags),
            "collapse_code_links": cfg.normalize.collapse_code_links,
        },
        "extract": {
            "lists_selector": cfg.extract.lists_selector,
            "main_selector": cfg.extract.main_selector,
            "item_tag": cfg.extract.item_tag,
            "title_selector": cfg.extract.title_selector,
            "text_selector": cfg.extract.text_selector,
            "boundary_selector": cfg.extract.boundary_selector,
            "alias_selector": cfg.extract.alias_selector,
            "related_selector": cfg.extract.related_selector,
            "link_attribute": cfg.extract.link_attribute,
            "categories": list(cfg.extract.categories),
        },
        "output": {
            "path": cfg.output.path,
            "link_template": cfg.output.link_template,
            "header": cfg.output.header,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        source=SourceConfig(**data["source"]),
        normalize=NormalizeConfig(**data["normalize"]),
        extract=ExtractConfig(**data["extract"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
