"""End-to-end tests of the compile pipeline and the CLI."""

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from fathead.cli import app
from fathead.config import AppConfig, load_config
from fathead.core.errors import DanglingAliasError
from fathead.input.pages import discover_pages
from fathead.parse.list_groups import ListGroupConfig
from fathead.parse.selectors import own_text
from fathead.runner import compile_corpus, run_pipeline

PAGE_A = """
<html><body>
<ul class="decls">
  <li><a name="foo"></a><code>Foo</code><p>Foo does things.</p></li>
</ul>
</body></html>
"""

PAGE_B = """
<html><body>
<ul class="decls">
  <li><code>Baz</code></li>
  <li><a name="bar"></a><code>Bar</code><p>Like <a href="a.html#foo">Foo</a>.</p></li>
</ul>
</body></html>
"""


def _docs(tmp_path: Path, pages: dict[str, str]) -> Path:
    docs = tmp_path / "docs"
    docs.mkdir()
    for name, html in pages.items():
        (docs / name).write_text(html, encoding="utf-8")
    return docs


def _config() -> AppConfig:
    cfg = load_config(None)
    cfg.source.base_url = "http://docs.test/"
    cfg.extract.lists_selector = "ul.decls"
    cfg.logging.console = False
    return cfg


def _rows(path: Path) -> list[list[str]]:
    return [line.split("\t") for line in path.read_text(encoding="utf-8").splitlines()]


def test_pipeline_writes_articles_and_redirects(tmp_path: Path):
    docs = _docs(tmp_path, {"b.html": PAGE_B, "a.html": PAGE_A})
    output = tmp_path / "out" / "output.txt"

    stats = run_pipeline(
        docs, output, _config(), show_progress=False, console=Console(file=io.StringIO())
    )

    rows = _rows(output)
    assert [(r[0], r[1], r[2]) for r in rows] == [
        ("Foo", "A", ""),
        ("Bar", "A", ""),
        ("Baz", "R", "Bar"),
    ]
    assert all(len(r) == 13 for r in rows)
    assert rows[0][11] == "<p>Foo does things.</p>"
    assert rows[0][12] == "http://docs.test/a.html#foo"
    assert rows[1][11] == '<p>Like <a href="/?q=Foo&amp;ia=about">Foo</a>.</p>'
    assert rows[1][12] == "http://docs.test/b.html#bar"
    assert (stats.pages, stats.articles, stats.redirects, stats.rows) == (2, 2, 1, 3)


def test_first_page_wins_on_duplicate_titles(tmp_path: Path):
    duplicate = PAGE_A.replace("Foo does things.", "Another Foo.")
    docs = _docs(tmp_path, {"a.html": PAGE_A, "z.html": duplicate})
    output = tmp_path / "output.txt"

    stats = run_pipeline(
        docs, output, _config(), show_progress=False, console=Console(file=io.StringIO())
    )

    rows = _rows(output)
    assert len(rows) == 1
    assert rows[0][11] == "<p>Foo does things.</p>"
    assert stats.duplicates == 1


def test_unreadable_page_is_skipped(tmp_path: Path):
    docs = _docs(tmp_path, {"a.html": PAGE_A})
    (docs / "broken.html").write_bytes(b"\xff\xfe<ul class='decls'></ul>")
    output = tmp_path / "output.txt"

    stats = run_pipeline(
        docs, output, _config(), show_progress=False, console=Console(file=io.StringIO())
    )

    assert stats.pages == 2
    assert stats.pages_failed == 1
    assert [r[0] for r in _rows(output)] == ["Foo"]


def test_dangling_alias_aborts_without_output(tmp_path: Path):
    page = """
    <ul class="decls">
      <li><code>Old</code><em>moved</em><p>Gone.</p></li>
    </ul>
    """
    docs = _docs(tmp_path, {"a.html": page})
    output = tmp_path / "output.txt"
    rules = ListGroupConfig(
        title_of=own_text,
        lists=lambda soup: soup.select("ul.decls"),
        redirect_of=lambda item, article: "Nowhere" if item.find("em") else None,
    )

    with pytest.raises(DanglingAliasError) as excinfo:
        run_pipeline(
            docs,
            output,
            _config(),
            rules=rules,
            show_progress=False,
            console=Console(file=io.StringIO()),
        )

    assert excinfo.value.alias == "Old"
    assert excinfo.value.title == "Nowhere"
    assert not output.exists()


def _code_title(item):
    return item.find("code").get_text()


def test_page_with_failing_hook_is_skipped(tmp_path: Path):
    broken = """
    <ul class="decls">
      <li><span>no code here</span><p>Orphan.</p></li>
    </ul>
    """
    docs = _docs(tmp_path, {"a.html": PAGE_A, "b.html": broken})
    output = tmp_path / "output.txt"
    rules = ListGroupConfig(title_of=_code_title, lists=lambda soup: soup.select("ul.decls"))

    stats = run_pipeline(
        docs,
        output,
        _config(),
        rules=rules,
        show_progress=False,
        console=Console(file=io.StringIO()),
    )

    assert stats.pages_failed == 1
    assert [(r[0], r[1]) for r in _rows(output)] == [("Foo", "A")]


def test_compile_corpus_logs_failed_pages_without_logger(tmp_path: Path, caplog):
    docs = _docs(tmp_path, {"a.html": PAGE_A, "b.html": "<ul class='decls'><li>x</li></ul>"})
    rules = ListGroupConfig(title_of=_code_title, lists=lambda soup: soup.select("ul.decls"))

    with caplog.at_level(logging.ERROR):
        corpus, stats = compile_corpus(discover_pages(docs), _config(), rules)

    assert stats.pages_failed == 1
    assert "Foo" in corpus.registry
    assert corpus.sealed
    failures = [r for r in caplog.records if getattr(r, "event", None) == "page_failed"]
    assert [r.page for r in failures] == ["b.html"]
    assert failures[0].exc_info is not None


def test_trailing_group_without_text_gets_no_redirect(tmp_path: Path):
    page = """
    <ul class="decls">
      <li><code>a</code><p>First.</p></li>
      <li><code>b</code></li>
      <li><code>c</code></li>
    </ul>
    """
    docs = _docs(tmp_path, {"a.html": page})
    output = tmp_path / "output.txt"

    stats = run_pipeline(
        docs, output, _config(), show_progress=False, console=Console(file=io.StringIO())
    )

    assert [(r[0], r[1]) for r in _rows(output)] == [("a", "A")]
    assert (stats.skipped, stats.dropped, stats.redirects) == (1, 1, 0)


def test_cli_run(tmp_path: Path):
    docs = _docs(tmp_path, {"a.html": PAGE_A, "b.html": PAGE_B})
    output = tmp_path / "output.txt"
    config = tmp_path / "config.yaml"
    config.write_text(
        "source:\n"
        "  base_url: http://docs.test/\n"
        "extract:\n"
        "  lists_selector: ul.decls\n"
        "logging:\n"
        "  console: false\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        app,
        ["run", "-d", str(docs), "-o", str(output), "-c", str(config), "--no-progress"],
    )

    assert result.exit_code == 0, result.output
    assert "Wrote 3 rows" in result.output
    assert [r[0] for r in _rows(output)] == ["Foo", "Bar", "Baz"]


def test_cli_missing_docs_dir(tmp_path: Path):
    result = CliRunner().invoke(
        app, ["run", "-d", str(tmp_path / "missing"), "-o", str(tmp_path / "out.txt")]
    )

    assert result.exit_code == 2
    assert not (tmp_path / "out.txt").exists()


@pytest.mark.parametrize(
    "text",
    ["source: [\n", "extract:\n  boundary_selector: ''\n", "logging:\n  level: 5\n"],
)
def test_cli_bad_config(tmp_path: Path, text: str):
    docs = _docs(tmp_path, {"a.html": PAGE_A})
    config = tmp_path / "config.yaml"
    config.write_text(text, encoding="utf-8")

    result = CliRunner().invoke(
        app, ["run", "-d", str(docs), "-o", str(tmp_path / "out.txt"), "-c", str(config)]
    )

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output
    assert not (tmp_path / "out.txt").exists()
