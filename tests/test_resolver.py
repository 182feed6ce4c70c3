"""Tests for alias and disambiguation resolution."""

import pytest

from fathead.core.corpus import Corpus
from fathead.core.errors import DanglingAliasError, RedirectCycleError
from fathead.core.resolver import AliasResolver, resolve_aliases
from fathead.core.types import (
    ArticleCandidate,
    Disambiguation,
    DisambiguationEntry,
    ParseResult,
    Redirect,
)


def _corpus(articles, aliases, disambiguations=(), seal=True) -> Corpus:
    corpus = Corpus()
    parsed = ParseResult(
        articles=[
            ArticleCandidate(title=title, anchor=title.lower(), text=text)
            for title, text in articles.items()
        ],
        aliases=list(aliases),
        disambiguations=list(disambiguations),
    )
    corpus.add_page("http://docs.example.org/page.html", parsed)
    if seal:
        corpus.seal()
    return corpus


def test_single_target_becomes_redirect():
    corpus = _corpus({"Bar": "<p>bar</p>"}, [("Foo", "Bar")])

    result = resolve_aliases(corpus)

    assert result.records == [Redirect(title="Foo", target="Bar")]


def test_single_target_keeps_immediate_target():
    corpus = _corpus({"Qux": "<p>q</p>"}, [("Foo", "Bar"), ("Bar", "Qux")])

    result = resolve_aliases(corpus)

    assert result.records == [
        Redirect(title="Foo", target="Bar"),
        Redirect(title="Bar", target="Qux"),
    ]


def test_ambiguity_collapses_when_targets_share_terminal():
    corpus = _corpus(
        {"Qux": "<p>q</p>"},
        [("Foo", "Bar"), ("Foo", "Baz"), ("Bar", "Qux"), ("Baz", "Qux")],
    )

    result = resolve_aliases(corpus)

    assert result.records[0] == Redirect(title="Foo", target="Bar")
    assert result.disambiguations == []
    assert len(result.redirects) == 3


def test_repeated_target_is_not_ambiguous():
    corpus = _corpus({"Bar": "<p>b</p>"}, [("Foo", "Bar"), ("Foo", "Bar")])

    result = resolve_aliases(corpus)

    assert result.records == [Redirect(title="Foo", target="Bar")]


def test_distinct_terminals_become_disambiguation():
    corpus = _corpus(
        {"Baz": "<p>baz text</p>", "Bar": "<p>bar text</p>"},
        [("Foo", "Bar"), ("Foo", "Baz"), ("Foo", "Bar")],
    )

    result = resolve_aliases(corpus)

    assert result.records == [
        Disambiguation(
            title="Foo",
            entries=[
                DisambiguationEntry(link="Bar", description="<p>bar text</p>"),
                DisambiguationEntry(link="Baz", description="<p>baz text</p>"),
            ],
        )
    ]


def test_chain_follower_takes_one_step_per_link():
    corpus = _corpus({"d": "<p>d</p>"}, [("a", "b"), ("b", "c"), ("c", "d")])
    resolver = AliasResolver(corpus)

    assert resolver.chain_length("a") == 3
    assert resolver.chain_length("c") == 1
    assert resolver.chain_length("d") == 0
    assert resolver.follow_chain("a").title == "d"


def test_article_shadows_alias_of_same_title():
    corpus = _corpus({"Foo": "<p>foo</p>", "Bar": "<p>bar</p>"}, [("Foo", "Bar")])
    resolver = AliasResolver(corpus)

    assert resolver.follow_chain("Foo").title == "Foo"
    assert resolver.resolve().records == [Redirect(title="Foo", target="Bar")]


def test_ambiguous_alias_is_terminal_for_chains():
    corpus = _corpus(
        {"P": "<p>p</p>", "Q": "<p>q</p>"},
        [("X", "Y"), ("Y", "P"), ("Y", "Q"), ("Z", "X"), ("Z", "Y")],
    )

    result = resolve_aliases(corpus)
    by_title = {record.title: record for record in result.records}

    assert by_title["X"] == Redirect(title="X", target="Y")
    assert isinstance(by_title["Y"], Disambiguation)
    assert [e.link for e in by_title["Y"].entries] == ["P", "Q"]
    # Both of Z's targets end at the disambiguation Y.
    assert by_title["Z"] == Redirect(title="Z", target="X")


def test_source_disambiguation_is_a_valid_target():
    amb = Disambiguation(title="fold", entries=[DisambiguationEntry(link="foldl")])
    corpus = _corpus(
        {"foldr": "<p>right</p>"},
        [("folding", "fold"), ("f", "fold"), ("f", "foldr")],
        disambiguations=[amb],
    )

    result = resolve_aliases(corpus)

    assert result.records[0] == Redirect(title="folding", target="fold")
    assert result.records[1] == Disambiguation(
        title="f",
        entries=[
            DisambiguationEntry(link="fold", description=""),
            DisambiguationEntry(link="foldr", description="<p>right</p>"),
        ],
    )


def test_dangling_alias_is_fatal():
    corpus = _corpus({"Bar": "<p>b</p>"}, [("Foo", "Missing")])

    with pytest.raises(DanglingAliasError) as excinfo:
        resolve_aliases(corpus)

    assert excinfo.value.alias == "Foo"
    assert excinfo.value.title == "Missing"


def test_dangling_link_deep_in_chain_is_fatal():
    corpus = _corpus({}, [("a", "b"), ("b", "gone")])

    with pytest.raises(DanglingAliasError) as excinfo:
        resolve_aliases(corpus)

    assert excinfo.value.title == "gone"


def test_redirect_cycle_fails_fast():
    corpus = _corpus({}, [("A", "B"), ("B", "A")])

    with pytest.raises(RedirectCycleError) as excinfo:
        resolve_aliases(corpus)

    assert excinfo.value.chain == ["B", "A", "B"]


def test_self_redirect_is_a_cycle():
    corpus = _corpus({}, [("X", "X")])

    with pytest.raises(RedirectCycleError):
        resolve_aliases(corpus)


def test_cycle_through_ambiguous_alias_fails_fast():
    corpus = _corpus({"C": "<p>c</p>"}, [("A", "B"), ("A", "C"), ("B", "A")])

    with pytest.raises(RedirectCycleError):
        resolve_aliases(corpus)


def test_resolver_requires_sealed_corpus():
    corpus = _corpus({"Bar": "<p>b</p>"}, [("Foo", "Bar")], seal=False)

    with pytest.raises(ValueError):
        AliasResolver(corpus)
