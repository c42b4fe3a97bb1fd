import pytest

from branchpy.diagnostics import GrammarShapeError
from branchpy.grammar import Collector, Word, collect, format_grammar, grammar, parse_grammar, word
from branchpy.lexer import Token
from tests._shared_cases import QUERY_GRAMMAR, SELECT_GRAMMAR, SORT_GRAMMAR


def kw(text: str) -> Token:
    return Token.identifier(text)


def test_parse_select_grammar() -> None:
    spec = parse_grammar(SELECT_GRAMMAR)

    assert spec == grammar(
        word(kw("select"), collect(word(kw("into"), collect(terminal=True)), terminal=True)),
    )


def test_parse_capture_with_alternatives() -> None:
    spec = parse_grammar("{order {by {# {ascending} {descending}}}}")

    (order,) = spec.branches
    assert isinstance(order, Word)
    (by,) = order.children
    assert isinstance(by, Word)
    (capture,) = by.children
    assert isinstance(capture, Collector)
    assert not capture.is_terminal
    assert [str(child.keyword) for child in capture.children if isinstance(child, Word)] == [
        "ascending",
        "descending",
    ]
    assert all(child.is_terminal for child in capture.children)


def test_bare_capture_is_terminal() -> None:
    (scan,) = parse_grammar("{scan {#}}").branches

    assert isinstance(scan, Word)
    assert scan.children == (Collector(),)
    assert scan.children[0].is_terminal


def test_grammar_keywords_and_depth() -> None:
    spec = parse_grammar(QUERY_GRAMMAR)

    assert [str(keyword) for keyword in spec.keywords()] == ["select", "order", "limit"]
    assert spec.depth() == 6
    assert sum(1 for node in spec.walk() if isinstance(node, Collector)) == 5


@pytest.mark.parametrize("source", [SELECT_GRAMMAR, SORT_GRAMMAR, QUERY_GRAMMAR])
def test_format_grammar_reads_back(source: str) -> None:
    spec = parse_grammar(source)

    assert parse_grammar(format_grammar(spec)) == spec


def test_format_grammar_output() -> None:
    assert format_grammar(parse_grammar("{select   {#  {}  {into {#}}}}")) == "{select {# {} {into {#}}}}"


@pytest.mark.parametrize(
    "source",
    [
        "select",
        "{}",
        "{select into}",
        "{select {}}",
        "{(x) {#}}",
    ],
)
def test_malformed_notation_is_rejected(source: str) -> None:
    with pytest.raises(GrammarShapeError) as excinfo:
        parse_grammar(source)

    assert excinfo.value.code == "GRAMMAR_INVALID_SHAPE"
