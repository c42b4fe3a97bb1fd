import pytest

from branchpy.compiler import ROOT_TAG, CompilerOptions, Halt, KeywordFilter, RuleTable, WordState, compile_grammar
from branchpy.diagnostics import ParseError, StarvationError, UnexpectedTokenError
from branchpy.grammar import collect, grammar, parse_grammar, word
from branchpy.lexer import tokenize
from branchpy.runtime import Interpreter
from tests._debug import debug_dump_archive, debug_dump_diagnostics, debug_dump_rules
from tests._shared_cases import PARSE_CASES, ParseCase, case_id, collect_groups


@pytest.mark.parametrize("case", PARSE_CASES, ids=case_id)
def test_parse_cases(case: ParseCase) -> None:
    table = compile_grammar(parse_grammar(case.grammar))
    debug_dump_rules(case.name, table)
    interpreter = Interpreter(table)

    if case.error_code is not None:
        with pytest.raises(ParseError) as excinfo:
            interpreter.run(tokenize(case.source))
        debug_dump_diagnostics(case.name, [excinfo.value.diagnostic])
        assert excinfo.value.code == case.error_code
        return

    archive = interpreter.run(tokenize(case.source))
    debug_dump_archive(case.name, archive)
    assert case.groups is not None
    assert collect_groups(*archive) == [list(group) for group in case.groups]


def test_capture_to_end_of_input_with_plain_tokens() -> None:
    table = compile_grammar(grammar(word("A", collect())))

    assert Interpreter(table).run(["A", "x", "y", "z"]) == [["x", "y", "z"]]


def test_word_without_following_tokens_starves() -> None:
    table = compile_grammar(grammar(word("A")))

    with pytest.raises(StarvationError) as excinfo:
        Interpreter(table).run(["A"])

    diagnostic = excinfo.value.diagnostic
    assert diagnostic.code == "PARSER_STARVATION"
    assert diagnostic.message == "Ran out of tokens before finishing current token chain!"
    assert diagnostic.token_index == 1


def test_childless_top_level_word_rejects_extra_tokens() -> None:
    table = compile_grammar(grammar(word("A")))

    with pytest.raises(UnexpectedTokenError) as excinfo:
        Interpreter(table).run(["A", "x"])

    assert excinfo.value.diagnostic.token_index == 1


def test_select_into_scenarios() -> None:
    spec = grammar(word("select", collect(word("into", collect()), terminal=True)))
    interpreter = Interpreter(compile_grammar(spec))

    assert interpreter.run(["select", "x", "*", "2"]) == [["x", "*", "2"]]
    assert interpreter.run(["select", "x", "into", "y"]) == [["x"], ["y"]]


def test_continuation_keyword_is_peeked_before_capture() -> None:
    spec = grammar(
        word("group", collect(word("by", collect()))),
        word("filter", collect()),
    )
    interpreter = Interpreter(compile_grammar(spec))

    assert interpreter.run(["group", "a", "by", "b"]) == [["a"], ["b"]]
    assert interpreter.run(["filter", "by", "x"]) == [["by", "x"]]


def test_terminal_word_alternatives_after_optional_capture() -> None:
    spec = grammar(word("order", word("by", collect(word("ascending"), word("descending")))))
    interpreter = Interpreter(compile_grammar(spec))

    assert interpreter.run(["order", "by", "x", "descending"]) == [["x"], ["descending"]]
    assert interpreter.run(["order", "by", "ascending"]) == [[], ["ascending"]]


def test_terminal_word_directly_under_word_is_archived() -> None:
    spec = grammar(word("show", word("all"), collect()))
    interpreter = Interpreter(compile_grammar(spec))

    assert interpreter.run(["show", "all"]) == [["all"]]
    assert interpreter.run(["show", "x", "all"]) == [["x", "all"]]


def test_unexpected_token_reports_source_range() -> None:
    table = compile_grammar(parse_grammar("{select {#}}"))

    with pytest.raises(UnexpectedTokenError) as excinfo:
        Interpreter(table).run(tokenize("delete t"))

    diagnostic = excinfo.value.diagnostic
    assert diagnostic.token_index == 0
    assert diagnostic.range is not None
    assert diagnostic.range.as_tuple() == (0, 6)


def test_runs_are_idempotent() -> None:
    interpreter = Interpreter(compile_grammar(parse_grammar("{select {# {} {into {# {}}}}}")))
    tokens = tokenize("select a + 1 into b")

    first = interpreter.run(tokens)
    second = interpreter.run(tokens)

    assert first == second
    assert first is not second


def test_statement_chaining_can_be_disabled() -> None:
    options = CompilerOptions(allow_statement_chaining=False)

    select = Interpreter(compile_grammar(grammar(word("select", collect())), options))
    assert select.run(["select", "a", "select", "b"]) == [["a", "select", "b"]]

    order = Interpreter(compile_grammar(grammar(word("order", word("by", collect(word("asc"))))), options))
    with pytest.raises(UnexpectedTokenError) as excinfo:
        order.run(["order", "by", "a", "asc", "order"])
    assert excinfo.value.diagnostic.token_index == 4


def test_continuation_keyword_at_end_of_input_starves() -> None:
    table = compile_grammar(grammar(word("select", collect(word("into", collect()), terminal=True))))

    with pytest.raises(StarvationError) as excinfo:
        Interpreter(table).run(["select", "x", "into"])

    assert excinfo.value.diagnostic.token_index == 3
    assert isinstance(table.state(ROOT_TAG.extend("select").capture().extend("into")), WordState)


def test_capture_halts_where_the_keyword_filter_signals() -> None:
    table = compile_grammar(grammar(word("select", collect()), word("limit", collect())))

    assert isinstance(table.keyword_filter("limit"), Halt)
    assert Interpreter(table).run(["select", "a", "limit", "1"]) == [["a"], ["1"]]

    narrowed = RuleTable(
        {tag: table.state(tag) for tag in table.tags},
        KeywordFilter(["select"]),
        table.options,
    )
    assert Interpreter(narrowed).run(["select", "a", "limit", "1"]) == [["a", "limit", "1"]]
