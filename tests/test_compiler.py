import pytest

from branchpy.compiler import (
    Accept,
    Advance,
    CaptureState,
    CompileMode,
    CompilerOptions,
    Halt,
    KeywordFilter,
    RuleTable,
    WordState,
    compile_grammar,
)
from branchpy.compiler.tags import ROOT_TAG, Step, Tag
from branchpy.diagnostics import GrammarConflictError, GrammarError, GrammarShapeError
from branchpy.grammar import Collector, GrammarSpec, collect, grammar, parse_grammar, word
from branchpy.runtime import Interpreter
from tests._debug import debug_dump_diagnostics, debug_dump_rules
from tests._shared_cases import QUERY_GRAMMAR, SELECT_GRAMMAR


def test_select_grammar_compiles_one_state_per_tag() -> None:
    table = compile_grammar(parse_grammar(SELECT_GRAMMAR))
    debug_dump_rules("select", table)

    assert [str(tag) for tag in table.tags] == [
        "@()",
        "@(select)",
        "@(select #)",
        "@(select # into)",
        "@(select # into #)",
    ]
    assert len(set(table.tags)) == len(table.tags)


def test_states_are_queued_breadth_first_in_declaration_order() -> None:
    spec = grammar(
        word("a", word("b", collect())),
        word("c", collect()),
    )

    table = compile_grammar(spec)

    assert [tag.path() for tag in table.tags] == [
        (),
        ("a",),
        ("c",),
        ("a", "b"),
        ("c", Step.CAPTURE),
        ("a", "b", Step.CAPTURE),
    ]


def test_state_kinds_and_transitions() -> None:
    spec = grammar(word("order", word("by", collect(word("asc"), word("desc")))))

    table = compile_grammar(spec)

    root = table.root
    assert isinstance(root, WordState)
    assert root.keywords["order"] == Advance(ROOT_TAG.extend("order"))
    assert root.capture is None

    by_state = table.state(ROOT_TAG.extend("order").extend("by"))
    assert isinstance(by_state, WordState)
    assert by_state.capture == ROOT_TAG.extend("order").extend("by").capture()

    capture = table.state(by_state.capture)
    assert isinstance(capture, CaptureState)
    assert capture.continuations == {"asc": Accept("asc"), "desc": Accept("desc")}
    assert capture.terminal is False
    assert capture.halts is False


def test_terminal_capture_halts_only_with_statement_chaining() -> None:
    spec = grammar(word("select", collect()))
    capture_tag = ROOT_TAG.extend("select").capture()

    chained = compile_grammar(spec).state(capture_tag)
    single = compile_grammar(spec, CompilerOptions(allow_statement_chaining=False)).state(capture_tag)

    assert isinstance(chained, CaptureState) and isinstance(single, CaptureState)
    assert chained.terminal and chained.halts
    assert single.terminal and not single.halts


def test_keyword_filter_holds_top_level_keywords() -> None:
    table = compile_grammar(parse_grammar(QUERY_GRAMMAR))
    keywords = {str(keyword) for keyword in table.keyword_filter.keywords}

    assert keywords == {"select", "order", "limit"}


def test_compilation_is_deterministic() -> None:
    spec = parse_grammar(QUERY_GRAMMAR)

    first = compile_grammar(spec)
    second = compile_grammar(spec)

    assert first.tags == second.tags
    assert first.describe() == second.describe()


def test_shadowed_sibling_keeps_first_declaration() -> None:
    spec = grammar(
        word("a", collect()),
        word("a", word("b", collect())),
    )

    table = compile_grammar(spec)
    debug_dump_diagnostics("shadowed", table.diagnostics)

    assert [diagnostic.code for diagnostic in table.diagnostics] == ["GRAMMAR_SHADOWED_BRANCH"]
    assert table.diagnostics[0].severity == "warning"
    assert ROOT_TAG.extend("a").extend("b") not in table
    assert Interpreter(table).run(["a", "b"]) == [["b"]]


def test_shadowed_sibling_capture_is_reported() -> None:
    spec = grammar(word("a", collect(word("x", collect())), collect()))

    table = compile_grammar(spec)

    assert [diagnostic.code for diagnostic in table.diagnostics] == ["GRAMMAR_SHADOWED_BRANCH"]


def test_strict_mode_rejects_shadowed_siblings() -> None:
    spec = grammar(
        word("a", collect()),
        word("a", word("b", collect())),
    )

    with pytest.raises(GrammarConflictError) as excinfo:
        compile_grammar(spec, mode=CompileMode.STRICT)

    assert excinfo.value.diagnostic.severity == "error"


def test_top_level_capture_is_a_shape_error() -> None:
    with pytest.raises(GrammarShapeError) as excinfo:
        compile_grammar(GrammarSpec((Collector(),)))

    assert excinfo.value.code == "GRAMMAR_INVALID_SHAPE"


def test_capture_continuation_must_be_a_keyword() -> None:
    with pytest.raises(GrammarShapeError):
        compile_grammar(grammar(word("a", collect(collect()))))


def test_unknown_node_is_a_shape_error() -> None:
    with pytest.raises(GrammarShapeError):
        compile_grammar(GrammarSpec(("not-a-node",)))


def test_depth_is_bounded_by_options() -> None:
    spec = grammar(word("a", word("b", word("c", collect()))))

    with pytest.raises(GrammarError) as excinfo:
        compile_grammar(spec, CompilerOptions(max_depth=2))

    assert excinfo.value.code == "GRAMMAR_TOO_DEEP"
    assert len(compile_grammar(spec, CompilerOptions(max_depth=4))) == 5


def test_options_and_mode_are_mutually_exclusive() -> None:
    try:
        compile_grammar(grammar(word("a", collect())), CompilerOptions(), mode=CompileMode.STRICT)
    except ValueError as exc:
        assert "Pass either options or mode, not both" in str(exc)
    else:
        raise AssertionError("Expected ValueError when passing options and mode together")


def test_keyword_filter_halts_on_exact_matches_only() -> None:
    table = compile_grammar(grammar(word("select", collect()), word("order", word("by", collect()))))
    keyword_filter = table.keyword_filter

    assert keyword_filter("select") == Halt("select")
    assert keyword_filter("by") == "by"
    assert keyword_filter("SELECT") == "SELECT"
    assert "order" in keyword_filter
    assert len(keyword_filter) == 2


def test_describe_lists_every_state() -> None:
    table = compile_grammar(parse_grammar(SELECT_GRAMMAR))

    text = table.describe()

    assert "@(select #) capture [terminal, halts]" in text
    assert "  into -> @(select # into)" in text
    assert text.count("\n") + 1 >= len(table)


def test_rule_table_root_must_be_a_word_state() -> None:
    table = RuleTable({ROOT_TAG: CaptureState(ROOT_TAG, {})}, KeywordFilter(()), CompilerOptions())

    with pytest.raises(TypeError):
        table.root


def test_tags_built_separately_are_interchangeable_keys() -> None:
    built = ROOT_TAG.extend("select").capture().extend("into")
    rebuilt = Tag().extend("select").capture().extend("into")

    assert built == rebuilt
    assert hash(built) == hash(rebuilt)
    assert {built: "into"}[rebuilt] == "into"
    assert built != ROOT_TAG.extend("select").extend("into")
    assert repr(built) == "Tag(@(select # into))"
