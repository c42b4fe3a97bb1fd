"""Keyword/capture parser generator for small embedded DSLs.

A grammar is a tree of keywords (`Word`) and wildcard captures (`Collector`).
`compile_grammar` turns it into a `RuleTable` with a breadth-first worklist;
`generate_parser` wraps the table in a callable that feeds the captured token
groups to a consumer.
"""

from branchpy.compiler import (
    CompileMode,
    CompilerOptions,
    KeywordFilter,
    RuleTable,
    compile_grammar,
)
from branchpy.diagnostics import (
    BranchpyError,
    Diagnostic,
    EmptyInputError,
    GrammarConflictError,
    GrammarError,
    GrammarShapeError,
    LexError,
    ParseError,
    StarvationError,
    UnexpectedTokenError,
)
from branchpy.grammar import Collector, GrammarSpec, Word, collect, grammar, parse_grammar, word
from branchpy.lexer import Token, TokenKind, tokenize
from branchpy.runtime import GeneratedParser, Interpreter, ParseResult, build_parser, generate_parser

__all__ = [
    "BranchpyError",
    "Collector",
    "CompileMode",
    "CompilerOptions",
    "Diagnostic",
    "EmptyInputError",
    "GeneratedParser",
    "GrammarConflictError",
    "GrammarError",
    "GrammarShapeError",
    "GrammarSpec",
    "Interpreter",
    "KeywordFilter",
    "LexError",
    "ParseError",
    "ParseResult",
    "RuleTable",
    "StarvationError",
    "Token",
    "TokenKind",
    "UnexpectedTokenError",
    "Word",
    "build_parser",
    "collect",
    "compile_grammar",
    "generate_parser",
    "grammar",
    "parse_grammar",
    "tokenize",
    "word",
]
