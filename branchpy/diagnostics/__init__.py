"""Diagnostics."""

from branchpy.diagnostics.codes import (
    GRAMMAR_INVALID_SHAPE,
    GRAMMAR_SHADOWED_BRANCH,
    GRAMMAR_TOO_DEEP,
    LEXER_UNBALANCED_DELIMITER,
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_STRING,
    PARSER_EMPTY_INPUT,
    PARSER_STARVATION,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from branchpy.diagnostics.diagnostic import Diagnostic, Severity
from branchpy.diagnostics.errors import (
    BranchpyError,
    EmptyInputError,
    GrammarConflictError,
    GrammarError,
    GrammarShapeError,
    LexError,
    ParseError,
    StarvationError,
    UnexpectedTokenError,
)
from branchpy.diagnostics.report import collect_diagnostics, has_errors

__all__ = [
    "GRAMMAR_INVALID_SHAPE",
    "GRAMMAR_SHADOWED_BRANCH",
    "GRAMMAR_TOO_DEEP",
    "LEXER_UNBALANCED_DELIMITER",
    "LEXER_UNEXPECTED_CHARACTER",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EMPTY_INPUT",
    "PARSER_STARVATION",
    "PARSER_UNEXPECTED_TOKEN",
    "BranchpyError",
    "Diagnostic",
    "DiagnosticSpec",
    "EmptyInputError",
    "GrammarConflictError",
    "GrammarError",
    "GrammarShapeError",
    "LexError",
    "ParseError",
    "Severity",
    "StarvationError",
    "UnexpectedTokenError",
    "collect_diagnostics",
    "has_errors",
]
