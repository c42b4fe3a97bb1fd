"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a matching quote.",
    severity="error",
    category="lexer",
)

LEXER_UNBALANCED_DELIMITER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNBALANCED_DELIMITER",
    message="Unbalanced delimiter.",
    hint="Every `(`, `[` and `{` needs a matching closing delimiter.",
    severity="error",
    category="lexer",
)

LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character.",
    severity="error",
    category="lexer",
)

GRAMMAR_INVALID_SHAPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_INVALID_SHAPE",
    message="Grammar node cannot be compiled in this position.",
    hint="Top-level branches and capture continuations must start with a keyword.",
    severity="error",
    category="grammar",
)

GRAMMAR_TOO_DEEP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_TOO_DEEP",
    message="Grammar nesting exceeds the configured maximum depth.",
    hint="Raise `CompilerOptions.max_depth` or flatten the grammar.",
    severity="error",
    category="grammar",
)

GRAMMAR_SHADOWED_BRANCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="GRAMMAR_SHADOWED_BRANCH",
    message="Branch is shadowed by an earlier sibling with the same lead.",
    hint="The first declared sibling wins; merge or reorder the branches.",
    severity="warning",
    category="grammar",
)

PARSER_STARVATION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_STARVATION",
    message="Ran out of tokens before finishing current token chain!",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="No rules expected this token",
    severity="error",
    category="parser",
)

PARSER_EMPTY_INPUT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EMPTY_INPUT",
    message="Parser entry point requires at least one token",
    severity="error",
    category="parser",
)
