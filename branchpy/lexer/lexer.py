"""Lexer."""

from typing import Final

from branchpy.diagnostics import Diagnostic
from branchpy.diagnostics.codes import LEXER_UNEXPECTED_CHARACTER, LEXER_UNTERMINATED_STRING
from branchpy.lexer.tokens import Token, TokenKind
from branchpy.text import TextRange, slice_text_range

# Longest first, so `==` wins over `=`.
MULTI_CHAR_OPERATORS: Final[tuple[str, ...]] = ("==", "!=", "<=", ">=", "->", "=>", "::")
SINGLE_CHAR_OPERATORS: Final[frozenset[str]] = frozenset("=<>+-*/%^|&!?~")
PUNCTUATION_CHARS: Final[frozenset[str]] = frozenset(",;.:@#$")
DELIMITERS: Final[dict[str, TokenKind]] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


class Lexer:
    """Lossless lexer that emits trivia and flat (ungrouped) tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._current_start = 0
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def current_range(self) -> TextRange:
        return TextRange.at(self._current_start, self._position - self._current_start)

    def next_token(self) -> Token:
        self._current_start = self._position

        if self.is_eof:
            return Token(TokenKind.EOF, "", range=TextRange.empty(self._current_start))

        kind = self._lex_token()
        return Token(kind, slice_text_range(self._source, self.current_range), range=self.current_range)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n":
            return self._consume_newline()

        if ch in " \t":
            return self._consume_whitespaces()

        if ch == '"' or ch == "'":
            return self._lex_string(ch)

        if ch.isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        if ch in DELIMITERS:
            self._advance(1)
            return DELIMITERS[ch]

        for operator in MULTI_CHAR_OPERATORS:
            if self._source.startswith(operator, self._position):
                self._advance(len(operator))
                return TokenKind.OPERATOR

        if ch in SINGLE_CHAR_OPERATORS:
            self._advance(1)
            return TokenKind.OPERATOR

        if ch in PUNCTUATION_CHARS:
            self._advance(1)
            return TokenKind.PUNCTUATION

        self._advance(1)
        self._diagnostics.append(
            Diagnostic.from_spec(
                LEXER_UNEXPECTED_CHARACTER,
                f"Unexpected character {ch!r}",
                range=self.current_range,
            )
        )
        return TokenKind.PUNCTUATION

    def _lex_string(self, quote: str) -> TokenKind:
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\\":
                self._advance(2)
                continue
            if ch == quote:
                self._advance(1)
                return TokenKind.STRING
            if ch in "\r\n":
                break
            self._advance(1)

        self._diagnostics.append(Diagnostic.from_spec(LEXER_UNTERMINATED_STRING, range=self.current_range))
        return TokenKind.STRING

    def _lex_number(self) -> TokenKind:
        self._consume_digits()
        if self._current_char() == "." and self._peek_char().isdigit():
            self._advance(1)
            self._consume_digits()
            return TokenKind.FLOAT
        return TokenKind.INT

    def _lex_identifier(self) -> TokenKind:
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_":
                self._advance(1)
                continue
            break
        return TokenKind.IDENTIFIER

    def _consume_digits(self) -> None:
        while self._current_char().isdigit():
            self._advance(1)

    def _consume_whitespaces(self) -> TokenKind:
        while not self.is_eof and self._current_char() in " \t":
            self._advance(1)
        return TokenKind.WHITESPACE

    def _consume_newline(self) -> TokenKind:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)
        return TokenKind.NEWLINE

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position = min(self._position + steps, len(self._source))


def dump_tokens(tokens: list[Token], diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, range and text for debugging."""
    for i, tok in enumerate(tokens):
        span = tok.range.as_tuple() if tok.range is not None else None
        print(f"{i:03d} {tok.kind.name:<14} range={span} text={str(tok)!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d}")
