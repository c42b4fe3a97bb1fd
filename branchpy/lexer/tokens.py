"""Lexer tokens."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Final

from branchpy.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (emitted by the lexer, dropped from token trees)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11

    # -------------------------
    # Identifiers / literals
    # -------------------------
    IDENTIFIER = 20
    STRING = 21  # quoted string
    INT = 22
    FLOAT = 23

    # -------------------------
    # Operators / punctuation
    # -------------------------
    OPERATOR = 30  # = == != < <= > >= + - * / % ^ | & ! ? ~ -> => ::
    PUNCTUATION = 40  # , ; . : @ # $

    # -------------------------
    # Delimiters (flat lexer output)
    # -------------------------
    LPAREN = 60  # (
    RPAREN = 61  # )
    LBRACKET = 62  # [
    RBRACKET = 63  # ]
    LBRACE = 64  # {
    RBRACE = 65  # }

    # -------------------------
    # Delimiter groups (token trees)
    # -------------------------
    PAREN_GROUP = 70
    BRACKET_GROUP = 71
    BRACE_GROUP = 72

    @property
    def is_trivia(self) -> bool:
        return self in (TokenKind.WHITESPACE, TokenKind.NEWLINE)

    @property
    def is_open_delimiter(self) -> bool:
        return self in OPEN_TO_CLOSE

    @property
    def is_close_delimiter(self) -> bool:
        return self in CLOSE_TO_OPEN

    @property
    def is_group(self) -> bool:
        return self in (TokenKind.PAREN_GROUP, TokenKind.BRACKET_GROUP, TokenKind.BRACE_GROUP)


OPEN_TO_CLOSE: Final[dict[TokenKind, TokenKind]] = {
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LBRACE: TokenKind.RBRACE,
}

CLOSE_TO_OPEN: Final[dict[TokenKind, TokenKind]] = {close: open_ for open_, close in OPEN_TO_CLOSE.items()}

GROUP_KIND_FOR_OPEN: Final[dict[TokenKind, TokenKind]] = {
    TokenKind.LPAREN: TokenKind.PAREN_GROUP,
    TokenKind.LBRACKET: TokenKind.BRACKET_GROUP,
    TokenKind.LBRACE: TokenKind.BRACE_GROUP,
}

GROUP_DELIMITERS: Final[dict[TokenKind, str]] = {
    TokenKind.PAREN_GROUP: "()",
    TokenKind.BRACKET_GROUP: "[]",
    TokenKind.BRACE_GROUP: "{}",
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token tree.

    Equality is by kind, text and children only; the source range is
    informational so that tokens lexed from different places compare equal.
    Delimiter groups carry their delimiter pair as `text` and their content
    as `children`.
    """

    kind: TokenKind
    text: str
    children: tuple["Token", ...] = ()
    range: TextRange | None = field(default=None, compare=False)

    @staticmethod
    def identifier(text: str) -> "Token":
        return Token(TokenKind.IDENTIFIER, text)

    @staticmethod
    def operator(text: str) -> "Token":
        return Token(TokenKind.OPERATOR, text)

    @staticmethod
    def group(kind: TokenKind, children: tuple["Token", ...], range: TextRange | None = None) -> "Token":
        if not kind.is_group:
            raise ValueError(f"Not a delimiter group kind: {kind!r}")
        return Token(kind, GROUP_DELIMITERS[kind], children, range)

    def is_word(self, text: str) -> bool:
        return self.kind == TokenKind.IDENTIFIER and self.text == text

    def __str__(self) -> str:
        if self.kind.is_group:
            inner = " ".join(str(child) for child in self.children)
            return f"{self.text[0]}{inner}{self.text[1]}"
        return self.text

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {str(self)!r})"
