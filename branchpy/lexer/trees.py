"""Fold flat lexer output into token trees.

A token tree is either a single leaf token or a balanced delimiter group
holding further token trees, which is the unit the generated parsers consume.
"""

from dataclasses import dataclass, field

from branchpy.diagnostics import Diagnostic, LexError, collect_diagnostics
from branchpy.diagnostics.codes import LEXER_UNBALANCED_DELIMITER
from branchpy.lexer.lexer import Lexer
from branchpy.lexer.tokens import CLOSE_TO_OPEN, GROUP_KIND_FOR_OPEN, Token, TokenKind
from branchpy.text import TextRange


@dataclass(slots=True)
class _OpenGroup:
    opener: Token
    children: list[Token] = field(default_factory=list)

    def close(self, closer: Token | None) -> Token:
        start = self.opener.range
        end = closer.range if closer is not None else (self.children[-1].range if self.children else None)
        range: TextRange | None = None
        if start is not None:
            range = start.cover(end) if end is not None else start
        return Token.group(GROUP_KIND_FOR_OPEN[self.opener.kind], tuple(self.children), range)


def build_token_trees(tokens: list[Token]) -> tuple[list[Token], list[Diagnostic]]:
    """Group delimiters into token trees, dropping trivia and EOF."""
    diagnostics: list[Diagnostic] = []
    top: list[Token] = []
    stack: list[_OpenGroup] = []

    def emit(token: Token) -> None:
        if stack:
            stack[-1].children.append(token)
        else:
            top.append(token)

    for token in tokens:
        if token.kind.is_trivia or token.kind == TokenKind.EOF:
            continue

        if token.kind.is_open_delimiter:
            stack.append(_OpenGroup(token))
            continue

        if token.kind.is_close_delimiter:
            if not stack or stack[-1].opener.kind != CLOSE_TO_OPEN[token.kind]:
                diagnostics.append(
                    Diagnostic.from_spec(
                        LEXER_UNBALANCED_DELIMITER,
                        f"Unmatched closing delimiter {token.text!r}",
                        range=token.range,
                    )
                )
                continue
            emit(stack.pop().close(token))
            continue

        emit(token)

    while stack:
        group = stack.pop()
        diagnostics.append(
            Diagnostic.from_spec(
                LEXER_UNBALANCED_DELIMITER,
                f"Unclosed delimiter {group.opener.text!r}",
                range=group.opener.range,
            )
        )
        emit(group.close(None))

    return top, diagnostics


def tokenize(text: str) -> list[Token]:
    """Lex `text` into token trees, raising `LexError` on the first error."""
    lexer = Lexer(text)
    flat = lexer.lex()
    trees, tree_diagnostics = build_token_trees(flat)
    for diagnostic in collect_diagnostics(lexer.diagnostics, tree_diagnostics):
        if diagnostic.severity == "error":
            raise LexError(diagnostic)
    return trees
