"""Bracketed grammar notation.

The notation is a sequence of top-level `{...}` groups, one per branch. Inside
a group the first token is the head and every following token must be a
`{...}` child group:

    {select {# {} {into {# {}}}}}
    {order {by {# {ascending} {descending}}}}

A keyword head makes a `Word`; `#` makes a `Collector`. Under `#`, an empty
child group `{}` marks the capture as terminal, and a bare `#` is a terminal
capture with no continuations.
"""

from branchpy.diagnostics import Diagnostic, GrammarShapeError
from branchpy.diagnostics.codes import GRAMMAR_INVALID_SHAPE
from branchpy.grammar.model import CAPTURE_MARKER, Collector, GrammarNode, GrammarSpec, Word
from branchpy.lexer import Token, TokenKind, tokenize


def parse_grammar(text: str) -> GrammarSpec:
    """Read a grammar from bracketed notation text."""
    return read_grammar(tokenize(text))


def read_grammar(trees: list[Token]) -> GrammarSpec:
    branches: list[GrammarNode] = []
    for tree in trees:
        if tree.kind != TokenKind.BRACE_GROUP:
            raise _shape_error(tree, f"Expected a `{{...}}` branch group, got {str(tree)!r}")
        if not tree.children:
            raise _shape_error(tree, "Top-level branch group cannot be empty")
        branches.append(_read_node(tree))
    return GrammarSpec(tuple(branches))


def _read_node(group: Token) -> GrammarNode:
    head, *rest = group.children
    for child in rest:
        if child.kind != TokenKind.BRACE_GROUP:
            raise _shape_error(child, f"Expected a `{{...}}` child group, got {str(child)!r}")

    if _is_capture_marker(head):
        terminal = any(not child.children for child in rest)
        continuations = tuple(_read_node(child) for child in rest if child.children)
        return Collector(continuations, terminal=terminal)

    if head.kind.is_group:
        raise _shape_error(head, f"Grammar node head must be a keyword or `#`, got {str(head)!r}")

    for child in rest:
        if not child.children:
            raise _shape_error(child, "Empty child group is only allowed under `#`")
    return Word(head, tuple(_read_node(child) for child in rest))


def format_grammar(spec: GrammarSpec) -> str:
    """Render a grammar back into bracketed notation."""
    return " ".join(_format_node(branch) for branch in spec.branches)


def _format_node(node: GrammarNode) -> str:
    match node:
        case Word(keyword=keyword, children=children):
            parts = [str(keyword), *(_format_node(child) for child in children)]
        case Collector(children=children, terminal=terminal):
            parts = [CAPTURE_MARKER]
            if terminal:
                parts.append("{}")
            parts.extend(_format_node(child) for child in children)
    return "{" + " ".join(parts) + "}"


def _is_capture_marker(token: Token) -> bool:
    return token.kind == TokenKind.PUNCTUATION and token.text == CAPTURE_MARKER


def _shape_error(token: Token, message: str) -> GrammarShapeError:
    return GrammarShapeError(Diagnostic.from_spec(GRAMMAR_INVALID_SHAPE, message, range=token.range))
