"""Grammar specification model and notation."""

from branchpy.grammar.model import (
    CAPTURE_MARKER,
    Collector,
    GrammarNode,
    GrammarSpec,
    Word,
    collect,
    grammar,
    word,
)
from branchpy.grammar.notation import format_grammar, parse_grammar, read_grammar

__all__ = [
    "CAPTURE_MARKER",
    "Collector",
    "GrammarNode",
    "GrammarSpec",
    "Word",
    "collect",
    "format_grammar",
    "grammar",
    "parse_grammar",
    "read_grammar",
    "word",
]
