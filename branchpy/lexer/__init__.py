"""Lexer."""

from branchpy.lexer.lexer import Lexer, dump_tokens
from branchpy.lexer.tokens import Token, TokenKind
from branchpy.lexer.trees import build_token_trees, tokenize

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "build_token_trees",
    "dump_tokens",
    "tokenize",
]
