"""Generated parser runtime."""

from branchpy.runtime.entry import (
    GeneratedParser,
    ParseResult,
    build_parser,
    generate_parser,
    install,
    resolve_consumer,
)
from branchpy.runtime.interpreter import Archive, Interpreter

__all__ = [
    "Archive",
    "GeneratedParser",
    "Interpreter",
    "ParseResult",
    "build_parser",
    "generate_parser",
    "install",
    "resolve_consumer",
]
