"""Parser generation entrypoints.

`generate_parser` compiles a grammar once and installs three callables into a
caller-chosen namespace: the entry point (tokens in, consumer result out), the
internal parser (tokens in, archive out) and the internal keyword filter.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, MutableMapping
from dataclasses import dataclass, field
import importlib
import logging
from types import ModuleType
from typing import Any

from branchpy.compiler import CompileMode, CompilerOptions, KeywordFilter, RuleTable, compile_grammar
from branchpy.diagnostics import Diagnostic, EmptyInputError, ParseError, has_errors
from branchpy.diagnostics.codes import PARSER_EMPTY_INPUT
from branchpy.grammar import GrammarSpec, parse_grammar
from branchpy.lexer import tokenize
from branchpy.runtime.interpreter import Archive, Interpreter

logger = logging.getLogger(__name__)

type Consumer = Callable[..., Any]
type Namespace = ModuleType | MutableMapping[str, Any] | str


@dataclass(slots=True)
class ParseResult:
    """Parse carrier that reports failures as diagnostics instead of raising."""

    tokens: tuple[Hashable, ...]
    archive: Archive | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)


class GeneratedParser:
    """Callable entry point bound to one compiled grammar and one consumer."""

    def __init__(self, table: RuleTable, consumer: Consumer) -> None:
        self._table = table
        self._consumer = consumer
        self._interpreter = Interpreter(table)

    @property
    def table(self) -> RuleTable:
        return self._table

    @property
    def consumer(self) -> Consumer:
        return self._consumer

    @property
    def keyword_filter(self) -> KeywordFilter:
        return self._table.keyword_filter

    def __call__(self, *tokens: Hashable) -> Any:
        if not tokens:
            raise EmptyInputError(Diagnostic.from_spec(PARSER_EMPTY_INPUT, token_index=0))
        return self._consumer(*self.parse(tokens))

    def parse(self, tokens: Iterable[Hashable]) -> Archive:
        return self._interpreter.run(tokens)

    def parse_result(self, tokens: Iterable[Hashable]) -> ParseResult:
        token_tuple = tuple(tokens)
        if not token_tuple:
            return ParseResult(token_tuple, diagnostics=[Diagnostic.from_spec(PARSER_EMPTY_INPUT, token_index=0)])
        try:
            archive = self._interpreter.run(token_tuple)
        except ParseError as exc:
            return ParseResult(token_tuple, diagnostics=[exc.diagnostic])
        return ParseResult(token_tuple, archive=archive)

    def parse_text(self, text: str) -> Any:
        """Tokenize `text` with the bundled lexer and run the entry point."""
        return self(*tokenize(text))


def build_parser(
    grammar: GrammarSpec | str,
    consumer: Consumer | str,
    options: CompilerOptions | None = None,
    *,
    mode: CompileMode | None = None,
) -> GeneratedParser:
    spec = parse_grammar(grammar) if isinstance(grammar, str) else grammar
    table = compile_grammar(spec, options, mode=mode)
    return GeneratedParser(table, resolve_consumer(consumer))


def generate_parser(
    namespace: Namespace,
    entry_name: str,
    parser_name: str,
    filter_name: str,
    consumer: Consumer | str,
    grammar: GrammarSpec | str,
    options: CompilerOptions | None = None,
    *,
    mode: CompileMode | None = None,
) -> GeneratedParser:
    """Compile `grammar` and install its entry point, parser and filter.

    Existing names in `namespace` are overwritten; choosing names that do not
    collide is up to the caller.
    """
    generated = build_parser(grammar, consumer, options, mode=mode)
    install(
        namespace,
        {
            entry_name: generated,
            parser_name: generated.parse,
            filter_name: generated.keyword_filter,
        },
    )
    return generated


def install(namespace: Namespace, symbols: dict[str, Any]) -> None:
    target = importlib.import_module(namespace) if isinstance(namespace, str) else namespace
    for name, value in symbols.items():
        logger.debug("install %s into %r", name, getattr(target, "__name__", type(target).__name__))
        if isinstance(target, MutableMapping):
            target[name] = value
        else:
            setattr(target, name, value)


def resolve_consumer(consumer: Consumer | str) -> Consumer:
    """Resolve a callable or a fully qualified `package.module.attr` path."""
    if not isinstance(consumer, str):
        if not callable(consumer):
            raise TypeError(f"Consumer must be callable, got {consumer!r}")
        return consumer

    parts = consumer.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            resolved: Any = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name is not None and not module_name.startswith(exc.name):
                raise
            continue
        for attr in parts[split:]:
            resolved = getattr(resolved, attr)
        if not callable(resolved):
            raise TypeError(f"Consumer {consumer!r} is not callable")
        return resolved

    raise ValueError(f"Cannot resolve consumer path {consumer!r}")
