"""Single-pass interpreter over a compiled rule table."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
import logging

from branchpy.compiler import Accept, Advance, CaptureState, Halt, RuleTable, Tag, Transition, WordState
from branchpy.compiler.tags import ROOT_TAG
from branchpy.diagnostics import Diagnostic, StarvationError, UnexpectedTokenError
from branchpy.diagnostics.codes import PARSER_STARVATION, PARSER_UNEXPECTED_TOKEN
from branchpy.text import TextRange

logger = logging.getLogger(__name__)

type Group = list[Hashable]
type Archive = list[Group]


class Interpreter:
    """Run a `RuleTable` left to right with one token of lookahead.

    Every step either consumes the current token or moves to a state that will
    consume it, so the run is bounded by the input length. The interpreter
    holds no state between runs.
    """

    def __init__(self, table: RuleTable) -> None:
        self._table = table

    @property
    def table(self) -> RuleTable:
        return self._table

    def run(self, tokens: Iterable[Hashable]) -> Archive:
        return _Run(self._table, tuple(tokens)).execute()


class _Run:
    def __init__(self, table: RuleTable, tokens: tuple[Hashable, ...]) -> None:
        self.table = table
        self.tokens = tokens
        self.position = 0
        self.tag: Tag = ROOT_TAG
        self.archive: Archive = []
        self.buffer: Group = []
        self.statements = 0

    def peek(self) -> Hashable | None:
        if self.position >= len(self.tokens):
            return None
        return self.tokens[self.position]

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def execute(self) -> Archive:
        while True:
            state = self.table.state(self.tag)
            match state:
                case WordState():
                    if self.at_end:
                        if self.tag.is_root:
                            logger.debug("finalize with %d groups", len(self.archive))
                            return self.archive
                        raise self.starvation()
                    self.step_word(state)
                case CaptureState():
                    if self.at_end:
                        if state.terminal:
                            self.flush()
                            self.complete_statement()
                            continue
                        raise self.starvation()
                    self.step_capture(state)

    def step_word(self, state: WordState) -> None:
        token = self.peek()
        if self.tag.is_root and self.statements and not self.table.options.allow_statement_chaining:
            raise self.unexpected(token)

        transition = state.keywords.get(token)
        if transition is not None:
            self.position += 1
            self.follow(transition)
            return

        if state.capture is not None:
            logger.debug("%s open capture %s", self.tag, state.capture)
            self.buffer = []
            self.tag = state.capture
            return

        raise self.unexpected(token)

    def step_capture(self, state: CaptureState) -> None:
        # Keyword continuations take priority over capture; statement keywords
        # only end a capture that is allowed to end.
        token = self.peek()
        transition = state.continuations.get(token)
        if transition is not None:
            self.position += 1
            self.flush()
            self.follow(transition)
            return

        if state.halts and isinstance(self.table.keyword_filter(token), Halt):
            logger.debug("%s halt before %s", self.tag, token)
            self.flush()
            self.complete_statement()
            return

        self.buffer.append(token)
        self.position += 1

    def follow(self, transition: Transition) -> None:
        match transition:
            case Advance(target=target):
                logger.debug("%s -> %s", self.tag, target)
                self.tag = target
            case Accept(keyword=keyword):
                logger.debug("%s accept %s", self.tag, keyword)
                self.archive.append([keyword])
                self.complete_statement()

    def flush(self) -> None:
        self.archive.append(self.buffer)
        self.buffer = []

    def complete_statement(self) -> None:
        self.statements += 1
        self.tag = ROOT_TAG

    def starvation(self) -> StarvationError:
        return StarvationError(
            Diagnostic.from_spec(
                PARSER_STARVATION,
                token_index=self.position,
                range=_token_range(self.tokens[-1]) if self.tokens else None,
            )
        )

    def unexpected(self, token: Hashable) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            Diagnostic.from_spec(
                PARSER_UNEXPECTED_TOKEN,
                f"No rules expected the token {token!s} at {self.tag}",
                token_index=self.position,
                range=_token_range(token),
            )
        )


def _token_range(token: Hashable) -> TextRange | None:
    range = getattr(token, "range", None)
    return range if isinstance(range, TextRange) else None
