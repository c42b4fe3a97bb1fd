"""Breadth-first worklist compiler from grammar trees to rule tables.

Work items are `(tag, node)` pairs: `tag` names the state whose rules the node
contributes to. Dequeuing an item emits the node's transition into that state
and enqueues the node's children under the tag of the state it leads to.
Every enqueued child carries a strictly longer tag, so each state is built
exactly once and the queue drains after at most one visit per grammar node.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
import logging
from types import MappingProxyType

from branchpy.compiler.keyword_filter import KeywordFilter
from branchpy.compiler.options import CompileMode, CompilerOptions, resolve_options
from branchpy.compiler.rules import Accept, Advance, CaptureState, RuleTable, State, Transition, WordState
from branchpy.compiler.tags import ROOT_TAG, Tag
from branchpy.diagnostics import Diagnostic, GrammarConflictError, GrammarError, GrammarShapeError
from branchpy.diagnostics.codes import GRAMMAR_INVALID_SHAPE, GRAMMAR_SHADOWED_BRANCH, GRAMMAR_TOO_DEEP
from branchpy.grammar import Collector, GrammarNode, GrammarSpec, Word

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorkItem:
    tag: Tag
    node: GrammarNode
    top_level: bool = False


@dataclass(slots=True)
class _PendingWordState:
    tag: Tag
    keywords: dict[Hashable, Transition] = field(default_factory=dict)
    capture: Tag | None = None

    def freeze(self) -> WordState:
        return WordState(self.tag, MappingProxyType(self.keywords), self.capture)


@dataclass(slots=True)
class _PendingCaptureState:
    tag: Tag
    terminal: bool
    halts: bool
    continuations: dict[Hashable, Transition] = field(default_factory=dict)

    def freeze(self) -> CaptureState:
        return CaptureState(self.tag, MappingProxyType(self.continuations), self.terminal, self.halts)


class WorklistCompiler:
    def __init__(self, options: CompilerOptions | None = None) -> None:
        self._options = options or CompilerOptions()
        self._states: dict[Tag, _PendingWordState | _PendingCaptureState] = {}
        self._diagnostics: list[Diagnostic] = []

    @property
    def options(self) -> CompilerOptions:
        return self._options

    def compile(self, grammar: GrammarSpec) -> RuleTable:
        self._states = {}
        self._diagnostics = []
        self._open_state(_PendingWordState(ROOT_TAG))

        queue: deque[WorkItem] = deque(WorkItem(ROOT_TAG, branch, top_level=True) for branch in grammar.branches)
        while queue:
            item = queue.popleft()
            queue.extend(self._expand(item))

        keyword_filter = KeywordFilter(grammar.keywords())
        states: dict[Tag, State] = {tag: pending.freeze() for tag, pending in self._states.items()}
        logger.debug("compiled %d states, %d statement keywords", len(states), len(keyword_filter))
        return RuleTable(states, keyword_filter, self._options, tuple(self._diagnostics))

    def _expand(self, item: WorkItem) -> Iterator[WorkItem]:
        match item.node:
            case Word() as node:
                yield from self._expand_word(item, node)
            case Collector() as node:
                yield from self._expand_collector(item, node)
            case other:
                raise _shape_error(f"Not a grammar node at {item.tag}: {other!r}")

    def _expand_word(self, item: WorkItem, node: Word) -> Iterator[WorkItem]:
        parent = self._states[item.tag]
        transitions = parent.keywords if isinstance(parent, _PendingWordState) else parent.continuations

        if node.keyword in transitions:
            self._shadowed(item, f"Branch {node.keyword!s} at {item.tag} is shadowed by an earlier sibling")
            return

        # Top-level words always open a state; only nested words can be terminal.
        if node.is_terminal and not item.top_level:
            transitions[node.keyword] = Accept(node.keyword)
            return

        target = self._checked_depth(item.tag.extend(node.keyword))
        transitions[node.keyword] = Advance(target)
        self._open_state(_PendingWordState(target))
        for child in node.children:
            yield WorkItem(target, child)

    def _expand_collector(self, item: WorkItem, node: Collector) -> Iterator[WorkItem]:
        if item.top_level:
            raise _shape_error("Top-level branch must start with a keyword, not a capture")

        parent = self._states[item.tag]
        if isinstance(parent, _PendingCaptureState):
            raise _shape_error(f"Capture continuations at {item.tag} must start with a keyword")

        if parent.capture is not None:
            self._shadowed(item, f"Capture at {item.tag} is shadowed by an earlier sibling capture")
            return

        target = self._checked_depth(item.tag.capture())
        parent.capture = target
        self._open_state(
            _PendingCaptureState(
                target,
                terminal=node.is_terminal,
                halts=node.is_terminal and self._options.allow_statement_chaining,
            )
        )
        for child in node.children:
            yield WorkItem(target, child)

    def _checked_depth(self, child: Tag) -> Tag:
        if child.depth > self._options.max_depth:
            raise GrammarError(
                Diagnostic.from_spec(
                    GRAMMAR_TOO_DEEP,
                    f"Grammar depth exceeds {self._options.max_depth} at {child}",
                )
            )
        return child

    def _open_state(self, pending: _PendingWordState | _PendingCaptureState) -> None:
        if pending.tag in self._states:
            raise RuntimeError(f"State {pending.tag} compiled twice")
        logger.debug("open %s state %s", "capture" if pending.tag.is_capture else "word", pending.tag)
        self._states[pending.tag] = pending

    def _shadowed(self, item: WorkItem, message: str) -> None:
        if self._options.is_strict:
            raise GrammarConflictError(Diagnostic.from_spec(GRAMMAR_SHADOWED_BRANCH, message, severity="error"))
        logger.debug(message)
        self._diagnostics.append(Diagnostic.from_spec(GRAMMAR_SHADOWED_BRANCH, message))


def compile_grammar(
    grammar: GrammarSpec,
    options: CompilerOptions | None = None,
    *,
    mode: CompileMode | None = None,
) -> RuleTable:
    return WorklistCompiler(resolve_options(options=options, mode=mode)).compile(grammar)


def _shape_error(message: str) -> GrammarShapeError:
    return GrammarShapeError(Diagnostic.from_spec(GRAMMAR_INVALID_SHAPE, message))
