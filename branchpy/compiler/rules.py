"""Compiled transition rules.

A `RuleTable` maps every reachable `Tag` to exactly one state. Word states are
entered with no capture in progress and dispatch on keywords; capture states
own the working buffer and decide, one token at a time, between following a
continuation keyword, halting at a statement keyword, or capturing.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from branchpy.compiler.tags import ROOT_TAG, Tag

if TYPE_CHECKING:
    from branchpy.compiler.keyword_filter import KeywordFilter
    from branchpy.compiler.options import CompilerOptions
    from branchpy.diagnostics import Diagnostic


@dataclass(frozen=True, slots=True)
class Advance:
    """Consume the keyword and move to `target`."""

    target: Tag


@dataclass(frozen=True, slots=True)
class Accept:
    """Consume a terminal keyword, archive it as its own group, and return to root."""

    keyword: Hashable


type Transition = Advance | Accept


@dataclass(frozen=True, slots=True)
class WordState:
    tag: Tag
    keywords: Mapping[Hashable, Transition]
    capture: Tag | None = None

    @property
    def kind(self) -> str:
        return "word"


@dataclass(frozen=True, slots=True)
class CaptureState:
    tag: Tag
    continuations: Mapping[Hashable, Transition]
    terminal: bool = False
    halts: bool = False

    @property
    def kind(self) -> str:
        return "capture"


type State = WordState | CaptureState


class RuleTable:
    """Immutable automaton produced by the worklist compiler."""

    def __init__(
        self,
        states: Mapping[Tag, State],
        keyword_filter: KeywordFilter,
        options: CompilerOptions,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> None:
        self._states = dict(states)
        self._keyword_filter = keyword_filter
        self._options = options
        self._diagnostics = diagnostics

    @property
    def root(self) -> WordState:
        state = self._states[ROOT_TAG]
        if not isinstance(state, WordState):
            raise TypeError(f"Root state must be a word state, got {state.kind}")
        return state

    @property
    def keyword_filter(self) -> KeywordFilter:
        return self._keyword_filter

    @property
    def options(self) -> CompilerOptions:
        return self._options

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    @property
    def tags(self) -> tuple[Tag, ...]:
        """State tags in compilation order."""
        return tuple(self._states)

    def state(self, tag: Tag) -> State:
        return self._states[tag]

    def __contains__(self, tag: object) -> bool:
        return tag in self._states

    def __iter__(self) -> Iterator[State]:
        return iter(self._states.values())

    def __len__(self) -> int:
        return len(self._states)

    def describe(self) -> str:
        """Human-readable dump of every state and its transitions."""
        lines: list[str] = []
        for state in self._states.values():
            match state:
                case WordState(tag=tag, keywords=keywords, capture=capture):
                    lines.append(f"{tag} word")
                    lines.extend(_describe_transitions(keywords))
                    if capture is not None:
                        lines.append(f"  * -> capture {capture}")
                case CaptureState(tag=tag, continuations=continuations, terminal=terminal, halts=halts):
                    flags = [name for name, on in (("terminal", terminal), ("halts", halts)) if on]
                    suffix = f" [{', '.join(flags)}]" if flags else ""
                    lines.append(f"{tag} capture{suffix}")
                    lines.extend(_describe_transitions(continuations))
                    lines.append("  * -> append")
        return "\n".join(lines)


def _describe_transitions(transitions: Mapping[Hashable, Transition]) -> list[str]:
    lines: list[str] = []
    for keyword, transition in transitions.items():
        match transition:
            case Advance(target=target):
                lines.append(f"  {keyword} -> {target}")
            case Accept():
                lines.append(f"  {keyword} -> accept")
    return lines
