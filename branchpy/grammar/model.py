"""Grammar specification tree.

A grammar is an ordered list of top-level branches. Each branch starts with a
keyword (`Word`) and continues with further keywords or wildcard captures
(`Collector`). Sibling order is declaration order and is significant: it is
the tie-break when two siblings lead with the same keyword.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Final

CAPTURE_MARKER: Final[str] = "#"


@dataclass(frozen=True, slots=True)
class Word:
    """Fixed keyword, optionally followed by child alternatives."""

    keyword: Hashable
    children: tuple[GrammarNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_terminal(self) -> bool:
        return not self.children


@dataclass(frozen=True, slots=True)
class Collector:
    """Wildcard capture of tokens until a keyword boundary.

    `children` are the continuation keywords that end the capture. A collector
    is terminal (may also end at end of input or at a statement keyword) when
    `terminal` is set or when it has no continuations at all.
    """

    children: tuple[GrammarNode, ...] = ()
    terminal: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_terminal(self) -> bool:
        return self.terminal or not self.children


type GrammarNode = Word | Collector


@dataclass(frozen=True, slots=True)
class GrammarSpec:
    branches: tuple[GrammarNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "branches", tuple(self.branches))

    def keywords(self) -> tuple[Hashable, ...]:
        """Distinct top-level keywords, in declaration order."""
        seen: dict[Hashable, None] = {}
        for branch in self.branches:
            if isinstance(branch, Word):
                seen.setdefault(branch.keyword, None)
        return tuple(seen)

    def depth(self) -> int:
        return max((_depth(branch) for branch in self.branches), default=0)

    def walk(self) -> Iterator[GrammarNode]:
        """Depth-first pre-order walk over every node."""
        stack = list(reversed(self.branches))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def _depth(node: GrammarNode) -> int:
    return 1 + max((_depth(child) for child in node.children), default=0)


def word(keyword: Hashable, *children: GrammarNode) -> Word:
    return Word(keyword, children)


def collect(*continuations: GrammarNode, terminal: bool = False) -> Collector:
    return Collector(continuations, terminal=terminal)


def grammar(*branches: GrammarNode) -> GrammarSpec:
    return GrammarSpec(branches)
