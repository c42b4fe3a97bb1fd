"""Path tags identifying automaton states."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Final


class Step(Enum):
    """Non-keyword tag steps."""

    CAPTURE = "#"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Tag:
    """Path from the grammar root to a state, built as `(parent, step)`.

    Each step is either a keyword or `Step.CAPTURE`. Tags only ever grow, so
    a tag is never reached by two different paths.
    """

    parent: Tag | None = None
    step: Hashable = None
    depth: int = 0
    _hash: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Parents contribute their own cached hash.
        object.__setattr__(self, "_hash", hash((self.parent, self.step, self.depth)))

    def __hash__(self) -> int:
        return self._hash

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_capture(self) -> bool:
        return self.step is Step.CAPTURE

    def extend(self, step: Hashable) -> Tag:
        return Tag(self, step, self.depth + 1)

    def capture(self) -> Tag:
        return self.extend(Step.CAPTURE)

    def path(self) -> tuple[Hashable, ...]:
        steps: list[Hashable] = []
        current: Tag | None = self
        while current is not None and current.parent is not None:
            steps.append(current.step)
            current = current.parent
        return tuple(reversed(steps))

    def __str__(self) -> str:
        return "@(" + " ".join(str(step) for step in self.path()) + ")"

    def __repr__(self) -> str:
        return f"Tag({str(self)})"


ROOT_TAG: Final[Tag] = Tag()
