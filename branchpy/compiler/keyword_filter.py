"""Closed-set keyword recognition for capture boundaries."""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Halt:
    """Signal that `token` is a recognised keyword and capture must stop."""

    token: Hashable


class KeywordFilter:
    """Total function from a token to either `Halt(token)` or the token itself.

    The keyword set is fixed when the filter is built. Matching is exact
    equality; no normalisation is applied.
    """

    def __init__(self, keywords: Iterable[Hashable]) -> None:
        self._keywords = frozenset(keywords)

    @property
    def keywords(self) -> frozenset[Hashable]:
        return self._keywords

    def __call__(self, token: Hashable) -> "Halt | Hashable":
        if token in self._keywords:
            return Halt(token)
        return token

    def __contains__(self, token: object) -> bool:
        return token in self._keywords

    def __len__(self) -> int:
        return len(self._keywords)

    def __repr__(self) -> str:
        return f"KeywordFilter({sorted(map(str, self._keywords))})"
