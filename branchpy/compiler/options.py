"""Compiler modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class CompileMode(StrEnum):
    """How sibling branches that lead with the same keyword are handled."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class CompilerOptions:
    """Feature flags controlling rule construction."""

    mode: CompileMode = CompileMode.PERMISSIVE
    allow_statement_chaining: bool = True
    max_depth: int = 64

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

    @property
    def is_strict(self) -> bool:
        return self.mode == CompileMode.STRICT

    @staticmethod
    def for_mode(mode: CompileMode) -> "CompilerOptions":
        return CompilerOptions(mode=mode)


def resolve_options(
    options: CompilerOptions | None,
    mode: CompileMode | None,
) -> CompilerOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return CompilerOptions.for_mode(mode)

    return CompilerOptions()
