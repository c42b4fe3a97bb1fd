"""Exceptions raised for unrecoverable failures.

Every exception carries the :class:`Diagnostic` describing it, so callers that
prefer diagnostics over exceptions can convert one into the other.
"""

from branchpy.diagnostics.diagnostic import Diagnostic


class BranchpyError(Exception):
    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def code(self) -> str:
        return self.diagnostic.code


class LexError(BranchpyError):
    """Source text could not be split into tokens."""


class GrammarError(BranchpyError):
    """Grammar specification could not be compiled."""


class GrammarShapeError(GrammarError):
    pass


class GrammarConflictError(GrammarError):
    pass


class ParseError(BranchpyError):
    """Token input was rejected by a generated parser."""


class StarvationError(ParseError):
    pass


class UnexpectedTokenError(ParseError):
    pass


class EmptyInputError(ParseError):
    pass
