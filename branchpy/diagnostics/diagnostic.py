"""Diagnostics core types."""

from dataclasses import dataclass

from branchpy.diagnostics.codes import DiagnosticSpec, Severity
from branchpy.text import TextRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the lexer, grammar compiler and parsers."""

    code: str
    message: str
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
    token_index: int | None = None
    range: TextRange | None = None

    @staticmethod
    def from_spec(
        spec: DiagnosticSpec,
        message: str | None = None,
        *,
        token_index: int | None = None,
        range: TextRange | None = None,
        severity: Severity | None = None,
    ) -> "Diagnostic":
        return Diagnostic(
            code=spec.code,
            message=message if message is not None else spec.message,
            severity=severity if severity is not None else spec.severity,
            hint=spec.hint,
            category=spec.category,
            token_index=token_index,
            range=range,
        )

    def __str__(self) -> str:
        location = f" at token {self.token_index}" if self.token_index is not None else ""
        if self.range is not None:
            location += f" {self.range.as_tuple()}"
        return f"{self.severity.upper()} {self.code}{location}: {self.message}"
