"""Translate validator findings into 0-based editor diagnostics."""

from __future__ import annotations

from cfnlint_server.models.diagnostics import Diagnostic, Finding, Position, Range, Severity

# Largest LSP ``uinteger``; clients clip it to the end of the line.
MAX_COLUMN = 2**31 - 1


def to_zero_based(position: Position) -> Position:
    """Shift a 1-based position to 0-based.  Out-of-range values pass through."""
    return Position(line=position.line - 1, character=position.character - 1)


def finding_to_diagnostic(finding: Finding) -> Diagnostic:
    return Diagnostic(
        range=Range(start=to_zero_based(finding.start), end=to_zero_based(finding.end)),
        severity=finding.severity,
        message=finding.message,
        code=finding.rule_id,
    )


def stderr_diagnostic(text: str) -> Diagnostic:
    """Warning spanning the whole first line, used for validator stderr output."""
    return Diagnostic(
        range=Range(
            start=Position(line=0, character=0),
            end=Position(line=0, character=MAX_COLUMN),
        ),
        severity=Severity.WARNING,
        message=text,
    )
