"""Findings reported by cfn-lint and the editor-facing diagnostics built from them."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel

DIAGNOSTIC_SOURCE = "cfn-lint"


class Severity(IntEnum):
    """Diagnostic severity, numbered as in the LSP ``DiagnosticSeverity`` enum."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class Position(BaseModel):
    """A line/character pair.

    Carries whichever addressing its producer uses: 1-based inside a
    :class:`Finding`, 0-based inside a :class:`Diagnostic`.  Values are not
    bounds-checked.
    """

    line: int
    character: int


class Range(BaseModel):
    start: Position
    end: Position


class Finding(BaseModel):
    """One issue reported by the validator, in its 1-based coordinates."""

    severity: Severity = Severity.ERROR
    message: str
    start: Position
    end: Position
    rule_id: str | None = None


class Diagnostic(BaseModel):
    """Editor-facing representation of a finding, in 0-based coordinates."""

    range: Range
    severity: Severity
    message: str
    source: str = DIAGNOSTIC_SOURCE
    code: str | None = None


class DiagnosticBatch(BaseModel):
    """The complete diagnostic set produced by one validation run for one document."""

    uri: str
    diagnostics: list[Diagnostic] = []
