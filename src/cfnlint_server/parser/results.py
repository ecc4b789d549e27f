"""Parse cfn-lint's ``--format json`` output into findings."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from cfnlint_server.models.diagnostics import Finding, Position, Severity

_SEVERITY_BY_LEVEL: dict[str, Severity] = {
    "Warning": Severity.WARNING,
    "Information": Severity.INFORMATION,
    "Hint": Severity.HINT,
}


class ResultParseError(ValueError):
    """Raised when validator output is not a JSON array of matches."""


# ---------------------------------------------------------------------------
# Wire shape of one cfn-lint match
# ---------------------------------------------------------------------------


class _ReportedPosition(BaseModel):
    # cfn-lint has emitted both integers and numeric strings here
    line: int = Field(alias="LineNumber")
    column: int = Field(alias="ColumnNumber")


class _ReportedLocation(BaseModel):
    start: _ReportedPosition = Field(alias="Start")
    end: _ReportedPosition = Field(alias="End")


class _ReportedRule(BaseModel):
    id: str | None = Field(None, alias="Id")


class _ReportedMatch(BaseModel):
    location: _ReportedLocation = Field(alias="Location")
    # any JSON value; unrecognised levels map to Error
    level: Any = Field(None, alias="Level")
    message: str = Field(alias="Message")
    rule: _ReportedRule | None = Field(None, alias="Rule")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def map_severity(level: Any) -> Severity:
    """Map a cfn-lint ``Level`` value to a severity; anything unrecognised is an error."""
    if not isinstance(level, str):
        return Severity.ERROR
    return _SEVERITY_BY_LEVEL.get(level, Severity.ERROR)


def parse_findings(text: str) -> list[Finding]:
    """Parse the complete stdout of one validator run.

    Findings keep the validator's 1-based coordinates and its array order.
    Raises :class:`ResultParseError` if *text* is not valid JSON, is not an
    array, or contains an element without the expected shape.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResultParseError(f"Validator output is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ResultParseError(
            f"Validator output must be a JSON array, got {type(data).__name__}"
        )

    findings: list[Finding] = []
    for index, element in enumerate(data):
        try:
            match = _ReportedMatch.model_validate(element)
        except ValidationError as exc:
            raise ResultParseError(f"Malformed match at index {index}: {exc}") from exc
        findings.append(
            Finding(
                severity=map_severity(match.level),
                message=match.message,
                start=Position(
                    line=match.location.start.line, character=match.location.start.column
                ),
                end=Position(line=match.location.end.line, character=match.location.end.column),
                rule_id=match.rule.id if match.rule else None,
            )
        )
    return findings
