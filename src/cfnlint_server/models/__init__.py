"""Pydantic domain models for the cfn-lint language server."""

from cfnlint_server.models.config import ClientSettings, LintSettings
from cfnlint_server.models.diagnostics import (
    DIAGNOSTIC_SOURCE,
    Diagnostic,
    DiagnosticBatch,
    Finding,
    Position,
    Range,
    Severity,
)
from cfnlint_server.models.document import TemplateDocument

__all__ = [
    "DIAGNOSTIC_SOURCE",
    "ClientSettings",
    "Diagnostic",
    "DiagnosticBatch",
    "Finding",
    "LintSettings",
    "Position",
    "Range",
    "Severity",
    "TemplateDocument",
]
