"""Validator output parsing and template detection."""

from cfnlint_server.parser.results import ResultParseError, map_severity, parse_findings
from cfnlint_server.parser.template import is_template

__all__ = [
    "ResultParseError",
    "is_template",
    "map_severity",
    "parse_findings",
]
