"""Detect whether a document is a CloudFormation template."""

from __future__ import annotations

import re

# Quoted (JSON) or bare (YAML) top-level version key.
_TEMPLATE_MARKER_RE = re.compile(r'"?AWSTemplateFormatVersion"?\s*')


def is_template(text: str) -> bool:
    """Return True if any line of *text* carries the template marker."""
    return any(_TEMPLATE_MARKER_RE.search(line) for line in text.split("\n"))
