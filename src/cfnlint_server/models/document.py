"""Read-only view of an editor document as seen by the validation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from pygls.uris import to_fs_path

from cfnlint_server.parser.template import is_template


@dataclass(frozen=True)
class TemplateDocument:
    """A document snapshot identified by its URI."""

    uri: str
    source: str

    @cached_property
    def is_template(self) -> bool:
        """True when the content carries the CloudFormation template marker."""
        return is_template(self.source)

    @property
    def path(self) -> str:
        """Local filesystem path handed to the validator.

        Non-``file:`` URIs (e.g. ``untitled:``) are passed through as-is;
        the validator will then report the problem on stderr.
        """
        if not self.uri.startswith("file:"):
            return self.uri
        return to_fs_path(self.uri) or self.uri
