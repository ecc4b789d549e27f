"""Outbound editor channel used by the validation coordinator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from cfnlint_server.models.diagnostics import Diagnostic
from cfnlint_server.models.document import TemplateDocument


class DiagnosticChannel(ABC):
    """What the coordinator needs from the editor connection."""

    @abstractmethod
    def publish(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the complete diagnostic set shown for *uri*."""

    @abstractmethod
    def documents(self) -> list[TemplateDocument]:
        """Snapshot of every document currently open in the editor."""

    def log(self, message: str) -> None:
        """Write a line to the editor's output console (optional)."""
