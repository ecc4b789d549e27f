"""Client-side settings delivered by ``workspace/didChangeConfiguration``."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LintSettings(BaseModel):
    """The ``cfnLint`` settings section."""

    path: str | None = None

    model_config = {"extra": "ignore"}


class ClientSettings(BaseModel):
    """Top-level settings object pushed by the editor."""

    cfn_lint: LintSettings = Field(default_factory=LintSettings, alias="cfnLint")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def validator_command(self, default: str) -> str:
        """Return the configured validator path, or *default* when unset or empty."""
        return self.cfn_lint.path or default
