"""Process-wide validation controller: settings, in-flight tracking, publishing."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from cfnlint_server.models.config import ClientSettings
from cfnlint_server.models.diagnostics import Diagnostic, DiagnosticBatch
from cfnlint_server.models.document import TemplateDocument
from cfnlint_server.service.channel import DiagnosticChannel
from cfnlint_server.service.runner import SpawnFn, ValidationRun

logger = logging.getLogger("cfnlint_server.coordinator")


class ValidationCoordinator:
    """Decides when documents are validated and publishes the results.

    At most one :class:`ValidationRun` is live per URI.  A trigger that
    arrives while the URI is still validating is dropped, not queued; the
    next open/save will try again.  Must be driven from a single event loop.
    """

    def __init__(
        self,
        channel: DiagnosticChannel,
        *,
        default_command: str = "cfn-lint",
        spawn: SpawnFn | None = None,
    ) -> None:
        self._channel = channel
        self._default_command = default_command
        self._command = default_command
        self._spawn = spawn
        self._validating: dict[str, bool] = {}
        self._tasks: set[asyncio.Task[DiagnosticBatch]] = set()

    # -- state ---------------------------------------------------------------

    @property
    def command(self) -> str:
        """Validator command used by runs started from now on."""
        return self._command

    def is_validating(self, uri: str) -> bool:
        return self._validating.get(uri, False)

    # -- editor events -------------------------------------------------------

    def on_open(self, document: TemplateDocument) -> asyncio.Task[DiagnosticBatch] | None:
        return self.validate(document)

    def on_save(self, document: TemplateDocument) -> asyncio.Task[DiagnosticBatch] | None:
        return self.validate(document)

    def on_configuration_change(self, settings: Any) -> list[asyncio.Task[DiagnosticBatch]]:
        """Adopt the editor's validator path and re-validate every open document.

        Documents that are still validating keep their current run; the
        re-trigger for them is dropped like any other.
        """
        try:
            client_settings = ClientSettings.model_validate(settings or {})
        except ValidationError as exc:
            logger.warning("Ignoring malformed client settings: %s", exc)
            client_settings = ClientSettings()
        self._command = client_settings.validator_command(self._default_command)
        logger.info("Validator command set to %r", self._command)
        self._channel.log(f"cfn-lint path set to: {self._command}")

        tasks: list[asyncio.Task[DiagnosticBatch]] = []
        for document in self._channel.documents():
            task = self.validate(document)
            if task is not None:
                tasks.append(task)
        return tasks

    # -- validation ----------------------------------------------------------

    def validate(self, document: TemplateDocument) -> asyncio.Task[DiagnosticBatch] | None:
        """Start a run for *document* unless one is already live for its URI.

        Returns the scheduled task, or ``None`` when the trigger was dropped.
        """
        uri = document.uri
        if self._validating.get(uri):
            logger.debug("Validation already running for %s; dropping trigger", uri)
            return None
        self._validating[uri] = True

        run = ValidationRun(
            uri,
            document.path,
            is_template=document.is_template,
            command=self._command,
            spawn=self._spawn,
        )
        self._channel.log(f"Is CFN: {run.is_template}")
        task = asyncio.get_running_loop().create_task(self._execute(run))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every live run has published."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def publish(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Send *diagnostics* as the complete set for *uri*, replacing earlier ones."""
        logger.info("Publishing %d diagnostic(s) for %s", len(diagnostics), uri)
        self._channel.publish(uri, list(diagnostics))

    # -- internal ------------------------------------------------------------

    async def _execute(self, run: ValidationRun) -> DiagnosticBatch:
        batch = run.snapshot()
        try:
            batch = await run.execute()
        except Exception:
            logger.exception("Validation run for %s failed unexpectedly", run.uri)
            batch = run.snapshot()
        finally:
            try:
                self.publish(batch.uri, batch.diagnostics)
            finally:
                self._validating[run.uri] = False
        return batch
