"""One external cfn-lint invocation for one document snapshot."""

from __future__ import annotations

import asyncio
import codecs
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, Protocol

from cfnlint_server.models.diagnostics import Diagnostic, DiagnosticBatch
from cfnlint_server.parser.results import ResultParseError, parse_findings
from cfnlint_server.service.translate import finding_to_diagnostic, stderr_diagnostic

logger = logging.getLogger("cfnlint_server.runner")

_CHUNK_SIZE = 64 * 1024


class ValidatorProcess(Protocol):
    """The slice of ``asyncio.subprocess.Process`` a run relies on."""

    stdout: asyncio.StreamReader | None
    stderr: asyncio.StreamReader | None

    async def wait(self) -> int: ...


SpawnFn = Callable[..., Awaitable[ValidatorProcess]]


class RunState(StrEnum):
    PENDING = "pending"
    SPAWNED = "spawned"
    STREAMING = "streaming"
    TERMINATED = "terminated"
    CLOSED = "closed"


class ValidationRun:
    """Spawn the validator once, collect its streams, and build a batch.

    Lifecycle: ``PENDING → SPAWNED → STREAMING → TERMINATED → CLOSED``.
    stderr chunks become warnings as they arrive; stdout is parsed once the
    process has exited; :meth:`execute` returns only after both streams
    are closed.  Validator failures never raise out of :meth:`execute`.
    """

    def __init__(
        self,
        uri: str,
        path: str,
        *,
        is_template: bool,
        command: str,
        spawn: SpawnFn | None = None,
    ) -> None:
        self.uri = uri
        self.path = path
        self.is_template = is_template
        self.command = command
        self._spawn: SpawnFn = spawn or asyncio.create_subprocess_exec
        self._state = RunState.PENDING
        self._diagnostics: list[Diagnostic] = []
        self.returncode: int | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def args(self) -> list[str]:
        return ["--format", "json", "--template", self.path]

    async def execute(self) -> DiagnosticBatch:
        logger.info("Running %s %s", self.command, " ".join(self.args))
        try:
            process = await self._spawn(
                self.command,
                *self.args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("Could not start validator %r: %s", self.command, exc)
            self._diagnostics.append(
                stderr_diagnostic(f"Failed to run '{self.command}': {exc}")
            )
            self._state = RunState.CLOSED
            return self.snapshot()
        self._state = RunState.SPAWNED

        stdout_reader = asyncio.ensure_future(self._read_stdout(process.stdout))
        stderr_reader = asyncio.ensure_future(self._read_stderr(process.stderr))
        self._state = RunState.STREAMING

        self.returncode = await process.wait()
        self._state = RunState.TERMINATED
        logger.debug("Validator for %s exited with code %s", self.uri, self.returncode)
        self._on_terminated(await stdout_reader)

        await stderr_reader
        self._state = RunState.CLOSED
        return self.snapshot()

    def snapshot(self) -> DiagnosticBatch:
        """Diagnostics collected so far; the full set once the run is CLOSED."""
        return DiagnosticBatch(uri=self.uri, diagnostics=list(self._diagnostics))

    # -- internal ------------------------------------------------------------

    def _on_terminated(self, stdout: str) -> None:
        try:
            findings = parse_findings(stdout)
        except ResultParseError as exc:
            logger.warning("Ignoring unparseable validator output for %s: %s", self.uri, exc)
            return
        if not self.is_template:
            logger.debug(
                "Discarding %d finding(s) for %s: not a CloudFormation template",
                len(findings), self.uri,
            )
            return
        self._diagnostics.extend(finding_to_diagnostic(f) for f in findings)

    async def _read_stdout(self, stream: asyncio.StreamReader | None) -> str:
        if stream is None:
            return ""
        buffer = bytearray()
        while chunk := await stream.read(_CHUNK_SIZE):
            buffer.extend(chunk)
        return buffer.decode("utf-8", errors="replace")

    async def _read_stderr(self, stream: asyncio.StreamReader | None) -> None:
        if stream is None:
            return
        decoder: Any = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while chunk := await stream.read(_CHUNK_SIZE):
            text = decoder.decode(chunk)
            if text:
                logger.info("Validator stderr for %s: %s", self.uri, text.rstrip())
                self._diagnostics.append(stderr_diagnostic(text))
        tail = decoder.decode(b"", final=True)
        if tail:
            self._diagnostics.append(stderr_diagnostic(tail))
