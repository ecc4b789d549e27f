"""Shared test fixtures for the cfn-lint language server."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from cfnlint_server.models.diagnostics import Diagnostic
from cfnlint_server.models.document import TemplateDocument
from cfnlint_server.service.channel import DiagnosticChannel

TEMPLATE_URI = "file:///work/stack.yaml"
PLAIN_URI = "file:///work/notes.yaml"

TEMPLATE_SOURCE = """\
AWSTemplateFormatVersion: "2010-09-09"
Resources:
  Bucket:
    Type: AWS::S3::Bucket
"""

PLAIN_SOURCE = """\
name: not a template
items:
  - one
"""

SAMPLE_STDOUT = (
    '[{"Location":{"Start":{"LineNumber":"2","ColumnNumber":"1"},'
    '"End":{"LineNumber":"2","ColumnNumber":"5"}},'
    '"Level":"Warning","Message":"bad ref"}]'
)


class RecordingChannel(DiagnosticChannel):
    """In-memory channel that records every publish and log line."""

    def __init__(self, documents: Sequence[TemplateDocument] = ()) -> None:
        self.open_documents = list(documents)
        self.published: list[tuple[str, list[Diagnostic]]] = []
        self.messages: list[str] = []

    def publish(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.published.append((uri, list(diagnostics)))

    def documents(self) -> list[TemplateDocument]:
        return list(self.open_documents)

    def log(self, message: str) -> None:
        self.messages.append(message)


class FakeProcess:
    """Stand-in for ``asyncio.subprocess.Process`` fed from canned bytes.

    Must be constructed inside a running event loop.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        release: asyncio.Event | None = None,
    ) -> None:
        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        self.returncode = returncode
        self._release = release
        if stdout:
            self.stdout.feed_data(stdout)
        if stderr:
            self.stderr.feed_data(stderr)
        if release is None:
            self.stdout.feed_eof()
            self.stderr.feed_eof()

    async def wait(self) -> int:
        if self._release is not None:
            await self._release.wait()
            self.stdout.feed_eof()
            self.stderr.feed_eof()
        return self.returncode


@dataclass
class FakeSpawner:
    """Records spawn calls and hands out :class:`FakeProcess` instances.

    ``outputs`` maps a template path to ``(stdout, stderr)``; unknown paths
    produce empty streams.  Paths listed in ``held`` block until
    :meth:`release` is called.
    """

    outputs: dict[str, tuple[bytes, bytes]] = field(default_factory=dict)
    held: set[str] = field(default_factory=set)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    _events: dict[str, asyncio.Event] = field(default_factory=dict)

    async def __call__(self, *cmd: str, **kwargs: object) -> FakeProcess:
        self.calls.append(cmd)
        path = cmd[-1]
        stdout, stderr = self.outputs.get(path, (b"", b""))
        release = None
        if path in self.held:
            release = self._events.setdefault(path, asyncio.Event())
        return FakeProcess(stdout=stdout, stderr=stderr, release=release)

    def release(self, path: str) -> None:
        self._events.setdefault(path, asyncio.Event()).set()


@pytest.fixture
def template_document() -> TemplateDocument:
    return TemplateDocument(uri=TEMPLATE_URI, source=TEMPLATE_SOURCE)


@pytest.fixture
def plain_document() -> TemplateDocument:
    return TemplateDocument(uri=PLAIN_URI, source=PLAIN_SOURCE)


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def spawner() -> FakeSpawner:
    return FakeSpawner()
