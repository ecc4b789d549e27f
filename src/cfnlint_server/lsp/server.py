"""pygls language server wiring the editor connection to the validation coordinator.

Run via::

    cfnlint-server                          # reads .env (default: stdio)
    LSP_TRANSPORT=tcp cfnlint-server        # TCP on 127.0.0.1:2087

The editor pushes the validator path as ``{"cfnLint": {"path": ...}}``
through ``workspace/didChangeConfiguration``.  Settings are loaded from
environment variables and ``.env`` file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from cfnlint_server import __version__
from cfnlint_server.models.diagnostics import Diagnostic, Position
from cfnlint_server.models.document import TemplateDocument
from cfnlint_server.service.channel import DiagnosticChannel
from cfnlint_server.service.coordinator import ValidationCoordinator
from cfnlint_server.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("cfnlint_server.lsp")

_UINTEGER_MAX = 2**31 - 1

server = LanguageServer(
    "cfn-lint-server",
    __version__,
    text_document_sync_kind=types.TextDocumentSyncKind.Full,
)
_coordinator: ValidationCoordinator | None = None


class PyglsChannel(DiagnosticChannel):
    """Publishes diagnostics and reads open documents through a pygls server."""

    def __init__(self, ls: LanguageServer) -> None:
        self._ls = ls

    def publish(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        self._ls.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[to_lsp_diagnostic(d) for d in diagnostics],
            )
        )

    def documents(self) -> list[TemplateDocument]:
        return [
            TemplateDocument(uri=doc.uri, source=doc.source)
            for doc in self._ls.workspace.text_documents.values()
        ]

    def log(self, message: str) -> None:
        self._ls.window_log_message(
            types.LogMessageParams(type=types.MessageType.Log, message=message)
        )


def _to_lsp_position(position: Position) -> types.Position:
    # The wire format is unsigned; anything outside it cannot be sent.
    line, character = position.line, position.character
    if not (0 <= line <= _UINTEGER_MAX and 0 <= character <= _UINTEGER_MAX):
        logger.warning("Clamping out-of-range position (%d, %d)", line, character)
        line = min(max(line, 0), _UINTEGER_MAX)
        character = min(max(character, 0), _UINTEGER_MAX)
    return types.Position(line=line, character=character)


def to_lsp_diagnostic(diagnostic: Diagnostic) -> types.Diagnostic:
    """Convert a domain diagnostic to its ``lsprotocol`` form."""
    return types.Diagnostic(
        range=types.Range(
            start=_to_lsp_position(diagnostic.range.start),
            end=_to_lsp_position(diagnostic.range.end),
        ),
        severity=types.DiagnosticSeverity(int(diagnostic.severity)),
        message=diagnostic.message,
        source=diagnostic.source,
        code=diagnostic.code,
    )


def init_coordinator(coordinator: ValidationCoordinator) -> None:
    """Set the global coordinator (called at startup)."""
    global _coordinator  # noqa: PLW0603
    _coordinator = coordinator


def reset_coordinator() -> None:
    """Clear the global coordinator (for tests)."""
    global _coordinator  # noqa: PLW0603
    _coordinator = None


def _resolve_coordinator() -> ValidationCoordinator:
    if _coordinator is None:
        raise RuntimeError("Coordinator not initialised; call init_coordinator() first")
    return _coordinator


def _snapshot(ls: LanguageServer, uri: str) -> TemplateDocument:
    document = ls.workspace.get_text_document(uri)
    return TemplateDocument(uri=document.uri, source=document.source)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: types.DidOpenTextDocumentParams) -> None:
    _resolve_coordinator().on_open(_snapshot(ls, params.text_document.uri))


@server.feature(types.TEXT_DOCUMENT_DID_SAVE)
def did_save(ls: LanguageServer, params: types.DidSaveTextDocumentParams) -> None:
    logger.info("Running cfn-lint on save: %s", params.text_document.uri)
    _resolve_coordinator().on_save(_snapshot(ls, params.text_document.uri))


@server.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: LanguageServer, params: types.DidChangeConfigurationParams
) -> None:
    logger.info("Settings have been updated")
    _resolve_coordinator().on_configuration_change(params.settings)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the language server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "cfn-lint language server v%s starting (transport=%s, validator=%s)",
        __version__,
        settings.lsp_transport,
        settings.default_validator_command,
    )

    init_coordinator(
        ValidationCoordinator(
            PyglsChannel(server),
            default_command=settings.default_validator_command,
        )
    )

    if settings.lsp_transport == "stdio":
        server.start_io()
    else:
        server.start_tcp(settings.lsp_server_host, settings.lsp_server_port)


if __name__ == "__main__":
    main()
