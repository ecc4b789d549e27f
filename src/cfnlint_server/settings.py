"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the cfn-lint language server process.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.  The validator path chosen by the editor
    arrives later through ``workspace/didChangeConfiguration`` and is held
    in memory by the coordinator; ``default_validator_command`` is only
    the fallback used until then (or whenever the editor sends an empty path).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Validator
    default_validator_command: str = "cfn-lint"

    # Transport
    lsp_transport: Literal["stdio", "tcp"] = "stdio"
    lsp_server_host: str = "127.0.0.1"
    lsp_server_port: int = 2087
