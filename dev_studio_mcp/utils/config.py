"""Settings of the Dev Studio MCP server."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from dev_studio_mcp.vfs.templates import TEMPLATES


class ServiceConfig(BaseSettings):
    """
    Server settings, read from environment variables. `.env` files are loaded
    into the environment by main.py before this class is instantiated.
    """

    MCP_TRANSPORT: Literal["stdio", "sse", "streamable-http"] = "stdio"
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8660

    # JSON document holding the whole project table. Empty keeps projects in memory only.
    STORAGE_PATH: str = "~/.dev_studio/projects.json"
    # Opaque owner reference stamped on new projects.
    PROJECT_OWNER: str | None = None
    DEFAULT_TEMPLATE: str = "react"
    # Quiescence window for coalescing editor saves.
    AUTOSAVE_DELAY_SECONDS: float = Field(default=1.0, ge=0)

    PREVIEW_ENTRY_FILE: str = "src/App.js"
    PREVIEW_ENTRY_SYMBOL: str = "App"

    # Wall-clock budget of one `node` run.
    SANDBOX_TIME_LIMIT_SECONDS: float = Field(default=2.0, gt=0)

    class Config:
        extra = "ignore"

    @field_validator("DEFAULT_TEMPLATE")
    @classmethod
    def _known_template(cls, value: str) -> str:
        if value not in TEMPLATES:
            raise ValueError(f"Unknown template {value!r}; expected one of {sorted(TEMPLATES)}")
        return value

    @field_validator("PREVIEW_ENTRY_FILE")
    @classmethod
    def _relative_entry_file(cls, value: str) -> str:
        return value.lstrip("/")
