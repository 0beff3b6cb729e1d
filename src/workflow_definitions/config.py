"""Configuration for the workflow definitions service.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The workflow configuration itself lives in a separate JSON file pointed at by
`WORKFLOW_CONFIG_PATH`; these settings only describe how to find and serve it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the REST API and CLI.

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ServerSettings(_env_file=path_to_env)`.
    """

    workflow_config_path: Path = Field(
        default=Path("config/workflow.json"),
        validation_alias="WORKFLOW_CONFIG_PATH",
        description="JSON file with workflow definitions and collection mappings",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    default_page_size: int = Field(
        default=20,
        validation_alias="WORKFLOW_DEFAULT_PAGE_SIZE",
        description="Page size used when a request does not ask for one",
        ge=1,
        le=1000,
    )
    max_page_size: int = Field(
        default=100,
        validation_alias="WORKFLOW_MAX_PAGE_SIZE",
        description="Largest page size a request may ask for",
        ge=1,
        le=1000,
    )

    # Dev-friendly CORS. Override via WORKFLOW_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="WORKFLOW_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def _page_sizes_consistent(self) -> ServerSettings:
        if self.default_page_size > self.max_page_size:
            raise ValueError("WORKFLOW_DEFAULT_PAGE_SIZE must not exceed WORKFLOW_MAX_PAGE_SIZE")
        return self

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
