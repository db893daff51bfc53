"""Configuration for the flow store.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FlowSettings(BaseSettings):
    """Settings for the flow store and its remote service.

    Environment variables:
    - WORKFLOW_SERVICE_URL
    - WORKFLOW_SERVICE_TOKEN            (optional)
    - WORKFLOW_SERVICE_TIMEOUT_SECONDS  (optional)
    - LOG_LEVEL                         (optional)
    - FLOW_EXPORT_DIR                   (optional)
    - FLOW_EXPORT_EXTENSION             (optional)
    - FLOW_DEFAULT_TITLE                (optional)
    - FLOW_DEFAULT_MODEL                (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `FlowSettings(_env_file=path_to_env)`.
    """

    service_url: str = Field(
        default="http://localhost:3000/api",
        validation_alias="WORKFLOW_SERVICE_URL",
        description="Base URL of the workflow persistence service",
    )
    service_token: str = Field(
        default="",
        validation_alias="WORKFLOW_SERVICE_TOKEN",
        description="Bearer token for the persistence service (empty means anonymous)",
    )
    service_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="WORKFLOW_SERVICE_TIMEOUT_SECONDS",
        description="Per-request timeout for the persistence service",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    export_dir: Path = Field(
        default=Path("."),
        validation_alias="FLOW_EXPORT_DIR",
        description="Directory where exported workflow files are written",
    )
    export_extension: str = Field(
        default="yml",
        validation_alias="FLOW_EXPORT_EXTENSION",
        description="File extension for exported workflows",
    )

    default_title: str = Field(
        default="AI Workshop",
        validation_alias="FLOW_DEFAULT_TITLE",
        description="Title given to newly created workflows",
    )
    default_model: str = Field(
        default="gpt-3.5-turbo",
        validation_alias="FLOW_DEFAULT_MODEL",
        description="LLM model for seed nodes when none is specified",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_service_url(self) -> FlowSettings:
        if not self.service_url.strip():
            raise ValueError("WORKFLOW_SERVICE_URL must not be empty")
        self.export_extension = self.export_extension.strip().lstrip(".") or "yml"
        return self
