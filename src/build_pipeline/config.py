"""Stack assembly configuration using pydantic-settings.

This module defines the StackSettings class that reads configuration from
environment variables with the BUILD_PIPELINE_ prefix. Every field has a
default, so assembly works without any environment; the three stack inputs
are only required by the command-line entry point.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "assets"
DEFAULT_PIPELINE_SUFFIX = "DockerPipelineStack"
DEFAULT_SOURCE_BRANCH = "master"


class StackSettings(BaseSettings):
    """Stack assembly configuration from environment variables.

    All environment variables are prefixed with BUILD_PIPELINE_
    (e.g., BUILD_PIPELINE_TEMPLATES_DIR).
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILD_PIPELINE_",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Template Store
    # -------------------------------------------------------------------------
    # Directory holding the three policy statement JSON templates
    templates_dir: Path = DEFAULT_TEMPLATES_DIR

    # -------------------------------------------------------------------------
    # Naming and Topology
    # -------------------------------------------------------------------------
    # Appended to the pipeline name to form the full pipeline name
    pipeline_suffix: str = DEFAULT_PIPELINE_SUFFIX

    # Branch whose change events trigger the source stage
    source_branch: str = DEFAULT_SOURCE_BRANCH

    # ARN partition used in computed resource scopes
    partition: str = "aws"

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = "INFO"

    # Render log events as JSON lines (console rendering otherwise)
    log_json: bool = True

    # -------------------------------------------------------------------------
    # Stack Inputs (entry point only)
    # -------------------------------------------------------------------------
    code_pipeline_name: Optional[str] = None
    code_commit_repository_name: Optional[str] = None
    ecr_repository_name: Optional[str] = None

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("pipeline_suffix", "source_branch", "partition")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Validate that naming settings are not empty."""
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a standard level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


def get_settings() -> StackSettings:
    """Create and return a StackSettings instance.

    Returns:
        StackSettings: Settings read from the current environment.

    Raises:
        pydantic.ValidationError: If a configured value is invalid.
    """
    return StackSettings()
