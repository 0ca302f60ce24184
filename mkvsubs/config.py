"""
mkvsubs.config - Tool configuration and validation.

Builds the explicit configuration handed to the probe and extraction
adapters from environment variables and command-line overrides. There is no
configuration file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from mkvsubs.exceptions import ConfigError

OverwriteDecision = Literal["ask", "overwrite", "skip"]

ENV_PREFIX = "MKVSUBS_"
ENV_KEYS = ("ffmpeg", "ffprobe", "mkvextract")


class ToolConfig(BaseModel):
    """Resolved configuration for one extraction run."""

    model_config = ConfigDict(frozen=True)

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    mkvextract: str = "mkvextract"

    output_dir: Path | None = None
    on_existing: OverwriteDecision = "ask"
    fallback_language: str = "und"

    @field_validator("ffmpeg", "ffprobe", "mkvextract")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("executable must not be empty")
        return v

    @field_validator("fallback_language")
    @classmethod
    def validate_fallback_language(cls, v: str) -> str:
        if not v.isalnum():
            raise ValueError("fallback_language must be alphanumeric")
        return v


def config_from_env(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect tool overrides from MKVSUBS_* environment variables."""
    if env is None:
        env = os.environ
    values = {}
    for key in ENV_KEYS:
        value = env.get(f"{ENV_PREFIX}{key.upper()}")
        if value:
            values[key] = value
    return values


def load_config(env: Mapping[str, str] | None = None, **overrides: Any) -> ToolConfig:
    """Load and validate configuration. Explicit overrides take precedence.

    Args:
        env: Environment mapping (defaults to os.environ)
        **overrides: Field values from the command line; None values are ignored

    Returns:
        Validated ToolConfig

    Raises:
        ConfigError: If any value is invalid
    """
    merged = config_from_env(env)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    try:
        return ToolConfig(**merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
