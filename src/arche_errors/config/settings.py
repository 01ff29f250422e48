# src/arche_errors/config/settings.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Arche Errors Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated process configuration for the error library. Values are
    read once per process; the stack-capture depth in particular is frozen at
    import of :mod:`arche_errors.domain.services.stack_capture`.

Design:
    - Pydantic v2 BaseSettings scoped by the `ARCHE_ERRORS_` prefix; unrelated
      keys in the host environment or `.env` are ignored.
    - Explicit field declarations with constrained types and ranges.
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration for the error library.

    Only process-wide knobs live here. Nothing in this object is consulted per
    call; callers that need a different capture depth must restart the process.

    Every field is read from `ARCHE_ERRORS_<FIELD>`, e.g. `ARCHE_ERRORS_LOG_LEVEL`.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level used by configure_root_logging().",
    )

    max_stack_depth: int = Field(
        default=50,
        ge=1,
        le=1024,
        description="Maximum number of frames captured and parsed per error.",
    )

    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus counters for normalized errors.",
    )

    model_config = SettingsConfigDict(
        env_prefix="ARCHE_ERRORS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Upper-case and validate the log level name.

        Raises:
            ValueError: If the name is not a known logging level.
        """
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated library settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.error("Invalid configuration", extra={"errors": exc.errors()})
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "Settings initialized",
        extra={
            "environment": settings.environment.value,
            "log_level": settings.log_level,
            "max_stack_depth": settings.max_stack_depth,
            "metrics_enabled": settings.metrics_enabled,
        },
    )
    return settings
