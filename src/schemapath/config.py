from __future__ import annotations

import logging
import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class SchemaPathConfig(BaseModel):
    """Process-wide settings, seeded from ``SCHEMAPATH_*`` environment variables."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    max_unwrap_depth: int = Field(default=64, gt=0)
    log_level: LogLevel = "WARNING"
    rich_logging: bool = True

    @classmethod
    def from_env(cls) -> SchemaPathConfig:
        values: dict[str, object] = {}
        depth = os.getenv("SCHEMAPATH_MAX_UNWRAP_DEPTH")
        if depth is not None:
            values["max_unwrap_depth"] = _parse_int("SCHEMAPATH_MAX_UNWRAP_DEPTH", depth)
        level = os.getenv("SCHEMAPATH_LOG_LEVEL")
        if level is not None:
            values["log_level"] = level.strip().upper()
        rich_logging = os.getenv("SCHEMAPATH_RICH_LOGGING")
        if rich_logging is not None:
            values["rich_logging"] = _parse_bool("SCHEMAPATH_RICH_LOGGING", rich_logging)
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ValueError(f"invalid schemapath environment configuration: {exc}") from exc

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


SCHEMAPATH_CONFIG = SchemaPathConfig.from_env()

__all__ = ["SCHEMAPATH_CONFIG", "LogLevel", "SchemaPathConfig"]
