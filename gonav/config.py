"""Environment-driven settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigError
from .interfaces import DEFAULT_LOOKAHEAD


@dataclass(frozen=True)
class GonavConfig:
    gopls_path: str = "gopls"
    gopls_timeout_seconds: float = 30.0
    lookahead: int = DEFAULT_LOOKAHEAD
    log_level: str = "WARNING"


def resolve_config() -> GonavConfig:
    gopls_path = os.getenv("GONAV_GOPLS_PATH") or "gopls"
    timeout_seconds = _parse_number("GONAV_GOPLS_TIMEOUT_SECONDS", "30", float)
    if timeout_seconds <= 0:
        raise ConfigError("GONAV_GOPLS_TIMEOUT_SECONDS must be positive")
    lookahead = _parse_number("GONAV_LOOKAHEAD", str(DEFAULT_LOOKAHEAD), int)
    if lookahead < 1:
        raise ConfigError("GONAV_LOOKAHEAD must be at least 1")
    log_level = (os.getenv("GONAV_LOG_LEVEL") or "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"GONAV_LOG_LEVEL is not a logging level: {log_level!r}")

    return GonavConfig(
        gopls_path=gopls_path,
        gopls_timeout_seconds=timeout_seconds,
        lookahead=lookahead,
        log_level=log_level,
    )


def configure_logging(config: GonavConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
