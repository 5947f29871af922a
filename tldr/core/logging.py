from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

# Attributes every LogRecord carries; anything else was passed via `extra`.
_STANDARD_LOG_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "level_color", "name_color", "reset", "color_message"}

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER_PREFIX = "tldr"

# Third-party loggers we talk to directly; everything else is clamped to WARNING.
_DEFAULT_THIRD_PARTY_LEVELS: dict[str, str] = {
    "uvicorn": "WARNING",
    "uvicorn.error": "INFO",
    "uvicorn.access": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "openai": "WARNING",
}

_ALLOW_BELOW_WARNING: frozenset[str] = frozenset({"uvicorn.error"})


def _is_app_logger(name: str) -> bool:
    return name in ("__main__", APP_LOGGER_PREFIX) or name.startswith(f"{APP_LOGGER_PREFIX}.")


def _matches(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


class ThirdPartyFilter(logging.Filter):
    """Drop third-party records below their configured threshold."""

    def __init__(self, levels: Mapping[str, int]) -> None:
        super().__init__()
        # Longest prefix first so the most specific match wins.
        self.levels = sorted(levels.items(), key=lambda item: len(item[0]), reverse=True)

    def threshold_for(self, name: str) -> int:
        for prefix, level in self.levels:
            if _matches(name, prefix):
                return level
        return logging.WARNING

    def filter(self, record: logging.LogRecord) -> bool:
        if _is_app_logger(record.name):
            return True
        return record.levelno >= self.threshold_for(record.name)


class SmartContextFormatter(logging.Formatter):
    """Formatter that appends all extra fields as key=value context."""

    def format(self, record: logging.LogRecord) -> str:
        base_message = super().format(record)
        extra_fields = {key: value for key, value in record.__dict__.items() if key not in _STANDARD_LOG_RECORD_ATTRS}
        if not extra_fields:
            return base_message

        context_str = " ".join(f"{key}={value}" for key, value in extra_fields.items())
        return f"{base_message} [{context_str}]"


class ColorFormatter(SmartContextFormatter):
    """Colorize level and message by severity, logger name in blue."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",  # cyan
        "INFO": "\x1b[32m",  # green
        "WARNING": "\x1b[33m",  # yellow
        "ERROR": "\x1b[31m",  # red
        "CRITICAL": "\x1b[1;31m",  # bold red
    }
    _NAME_COLOR = "\x1b[34m"  # blue

    def format(self, record: logging.LogRecord) -> str:
        record.level_color = self._LEVEL_COLORS.get(record.levelname, "")  # type: ignore[attr-defined]
        record.name_color = self._NAME_COLOR  # type: ignore[attr-defined]
        record.reset = self._RESET  # type: ignore[attr-defined]
        return super().format(record)


_COLOR_FORMAT = (
    "%(level_color)s%(asctime)s | %(levelname)s%(reset)s | "
    "%(name_color)s%(name)s%(reset)s | %(filename)s:%(lineno)d | "
    "%(level_color)s%(message)s%(reset)s"
)
_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _level_from_name(level_name: str, fallback: int) -> int:
    value = getattr(logging, level_name.upper().strip(), fallback)
    return value if isinstance(value, int) else fallback


def _resolve_third_party_levels(root_level: int, overrides: Mapping[str, str] | None) -> dict[str, int]:
    merged = {**_DEFAULT_THIRD_PARTY_LEVELS, **(overrides or {})}
    levels: dict[str, int] = {}
    for name, level_name in merged.items():
        level = _level_from_name(level_name, root_level)
        if name not in _ALLOW_BELOW_WARNING:
            level = max(level, logging.WARNING)
        levels[name] = level
    return levels


def setup_logging(
    *,
    log_level: str | None = None,
    third_party_levels: Mapping[str, str] | None = None,
) -> None:
    """
    Configure global logging for the application.

    Environment variables:
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    - LOG_COLOR: enable ANSI colors (default: auto when TTY)
    """
    root_level = _level_from_name(log_level or os.getenv("LOG_LEVEL", "INFO"), logging.INFO)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    logging.captureWarnings(True)

    handler = logging.StreamHandler(sys.stdout)
    formatter: logging.Formatter
    if _env_flag("LOG_COLOR", sys.stdout.isatty()):
        formatter = ColorFormatter(_COLOR_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    else:
        formatter = SmartContextFormatter(_PLAIN_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    handler.setFormatter(formatter)

    resolved = _resolve_third_party_levels(root_level, third_party_levels)
    handler.addFilter(ThirdPartyFilter(resolved))
    root_logger.addHandler(handler)
    root_logger.setLevel(root_level)

    logging.getLogger(APP_LOGGER_PREFIX).setLevel(root_level)
    for name, level in resolved.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": logging.getLevelName(root_level)},
    )
