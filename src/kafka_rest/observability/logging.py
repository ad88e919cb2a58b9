"""Structured logging setup with JSON-lines output and redaction support."""

from __future__ import annotations

import json
import logging
import math
import re
import sys
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import IO, Final, Literal

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
LogRedactor = Callable[[JSONValue], JSONValue]

_REDACTED_VALUE: Final[str] = "***REDACTED***"
_DEFAULT_LOGGER_NAME: Final[str] = "kafka_rest"
_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s %(message)s"

_SENSITIVE_KEY_TERMS: Final[tuple[str, ...]] = (
    "password",
    "secret",
    "token",
    "jaas.config",
    "basic.auth.user.info",
)

_SENSITIVE_ASSIGNMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)\b([\w.]*(?:password|secret|token|user\.info))\b\s*([:=])\s*([^\s,;]+)"
)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_ACTIVE_HANDLE_LOCK = threading.Lock()
_ACTIVE_HANDLE: StructuredLoggingHandle | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for structured logging."""

    logger_name: str = _DEFAULT_LOGGER_NAME
    level: int | str = "INFO"
    log_format: Literal["json", "text"] = "json"
    stream: IO[str] | None = None
    log_file: Path | str | None = None
    redactor: LogRedactor | None = None


class _JsonLineFormatter(logging.Formatter):
    """Formatter that emits canonical JSON objects per log line."""

    def __init__(self, *, redactor: LogRedactor) -> None:
        super().__init__()
        self._redactor = redactor

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": _coerce_log_message(
                self._redactor(_normalize_json_value(record.getMessage()))
            ),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = self._redactor(_normalize_json_value(extras))

        if record.exc_info is not None:
            event["exception"] = _coerce_log_message(
                self._redactor(_normalize_json_value(self.formatException(record.exc_info)))
            )

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class StructuredLoggingHandle:
    """Runtime handle for an active logging setup."""

    def __init__(
        self,
        *,
        logger: logging.Logger,
        handlers: tuple[logging.Handler, ...],
        previous_level: int = logging.NOTSET,
        previous_propagate: bool = True,
    ) -> None:
        self.logger = logger
        self._handlers = handlers
        self._previous_level = previous_level
        self._previous_propagate = previous_propagate
        self._shutdown_lock = threading.Lock()
        self._is_shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def flush(self) -> None:
        for handler in self._handlers:
            handler.flush()

    def shutdown(self) -> None:
        with self._shutdown_lock:
            if self._is_shutdown:
                return
            for handler in self._handlers:
                handler.flush()
                self.logger.removeHandler(handler)
                handler.close()
            self.logger.setLevel(self._previous_level)
            self.logger.propagate = self._previous_propagate
            self._is_shutdown = True


def setup_logging(config: LoggingConfig | None = None) -> StructuredLoggingHandle:
    """Attach JSON (or text) handlers to the package logger and return a handle."""

    cfg = config or LoggingConfig()
    shutdown_logging()

    level = _parse_log_level(cfg.level)
    redactor = cfg.redactor or default_log_redactor
    formatter: logging.Formatter
    if cfg.log_format == "json":
        formatter = _JsonLineFormatter(redactor=redactor)
    elif cfg.log_format == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        raise ValueError(f"unsupported log format {cfg.log_format!r}")

    handlers: list[logging.Handler] = [
        logging.StreamHandler(cfg.stream if cfg.stream is not None else sys.stderr)
    ]
    if cfg.log_file is not None:
        log_path = Path(cfg.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logger = logging.getLogger(cfg.logger_name)
    previous_level = logger.level
    previous_propagate = logger.propagate
    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    handle = StructuredLoggingHandle(
        logger=logger,
        handlers=tuple(handlers),
        previous_level=previous_level,
        previous_propagate=previous_propagate,
    )
    with _ACTIVE_HANDLE_LOCK:
        global _ACTIVE_HANDLE
        _ACTIVE_HANDLE = handle
    return handle


def shutdown_logging(handle: StructuredLoggingHandle | None = None) -> None:
    """Detach and close handlers of ``handle`` (the active one by default)."""

    with _ACTIVE_HANDLE_LOCK:
        global _ACTIVE_HANDLE
        resolved = handle if handle is not None else _ACTIVE_HANDLE
        if resolved is None:
            return
        if _ACTIVE_HANDLE is resolved:
            _ACTIVE_HANDLE = None
    resolved.shutdown()


def default_log_redactor(value: JSONValue) -> JSONValue:
    """Deep redaction of password/secret keys and ``key=value`` secrets in text."""
    return _redact_value(value, key_context=None)


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_log_message(value: JSONValue) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = _normalize_json_value(value)
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    # Config values reach log fields as parsed types: tuples for lists, Password
    # objects that render hidden, MappingProxyType views of property maps.
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    return str(value)


def _redact_value(value: JSONValue, *, key_context: str | None) -> JSONValue:
    if key_context is not None and _requires_redaction_for_key(key_context):
        return _REDACTED_VALUE

    if isinstance(value, str):
        return _SENSITIVE_ASSIGNMENT_PATTERN.sub(
            lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", value
        )

    if isinstance(value, list):
        return [_redact_value(item, key_context=None) for item in value]

    if isinstance(value, dict):
        return {key: _redact_value(item, key_context=key) for key, item in value.items()}

    return value


def _requires_redaction_for_key(key: str) -> bool:
    key_lower = key.lower()
    return any(term in key_lower for term in _SENSITIVE_KEY_TERMS)


__all__ = [
    "JSONScalar",
    "JSONValue",
    "LogRedactor",
    "LoggingConfig",
    "StructuredLoggingHandle",
    "default_log_redactor",
    "setup_logging",
    "shutdown_logging",
]
