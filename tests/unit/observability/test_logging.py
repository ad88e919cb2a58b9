"""
kafka-rest — unit tests for observability logging

File: tests/unit/observability/test_logging.py

Purpose
- Validate structured JSON logging with redaction and clean handler lifecycle.

What this test file should cover
- JSON line validity and redaction guarantees.
- Text format output.
- Handler detach and logger state restore on shutdown.

Functional requirements
- Offline operation.
"""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from kafka_rest.config.definition import Password
from kafka_rest.observability.logging import (
    LoggingConfig,
    default_log_redactor,
    setup_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _logger_name() -> str:
    return f"kafka_rest.tests.logging.{uuid4().hex}"


def test_json_lines_carry_extras_and_redact_secrets() -> None:
    stream = io.StringIO()
    name = _logger_name()
    setup_logging(LoggingConfig(logger_name=name, level="DEBUG", stream=stream))

    logging.getLogger(name).info(
        "loaded ssl.keystore.password=hunter2",
        extra={"keys": 3, "props": {"ssl.key.password": "s3cret", "id": "proxy-1"}},
    )
    shutdown_logging()

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["level"] == "INFO"
    assert event["logger"] == name
    assert event["timestamp"].endswith("Z")
    assert "hunter2" not in event["message"]
    assert event["fields"]["keys"] == 3
    assert event["fields"]["props"] == {"ssl.key.password": "***REDACTED***", "id": "proxy-1"}


def test_text_format_and_file_output(tmp_path: Path) -> None:
    stream = io.StringIO()
    name = _logger_name()
    log_file = tmp_path / "logs" / "kafka-rest.log"
    handle = setup_logging(
        LoggingConfig(logger_name=name, log_format="text", stream=stream, log_file=log_file)
    )

    logging.getLogger(name).warning("pool exhausted")
    shutdown_logging(handle)

    assert "WARNING" in stream.getvalue()
    assert "pool exhausted" in log_file.read_text(encoding="utf-8")


def test_level_filters_records() -> None:
    stream = io.StringIO()
    name = _logger_name()
    setup_logging(LoggingConfig(logger_name=name, level="WARNING", stream=stream))

    logging.getLogger(name).info("quiet")
    shutdown_logging()

    assert stream.getvalue() == ""


def test_shutdown_detaches_handlers_and_restores_propagation() -> None:
    name = _logger_name()
    logger = logging.getLogger(name)
    handle = setup_logging(LoggingConfig(logger_name=name, stream=io.StringIO()))

    assert logger.propagate is False

    shutdown_logging()
    shutdown_logging(handle)

    assert handle.is_shutdown
    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET


def test_invalid_settings_are_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported logging level"):
        setup_logging(LoggingConfig(logger_name=_logger_name(), level="LOUD"))
    with pytest.raises(ValueError, match="unsupported log format"):
        setup_logging(
            LoggingConfig(logger_name=_logger_name(), log_format="xml")  # type: ignore[arg-type]
        )


def test_default_redactor_walks_nested_values() -> None:
    redacted = default_log_redactor(
        {"outer": [{"token": "abc"}, "secret=xyz"], "safe": "value"}
    )

    assert redacted == {
        "outer": [{"token": "***REDACTED***"}, "secret=***REDACTED***"],
        "safe": "value",
    }


def test_config_values_in_fields_stay_hidden() -> None:
    stream = io.StringIO()
    name = _logger_name()
    setup_logging(LoggingConfig(logger_name=name, stream=stream))

    logging.getLogger(name).info(
        "config_dump",
        extra={
            "values": {
                "ssl.truststore.location": "/etc/ts.jks",
                "listeners": ("http://a:1", "http://b:2"),
                "sasl.jaas.config": "org.Login required;",
                "store": Password("hunter2"),
            }
        },
    )
    shutdown_logging()

    fields = json.loads(stream.getvalue())["fields"]["values"]
    assert fields["ssl.truststore.location"] == "/etc/ts.jks"
    assert fields["listeners"] == ["http://a:1", "http://b:2"]
    assert fields["sasl.jaas.config"] == "***REDACTED***"
    assert fields["store"] == "[hidden]"
