"""Public observability primitives: structured logging."""

from kafka_rest.observability.logging import (
    LoggingConfig,
    LogRedactor,
    StructuredLoggingHandle,
    default_log_redactor,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LogRedactor",
    "LoggingConfig",
    "StructuredLoggingHandle",
    "default_log_redactor",
    "setup_logging",
    "shutdown_logging",
]
