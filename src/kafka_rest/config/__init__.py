"""
kafka-rest config package public API.

File: src/kafka_rest/config/__init__.py

Purpose
- Export schema declaration, validation, resolution and loading entrypoints.

What should be included in this file
- Public schema types and the published simple-consumer schema.
- ``resolve_config`` / ``SimpleConsumerConfig`` and their error types.
- Property loaders and reference documentation helpers.

Functional requirements
- Support loading from ``.properties``/YAML/TOML + ``KAFKA_REST_`` env overrides.
- Fail fast with aggregated, structured validation errors.

Non-functional requirements
- Keep import-time surface small and deterministic.
"""

from kafka_rest.config.consumer import (
    ConsumerConfigError,
    ConsumerSettings,
    ConsumerSettingsFactory,
    LegacyConsumerConfig,
)
from kafka_rest.config.definition import (
    REQUIRED,
    ConfigDef,
    ConfigDefinitionError,
    ConfigKey,
    ConfigType,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    ConfigValueError,
    Importance,
    Password,
    Range,
    ValidString,
    compose,
    make_key,
)
from kafka_rest.config.docs import to_records, to_rows, to_rst
from kafka_rest.config.loader import (
    ENV_PREFIX,
    ConfigLoadError,
    env_properties,
    load_properties,
    read_properties_file,
)
from kafka_rest.config.rest import rest_config_def
from kafka_rest.config.schema import DEFAULT_CONFIG_DEF, simple_consumer_config_def
from kafka_rest.config.simple_consumer import (
    CONSUMER_PROPERTY_OVERRIDES,
    SimpleConsumerConfig,
    resolve_config,
)

__all__ = [
    "CONSUMER_PROPERTY_OVERRIDES",
    "DEFAULT_CONFIG_DEF",
    "ENV_PREFIX",
    "REQUIRED",
    "ConfigDef",
    "ConfigDefinitionError",
    "ConfigKey",
    "ConfigLoadError",
    "ConfigType",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "ConfigValueError",
    "ConsumerConfigError",
    "ConsumerSettings",
    "ConsumerSettingsFactory",
    "Importance",
    "LegacyConsumerConfig",
    "Password",
    "Range",
    "SimpleConsumerConfig",
    "ValidString",
    "compose",
    "env_properties",
    "load_properties",
    "make_key",
    "read_properties_file",
    "resolve_config",
    "rest_config_def",
    "simple_consumer_config_def",
    "to_records",
    "to_rows",
    "to_rst",
]
