"""
kafka-rest — resolved simple-consumer configuration.

File: src/kafka_rest/config/simple_consumer.py

Purpose
- Validate proxy properties once at startup and expose typed accessors for
  both the proxy settings and the settings derived from the embedded legacy
  consumer configuration.

What should be included in this file
- ``SimpleConsumerConfig`` and the ``resolve_config`` entrypoint.
- The override view handed to the legacy consumer configuration.

Functional requirements
- All-or-nothing: validation and consumer-config failures abort construction.
- The caller's properties are retained verbatim and never mutated.

Non-functional requirements
- Immutable after construction; safe to read from many threads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

from kafka_rest.config.consumer import (
    GROUP_ID,
    ZOOKEEPER_CONNECT,
    ConsumerSettings,
    ConsumerSettingsFactory,
    LegacyConsumerConfig,
)
from kafka_rest.config.definition import ConfigDef, Password, render_value
from kafka_rest.config.schema import (
    CLIENT_ZK_SESSION_TIMEOUT_MS_CONFIG,
    CONSUMER_INSTANCE_TIMEOUT_MS_CONFIG,
    CONSUMER_ITERATOR_BACKOFF_MS_CONFIG,
    CONSUMER_ITERATOR_TIMEOUT_MS_CONFIG,
    CONSUMER_MAX_THREADS_CONFIG,
    CONSUMER_REQUEST_MAX_BYTES_CONFIG,
    CONSUMER_REQUEST_TIMEOUT_MS_CONFIG,
    DEFAULT_CONFIG_DEF,
    ID_CONFIG,
    PROXY_FETCH_MIN_BYTES_CONFIG,
    SCHEMA_REGISTRY_URL_CONFIG,
    SIMPLE_CONSUMER_MAX_POOL_SIZE_CONFIG,
    SIMPLE_CONSUMER_POOL_TIMEOUT_MS_CONFIG,
    ZOOKEEPER_CONNECT_CONFIG,
)
from kafka_rest.utils.clock import SystemTime, Time

logger = logging.getLogger(__name__)

# The legacy consumer requires these keys, but a simple consumer has no use
# for them: they are blanked instead of forwarded.
CONSUMER_PROPERTY_OVERRIDES: Final[Mapping[str, str]] = MappingProxyType(
    {
        ZOOKEEPER_CONNECT: "",
        GROUP_ID: "",
    }
)

DERIVED_SETTINGS: Final[tuple[str, ...]] = (
    "socket_timeout_ms",
    "socket_receive_buffer_bytes",
    "fetch_message_max_bytes",
    "fetch_wait_max_ms",
    "fetch_min_bytes",
)


def consumer_properties(props: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``props`` with the legacy-consumer overrides applied."""

    overridden = dict(props)
    overridden.update(CONSUMER_PROPERTY_OVERRIDES)
    return overridden


class SimpleConsumerConfig:
    """Validated, defaulted configuration of a simple-consumer REST proxy."""

    __slots__ = ("_config_def", "_consumer_settings", "_original", "_time", "_values")

    def __init__(
        self,
        props: Mapping[str, str],
        time: Time,
        *,
        config_def: ConfigDef = DEFAULT_CONFIG_DEF,
        consumer_settings_factory: ConsumerSettingsFactory = LegacyConsumerConfig,
    ) -> None:
        values = config_def.parse(props)
        original = dict(props)
        consumer_settings = consumer_settings_factory(consumer_properties(original))

        _init = object.__setattr__
        _init(self, "_config_def", config_def)
        _init(self, "_values", values)
        _init(self, "_original", MappingProxyType(original))
        _init(self, "_time", time)
        _init(self, "_consumer_settings", consumer_settings)

        logger.info(
            "simple_consumer_config_resolved",
            extra={"keys": len(values), "supplied": len(original)},
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"SimpleConsumerConfig(id={self.id!r}, keys={len(self._values)})"

    # -- passthrough -----------------------------------------------------------------

    @property
    def time(self) -> Time:
        return self._time

    @property
    def original_properties(self) -> Mapping[str, str]:
        """Read-only view of the properties exactly as supplied."""

        return self._original

    @property
    def config_def(self) -> ConfigDef:
        return self._config_def

    # -- generic access --------------------------------------------------------------

    def values(self) -> Mapping[str, Any]:
        """Parsed value of every declared key."""

        return self._values

    def get(self, name: str) -> Any:
        if name not in self._values:
            raise KeyError(f"unknown configuration {name!r}")
        return self._values[name]

    def get_int(self, name: str) -> int:
        return self._typed(name, int)

    def get_long(self, name: str) -> int:
        return self._typed(name, int)

    def get_string(self, name: str) -> str:
        return self._typed(name, str)

    def get_boolean(self, name: str) -> bool:
        return self._typed(name, bool)

    def get_list(self, name: str) -> tuple[str, ...]:
        return self._typed(name, tuple)

    def get_password(self, name: str) -> Password:
        return self._typed(name, Password)

    def _typed(self, name: str, expected: type) -> Any:
        value = self.get(name)
        if expected is int and isinstance(value, bool):
            raise TypeError(f"configuration {name!r} is not a {expected.__name__}")
        if not isinstance(value, expected):
            raise TypeError(f"configuration {name!r} is not a {expected.__name__}")
        return value

    # -- proxy settings --------------------------------------------------------------

    @property
    def id(self) -> str:
        return self.get_string(ID_CONFIG)

    @property
    def consumer_max_threads(self) -> int:
        return self.get_int(CONSUMER_MAX_THREADS_CONFIG)

    @property
    def zookeeper_connect(self) -> str:
        return self.get_string(ZOOKEEPER_CONNECT_CONFIG)

    @property
    def schema_registry_url(self) -> str:
        return self.get_string(SCHEMA_REGISTRY_URL_CONFIG)

    @property
    def proxy_fetch_min_bytes(self) -> int:
        return self.get_int(PROXY_FETCH_MIN_BYTES_CONFIG)

    @property
    def consumer_iterator_timeout_ms(self) -> int:
        return self.get_int(CONSUMER_ITERATOR_TIMEOUT_MS_CONFIG)

    @property
    def consumer_iterator_backoff_ms(self) -> int:
        return self.get_int(CONSUMER_ITERATOR_BACKOFF_MS_CONFIG)

    @property
    def consumer_request_timeout_ms(self) -> int:
        return self.get_int(CONSUMER_REQUEST_TIMEOUT_MS_CONFIG)

    @property
    def consumer_request_max_bytes(self) -> int:
        return self.get_long(CONSUMER_REQUEST_MAX_BYTES_CONFIG)

    @property
    def consumer_instance_timeout_ms(self) -> int:
        return self.get_int(CONSUMER_INSTANCE_TIMEOUT_MS_CONFIG)

    @property
    def simple_consumer_max_pool_size(self) -> int:
        return self.get_int(SIMPLE_CONSUMER_MAX_POOL_SIZE_CONFIG)

    @property
    def simple_consumer_pool_timeout_ms(self) -> int:
        return self.get_int(SIMPLE_CONSUMER_POOL_TIMEOUT_MS_CONFIG)

    @property
    def client_zk_session_timeout_ms(self) -> int:
        return self.get_int(CLIENT_ZK_SESSION_TIMEOUT_MS_CONFIG)

    # -- derived from the legacy consumer configuration ---------------------------------

    @property
    def consumer_settings(self) -> ConsumerSettings:
        return self._consumer_settings

    @property
    def socket_timeout_ms(self) -> int:
        return self._consumer_settings.socket_timeout_ms

    @property
    def socket_receive_buffer_bytes(self) -> int:
        return self._consumer_settings.socket_receive_buffer_bytes

    @property
    def fetch_message_max_bytes(self) -> int:
        return self._consumer_settings.fetch_message_max_bytes

    @property
    def fetch_wait_max_ms(self) -> int:
        return self._consumer_settings.fetch_wait_max_ms

    @property
    def fetch_min_bytes(self) -> int:
        return self._consumer_settings.fetch_min_bytes

    # -- reporting -------------------------------------------------------------------

    def derived_settings(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in DERIVED_SETTINGS}

    def as_dict(self, *, redact: bool = True) -> dict[str, Any]:
        """Effective values and derived settings; passwords hidden unless ``redact=False``."""

        values: dict[str, Any] = {}
        for name in sorted(self._values):
            value = self._values[name]
            if isinstance(value, Password):
                values[name] = str(value) if redact else value.value
            elif isinstance(value, tuple):
                values[name] = list(value)
            else:
                values[name] = value
        return {"values": values, "derived": self.derived_settings()}

    def to_properties(self) -> dict[str, str]:
        """Effective values rendered back to property strings (passwords hidden)."""

        return {name: render_value(self._values[name]) for name in sorted(self._values)}


def resolve_config(
    props: Mapping[str, str],
    time: Time | None = None,
    *,
    config_def: ConfigDef = DEFAULT_CONFIG_DEF,
    consumer_settings_factory: ConsumerSettingsFactory = LegacyConsumerConfig,
) -> SimpleConsumerConfig:
    """Resolve ``props`` into a ``SimpleConsumerConfig``.

    Raises ``ConfigValidationError`` listing every invalid key, or the legacy
    consumer's ``ConsumerConfigError`` unchanged.
    """

    return SimpleConsumerConfig(
        props,
        SystemTime() if time is None else time,
        config_def=config_def,
        consumer_settings_factory=consumer_settings_factory,
    )


__all__ = [
    "CONSUMER_PROPERTY_OVERRIDES",
    "DERIVED_SETTINGS",
    "SimpleConsumerConfig",
    "consumer_properties",
    "resolve_config",
]
