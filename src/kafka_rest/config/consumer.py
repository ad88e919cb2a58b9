"""
kafka-rest — embedded legacy consumer configuration.

File: src/kafka_rest/config/consumer.py

Purpose
- Provide the fetch/socket settings of the old ZooKeeper-based high level
  consumer so the proxy can reuse its defaults.

What should be included in this file
- The ``ConsumerSettings`` capability the proxy reads from.
- ``LegacyConsumerConfig``: required keys, defaults and consistency checks of
  the legacy consumer, applied to a flat property map.

Functional requirements
- ``zookeeper.connect`` and ``group.id`` must be present (empty is accepted).
- ``socket.timeout.ms`` must not be smaller than ``fetch.wait.max.ms``.

Non-functional requirements
- Immutable after construction; raises ``ConsumerConfigError`` on bad input.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Final, Protocol

from kafka_rest.config.definition import INT_MAX, INT_MIN

ZOOKEEPER_CONNECT: Final[str] = "zookeeper.connect"
GROUP_ID: Final[str] = "group.id"
CLIENT_ID: Final[str] = "client.id"
SOCKET_TIMEOUT_MS: Final[str] = "socket.timeout.ms"
SOCKET_RECEIVE_BUFFER_BYTES: Final[str] = "socket.receive.buffer.bytes"
FETCH_MESSAGE_MAX_BYTES: Final[str] = "fetch.message.max.bytes"
FETCH_WAIT_MAX_MS: Final[str] = "fetch.wait.max.ms"
FETCH_MIN_BYTES: Final[str] = "fetch.min.bytes"
AUTO_OFFSET_RESET: Final[str] = "auto.offset.reset"

DEFAULT_SOCKET_TIMEOUT_MS: Final[int] = 30 * 1000
DEFAULT_SOCKET_RECEIVE_BUFFER_BYTES: Final[int] = 64 * 1024
DEFAULT_FETCH_MESSAGE_MAX_BYTES: Final[int] = 1024 * 1024
DEFAULT_FETCH_WAIT_MAX_MS: Final[int] = 100
DEFAULT_FETCH_MIN_BYTES: Final[int] = 1
DEFAULT_AUTO_OFFSET_RESET: Final[str] = "largest"
AUTO_OFFSET_RESET_VALUES: Final[tuple[str, ...]] = ("smallest", "largest")

_LEGAL_ID_CHARS = re.compile(r"^[a-zA-Z0-9._-]*$")


class ConsumerConfigError(ValueError):
    """Raised when the legacy consumer rejects its property map."""


class ConsumerSettings(Protocol):
    """Read-only fetch and socket settings consumed by the proxy."""

    @property
    def socket_timeout_ms(self) -> int: ...

    @property
    def socket_receive_buffer_bytes(self) -> int: ...

    @property
    def fetch_message_max_bytes(self) -> int: ...

    @property
    def fetch_wait_max_ms(self) -> int: ...

    @property
    def fetch_min_bytes(self) -> int: ...


ConsumerSettingsFactory = Callable[[Mapping[str, str]], ConsumerSettings]


class LegacyConsumerConfig:
    """Settings of the legacy high level consumer, built from flat properties."""

    __slots__ = (
        "_auto_offset_reset",
        "_client_id",
        "_fetch_message_max_bytes",
        "_fetch_min_bytes",
        "_fetch_wait_max_ms",
        "_group_id",
        "_socket_receive_buffer_bytes",
        "_socket_timeout_ms",
        "_zookeeper_connect",
    )

    def __init__(self, props: Mapping[str, str]) -> None:
        self._zookeeper_connect = _require(props, ZOOKEEPER_CONNECT)
        self._group_id = _require(props, GROUP_ID)
        self._client_id = _get_str(props, CLIENT_ID, self._group_id)
        self._socket_timeout_ms = _get_int(props, SOCKET_TIMEOUT_MS, DEFAULT_SOCKET_TIMEOUT_MS)
        self._socket_receive_buffer_bytes = _get_int(
            props, SOCKET_RECEIVE_BUFFER_BYTES, DEFAULT_SOCKET_RECEIVE_BUFFER_BYTES
        )
        self._fetch_message_max_bytes = _get_int(
            props, FETCH_MESSAGE_MAX_BYTES, DEFAULT_FETCH_MESSAGE_MAX_BYTES
        )
        self._fetch_wait_max_ms = _get_int(props, FETCH_WAIT_MAX_MS, DEFAULT_FETCH_WAIT_MAX_MS)
        self._fetch_min_bytes = _get_int(props, FETCH_MIN_BYTES, DEFAULT_FETCH_MIN_BYTES)
        self._auto_offset_reset = _get_str(props, AUTO_OFFSET_RESET, DEFAULT_AUTO_OFFSET_RESET)

        if self._fetch_wait_max_ms > self._socket_timeout_ms:
            raise ConsumerConfigError(
                f"{SOCKET_TIMEOUT_MS} should always be at least {FETCH_WAIT_MAX_MS} "
                "to prevent unnecessary socket timeouts"
            )
        _validate_chars(GROUP_ID, self._group_id)
        _validate_chars(CLIENT_ID, self._client_id)
        if self._auto_offset_reset not in AUTO_OFFSET_RESET_VALUES:
            raise ConsumerConfigError(
                f"wrong value {self._auto_offset_reset!r} of {AUTO_OFFSET_RESET}; "
                f"valid values are {' and '.join(AUTO_OFFSET_RESET_VALUES)}"
            )

    @property
    def zookeeper_connect(self) -> str:
        return self._zookeeper_connect

    @property
    def group_id(self) -> str:
        return self._group_id

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def auto_offset_reset(self) -> str:
        return self._auto_offset_reset

    @property
    def socket_timeout_ms(self) -> int:
        return self._socket_timeout_ms

    @property
    def socket_receive_buffer_bytes(self) -> int:
        return self._socket_receive_buffer_bytes

    @property
    def fetch_message_max_bytes(self) -> int:
        return self._fetch_message_max_bytes

    @property
    def fetch_wait_max_ms(self) -> int:
        return self._fetch_wait_max_ms

    @property
    def fetch_min_bytes(self) -> int:
        return self._fetch_min_bytes


def _require(props: Mapping[str, str], name: str) -> str:
    if name not in props:
        raise ConsumerConfigError(f"missing required property {name!r}")
    return str(props[name])


def _get_str(props: Mapping[str, str], name: str, default: str) -> str:
    if name not in props:
        return default
    return str(props[name])


def _get_int(props: Mapping[str, str], name: str, default: int) -> int:
    if name not in props:
        return default
    raw = str(props[name]).strip()
    try:
        value = int(raw, 10)
    except ValueError as exc:
        raise ConsumerConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < INT_MIN or value > INT_MAX:
        raise ConsumerConfigError(f"{name} must be a 32-bit integer, got {raw!r}")
    return value


def _validate_chars(name: str, value: str) -> None:
    if not _LEGAL_ID_CHARS.fullmatch(value):
        raise ConsumerConfigError(
            f"{name} {value!r} is illegal, contains a character other than ASCII "
            "alphanumerics, '.', '_' and '-'"
        )


__all__ = [
    "AUTO_OFFSET_RESET",
    "AUTO_OFFSET_RESET_VALUES",
    "CLIENT_ID",
    "DEFAULT_AUTO_OFFSET_RESET",
    "DEFAULT_FETCH_MESSAGE_MAX_BYTES",
    "DEFAULT_FETCH_MIN_BYTES",
    "DEFAULT_FETCH_WAIT_MAX_MS",
    "DEFAULT_SOCKET_RECEIVE_BUFFER_BYTES",
    "DEFAULT_SOCKET_TIMEOUT_MS",
    "FETCH_MESSAGE_MAX_BYTES",
    "FETCH_MIN_BYTES",
    "FETCH_WAIT_MAX_MS",
    "GROUP_ID",
    "SOCKET_RECEIVE_BUFFER_BYTES",
    "SOCKET_TIMEOUT_MS",
    "ZOOKEEPER_CONNECT",
    "ConsumerConfigError",
    "ConsumerSettings",
    "ConsumerSettingsFactory",
    "LegacyConsumerConfig",
]
