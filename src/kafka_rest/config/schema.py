"""
kafka-rest — simple-consumer configuration schema.

File: src/kafka_rest/config/schema.py

Purpose
- Declare the keys the simple-consumer REST proxy adds on top of the REST base.

What should be included in this file
- Key name constants and their defaults.
- The composed schema builder and the schema published at import time.

Functional requirements
- Defaults and validators match the documented conventions: ``-1`` for
  unbounded threads and disabled fetch accumulation, ``0`` for an unbounded
  pool and no pool wait timeout.

Non-functional requirements
- Sentinel conventions are documented, not enforced; only
  ``fetch.min.bytes`` and ``client.zk.session.timeout.ms`` carry validators.
"""

from __future__ import annotations

from typing import Final

from kafka_rest.config.definition import (
    ConfigDef,
    ConfigKey,
    ConfigType,
    Importance,
    Range,
    compose,
    make_key,
)
from kafka_rest.config.rest import rest_config_def

ID_CONFIG: Final[str] = "id"
CONSUMER_MAX_THREADS_CONFIG: Final[str] = "consumer.threads"
ZOOKEEPER_CONNECT_CONFIG: Final[str] = "zookeeper.connect"
SCHEMA_REGISTRY_URL_CONFIG: Final[str] = "schema.registry.url"
PROXY_FETCH_MIN_BYTES_CONFIG: Final[str] = "fetch.min.bytes"
CONSUMER_ITERATOR_TIMEOUT_MS_CONFIG: Final[str] = "consumer.iterator.timeout.ms"
CONSUMER_ITERATOR_BACKOFF_MS_CONFIG: Final[str] = "consumer.iterator.backoff.ms"
CONSUMER_REQUEST_TIMEOUT_MS_CONFIG: Final[str] = "consumer.request.timeout.ms"
CONSUMER_REQUEST_MAX_BYTES_CONFIG: Final[str] = "consumer.request.max.bytes"
CONSUMER_INSTANCE_TIMEOUT_MS_CONFIG: Final[str] = "consumer.instance.timeout.ms"
SIMPLE_CONSUMER_MAX_POOL_SIZE_CONFIG: Final[str] = "simpleconsumer.pool.size.max"
SIMPLE_CONSUMER_POOL_TIMEOUT_MS_CONFIG: Final[str] = "simpleconsumer.pool.timeout.ms"
CLIENT_ZK_SESSION_TIMEOUT_MS_CONFIG: Final[str] = "client.zk.session.timeout.ms"

ID_DEFAULT: Final[str] = ""
CONSUMER_MAX_THREADS_DEFAULT: Final[int] = 50
ZOOKEEPER_CONNECT_DEFAULT: Final[str] = ""
SCHEMA_REGISTRY_URL_DEFAULT: Final[str] = "http://localhost:8081"
PROXY_FETCH_MIN_BYTES_DEFAULT: Final[int] = -1
CONSUMER_ITERATOR_TIMEOUT_MS_DEFAULT: Final[int] = 1
CONSUMER_ITERATOR_BACKOFF_MS_DEFAULT: Final[int] = 50
CONSUMER_REQUEST_TIMEOUT_MS_DEFAULT: Final[int] = 1000
CONSUMER_REQUEST_MAX_BYTES_DEFAULT: Final[int] = 64 * 1024 * 1024
CONSUMER_INSTANCE_TIMEOUT_MS_DEFAULT: Final[int] = 300000
SIMPLE_CONSUMER_MAX_POOL_SIZE_DEFAULT: Final[int] = 25
SIMPLE_CONSUMER_POOL_TIMEOUT_MS_DEFAULT: Final[int] = 1000
CLIENT_ZK_SESSION_TIMEOUT_MS_DEFAULT: Final[int] = 30000

# Shared with per-consumer-instance overrides of the same key.
PROXY_FETCH_MIN_BYTES_MAX: Final[int] = 10_000_000
PROXY_FETCH_MIN_BYTES_VALIDATOR: Final[Range] = Range.between(-1, PROXY_FETCH_MIN_BYTES_MAX)

_SIMPLE_CONSUMER_KEYS: Final[tuple[ConfigKey, ...]] = (
    make_key(
        ID_CONFIG,
        ConfigType.STRING,
        ID_DEFAULT,
        Importance.HIGH,
        "Unique ID for this REST server instance. This is used in generating unique IDs "
        "for consumers that do not specify their ID. The ID is empty by default, which "
        "makes a single server setup easier to get up and running, but is not safe for "
        "multi-server deployments where automatic consumer IDs are used.",
    ),
    make_key(
        CONSUMER_MAX_THREADS_CONFIG,
        ConfigType.INT,
        CONSUMER_MAX_THREADS_DEFAULT,
        Importance.MEDIUM,
        "The maximum number of threads to run consumer requests on. The value of -1 "
        "denotes unbounded thread creation",
    ),
    make_key(
        ZOOKEEPER_CONNECT_CONFIG,
        ConfigType.STRING,
        ZOOKEEPER_CONNECT_DEFAULT,
        Importance.HIGH,
        "NOTE: Only required when using v1 Consumer API's. Specifies the ZooKeeper "
        "connection string in the form hostname:port where host and port are the host "
        "and port of a ZooKeeper server. To allow connecting through other ZooKeeper "
        "nodes when that ZooKeeper machine is down you can also specify multiple hosts "
        "in the form hostname1:port1,hostname2:port2,hostname3:port3.\n\n"
        "The server may also have a ZooKeeper chroot path as part of its ZooKeeper "
        "connection string which puts its data under some path in the global ZooKeeper "
        "namespace. If so the consumer should use the same chroot path in its "
        "connection string. For example to give a chroot path of /chroot/path you would "
        "give the connection string as "
        "hostname1:port1,hostname2:port2,hostname3:port3/chroot/path.",
    ),
    make_key(
        SCHEMA_REGISTRY_URL_CONFIG,
        ConfigType.STRING,
        SCHEMA_REGISTRY_URL_DEFAULT,
        Importance.HIGH,
        "The base URL for the schema registry that should be used by the Avro serializer.",
    ),
    make_key(
        PROXY_FETCH_MIN_BYTES_CONFIG,
        ConfigType.INT,
        PROXY_FETCH_MIN_BYTES_DEFAULT,
        Importance.LOW,
        "Minimum bytes of records for the proxy to accumulate before returning a "
        "response to a consumer request. The special sentinel value of -1 disables this "
        "functionality.",
        validator=PROXY_FETCH_MIN_BYTES_VALIDATOR,
    ),
    make_key(
        CONSUMER_ITERATOR_TIMEOUT_MS_CONFIG,
        ConfigType.INT,
        CONSUMER_ITERATOR_TIMEOUT_MS_DEFAULT,
        Importance.LOW,
        "Timeout for blocking consumer iterator operations. This should be set to a "
        "small enough value that it is possible to effectively peek() on the iterator.",
    ),
    make_key(
        CONSUMER_ITERATOR_BACKOFF_MS_CONFIG,
        ConfigType.INT,
        CONSUMER_ITERATOR_BACKOFF_MS_DEFAULT,
        Importance.LOW,
        "Amount of time to backoff when an iterator runs out of data. If a consumer has "
        "a dedicated worker thread, this is effectively the maximum error for the entire "
        "request timeout. It should be small enough to closely target the timeout, but "
        "large enough to avoid busy waiting.",
    ),
    make_key(
        CONSUMER_REQUEST_TIMEOUT_MS_CONFIG,
        ConfigType.INT,
        CONSUMER_REQUEST_TIMEOUT_MS_DEFAULT,
        Importance.MEDIUM,
        "The maximum total time to wait for messages for a request if the maximum number "
        "of messages has not yet been reached.",
    ),
    make_key(
        CONSUMER_REQUEST_MAX_BYTES_CONFIG,
        ConfigType.LONG,
        CONSUMER_REQUEST_MAX_BYTES_DEFAULT,
        Importance.MEDIUM,
        "Maximum number of bytes in unencoded message keys and values returned by a "
        "single request. This can be used by administrators to limit the memory used by "
        "a single consumer and to control the memory usage required to decode responses "
        "on clients that cannot perform a streaming decode. Note that the actual payload "
        "will be larger due to overhead from base64 encoding the response data and from "
        "JSON encoding the entire response.",
    ),
    make_key(
        CONSUMER_INSTANCE_TIMEOUT_MS_CONFIG,
        ConfigType.INT,
        CONSUMER_INSTANCE_TIMEOUT_MS_DEFAULT,
        Importance.LOW,
        "Amount of idle time before a consumer instance is automatically destroyed.",
    ),
    make_key(
        SIMPLE_CONSUMER_MAX_POOL_SIZE_CONFIG,
        ConfigType.INT,
        SIMPLE_CONSUMER_MAX_POOL_SIZE_DEFAULT,
        Importance.MEDIUM,
        "Maximum number of SimpleConsumers that can be instantiated per broker. If 0, "
        "then the pool size is not limited.",
    ),
    make_key(
        SIMPLE_CONSUMER_POOL_TIMEOUT_MS_CONFIG,
        ConfigType.INT,
        SIMPLE_CONSUMER_POOL_TIMEOUT_MS_DEFAULT,
        Importance.LOW,
        "Amount of time to wait for an available SimpleConsumer from the pool before "
        "failing. Use 0 for no timeout",
    ),
    make_key(
        CLIENT_ZK_SESSION_TIMEOUT_MS_CONFIG,
        ConfigType.INT,
        CLIENT_ZK_SESSION_TIMEOUT_MS_DEFAULT,
        Importance.LOW,
        "Zookeeper session timeout",
        validator=Range.at_least(0),
    ),
)


def simple_consumer_keys() -> tuple[ConfigKey, ...]:
    """Return the keys this service declares, in declaration order."""

    return _SIMPLE_CONSUMER_KEYS


def simple_consumer_config_def(base: ConfigDef | None = None) -> ConfigDef:
    """Compose ``base`` (the REST schema by default) with the simple-consumer keys."""

    return compose(rest_config_def() if base is None else base, _SIMPLE_CONSUMER_KEYS)


DEFAULT_CONFIG_DEF: Final[ConfigDef] = simple_consumer_config_def()


__all__ = [
    "CLIENT_ZK_SESSION_TIMEOUT_MS_CONFIG",
    "CLIENT_ZK_SESSION_TIMEOUT_MS_DEFAULT",
    "CONSUMER_INSTANCE_TIMEOUT_MS_CONFIG",
    "CONSUMER_INSTANCE_TIMEOUT_MS_DEFAULT",
    "CONSUMER_ITERATOR_BACKOFF_MS_CONFIG",
    "CONSUMER_ITERATOR_BACKOFF_MS_DEFAULT",
    "CONSUMER_ITERATOR_TIMEOUT_MS_CONFIG",
    "CONSUMER_ITERATOR_TIMEOUT_MS_DEFAULT",
    "CONSUMER_MAX_THREADS_CONFIG",
    "CONSUMER_MAX_THREADS_DEFAULT",
    "CONSUMER_REQUEST_MAX_BYTES_CONFIG",
    "CONSUMER_REQUEST_MAX_BYTES_DEFAULT",
    "CONSUMER_REQUEST_TIMEOUT_MS_CONFIG",
    "CONSUMER_REQUEST_TIMEOUT_MS_DEFAULT",
    "DEFAULT_CONFIG_DEF",
    "ID_CONFIG",
    "ID_DEFAULT",
    "PROXY_FETCH_MIN_BYTES_CONFIG",
    "PROXY_FETCH_MIN_BYTES_DEFAULT",
    "PROXY_FETCH_MIN_BYTES_MAX",
    "PROXY_FETCH_MIN_BYTES_VALIDATOR",
    "SCHEMA_REGISTRY_URL_CONFIG",
    "SCHEMA_REGISTRY_URL_DEFAULT",
    "SIMPLE_CONSUMER_MAX_POOL_SIZE_CONFIG",
    "SIMPLE_CONSUMER_MAX_POOL_SIZE_DEFAULT",
    "SIMPLE_CONSUMER_POOL_TIMEOUT_MS_CONFIG",
    "SIMPLE_CONSUMER_POOL_TIMEOUT_MS_DEFAULT",
    "ZOOKEEPER_CONNECT_CONFIG",
    "ZOOKEEPER_CONNECT_DEFAULT",
    "simple_consumer_config_def",
    "simple_consumer_keys",
]
