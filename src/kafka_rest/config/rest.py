"""Base schema shared by every REST service: listeners, CORS, metrics, TLS."""

from __future__ import annotations

from typing import Final

from kafka_rest.config.definition import (
    ConfigDef,
    ConfigType,
    Importance,
    Range,
    ValidString,
    make_key,
)

DEBUG_CONFIG: Final[str] = "debug"
PORT_CONFIG: Final[str] = "port"
LISTENERS_CONFIG: Final[str] = "listeners"
RESPONSE_MEDIATYPE_PREFERRED_CONFIG: Final[str] = "response.mediatype.preferred"
RESPONSE_MEDIATYPE_DEFAULT_CONFIG: Final[str] = "response.mediatype.default"
ACCESS_CONTROL_ALLOW_ORIGIN_CONFIG: Final[str] = "access.control.allow.origin"
ACCESS_CONTROL_ALLOW_METHODS_CONFIG: Final[str] = "access.control.allow.methods"
REQUEST_LOGGER_NAME_CONFIG: Final[str] = "request.logger.name"
METRICS_JMX_PREFIX_CONFIG: Final[str] = "metrics.jmx.prefix"
METRICS_SAMPLE_WINDOW_MS_CONFIG: Final[str] = "metrics.sample.window.ms"
METRICS_NUM_SAMPLES_CONFIG: Final[str] = "metrics.num.samples"
SHUTDOWN_GRACEFUL_MS_CONFIG: Final[str] = "shutdown.graceful.ms"
IDLE_TIMEOUT_MS_CONFIG: Final[str] = "idle.timeout.ms"
AUTHENTICATION_METHOD_CONFIG: Final[str] = "authentication.method"
SSL_KEYSTORE_LOCATION_CONFIG: Final[str] = "ssl.keystore.location"
SSL_KEYSTORE_PASSWORD_CONFIG: Final[str] = "ssl.keystore.password"
SSL_KEY_PASSWORD_CONFIG: Final[str] = "ssl.key.password"
SSL_TRUSTSTORE_LOCATION_CONFIG: Final[str] = "ssl.truststore.location"
SSL_TRUSTSTORE_PASSWORD_CONFIG: Final[str] = "ssl.truststore.password"

AUTHENTICATION_METHOD_NONE: Final[str] = "NONE"
AUTHENTICATION_METHOD_BASIC: Final[str] = "BASIC"

_REST_KEYS = (
    make_key(
        DEBUG_CONFIG,
        ConfigType.BOOLEAN,
        False,
        Importance.LOW,
        "Boolean indicating whether extra debugging information is generated in some "
        "error response entities.",
    ),
    make_key(
        PORT_CONFIG,
        ConfigType.INT,
        8082,
        Importance.LOW,
        "DEPRECATED: port to listen on for new connections. Use listeners instead.",
        validator=Range.between(0, 65535),
    ),
    make_key(
        LISTENERS_CONFIG,
        ConfigType.LIST,
        "",
        Importance.HIGH,
        "List of listeners. http and https are supported. Each listener must include "
        "the protocol, hostname, and port. For example: http://myhost:8080, "
        "https://0.0.0.0:8081",
    ),
    make_key(
        RESPONSE_MEDIATYPE_PREFERRED_CONFIG,
        ConfigType.LIST,
        "application/json",
        Importance.HIGH,
        "An ordered list of the server's preferred media types used for responses, "
        "from most preferred to least.",
    ),
    make_key(
        RESPONSE_MEDIATYPE_DEFAULT_CONFIG,
        ConfigType.STRING,
        "application/json",
        Importance.HIGH,
        "The default response media type that should be used if no specific types are "
        "requested in an Accept header.",
    ),
    make_key(
        ACCESS_CONTROL_ALLOW_ORIGIN_CONFIG,
        ConfigType.STRING,
        "",
        Importance.LOW,
        "Value of the Access-Control-Allow-Origin response header",
    ),
    make_key(
        ACCESS_CONTROL_ALLOW_METHODS_CONFIG,
        ConfigType.STRING,
        "",
        Importance.LOW,
        "Value of the Access-Control-Allow-Methods response header",
    ),
    make_key(
        REQUEST_LOGGER_NAME_CONFIG,
        ConfigType.STRING,
        "kafka_rest.requests",
        Importance.LOW,
        "Name of the logger used to log requests.",
    ),
    make_key(
        METRICS_JMX_PREFIX_CONFIG,
        ConfigType.STRING,
        "kafka.rest",
        Importance.LOW,
        "Prefix to apply to metric names for the default JMX reporter.",
    ),
    make_key(
        METRICS_SAMPLE_WINDOW_MS_CONFIG,
        ConfigType.LONG,
        30000,
        Importance.LOW,
        "The metrics system maintains a configurable number of samples over a fixed "
        "window size. This configuration controls the size of the window.",
        validator=Range.at_least(0),
    ),
    make_key(
        METRICS_NUM_SAMPLES_CONFIG,
        ConfigType.INT,
        2,
        Importance.LOW,
        "The number of samples maintained to compute metrics.",
        validator=Range.at_least(1),
    ),
    make_key(
        SHUTDOWN_GRACEFUL_MS_CONFIG,
        ConfigType.INT,
        1000,
        Importance.LOW,
        "Amount of time to wait after a shutdown request for outstanding requests to "
        "complete.",
        validator=Range.at_least(0),
    ),
    make_key(
        IDLE_TIMEOUT_MS_CONFIG,
        ConfigType.LONG,
        30000,
        Importance.LOW,
        "The number of milliseconds before an idle connection is timed out.",
        validator=Range.at_least(0),
    ),
    make_key(
        AUTHENTICATION_METHOD_CONFIG,
        ConfigType.STRING,
        AUTHENTICATION_METHOD_NONE,
        Importance.LOW,
        "Method of authentication. Must be BASIC to enable authentication.",
        validator=ValidString.of(AUTHENTICATION_METHOD_NONE, AUTHENTICATION_METHOD_BASIC),
    ),
    make_key(
        SSL_KEYSTORE_LOCATION_CONFIG,
        ConfigType.STRING,
        "",
        Importance.HIGH,
        "Location of the keystore file to use for SSL. This is required for HTTPS.",
    ),
    make_key(
        SSL_KEYSTORE_PASSWORD_CONFIG,
        ConfigType.PASSWORD,
        "",
        Importance.HIGH,
        "The store password for the keystore file.",
    ),
    make_key(
        SSL_KEY_PASSWORD_CONFIG,
        ConfigType.PASSWORD,
        "",
        Importance.HIGH,
        "The password of the private key in the keystore file.",
    ),
    make_key(
        SSL_TRUSTSTORE_LOCATION_CONFIG,
        ConfigType.STRING,
        "",
        Importance.HIGH,
        "Location of the trust store. Required only to authenticate HTTPS clients.",
    ),
    make_key(
        SSL_TRUSTSTORE_PASSWORD_CONFIG,
        ConfigType.PASSWORD,
        "",
        Importance.HIGH,
        "The store password for the trust store file.",
    ),
)


def rest_config_def() -> ConfigDef:
    """Return the base schema every REST service extends."""

    return ConfigDef(_REST_KEYS)


__all__ = [
    "ACCESS_CONTROL_ALLOW_METHODS_CONFIG",
    "ACCESS_CONTROL_ALLOW_ORIGIN_CONFIG",
    "AUTHENTICATION_METHOD_BASIC",
    "AUTHENTICATION_METHOD_CONFIG",
    "AUTHENTICATION_METHOD_NONE",
    "DEBUG_CONFIG",
    "IDLE_TIMEOUT_MS_CONFIG",
    "LISTENERS_CONFIG",
    "METRICS_JMX_PREFIX_CONFIG",
    "METRICS_NUM_SAMPLES_CONFIG",
    "METRICS_SAMPLE_WINDOW_MS_CONFIG",
    "PORT_CONFIG",
    "REQUEST_LOGGER_NAME_CONFIG",
    "RESPONSE_MEDIATYPE_DEFAULT_CONFIG",
    "RESPONSE_MEDIATYPE_PREFERRED_CONFIG",
    "SHUTDOWN_GRACEFUL_MS_CONFIG",
    "SSL_KEYSTORE_LOCATION_CONFIG",
    "SSL_KEYSTORE_PASSWORD_CONFIG",
    "SSL_KEY_PASSWORD_CONFIG",
    "SSL_TRUSTSTORE_LOCATION_CONFIG",
    "SSL_TRUSTSTORE_PASSWORD_CONFIG",
    "rest_config_def",
]
