"""
kafka-rest — unit tests for the resolved simple-consumer configuration

File: tests/unit/config/test_simple_consumer.py

Purpose
- Validate the override-then-derive construction of ``SimpleConsumerConfig``.

What this test file should cover
- Default application and typed accessors for every proxy key.
- Range validation and aggregated failures.
- Unknown-key tolerance and raw-property fidelity.
- Isolation of the legacy consumer override view and propagation of its errors.
- Idempotent, immutable results.

Functional requirements
- Offline; time is injected through ``MockTime``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kafka_rest.config.consumer import ConsumerConfigError, LegacyConsumerConfig
from kafka_rest.config.definition import ConfigValidationError, Password
from kafka_rest.config.schema import DEFAULT_CONFIG_DEF
from kafka_rest.config.simple_consumer import (
    CONSUMER_PROPERTY_OVERRIDES,
    SimpleConsumerConfig,
    consumer_properties,
    resolve_config,
)
from kafka_rest.utils.clock import MockTime, SystemTime


@dataclass(frozen=True, slots=True)
class _FixedSettings:
    socket_timeout_ms: int = 1
    socket_receive_buffer_bytes: int = 2
    fetch_message_max_bytes: int = 3
    fetch_wait_max_ms: int = 4
    fetch_min_bytes: int = 5


class _RecordingFactory:
    def __init__(self) -> None:
        self.calls: list[dict[str, str]] = []

    def __call__(self, props: Mapping[str, str]) -> _FixedSettings:
        self.calls.append(dict(props))
        return _FixedSettings()


class _CollaboratorFailure(Exception):
    pass


def _failing_factory(props: Mapping[str, str]) -> _FixedSettings:
    raise _CollaboratorFailure("rejected by consumer")


def test_empty_properties_resolve_to_documented_defaults() -> None:
    config = resolve_config({}, MockTime())

    assert config.id == ""
    assert config.consumer_max_threads == 50
    assert config.zookeeper_connect == ""
    assert config.schema_registry_url == "http://localhost:8081"
    assert config.proxy_fetch_min_bytes == -1
    assert config.consumer_iterator_timeout_ms == 1
    assert config.consumer_iterator_backoff_ms == 50
    assert config.consumer_request_timeout_ms == 1000
    assert config.consumer_request_max_bytes == 64 * 1024 * 1024
    assert config.consumer_instance_timeout_ms == 300000
    assert config.simple_consumer_max_pool_size == 25
    assert config.simple_consumer_pool_timeout_ms == 1000
    assert config.client_zk_session_timeout_ms == 30000


def test_derived_settings_use_legacy_consumer_defaults() -> None:
    config = resolve_config({}, MockTime())

    assert config.derived_settings() == {
        "socket_timeout_ms": 30000,
        "socket_receive_buffer_bytes": 65536,
        "fetch_message_max_bytes": 1048576,
        "fetch_wait_max_ms": 100,
        "fetch_min_bytes": 1,
    }


def test_request_timeout_override_keeps_other_defaults() -> None:
    config = resolve_config({"consumer.request.timeout.ms": "5000"}, MockTime())

    assert config.consumer_request_timeout_ms == 5000
    assert config.simple_consumer_max_pool_size == 25
    assert config.fetch_wait_max_ms == 100


def test_derived_settings_follow_supplied_consumer_properties() -> None:
    config = resolve_config(
        {
            "socket.timeout.ms": "5000",
            "socket.receive.buffer.bytes": "1024",
            "fetch.message.max.bytes": "4096",
            "fetch.wait.max.ms": "500",
        },
        MockTime(),
    )

    assert config.socket_timeout_ms == 5000
    assert config.socket_receive_buffer_bytes == 1024
    assert config.fetch_message_max_bytes == 4096
    assert config.fetch_wait_max_ms == 500


def test_fetch_min_bytes_is_read_by_both_proxy_and_consumer() -> None:
    config = resolve_config({"fetch.min.bytes": "2048"}, MockTime())

    assert config.proxy_fetch_min_bytes == 2048
    assert config.fetch_min_bytes == 2048


@pytest.mark.parametrize("value", ["0", "5", "30000"])
def test_session_timeout_accepts_non_negative_values(value: str) -> None:
    config = resolve_config({"client.zk.session.timeout.ms": value}, MockTime())

    assert config.client_zk_session_timeout_ms == int(value)


def test_negative_session_timeout_is_rejected() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        resolve_config({"client.zk.session.timeout.ms": "-1"}, MockTime())

    assert excinfo.value.paths == ("client.zk.session.timeout.ms",)


def test_all_invalid_keys_are_reported_together() -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        resolve_config(
            {"consumer.threads": "abc", "client.zk.session.timeout.ms": "-5"},
            MockTime(),
        )

    assert set(excinfo.value.paths) == {"consumer.threads", "client.zk.session.timeout.ms"}


def test_validation_failure_never_builds_consumer_settings() -> None:
    factory = _RecordingFactory()

    with pytest.raises(ConfigValidationError):
        SimpleConsumerConfig(
            {"consumer.threads": "many"}, MockTime(), consumer_settings_factory=factory
        )

    assert factory.calls == []


_unknown_keys = st.text(
    alphabet=st.characters(min_codepoint=33, max_codepoint=126), min_size=1, max_size=20
).map(lambda suffix: f"unknown.{suffix}")


@given(st.dictionaries(_unknown_keys, st.text(max_size=20), max_size=8))
def test_unknown_keys_never_cause_failure(extra: dict[str, str]) -> None:
    config = resolve_config(extra, MockTime())

    assert config.consumer_max_threads == 50
    assert dict(config.original_properties) == extra


def test_consumer_receives_blanked_coordination_keys() -> None:
    factory = _RecordingFactory()
    props = {"zookeeper.connect": "zk1:2181/kafka", "group.id": "g1", "client.id": "c1"}

    config = SimpleConsumerConfig(props, MockTime(), consumer_settings_factory=factory)

    assert factory.calls == [{"zookeeper.connect": "", "group.id": "", "client.id": "c1"}]
    assert props["zookeeper.connect"] == "zk1:2181/kafka"
    assert config.zookeeper_connect == "zk1:2181/kafka"
    assert config.original_properties["group.id"] == "g1"
    assert config.fetch_min_bytes == 5


def test_override_view_is_a_copy() -> None:
    props = {"group.id": "mine"}

    overridden = consumer_properties(props)

    assert overridden == {"group.id": "", "zookeeper.connect": ""}
    assert props == {"group.id": "mine"}
    assert dict(CONSUMER_PROPERTY_OVERRIDES) == {"zookeeper.connect": "", "group.id": ""}


def test_original_properties_are_verbatim_and_detached() -> None:
    props = {"consumer.threads": " 8 ", "custom.flag": "on"}

    config = resolve_config(props, MockTime())
    props["custom.flag"] = "off"

    assert config.original_properties == {"consumer.threads": " 8 ", "custom.flag": "on"}
    assert config.consumer_max_threads == 8
    with pytest.raises(TypeError):
        config.original_properties["custom.flag"] = "x"  # type: ignore[index]


def test_collaborator_errors_propagate_unchanged() -> None:
    with pytest.raises(_CollaboratorFailure, match="rejected by consumer"):
        SimpleConsumerConfig({}, MockTime(), consumer_settings_factory=_failing_factory)


def test_inconsistent_consumer_timeouts_abort_resolution() -> None:
    with pytest.raises(ConsumerConfigError):
        resolve_config({"socket.timeout.ms": "10", "fetch.wait.max.ms": "100"}, MockTime())


def test_resolution_is_idempotent() -> None:
    props = {"consumer.request.timeout.ms": "5000", "id": "proxy-a"}

    first = resolve_config(props, MockTime())
    second = resolve_config(props, MockTime())

    assert first.as_dict() == second.as_dict()
    assert first.to_properties() == second.to_properties()


def test_resolved_config_is_immutable() -> None:
    config = resolve_config({}, MockTime())

    with pytest.raises(AttributeError):
        config.consumer_max_threads = 5  # type: ignore[misc]
    with pytest.raises(AttributeError):
        config._values = {}  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del config._time
    with pytest.raises(TypeError):
        config.values()["consumer.threads"] = 1  # type: ignore[index]


def test_time_is_passed_through() -> None:
    clock = MockTime(start_ms=1234)

    config = resolve_config({}, clock)

    assert config.time is clock
    assert isinstance(resolve_config({}).time, SystemTime)


def test_generic_accessors_are_typed() -> None:
    config = resolve_config({"debug": "true", "listeners": "http://a:1,http://b:2"}, MockTime())

    assert config.get_boolean("debug") is True
    assert config.get_list("listeners") == ("http://a:1", "http://b:2")
    assert isinstance(config.get_password("ssl.keystore.password"), Password)
    assert config.get_long("consumer.request.max.bytes") == 64 * 1024 * 1024
    with pytest.raises(TypeError):
        config.get_int("debug")
    with pytest.raises(TypeError):
        config.get_string("consumer.threads")
    with pytest.raises(KeyError):
        config.get("group.id")


def test_as_dict_hides_passwords_unless_asked() -> None:
    config = resolve_config({"ssl.keystore.password": "hunter2"}, MockTime())

    redacted = config.as_dict()
    revealed = config.as_dict(redact=False)

    assert redacted["values"]["ssl.keystore.password"] == "[hidden]"
    assert revealed["values"]["ssl.keystore.password"] == "hunter2"
    assert config.to_properties()["ssl.keystore.password"] == "[hidden]"
    assert redacted["derived"]["fetch_wait_max_ms"] == 100
    assert set(redacted["values"]) == set(DEFAULT_CONFIG_DEF.names)


def test_default_factory_is_legacy_consumer_config() -> None:
    config = resolve_config({}, MockTime())

    assert isinstance(config.consumer_settings, LegacyConsumerConfig)


def test_resolution_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="kafka_rest.config.simple_consumer"):
        resolve_config({"extra.key": "1"}, MockTime())

    records = [
        record
        for record in caplog.records
        if record.getMessage() == "simple_consumer_config_resolved"
    ]
    assert len(records) == 1
    assert getattr(records[0], "supplied", None) == 1
    assert getattr(records[0], "keys", None) == len(DEFAULT_CONFIG_DEF)
