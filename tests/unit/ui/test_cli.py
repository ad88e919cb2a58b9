"""
kafka-rest — unit tests for the configuration CLI router

File: tests/unit/ui/test_cli.py

Purpose
- Exercise ``docs`` and ``validate`` in-process and lock down exit codes.

What this test file should cover
- Every docs output format.
- Successful and failing validation in text and JSON modes.
- Malformed ``--set`` values and unreadable config files.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kafka_rest.config.schema import DEFAULT_CONFIG_DEF
from kafka_rest.main import ExitCode, cli_entrypoint
from kafka_rest.ui.cli import build_parser, run_cli


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_docs_rst_lists_every_key(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["docs"]) == ExitCode.SUCCESS

    out = capsys.readouterr().out
    for name in DEFAULT_CONFIG_DEF.names:
        assert f"``{name}``" in out


def test_docs_json_is_machine_readable(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["docs", "--format", "json"]) == ExitCode.SUCCESS

    payload = json.loads(capsys.readouterr().out)
    names = {record["name"] for record in payload["keys"]}
    assert names == set(DEFAULT_CONFIG_DEF.names)


def test_docs_table_has_headers(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["docs", "--format", "table", "--no-color"]) == ExitCode.SUCCESS

    out = capsys.readouterr().out
    assert "Name" in out
    assert "simpleconsumer.pool.size.max" in out


def test_validate_prints_effective_and_derived_values(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write(tmp_path / "kafka-rest.properties", "consumer.request.timeout.ms=5000\n")

    code = run_cli(["validate", "--no-env", "--no-color", "--config", str(path)])

    out = capsys.readouterr().out
    assert code == ExitCode.SUCCESS
    assert "consumer.request.timeout.ms: 5000" in out
    assert "simpleconsumer.pool.size.max: 25" in out
    assert "fetch_wait_max_ms: 100" in out


def test_validate_json_applies_overrides(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(
        [
            "validate",
            "--no-env",
            "--json",
            "--set",
            "consumer.threads=-1",
            "--set",
            "ssl.keystore.password=hunter2",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == ExitCode.SUCCESS
    assert payload["valid"] is True
    assert payload["values"]["consumer.threads"] == -1
    assert payload["values"]["ssl.keystore.password"] == "[hidden]"
    assert payload["derived"]["socket_timeout_ms"] == 30000


def test_validate_reports_every_issue(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(
        [
            "validate",
            "--no-env",
            "--json",
            "--set",
            "consumer.threads=abc",
            "--set",
            "client.zk.session.timeout.ms=-1",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == ExitCode.CONFIG_ERROR
    assert payload["valid"] is False
    assert {issue["key"] for issue in payload["issues"]} == {
        "consumer.threads",
        "client.zk.session.timeout.ms",
    }


def test_validate_reports_consumer_errors(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(
        [
            "validate",
            "--no-env",
            "--no-color",
            "--set",
            "socket.timeout.ms=10",
            "--set",
            "fetch.wait.max.ms=100",
        ]
    )

    out = capsys.readouterr().out
    assert code == ExitCode.CONFIG_ERROR
    assert "FAIL" in out
    assert "socket.timeout.ms should always be at least fetch.wait.max.ms" in out


def test_validate_reads_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("KAFKA_REST_SIMPLECONSUMER_POOL_SIZE_MAX", "7")

    assert run_cli(["validate", "--json"]) == ExitCode.SUCCESS

    payload = json.loads(capsys.readouterr().out)
    assert payload["values"]["simpleconsumer.pool.size.max"] == 7


def test_malformed_set_value_is_a_config_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["validate", "--no-env", "--set", "novalue"]) == ExitCode.CONFIG_ERROR

    assert "expected KEY=VALUE" in capsys.readouterr().err


def test_missing_config_file_maps_to_config_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli_entrypoint(["validate", "--config", str(tmp_path / "absent.properties")])

    assert code == ExitCode.CONFIG_ERROR
    assert "config file not found" in capsys.readouterr().err


def test_unknown_log_level_is_a_config_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_cli(["docs", "--log-level", "LOUD"]) == ExitCode.CONFIG_ERROR

    assert "unsupported logging level" in capsys.readouterr().err
