"""
kafka-rest — CLI subprocess smoke contracts

File: tests/integration/test_cli_smoke.py

Purpose
- Enforce ``python -m kafka_rest`` exit codes and output signals end to end.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"


def _run_cli(
    cwd: Path, *args: str, extra_env: dict[str, str] | None = None
) -> subprocess.CompletedProcess[str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("KAFKA_REST_")}
    existing_pythonpath = env.get("PYTHONPATH")
    src_pythonpath = str(SRC_PATH)
    env["PYTHONPATH"] = (
        src_pythonpath if not existing_pythonpath else f"{src_pythonpath}:{existing_pythonpath}"
    )
    env.update(extra_env or {})
    return subprocess.run(
        [sys.executable, "-m", "kafka_rest", *args],
        cwd=cwd,
        text=True,
        capture_output=True,
        check=False,
        env=env,
    )


def test_docs_exits_zero(tmp_path: Path) -> None:
    completed = _run_cli(tmp_path, "docs")

    assert completed.returncode == 0, completed.stderr
    assert "``client.zk.session.timeout.ms``" in completed.stdout


def test_validate_yaml_with_env_override(tmp_path: Path) -> None:
    config_path = tmp_path / "kafka-rest.yaml"
    config_path.write_text(
        "consumer:\n  request:\n    timeout.ms: 5000\nid: proxy-a\n", encoding="utf-8"
    )

    completed = _run_cli(
        tmp_path,
        "validate",
        "--config",
        str(config_path),
        "--json",
        extra_env={"KAFKA_REST_ID": "proxy-b"},
    )

    assert completed.returncode == 0, completed.stderr
    payload = json.loads(completed.stdout)
    assert payload["values"]["consumer.request.timeout.ms"] == 5000
    assert payload["values"]["id"] == "proxy-b"
    assert payload["derived"]["fetch_wait_max_ms"] == 100


def test_invalid_config_exits_with_config_error(tmp_path: Path) -> None:
    completed = _run_cli(
        tmp_path, "validate", "--no-color", "--set", "client.zk.session.timeout.ms=-1"
    )

    assert completed.returncode == 2
    assert "client.zk.session.timeout.ms: value must be >= 0" in completed.stdout


def test_unknown_command_is_a_usage_error(tmp_path: Path) -> None:
    completed = _run_cli(tmp_path, "frobnicate")

    assert completed.returncode == 2
    assert "invalid choice" in completed.stderr
