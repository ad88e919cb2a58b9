"""Module entrypoint for ``python -m kafka_rest``."""

from __future__ import annotations

from kafka_rest.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
