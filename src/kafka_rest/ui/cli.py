"""Command-line interface router for kafka-rest configuration tooling."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from kafka_rest.config import (
    DEFAULT_CONFIG_DEF,
    ConfigValidationError,
    ConsumerConfigError,
    load_properties,
    resolve_config,
    to_records,
    to_rows,
    to_rst,
)
from kafka_rest.config.docs import TABLE_HEADERS
from kafka_rest.main import ExitCode
from kafka_rest.observability import LoggingConfig, setup_logging, shutdown_logging
from kafka_rest.ui.render import CLIRenderer, create_renderer

_DOC_CELL_WIDTH = 72


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = int(ExitCode.CONFIG_ERROR)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="kafka-rest-config",
        description=(
            "kafka-rest simple-consumer configuration tooling.\n\n"
            "Common workflows:\n"
            "  kafka-rest-config docs                      Print the configuration reference\n"
            "  kafka-rest-config validate --config x.properties\n"
            "                                              Resolve and print effective values\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for diagnostics written to stderr (default: WARNING).",
    )
    common.add_argument(
        "--log-format",
        choices=("json", "text"),
        default="json",
        help="Diagnostic log format (default: json).",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output (also respects NO_COLOR env var).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # docs ----------------------------------------------------------------
    docs_parser = subparsers.add_parser(
        "docs",
        parents=[common],
        help="Print the configuration reference",
        description=(
            "Print every configuration key with its type, default and documentation.\n\n"
            "Examples:\n"
            "  kafka-rest-config docs\n"
            "  kafka-rest-config docs --format table\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    docs_parser.add_argument(
        "--format",
        dest="output_format",
        choices=("rst", "table", "json"),
        default="rst",
        help="Output format (default: rst).",
    )
    docs_parser.set_defaults(handler=_cmd_docs)

    # validate ------------------------------------------------------------
    validate_parser = subparsers.add_parser(
        "validate",
        parents=[common],
        help="Resolve properties and show effective configuration",
        description=(
            "Load properties from a file, KAFKA_REST_* env vars and --set overrides,\n"
            "validate them and print effective and derived values. Passwords are hidden.\n\n"
            "Examples:\n"
            "  kafka-rest-config validate --config kafka-rest.properties\n"
            "  kafka-rest-config validate --set consumer.request.timeout.ms=5000 --json\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    validate_parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a .properties, .yaml or .toml file.",
    )
    validate_parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Property override; may be repeated.",
    )
    validate_parser.add_argument(
        "--no-env",
        action="store_true",
        default=False,
        help="Ignore KAFKA_REST_* environment variables.",
    )
    validate_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    validate_parser.set_defaults(handler=_cmd_validate)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    try:
        handle = setup_logging(
            LoggingConfig(level=namespace.log_level, log_format=namespace.log_format)
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        shutdown_logging(handle)
    return int(result)


def main(argv: Sequence[str] | None = None) -> int:
    """Compatibility wrapper for main-module wiring."""

    return run_cli(argv)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_docs(args: argparse.Namespace) -> int:
    output_format = getattr(args, "output_format", "rst")
    if output_format == "json":
        _emit_json({"command": "docs", "keys": to_records(DEFAULT_CONFIG_DEF)})
        return int(ExitCode.SUCCESS)
    if output_format == "table":
        renderer = _get_renderer(args)
        renderer.table(TABLE_HEADERS, to_rows(DEFAULT_CONFIG_DEF), max_width=_DOC_CELL_WIDTH)
        return int(ExitCode.SUCCESS)
    sys.stdout.write(to_rst(DEFAULT_CONFIG_DEF))
    return int(ExitCode.SUCCESS)


def _cmd_validate(args: argparse.Namespace) -> int:
    overrides = _parse_overrides(getattr(args, "overrides", []) or [])
    props = load_properties(
        getattr(args, "config_path", None),
        environ={} if getattr(args, "no_env", False) else None,
        overrides=overrides,
    )
    as_json = bool(getattr(args, "json", False))

    try:
        config = resolve_config(props)
    except ConfigValidationError as exc:
        issues = [{"key": issue.path, "message": issue.message} for issue in exc.issues]
        if as_json:
            _emit_json({"command": "validate", "valid": False, "issues": issues})
        else:
            renderer = _get_renderer(args)
            renderer.heading("Invalid configuration")
            for issue in exc.issues:
                renderer.fail(f"{issue.path}: {issue.message}")
        return int(ExitCode.CONFIG_ERROR)
    except ConsumerConfigError as exc:
        if as_json:
            _emit_json(
                {
                    "command": "validate",
                    "valid": False,
                    "issues": [{"key": None, "message": str(exc)}],
                }
            )
        else:
            renderer = _get_renderer(args)
            renderer.heading("Invalid consumer configuration")
            renderer.fail(str(exc))
        return int(ExitCode.CONFIG_ERROR)

    payload = config.as_dict(redact=True)
    if as_json:
        _emit_json({"command": "validate", "valid": True, **payload})
        return int(ExitCode.SUCCESS)

    renderer = _get_renderer(args)
    renderer.heading("Effective configuration")
    properties = config.to_properties()
    for name in sorted(properties):
        renderer.kv(f"  {name}", properties[name])
    renderer.section("Derived consumer settings")
    derived = payload["derived"]
    for name in sorted(derived):
        renderer.kv(f"  {name}", derived[name])
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_overrides(raw_items: Sequence[str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in raw_items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise CLIError(f"invalid --set value {item!r}; expected KEY=VALUE")
        overrides[key] = value
    return overrides


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    return create_renderer(no_color=bool(getattr(args, "no_color", False)))


def _emit_json(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


__all__ = ["CLIError", "build_parser", "main", "run_cli"]
