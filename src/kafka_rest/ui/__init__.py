"""UI package exports for the configuration CLI and its renderer."""

from kafka_rest.ui.cli import CLIError, build_parser, main, run_cli
from kafka_rest.ui.render import CLIRenderer, create_renderer

__all__ = [
    "CLIError",
    "CLIRenderer",
    "build_parser",
    "create_renderer",
    "main",
    "run_cli",
]
