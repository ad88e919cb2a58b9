"""Output rendering abstraction for the kafka-rest CLI.

File: src/kafka_rest/ui/render.py

Purpose
- Provide a thin rendering layer for CLI output.
- Respect NO_COLOR environment variable and --no-color CLI flag.

Non-functional requirements
- No dependencies beyond the standard library.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Sequence

_BOLD = "\033[1m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _color_allowed(no_color_flag: bool, stream: TextIO) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


class CLIRenderer:
    """Thin CLI output renderer.

    Produces clean, deterministic plain-text output.
    Respects ``NO_COLOR`` env var and ``--no-color`` flag.
    """

    def __init__(self, *, no_color: bool = False, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._color = _color_allowed(no_color, self._stream)

    def _print(self, text: str = "") -> None:
        print(text, file=self._stream)

    def heading(self, text: str) -> None:
        """Print a heading line."""

        self._print(f"{_BOLD}{text}{_RESET}" if self._color else text)

    def kv(self, key: str, value: object) -> None:
        """Print a key: value pair."""

        self._print(f"{key}: {value}")

    def section(self, title: str) -> None:
        """Print a section header with a preceding blank line."""

        self._print()
        self.heading(title)

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str | None = None,
        max_width: int | None = None,
    ) -> None:
        """Print a formatted ASCII table; cells longer than ``max_width`` are cut."""

        if not rows:
            return

        def _cell(value: object) -> str:
            text = str(value)
            if max_width is not None and len(text) > max_width:
                return text[: max(max_width - 3, 0)] + "..."
            return text

        col_count = len(headers)
        widths = [len(h) for h in headers]
        for row in rows:
            for i in range(min(len(row), col_count)):
                widths[i] = max(widths[i], len(_cell(row[i])))

        def _pad(cells: Sequence[object]) -> str:
            parts: list[str] = []
            for i in range(col_count):
                cell = _cell(cells[i]) if i < len(cells) else ""
                parts.append(cell.ljust(widths[i]))
            return "  ".join(parts).rstrip()

        if title:
            self.section(title)
        self._print(f"  {_pad(list(headers))}")
        self._print(f"  {'  '.join('-' * w for w in widths)}")
        for row in rows:
            self._print(f"  {_pad(list(row))}")

    def fail(self, label: str) -> None:
        """Print a failing check."""

        self._print(f"  {_RED}FAIL{_RESET}  {label}" if self._color else f"  FAIL  {label}")


def create_renderer(*, no_color: bool = False, stream: TextIO | None = None) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(no_color=no_color, stream=stream)


__all__ = ["CLIRenderer", "create_renderer"]
