"""
kafka-rest — property source loader.

File: src/kafka_rest/config/loader.py

Purpose
- Assemble the flat string property map from a file, ``KAFKA_REST_`` env vars,
  and explicit overrides.

What should be included in this file
- Precedence logic: overrides > env (KAFKA_REST_) > file.
- ``.properties`` parsing, YAML via PyYAML, TOML via ``tomllib``.
- Deterministic env var name mapping.

Functional requirements
- Produce ``dict[str, str]`` only; typing and validation belong to ``ConfigDef``.

Non-functional requirements
- Keep loading deterministic and reproducible.
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

ENV_PREFIX: Final[str] = "KAFKA_REST_"
PROPERTIES_SUFFIXES: Final[frozenset[str]] = frozenset({".properties", ".conf"})
YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
TOML_SUFFIXES: Final[frozenset[str]] = frozenset({".toml"})

_ESCAPES: Final[dict[str, str]] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_COMMENT_MARKERS: Final[tuple[str, ...]] = ("#", "!")
_SEPARATORS: Final[frozenset[str]] = frozenset({"=", ":"})
_ENV_ENCODING: Final[dict[str, str]] = {"-": "___", "_": "__", ".": "_"}
# Only CR, LF and CRLF end a line; \f and other Unicode breaks are value text.
_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


class ConfigLoadError(ValueError):
    """Raised when property sources cannot be read or parsed."""


def load_properties(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
    env_prefix: str = ENV_PREFIX,
) -> dict[str, str]:
    """Merge file, env and explicit overrides into one property map."""

    merged: dict[str, str] = {}
    if path is not None:
        merged.update(read_properties_file(path))
    merged.update(env_properties(os.environ if environ is None else environ, prefix=env_prefix))
    for key in sorted(overrides or {}):
        merged[key] = _stringify((overrides or {})[key], key)
    return merged


def read_properties_file(path: str | Path) -> dict[str, str]:
    """Read a ``.properties``, YAML or TOML file into flat string properties."""

    resolved = Path(path).expanduser()
    if not resolved.is_file():
        raise ConfigLoadError(f"config file not found: {resolved}")

    suffix = resolved.suffix.lower()
    try:
        if suffix in PROPERTIES_SUFFIXES:
            return parse_properties(resolved.read_text(encoding="utf-8"))
        if suffix in YAML_SUFFIXES:
            with resolved.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        elif suffix in TOML_SUFFIXES:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        else:
            raise ConfigLoadError(f"unsupported config format {resolved.suffix!r}: {resolved}")
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {resolved}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {resolved}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"unable to read config file {resolved}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigLoadError(
            f"config root must be a mapping, got {type(data).__name__}: {resolved}"
        )
    return flatten_mapping(data)


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style ``.properties`` text (last occurrence of a key wins)."""

    props: dict[str, str] = {}
    for logical in _logical_lines(text):
        key, value = _split_entry(logical)
        props[key] = value
    return props


def env_properties(environ: Mapping[str, str], *, prefix: str = ENV_PREFIX) -> dict[str, str]:
    """Map ``KAFKA_REST_CONSUMER_THREADS`` style variables to ``consumer.threads``."""

    props: dict[str, str] = {}
    for env_name in sorted(environ):
        if not env_name.startswith(prefix) or len(env_name) == len(prefix):
            continue
        props[property_name_for_env(env_name[len(prefix) :])] = environ[env_name]
    return props


def property_name_for_env(suffix: str) -> str:
    """``___`` -> ``-``, ``__`` -> ``_``, ``_`` -> ``.``; lower-cased."""

    out: list[str] = []
    index = 0
    while index < len(suffix):
        if suffix.startswith("___", index):
            out.append("-")
            index += 3
        elif suffix.startswith("__", index):
            out.append("_")
            index += 2
        elif suffix[index] == "_":
            out.append(".")
            index += 1
        else:
            out.append(suffix[index].lower())
            index += 1
    return "".join(out)


def env_name_for_property(name: str, *, prefix: str = ENV_PREFIX) -> str:
    """Inverse of ``property_name_for_env`` for lower-case property names.

    Adjacent separators can encode ambiguously (``a__b`` would read back as
    ``a-.b`` and ``a..b`` as ``a_b``); names whose encoding decodes to
    something else raise ``ConfigLoadError``.
    """

    encoded = "".join(_ENV_ENCODING.get(char, char) for char in name).upper()
    if property_name_for_env(encoded) != name:
        raise ConfigLoadError(f"property {name!r} cannot be expressed as an env var name")
    return prefix + encoded


def flatten_mapping(data: Mapping[Any, Any], prefix: tuple[str, ...] = ()) -> dict[str, str]:
    out: dict[str, str] = {}
    for key in sorted(data, key=str):
        value = data[key]
        path = (*prefix, str(key))
        if isinstance(value, Mapping):
            out.update(flatten_mapping(value, path))
        else:
            name = ".".join(path)
            out[name] = _stringify(value, name)
    return out


def _stringify(value: object, name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(item, name) for item in value)
    raise ConfigLoadError(f"unsupported value for {name!r}: {type(value).__name__}")


def _logical_lines(text: str) -> list[str]:
    lines: list[str] = []
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        stripped = raw.lstrip(" \t\f")
        if pending is None:
            if not stripped or stripped.startswith(_COMMENT_MARKERS):
                continue
            current = stripped
        else:
            current = pending + stripped
        if _ends_with_continuation(current):
            pending = current[:-1]
            continue
        pending = None
        lines.append(current)
    if pending is not None:
        lines.append(pending)
    return lines


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    key_chars: list[str] = []
    while index < len(line):
        char = line[index]
        if char == "\\" and index + 1 < len(line):
            key_chars.append(line[index : index + 2])
            index += 2
            continue
        if char in _SEPARATORS or char in " \t\f":
            break
        key_chars.append(char)
        index += 1

    rest = line[index:].lstrip(" \t\f")
    if rest[:1] in _SEPARATORS:
        rest = rest[1:].lstrip(" \t\f")
    return _unescape("".join(key_chars)), _unescape(rest)


def _unescape(text: str) -> str:
    out: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            out.append(char)
            index += 1
            continue
        code = text[index + 1]
        if code == "u":
            digits = text[index + 2 : index + 6]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ConfigLoadError(f"malformed \\uXXXX escape in {text!r}")
            out.append(chr(int(digits, 16)))
            index += 6
            continue
        out.append(_ESCAPES.get(code, code))
        index += 2
    return "".join(out)


__all__ = [
    "ENV_PREFIX",
    "ConfigLoadError",
    "env_name_for_property",
    "env_properties",
    "flatten_mapping",
    "load_properties",
    "parse_properties",
    "property_name_for_env",
    "read_properties_file",
]
