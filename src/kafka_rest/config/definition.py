"""
kafka-rest — typed configuration definitions and validation.

File: src/kafka_rest/config/definition.py

Purpose
- Declare configuration keys (type, default, importance, validator, doc) and
  resolve flat string properties against them.

What should be included in this file
- Key types, importance tiers and range/choice validators.
- The immutable ``ConfigDef`` builder with override-by-name semantics.
- Per-type parsing and aggregated structured validation errors.

Functional requirements
- Report every offending key in one failure, never just the first.
- Ignore keys the schema does not declare.

Non-functional requirements
- Pure and deterministic: no I/O, no mutation of published schemas or inputs.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Final, Protocol

logger = logging.getLogger(__name__)

INT_MIN: Final[int] = -(2**31)
INT_MAX: Final[int] = 2**31 - 1
LONG_MIN: Final[int] = -(2**63)
LONG_MAX: Final[int] = 2**63 - 1

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_HIDDEN: Final[str] = "[hidden]"


class ConfigType(Enum):
    """Declared value type of a configuration key."""

    BOOLEAN = "boolean"
    STRING = "string"
    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    LIST = "list"
    PASSWORD = "password"


class Importance(Enum):
    """Informational tier used by generated documentation only."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _Required:
    __slots__ = ()

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Final[Any] = _Required()


@dataclass(frozen=True, slots=True)
class Password:
    """Secret string that never renders its value."""

    value: str

    def __str__(self) -> str:
        return _HIDDEN

    def __repr__(self) -> str:
        return f"Password({_HIDDEN})"


class ConfigDefinitionError(ValueError):
    """Raised for malformed key declarations (schema authoring errors)."""


class ConfigValueError(ValueError):
    """Raised by a validator when a parsed value violates its constraint."""


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure for one key."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Parsed values when validation succeeded, otherwise every issue found."""

    values: Mapping[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.values is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when properties fail validation against a ``ConfigDef``."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.issues,))

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(item.path for item in self.issues)


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


class Validator(Protocol):
    """Constraint applied to a parsed value; raises ``ConfigValueError``."""

    def __call__(self, name: str, value: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class Range:
    """Numeric bounds, either side optional."""

    minimum: float | None = None
    maximum: float | None = None

    @classmethod
    def at_least(cls, minimum: float) -> Range:
        return cls(minimum=minimum)

    @classmethod
    def between(cls, minimum: float, maximum: float) -> Range:
        if minimum > maximum:
            raise ConfigDefinitionError(f"empty range [{minimum}, {maximum}]")
        return cls(minimum=minimum, maximum=maximum)

    def __call__(self, name: str, value: Any) -> None:
        if value is None:
            raise ConfigValueError("value must not be null")
        if self.minimum is not None and value < self.minimum:
            if self.maximum is None:
                raise ConfigValueError(f"value must be >= {self.minimum}")
            raise ConfigValueError(f"value must be in {self}")
        if self.maximum is not None and value > self.maximum:
            raise ConfigValueError(f"value must be in {self}")

    def __str__(self) -> str:
        if self.minimum is None and self.maximum is None:
            return "[...]"
        if self.maximum is None:
            return f"[{self.minimum},...]"
        if self.minimum is None:
            return f"[...,{self.maximum}]"
        return f"[{self.minimum},...,{self.maximum}]"


@dataclass(frozen=True, slots=True)
class ValidString:
    """Restricts a string key to a fixed set of choices (case-sensitive)."""

    choices: tuple[str, ...]

    @classmethod
    def of(cls, *choices: str) -> ValidString:
        if not choices:
            raise ConfigDefinitionError("ValidString requires at least one choice")
        return cls(choices=tuple(choices))

    def __call__(self, name: str, value: Any) -> None:
        if value not in self.choices:
            expected = ", ".join(self.choices)
            raise ConfigValueError(f"value must be one of: {expected}")

    def __str__(self) -> str:
        return "[" + ", ".join(self.choices) + "]"


@dataclass(frozen=True, slots=True)
class ConfigKey:
    """One schema entry."""

    name: str
    type: ConfigType
    default: Any
    importance: Importance
    doc: str
    validator: Validator | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not REQUIRED


class ConfigDef:
    """Immutable ordered mapping of key name to ``ConfigKey``.

    ``define`` and ``extend`` return new schemas; a published schema never
    changes. Redefining a name replaces the earlier entry in place, which is
    how a derived schema overrides keys inherited from its base.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[ConfigKey] = ()) -> None:
        table: dict[str, ConfigKey] = {}
        for key in keys:
            table[key.name] = key
        self._keys: Mapping[str, ConfigKey] = MappingProxyType(table)

    def define(
        self,
        name: str,
        type: ConfigType,
        default: Any = REQUIRED,
        importance: Importance = Importance.MEDIUM,
        doc: str = "",
        *,
        validator: Validator | None = None,
    ) -> ConfigDef:
        """Return a new schema with ``name`` added or overwritten."""

        return self.extend((make_key(name, type, default, importance, doc, validator=validator),))

    def extend(self, keys: Iterable[ConfigKey]) -> ConfigDef:
        """Return a new schema with ``keys`` applied in declaration order."""

        return ConfigDef((*self._keys.values(), *keys))

    @property
    def keys(self) -> tuple[ConfigKey, ...]:
        return tuple(self._keys.values())

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._keys)

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def __getitem__(self, name: str) -> ConfigKey:
        return self._keys[name]

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"ConfigDef({len(self._keys)} keys)"

    def validate(self, props: Mapping[str, object]) -> ConfigValidationResult:
        """Parse and default every declared key, collecting all issues."""

        issues = _IssueCollector()
        values: dict[str, Any] = {}

        for key in self._keys.values():
            if key.name in props:
                parsed = _parse_or_report(key, props[key.name], issues)
                if parsed is _INVALID:
                    continue
            elif key.has_default:
                parsed = key.default
            else:
                issues.add(
                    key.name,
                    f"missing required configuration {key.name!r} which has no default value",
                )
                continue

            if key.validator is not None:
                try:
                    key.validator(key.name, parsed)
                except ConfigValueError as exc:
                    issues.add(key.name, str(exc))
                    continue
            values[key.name] = parsed

        for name in sorted(set(props) - set(self._keys)):
            logger.debug("config_key_ignored", extra={"key": name})

        if issues.has_issues:
            return ConfigValidationResult(values=None, issues=issues.items())
        return ConfigValidationResult(values=MappingProxyType(values), issues=())

    def parse(self, props: Mapping[str, object]) -> Mapping[str, Any]:
        """Validate ``props`` and raise ``ConfigValidationError`` on failure."""

        result = self.validate(props)
        if result.values is None:
            raise ConfigValidationError(result.issues)
        return result.values


def make_key(
    name: str,
    type: ConfigType,
    default: Any = REQUIRED,
    importance: Importance = Importance.MEDIUM,
    doc: str = "",
    *,
    validator: Validator | None = None,
) -> ConfigKey:
    """Build a ``ConfigKey``, parsing and validating its default eagerly."""

    if not isinstance(name, str) or not name.strip():
        raise ConfigDefinitionError("config name must be a non-empty string")
    if not isinstance(type, ConfigType):
        raise ConfigDefinitionError(f"unknown config type {type!r} for {name!r}")
    if not isinstance(importance, Importance):
        raise ConfigDefinitionError(f"unknown importance {importance!r} for {name!r}")

    parsed_default = default
    if default is not REQUIRED:
        try:
            parsed_default = parse_value(type, default)
        except ConfigValueError as exc:
            raise ConfigDefinitionError(f"invalid default for {name!r}: {exc}") from exc
        if validator is not None:
            try:
                validator(name, parsed_default)
            except ConfigValueError as exc:
                raise ConfigDefinitionError(f"invalid default for {name!r}: {exc}") from exc

    return ConfigKey(
        name=name,
        type=type,
        default=parsed_default,
        importance=importance,
        doc=doc,
        validator=validator,
    )


def compose(base: ConfigDef, own_keys: Iterable[ConfigKey]) -> ConfigDef:
    """Return ``base`` extended/overridden by ``own_keys`` in order."""

    return base.extend(own_keys)


def parse_value(config_type: ConfigType, value: object) -> Any:
    """Parse ``value`` according to ``config_type``; raise ``ConfigValueError``."""

    expected = f"expected {config_type.value}, got value {value!r}"

    if config_type is ConfigType.STRING:
        if isinstance(value, str):
            return value.strip()
        raise ConfigValueError(expected)

    if config_type is ConfigType.PASSWORD:
        if isinstance(value, Password):
            return value
        if isinstance(value, str):
            return Password(value)
        raise ConfigValueError(expected)

    if config_type is ConfigType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "true":
                return True
            if lowered == "false":
                return False
        raise ConfigValueError(expected)

    if config_type in (ConfigType.INT, ConfigType.LONG):
        low, high = (INT_MIN, INT_MAX) if config_type is ConfigType.INT else (LONG_MIN, LONG_MAX)
        if isinstance(value, bool):
            raise ConfigValueError(expected)
        if isinstance(value, int):
            parsed = value
        elif isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value.strip()):
            parsed = int(value.strip(), 10)
        else:
            raise ConfigValueError(expected)
        if parsed < low or parsed > high:
            raise ConfigValueError(expected)
        return parsed

    if config_type is ConfigType.DOUBLE:
        if isinstance(value, bool):
            raise ConfigValueError(expected)
        if isinstance(value, (int, float)):
            parsed_float = float(value)
        elif isinstance(value, str):
            try:
                parsed_float = float(value.strip())
            except ValueError as exc:
                raise ConfigValueError(expected) from exc
        else:
            raise ConfigValueError(expected)
        if not math.isfinite(parsed_float):
            raise ConfigValueError(expected)
        return parsed_float

    if config_type is ConfigType.LIST:
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip() for item in value)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return ()
            return tuple(item.strip() for item in stripped.split(","))
        raise ConfigValueError(expected)

    raise ConfigDefinitionError(f"unknown config type {config_type!r}")


def render_value(value: object) -> str:
    """Render a parsed value the way it would be written in a properties file."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return ",".join(str(item) for item in value)
    if value is REQUIRED:
        return ""
    return str(value)


class _Invalid:
    __slots__ = ()


_INVALID: Final[Any] = _Invalid()


def _parse_or_report(key: ConfigKey, raw: object, issues: _IssueCollector) -> Any:
    try:
        return parse_value(key.type, raw)
    except ConfigValueError as exc:
        issues.add(key.name, str(exc))
        return _INVALID


__all__ = [
    "INT_MAX",
    "INT_MIN",
    "LONG_MAX",
    "LONG_MIN",
    "REQUIRED",
    "ConfigDef",
    "ConfigDefinitionError",
    "ConfigKey",
    "ConfigType",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "ConfigValueError",
    "Importance",
    "Password",
    "Range",
    "ValidString",
    "Validator",
    "compose",
    "make_key",
    "parse_value",
    "render_value",
]
