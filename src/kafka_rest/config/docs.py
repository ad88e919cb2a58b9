"""Reference documentation for a ``ConfigDef`` (reStructuredText and table rows)."""

from __future__ import annotations

from kafka_rest.config.definition import (
    ConfigDef,
    ConfigKey,
    ConfigType,
    Importance,
    Password,
    render_value,
)

_IMPORTANCE_ORDER = {Importance.HIGH: 0, Importance.MEDIUM: 1, Importance.LOW: 2}

TABLE_HEADERS: tuple[str, ...] = ("Name", "Type", "Importance", "Default", "Description")


def sorted_keys(config_def: ConfigDef) -> list[ConfigKey]:
    """Required keys first, then by importance, then by name."""

    return sorted(
        config_def,
        key=lambda item: (item.has_default, _IMPORTANCE_ORDER[item.importance], item.name),
    )


def default_text(key: ConfigKey) -> str:
    if not key.has_default:
        return ""
    if key.type is ConfigType.PASSWORD or isinstance(key.default, Password):
        return "[hidden]"
    if key.type is ConfigType.STRING and key.default == "":
        return '""'
    return render_value(key.default)


def to_rst(config_def: ConfigDef) -> str:
    lines: list[str] = []
    for key in sorted_keys(config_def):
        lines.append(f"``{key.name}``")
        for doc_line in (key.doc or "").splitlines() or [""]:
            lines.append(f"  {doc_line}".rstrip())
        lines.append("")
        lines.append(f"  * Type: {key.type.value}")
        if key.has_default:
            lines.append(f"  * Default: {default_text(key)}")
        else:
            lines.append("  * Default: (required)")
        if key.validator is not None:
            lines.append(f"  * Valid Values: {key.validator}")
        lines.append(f"  * Importance: {key.importance.value}")
        lines.append("")
    return "\n".join(lines)


def to_rows(config_def: ConfigDef) -> list[tuple[str, str, str, str, str]]:
    """One row per key: name, type, importance, default, doc."""

    return [
        (
            key.name,
            key.type.value,
            key.importance.value,
            default_text(key) if key.has_default else "(required)",
            " ".join(key.doc.split()),
        )
        for key in sorted_keys(config_def)
    ]


def to_records(config_def: ConfigDef) -> list[dict[str, object]]:
    records: list[dict[str, object]] = []
    for key in sorted_keys(config_def):
        records.append(
            {
                "name": key.name,
                "type": key.type.value,
                "importance": key.importance.value,
                "required": not key.has_default,
                "default": default_text(key) if key.has_default else None,
                "valid_values": None if key.validator is None else str(key.validator),
                "doc": key.doc,
            }
        )
    return records


__all__ = ["TABLE_HEADERS", "default_text", "sorted_keys", "to_records", "to_rows", "to_rst"]
