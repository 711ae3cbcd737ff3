"""Field references — how a token gets its value out of a regex match."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

DEFAULT_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Trailing "/<width>" on a date type is a display hint, not part of the format
_WIDTH_SUFFIX = re.compile(r"/\d+$")


@dataclass(frozen=True)
class Capture:
    """A single capture group, by index or by name."""

    group: int | str


@dataclass(frozen=True)
class Composite:
    """Literal strings interleaved with capture groups, concatenated in order."""

    parts: tuple[str | Capture, ...]


@dataclass(frozen=True)
class DateParts:
    """Date components captured separately.

    Keys are ``Y m d H i s M z`` for split dates, or one of ``U`` (epoch),
    ``r`` (RFC 2822) and ``c`` (ISO 8601) for a combined capture.
    """

    parts: tuple[tuple[str, int | str], ...]


FieldRef = Union[Capture, Composite, DateParts]


@dataclass(frozen=True)
class FieldSpec:
    """A declared token, its reference and its output date format (dates only)."""

    token: str
    ref: FieldRef
    date_format: str | None = None

    @property
    def is_date(self) -> bool:
        return self.date_format is not None


def parse_reference(raw: Any) -> FieldRef:
    """Turn a reference as written in a log type definition into a FieldRef."""
    if isinstance(raw, (Capture, Composite, DateParts)):
        return raw
    if isinstance(raw, dict):
        return DateParts(parts=tuple((str(k), v) for k, v in raw.items()))
    if isinstance(raw, (list, tuple)):
        parts: list[str | Capture] = []
        for part in raw:
            # Strings are literals inside a composite; integers are groups
            if isinstance(part, str):
                parts.append(part)
            else:
                parts.append(Capture(int(part)))
        return Composite(parts=tuple(parts))
    if isinstance(raw, (int, str)):
        return Capture(raw)
    raise ValueError(f"Unsupported field reference: {raw!r}")


def date_format_for(type_name: str | None) -> str | None:
    """Output format for a ``date`` / ``date:<format>`` type, ``None`` for text."""
    if not type_name or not type_name.startswith("date"):
        return None
    fmt = type_name[5:] if type_name.startswith("date:") else ""
    fmt = _WIDTH_SUFFIX.sub("", fmt)
    return fmt or DEFAULT_DATE_FORMAT


def compile_fields(
    fields: dict[str, Any], types: dict[str, str] | None = None
) -> list[FieldSpec]:
    """Resolve every declared token once per scan."""
    types = types or {}
    specs: list[FieldSpec] = []
    for token, raw in fields.items():
        ref = parse_reference(raw)
        date_format = date_format_for(types.get(token))
        if isinstance(ref, DateParts) and date_format is None:
            raise ValueError(
                f"Field '{token}' uses date components but is not a date type"
            )
        specs.append(FieldSpec(token=token, ref=ref, date_format=date_format))
    return specs


def group_value(match: re.Match[str], group: int | str) -> str:
    """Captured text for ``group``; unknown or unmatched groups give ``""``."""
    try:
        value = match.group(group)
    except IndexError:
        return ""
    return value if value is not None else ""


def resolve_text(ref: FieldRef, match: re.Match[str]) -> str:
    """Value of a text field."""
    if isinstance(ref, Capture):
        return group_value(match, ref.group)
    if isinstance(ref, Composite):
        return "".join(
            group_value(match, p.group) if isinstance(p, Capture) else p
            for p in ref.parts
        )
    raise ValueError("Date components can only be resolved as a date")


def date_source(ref: FieldRef, match: re.Match[str]) -> str:
    """Canonical date string built from the captured components."""
    if not isinstance(ref, DateParts):
        return resolve_text(ref, match)

    parts = {key: group_value(match, group) for key, group in ref.parts}
    if "U" in parts:
        return _from_epoch(parts["U"])
    if "r" in parts:
        return parts["r"]
    if "c" in parts:
        return parts["c"]
    if "M" in parts:
        return (
            f"{parts['M']} {parts.get('d', '')} "
            f"{parts.get('H', '')}:{parts.get('i', '')}:{parts.get('s', '')} "
            f"{parts.get('Y', '')} {parts.get('z', '')}"
        ).strip()
    if "m" in parts:
        return (
            f"{parts.get('Y', '')}/{parts['m']}/{parts.get('d', '')} "
            f"{parts.get('H', '')}:{parts.get('i', '')}:{parts.get('s', '')} "
            f"{parts.get('z', '')}"
        ).strip()
    return ""


def _from_epoch(value: str) -> str:
    try:
        instant = datetime.fromtimestamp(int(float(value)), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return value
    return instant.strftime("%Y/%m/%d %H:%M:%S %z")
