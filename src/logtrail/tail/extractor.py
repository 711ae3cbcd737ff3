"""Field extraction — applies a log type pattern to one logical record."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from logtrail.tail.fields import FieldSpec, date_source, resolve_text

logger = logging.getLogger(__name__)

DATE_ERROR = "ERROR ! Unable to convert this string to date : {}"

# "10:00:00.123456" -> "10:00:00"; epoch values are whole seconds
_SUBSECOND = re.compile(r"(\d{1,2}:\d{2}:\d{2})[.,]\d+")


@dataclass
class Extraction:
    """Values for every declared token, plus the derived epoch if any."""

    fields: dict[str, str]
    epoch: int | None = None


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Look up an IANA zone name. ``None`` / ``""`` means keep UTC."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name}") from exc


def parse_instant(text: str) -> datetime | None:
    """Parse a date string in any common log format. Naive values are UTC."""
    text = _SUBSECOND.sub(r"\1", text.strip())
    if not text:
        return None
    try:
        instant = date_parser.parse(text)
    except (ValueError, OverflowError) as exc:
        logger.debug("Unparseable date %r: %s", text, exc)
        return None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def format_date(
    source: str, date_format: str, tz: tzinfo | None
) -> tuple[str, int]:
    """Return the display value and epoch seconds (0 when unparseable)."""
    instant = parse_instant(source)
    if instant is None:
        return DATE_ERROR.format(source), 0
    try:
        if tz is not None:
            instant = instant.astimezone(tz)
        return instant.strftime(date_format), int(instant.timestamp())
    except (ValueError, OverflowError) as exc:
        # dateutil accepts offsets such as +2500 that datetime cannot apply
        logger.debug("Unusable date %r: %s", source, exc)
        return DATE_ERROR.format(source), 0


def parse_record(
    pattern: re.Pattern[str],
    specs: list[FieldSpec],
    text: str,
    tz: tzinfo | None = None,
) -> Extraction | None:
    """Extract all declared tokens from ``text``.

    Returns ``None`` when the pattern does not match. A match always yields
    one value per declared token; a bad date degrades to an error string.
    """
    match = pattern.search(text)
    if match is None:
        return None

    values: dict[str, str] = {}
    timestamp = 0
    for spec in specs:
        if spec.is_date:
            values[spec.token], timestamp = format_date(
                date_source(spec.ref, match), spec.date_format, tz
            )
        else:
            values[spec.token] = resolve_text(spec.ref, match)

    return Extraction(fields=values, epoch=timestamp if timestamp > 0 else None)
