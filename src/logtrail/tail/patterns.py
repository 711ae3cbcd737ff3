"""Regex helpers for user-supplied expressions.

Log type definitions write regexes either bare (``\\d+ ERROR``) or in the
delimited ``/body/flags`` form used by most log viewers. Both compile to a
plain :class:`re.Pattern`.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_DELIMITED = re.compile(r"^/(?P<body>.*)/(?P<flags>[imsxu]*)$", re.DOTALL)

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,  # str patterns are always unicode
}


def is_delimited(expr: str) -> bool:
    """True if ``expr`` is written as ``/body/flags``."""
    return _DELIMITED.match(expr) is not None


def compile_pattern(expr: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a bare or delimited expression. Raises ``re.error``."""
    if isinstance(expr, re.Pattern):
        return expr
    m = _DELIMITED.match(expr)
    if m is None:
        return re.compile(expr)
    flags = 0
    for letter in m.group("flags"):
        flags |= _FLAGS[letter]
    return re.compile(m.group("body"), flags)


def compile_or_none(expr: str | re.Pattern[str]) -> re.Pattern[str] | None:
    """Like :func:`compile_pattern` but an invalid expression yields ``None``."""
    try:
        return compile_pattern(expr)
    except re.error as exc:
        logger.debug("Ignoring invalid pattern %r: %s", expr, exc)
        return None


def search_regex(search: str) -> re.Pattern[str] | None:
    """Return the compiled search regex, or ``None`` for a plain substring.

    Only a valid delimited expression counts as a regex, so ordinary text
    containing metacharacters (``[WARN]``, ``a+b``) stays a substring search.
    """
    if not search or not is_delimited(search):
        return None
    return compile_or_none(search)


def compile_block_marker(marker: str | re.Pattern[str]) -> re.Pattern[str]:
    """Normalize a block-start marker into a line-start regex.

    Compiled patterns, delimited expressions and expressions already anchored
    with ``^`` are used as regexes. Anything else matches literally at the
    start of a line.
    """
    if isinstance(marker, re.Pattern):
        return marker
    if is_delimited(marker) or marker.startswith("^"):
        compiled = compile_or_none(marker)
        if compiled is not None:
            return compiled
    return re.compile("^" + re.escape(marker))
