"""Record filter — per-field exclusions, then the global search expression."""

from __future__ import annotations

import re

from logtrail.tail.patterns import compile_or_none, search_regex


class RecordFilter:
    """Decides whether an extracted record is returned to the caller.

    Patterns are compiled once per scan. Invalid exclusion patterns never
    match; an invalid delimited search falls back to a substring search.
    """

    def __init__(
        self,
        exclude: dict[str, list[str]] | None = None,
        search: str = "",
    ) -> None:
        self._exclude: dict[str, list[re.Pattern[str]]] = {}
        for token, patterns in (exclude or {}).items():
            if isinstance(patterns, str):
                patterns = [patterns]
            compiled = [c for c in map(compile_or_none, patterns) if c is not None]
            if compiled:
                self._exclude[token] = compiled

        self.search = search
        self._search_regex = search_regex(search)

    @property
    def search_is_regex(self) -> bool:
        return self._search_regex is not None

    def is_excluded(self, fields: dict[str, str]) -> bool:
        for token, patterns in self._exclude.items():
            value = fields.get(token)
            if value is None:
                continue
            if any(p.search(value) for p in patterns):
                return True
        return False

    def matches_search(self, raw: str) -> bool:
        if not self.search:
            return True
        if self._search_regex is not None:
            return self._search_regex.search(raw) is not None
        return self.search in raw

    def passes(self, fields: dict[str, str], raw: str) -> bool:
        """Exclusions short-circuit: an excluded record is never searched."""
        if self.is_excluded(fields):
            return False
        return self.matches_search(raw)
