"""Tests for expression compiling and the record filter."""

from __future__ import annotations

import re

import pytest

from logtrail.tail.filters import RecordFilter
from logtrail.tail.patterns import (
    compile_block_marker,
    compile_or_none,
    compile_pattern,
    is_delimited,
    search_regex,
)


class TestPatterns:
    def test_delimited_detection(self):
        assert is_delimited("/error/")
        assert is_delimited("/error/i")
        assert not is_delimited("error")
        assert not is_delimited("/var/log/syslog")

    def test_delimited_flags(self):
        pattern = compile_pattern("/^error$/im")
        assert pattern.flags & re.IGNORECASE
        assert pattern.search("ok\nERROR\n")

    def test_bare_pattern(self):
        assert compile_pattern(r"\d+").search("abc 42")

    def test_compiled_pattern_passes_through(self):
        pattern = re.compile("x")
        assert compile_pattern(pattern) is pattern

    def test_invalid_pattern(self):
        with pytest.raises(re.error):
            compile_pattern("/([/")
        assert compile_or_none("([") is None

    def test_search_mode(self):
        assert search_regex("") is None
        assert search_regex("[WARN]") is None
        assert search_regex("/[/") is None
        assert search_regex("/warn(ing)?/i").search("WARNING")

    def test_plain_block_marker_is_escaped_and_anchored(self):
        marker = compile_block_marker("[entry]")
        assert marker.search("[entry] one")
        assert not marker.search("e one")
        assert not marker.search("x [entry]")

    def test_anchored_block_marker_is_a_regex(self):
        marker = compile_block_marker("^BEGIN")
        assert marker.search("BEGIN 1")
        assert not marker.search("^BEGIN")

    def test_delimited_block_marker(self):
        marker = compile_block_marker("/^#\\d+/")
        assert marker.search("#12 start")
        assert not marker.search("# note")


class TestRecordFilter:
    def test_no_rules_passes(self):
        assert RecordFilter().passes({"level": "INFO"}, "raw")

    def test_exclusion_on_field(self):
        flt = RecordFilter(exclude={"level": ["/^DEBUG$/", "/^TRACE$/"]})
        assert not flt.passes({"level": "TRACE"}, "raw")
        assert flt.passes({"level": "INFO"}, "raw")

    def test_exclusion_ignores_unknown_tokens(self):
        flt = RecordFilter(exclude={"host": ["/.*/"]})
        assert flt.passes({"level": "INFO"}, "raw")

    def test_exclusion_accepts_single_string(self):
        flt = RecordFilter(exclude={"level": "/DEBUG/"})
        assert not flt.passes({"level": "DEBUG"}, "raw")

    def test_invalid_exclusion_never_matches(self):
        flt = RecordFilter(exclude={"level": ["/([/"]})
        assert flt.passes({"level": "([/"}, "raw")

    def test_substring_search_is_case_sensitive(self):
        flt = RecordFilter(search="Boom")
        assert not flt.search_is_regex
        assert flt.passes({}, "a Boom here")
        assert not flt.passes({}, "a boom here")

    def test_regex_search(self):
        flt = RecordFilter(search="/boom/i")
        assert flt.search_is_regex
        assert flt.passes({}, "a BOOM here")

    def test_excluded_record_is_not_searched(self):
        flt = RecordFilter(exclude={"level": ["/DEBUG/"]}, search="boom")
        calls = []
        original = flt.matches_search

        def spy(raw):
            calls.append(raw)
            return original(raw)

        flt.matches_search = spy
        assert not flt.passes({"level": "DEBUG"}, "boom")
        assert calls == []
