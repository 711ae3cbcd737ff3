"""Tests for the backward line reader."""

from __future__ import annotations

import io

import pytest

from logtrail.tail.models import SeekOrigin
from logtrail.tail.reverse import (
    ReverseLineReader,
    decode_line,
    lines_from_bottom,
    resolve_offset,
)


class TestReverseLineReader:
    @pytest.mark.parametrize("chunk_size", [1, 3, 8192])
    def test_lines_newest_first(self, chunk_size):
        data = b"one\ntwo\nthree"
        reader = ReverseLineReader(io.BytesIO(data), len(data), chunk_size=chunk_size)
        assert list(reader) == [(8, b"three"), (4, b"two"), (0, b"one")]
        assert reader.position == 0

    def test_trailing_newline_yields_empty_line(self):
        data = b"one\ntwo\n"
        reader = ReverseLineReader(io.BytesIO(data), len(data), chunk_size=3)
        assert list(reader) == [(8, b""), (4, b"two"), (0, b"one")]

    def test_end_inside_file(self):
        data = b"one\ntwo\nthree\n"
        reader = ReverseLineReader(io.BytesIO(data), 8)
        assert list(reader) == [(8, b""), (4, b"two"), (0, b"one")]

    def test_position_tracks_last_yielded_line(self):
        data = b"one\ntwo\nthree"
        reader = ReverseLineReader(io.BytesIO(data), len(data))
        for offset, raw in reader:
            if raw == b"two":
                break
        assert reader.position == 4

    def test_empty_range(self):
        reader = ReverseLineReader(io.BytesIO(b""), 0)
        assert list(reader) == [(0, b"")]


class TestHelpers:
    def test_decode_utf8(self):
        assert decode_line("héllo".encode("utf-8")) == "héllo"

    def test_decode_falls_back_to_latin1(self):
        assert decode_line(b"caf\xe9") == "café"

    def test_decode_strips_carriage_return(self):
        assert decode_line(b"line\r") == "line"

    def test_resolve_offset(self):
        assert resolve_offset(100, 0, SeekOrigin.END) == 100
        assert resolve_offset(100, -10, SeekOrigin.END) == 90
        assert resolve_offset(100, 40, SeekOrigin.START) == 40
        assert resolve_offset(100, 40, SeekOrigin.CURRENT) == 40
        assert resolve_offset(100, 500, SeekOrigin.START) == 100
        assert resolve_offset(100, -500, SeekOrigin.END) == 0


class TestLinesFromBottom:
    def test_last_lines(self, write_log):
        path = write_log(["a", "", "b", "c"])
        assert lines_from_bottom(path, 2) == ["c", "b"]

    def test_more_than_available(self, write_log):
        path = write_log(["a", "b"])
        assert lines_from_bottom(path, 10) == ["b", "a"]

    def test_count_is_at_least_one(self, write_log):
        path = write_log(["a", "b"])
        assert lines_from_bottom(path, 0) == ["b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            lines_from_bottom(tmp_path / "nope.log")
