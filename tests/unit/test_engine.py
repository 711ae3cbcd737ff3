"""Tests for the tail engine facade and result envelope."""

from __future__ import annotations

import os

import pytest

from logtrail.tail.engine import TailEngine, records_fingerprint
from logtrail.tail.models import Record, ScanRequest


class TestEngine:
    def test_line_mode_envelope(self, app_log_type, scenario_log):
        os.utime(scenario_log, (1704103201, 1704103201))
        request = app_log_type.to_request(
            scenario_log, data_to_parse=scenario_log.stat().st_size
        )
        result = TailEngine().scan(request)

        assert result.count == 2
        assert result.filesize == scenario_log.stat().st_size
        assert result.filemodifu == 1704103201
        assert result.filemodif == "2024/01/01 10:00:01"
        assert result.duration >= 0
        assert result.fingerprint == records_fingerprint(result.records)

    def test_file_time_uses_request_timezone(self, app_log_type, scenario_log):
        os.utime(scenario_log, (1704103201, 1704103201))
        request = app_log_type.to_request(scenario_log, timezone="Asia/Tokyo")
        result = TailEngine().scan(request)
        assert result.filemodif == "2024/01/01 19:00:01"
        assert result.filemodifu == 1704103201

    def test_block_marker_selects_block_mode(self, write_log):
        path = write_log(["BEGIN 1", "body", "BEGIN 2", "body"])
        request = ScanRequest(
            path=str(path),
            pattern=r"^BEGIN (\d+)",
            fields={"id": 1},
            block_start="^BEGIN",
        )
        result = TailEngine().scan(request)
        assert [r.raw for r in result.records] == ["BEGIN 2\nbody", "BEGIN 1\nbody"]

    def test_missing_file_is_fatal(self, app_log_type, tmp_path):
        with pytest.raises(FileNotFoundError):
            TailEngine().scan(app_log_type.to_request(tmp_path / "gone.log"))

    def test_invalid_pattern_is_rejected(self, scenario_log):
        request = ScanRequest(path=str(scenario_log), pattern="([", fields={"x": 1})
        with pytest.raises(ValueError, match="Invalid line pattern"):
            TailEngine().scan(request)

    def test_unknown_timezone_is_rejected(self, app_log_type, scenario_log):
        request = app_log_type.to_request(scenario_log, timezone="Nowhere/City")
        with pytest.raises(ValueError, match="Unknown timezone"):
            TailEngine().scan(request)

    def test_fingerprint_changes_with_records(self, app_log_type, scenario_log):
        engine = TailEngine()
        size = scenario_log.stat().st_size
        first = engine.scan(app_log_type.to_request(scenario_log, data_to_parse=size))
        again = engine.scan(app_log_type.to_request(scenario_log, data_to_parse=size))
        fewer = engine.scan(
            app_log_type.to_request(scenario_log, data_to_parse=size, wanted=1)
        )
        assert first.fingerprint == again.fingerprint
        assert first.fingerprint != fewer.fingerprint


class TestEnvelope:
    def test_to_dict_keys(self, app_log_type, scenario_log):
        request = app_log_type.to_request(
            scenario_log, data_to_parse=scenario_log.stat().st_size
        )
        data = TailEngine().scan(request).to_dict()

        assert data["count"] == 2
        assert data["errorlines"] == 1
        assert data["skiplines"] == 0
        assert data["abort"] is False
        assert data["lpo"] == 0
        newest = data["logs"][0]
        assert newest["level"] == "ERROR"
        assert newest["pml"] == "2024-01-01 10:00:01 ERROR boom"
        assert newest["pmld"] == 1704103201
        assert "pmlo" in newest

    def test_record_without_epoch_has_no_pmld(self):
        record = Record(fields={"a": "1"}, raw="1", offset=0)
        assert "pmld" not in record.to_dict()

    def test_empty_fingerprint_is_stable(self):
        assert records_fingerprint([]) == records_fingerprint([])
