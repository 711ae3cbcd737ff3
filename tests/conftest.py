"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from logtrail.types.models import LogType

APP_REGEX = r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) (\w+) (.*)$"

SCENARIO_LINES = [
    "2024-01-01 10:00:00 INFO hello",
    "not a log line",
    "2024-01-01 10:00:01 ERROR boom",
]


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def app_type_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "app_type.yaml"


@pytest.fixture
def app_log_type() -> LogType:
    return LogType(
        name="app",
        regex=APP_REGEX,
        match={"date": 1, "level": 2, "message": 3},
        types={"date": "date"},
    )


@pytest.fixture
def write_log(tmp_path: Path) -> Callable[..., Path]:
    """Write lines to a log file; each line gets a trailing newline."""

    def _write(lines: list[str], name: str = "app.log") -> Path:
        path = tmp_path / name
        path.write_bytes("".join(f"{line}\n" for line in lines).encode("utf-8"))
        return path

    return _write


@pytest.fixture
def scenario_log(write_log: Callable[..., Path]) -> Path:
    return write_log(SCENARIO_LINES)
