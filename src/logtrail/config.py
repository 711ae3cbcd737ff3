"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "logtrail"
    return Path.home() / ".config" / "logtrail"


@dataclass
class LogTrailConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    type_dirs: list[Path] = field(default_factory=list)
    wanted: int = 10
    max_search_log_time: float = 5.0
    poll_interval: float = 2.0
    timezone: str | None = None
    verbose: bool = False

    @classmethod
    def load(cls) -> LogTrailConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_wanted = os.environ.get("LOGTRAIL_WANTED")
        if env_wanted:
            config.wanted = int(env_wanted)

        env_max_time = os.environ.get("LOGTRAIL_MAX_SEARCH_LOG_TIME")
        if env_max_time:
            config.max_search_log_time = float(env_max_time)

        env_interval = os.environ.get("LOGTRAIL_POLL_INTERVAL")
        if env_interval:
            config.poll_interval = float(env_interval)

        env_tz = os.environ.get("LOGTRAIL_TIMEZONE")
        if env_tz:
            config.timezone = env_tz

        # User log type definitions live in the config dir's types/ subdirectory
        types_dir = config.config_dir / "types"
        if types_dir.is_dir():
            config.type_dirs.append(types_dir)

        return config
