"""Load and resolve LogType objects from YAML files."""

from __future__ import annotations

import importlib.resources
from pathlib import Path
from typing import Any

import yaml

from logtrail.types.models import LogType

_PRESET_PREFIX = "preset:"
_PRESET_PACKAGE = "logtrail.types.presets"


def load_log_type(path: str | Path, _resolved: set[str] | None = None) -> LogType:
    """Load a log type from a YAML file path."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Log type YAML must be a mapping")
    return _build_log_type(data, _resolved=_resolved if _resolved is not None else set())


def load_log_type_from_string(text: str) -> LogType:
    """Parse a YAML string into a LogType, resolving inheritance."""
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Log type YAML must be a mapping")
    return _build_log_type(data, _resolved=set())


def find_log_type(ref: str, type_dirs: list[Path] | None = None) -> LogType:
    """Resolve ``preset:<name>``, a YAML path, or a name from the user type dirs."""
    if ref.startswith(_PRESET_PREFIX) or Path(ref).is_file():
        return _load_ref(ref, set())
    for directory in type_dirs or []:
        candidate = directory / f"{ref}.yaml"
        if candidate.is_file():
            return load_log_type(candidate)
    raise ValueError(f"Unknown log type: {ref}")


def list_presets() -> list[str]:
    """Names of the bundled presets, usable as ``preset:<name>``."""
    pkg = importlib.resources.files(_PRESET_PACKAGE)
    return sorted(
        entry.name[: -len(".yaml")]
        for entry in pkg.iterdir()
        if entry.name.endswith(".yaml")
    )


def _build_log_type(data: dict, _resolved: set[str]) -> LogType:
    name = data.get("name", "unnamed")

    # Circular inheritance detection
    if name in _resolved:
        raise ValueError(f"Circular log type inheritance detected: {name}")
    _resolved.add(name)

    inherit_list = data.get("inherit", [])
    if isinstance(inherit_list, str):
        inherit_list = [inherit_list]

    # Parents first, so the definition's own keys win
    merged: dict[str, Any] = {"match": {}, "types": {}, "exclude": {}}
    for ref in inherit_list:
        parent = _load_ref(ref, _resolved)
        _merge(merged, _as_data(parent))
    _merge(merged, data)

    regex = merged.get("regex")
    if not regex:
        raise ValueError(f"Log type '{name}' must define a regex")
    if not isinstance(merged["match"], dict) or not merged["match"]:
        raise ValueError(f"Log type '{name}' must map at least one field in 'match'")

    return LogType(
        name=name,
        regex=regex,
        match=dict(merged["match"]),
        types={str(k): str(v) for k, v in merged["types"].items()},
        exclude=_parse_exclude(merged["exclude"]),
        multiline=merged.get("multiline") or "",
        block_start=merged.get("block_start") or "",
        description=data.get("description", ""),
        inherit=tuple(inherit_list),
    )


def _merge(target: dict[str, Any], data: dict[str, Any]) -> None:
    for key, value in data.items():
        if key in ("match", "types", "exclude"):
            # An empty YAML key ("types:") loads as None
            if value is None:
                continue
            if not isinstance(value, dict):
                raise ValueError(f"'{key}' must be a mapping, got {type(value).__name__}")
            target[key].update(value)
        else:
            target[key] = value


def _as_data(log_type: LogType) -> dict[str, Any]:
    return {
        "regex": log_type.regex,
        "match": log_type.match,
        "types": log_type.types,
        "exclude": {token: list(p) for token, p in log_type.exclude.items()},
        "multiline": log_type.multiline,
        "block_start": log_type.block_start,
    }


def _parse_exclude(exclude_data: dict) -> dict[str, tuple[str, ...]]:
    exclude: dict[str, tuple[str, ...]] = {}
    for token, patterns in exclude_data.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        exclude[str(token)] = tuple(str(p) for p in patterns)
    return exclude


def _load_ref(ref: str, _resolved: set[str]) -> LogType:
    if ref.startswith(_PRESET_PREFIX):
        preset_name = ref[len(_PRESET_PREFIX) :]
        return _load_preset(preset_name, _resolved)
    # Treat as file path
    return load_log_type(ref, _resolved=_resolved)


def _load_preset(name: str, _resolved: set[str]) -> LogType:
    filename = f"{name}.yaml"
    pkg = importlib.resources.files(_PRESET_PACKAGE)
    resource = pkg.joinpath(filename)
    if not resource.is_file():
        raise ValueError(f"Unknown preset: {name}")
    text = resource.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return _build_log_type(data, _resolved)
