"""Configuration loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from event_manager.common.constants import DEFAULT_DATETIME_FORMAT
from event_manager.common.errors import ConfigError
from event_manager.common.fs import read_yaml
from event_manager.common.schema import validate_event_manager_config

DEFAULT_CONFIG_PATH = Path("config") / "event_manager.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "inputs": {
        "attendees_csv": "event_attendees.csv",
        "secret_key": "secret.key",
        "template": "form_letter.html",
    },
    "output": {
        "letters_dir": "output",
        "report_path": "peak_hours_and_weekdays.txt",
    },
    "registration": {
        "datetime_format": DEFAULT_DATETIME_FORMAT,
        "top_hours": 5,
        "top_weekdays": 3,
    },
    "civic_info": {
        "endpoint": "https://www.googleapis.com/civicinfo/v2/representatives",
        "levels": ["country"],
        "roles": ["legislatorUpperBody", "legislatorLowerBody"],
        "timeout": {"connect": 10, "read": 30},
        "max_attempts": 1,
    },
    "logging": {"level": "INFO"},
}


@dataclass(frozen=True)
class EventManagerConfig:
    attendees_csv: Path
    secret_key: Path
    template: Path
    letters_dir: Path
    report_path: Path
    datetime_format: str
    top_hours: int
    top_weekdays: int
    civic_info: dict
    log_level: str

    @property
    def required_inputs(self) -> list[Path]:
        return [self.attendees_csv, self.secret_key, self.template]


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_overlay(path: Path | None) -> dict:
    if path is None or not path.exists():
        return {}
    overlay = read_yaml(path)
    if overlay is None:
        return {}
    if not isinstance(overlay, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return overlay


def load_config(path: Path | None = DEFAULT_CONFIG_PATH, *, base_dir: Path | None = None) -> EventManagerConfig:
    """Merge the optional YAML file over ``DEFAULT_CONFIG`` and validate it.

    Relative paths in ``inputs`` and ``output`` resolve against ``base_dir``
    (the working directory when omitted).
    """
    raw = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), _load_overlay(path))
    cfg = validate_event_manager_config(raw)

    root = base_dir or Path(".")
    inputs = cfg["inputs"]
    output = cfg["output"]
    registration = cfg["registration"]
    return EventManagerConfig(
        attendees_csv=root / inputs["attendees_csv"],
        secret_key=root / inputs["secret_key"],
        template=root / inputs["template"],
        letters_dir=root / output["letters_dir"],
        report_path=root / output["report_path"],
        datetime_format=registration["datetime_format"],
        top_hours=registration["top_hours"],
        top_weekdays=registration["top_weekdays"],
        civic_info=cfg["civic_info"],
        log_level=str(cfg["logging"]["level"]).upper(),
    )
