"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from event_manager.common.errors import ConfigError

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_section(cfg: dict, name: str, keys: set[str], allow_unknown: bool) -> dict:
    section = cfg[name]
    _assert_mapping(section, name)
    _assert_required_keys(section, keys, name)
    _assert_no_unknown_keys(section, keys, name, allow_unknown)
    return section


def _assert_positive_int(value, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{ctx} must be a positive integer")


def _assert_non_empty_str(value, ctx: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{ctx} must be a non-empty string")


def validate_event_manager_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "event manager config")
    top_known = {"inputs", "output", "registration", "civic_info", "logging"}
    _assert_required_keys(cfg, top_known, "event manager config")
    _assert_no_unknown_keys(cfg, top_known, "event manager config", allow_unknown)

    inputs = _assert_section(cfg, "inputs", {"attendees_csv", "secret_key", "template"}, allow_unknown)
    for key, value in inputs.items():
        _assert_non_empty_str(value, f"inputs.{key}")

    output = _assert_section(cfg, "output", {"letters_dir", "report_path"}, allow_unknown)
    for key, value in output.items():
        _assert_non_empty_str(value, f"output.{key}")

    registration = _assert_section(
        cfg,
        "registration",
        {"datetime_format", "top_hours", "top_weekdays"},
        allow_unknown,
    )
    _assert_non_empty_str(registration["datetime_format"], "registration.datetime_format")
    _assert_positive_int(registration["top_hours"], "registration.top_hours")
    _assert_positive_int(registration["top_weekdays"], "registration.top_weekdays")

    civic = _assert_section(
        cfg,
        "civic_info",
        {"endpoint", "levels", "roles", "timeout", "max_attempts"},
        allow_unknown,
    )
    _assert_non_empty_str(civic["endpoint"], "civic_info.endpoint")
    for key in ("levels", "roles"):
        if not isinstance(civic[key], list) or not all(isinstance(item, str) for item in civic[key]):
            raise ConfigError(f"civic_info.{key} must be a list of strings")
    _assert_mapping(civic["timeout"], "civic_info.timeout")
    _assert_required_keys(civic["timeout"], {"connect", "read"}, "civic_info.timeout")
    for key in ("connect", "read"):
        value = civic["timeout"][key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"civic_info.timeout.{key} must be a positive number")
    _assert_positive_int(civic["max_attempts"], "civic_info.max_attempts")

    logging_cfg = _assert_section(cfg, "logging", {"level"}, allow_unknown)
    if str(logging_cfg["level"]).upper() not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(sorted(LOG_LEVELS))}")

    return cfg
