"""Peak registration report."""

from __future__ import annotations

from pathlib import Path

from event_manager.common.constants import REPORT_TITLE_WIDTH
from event_manager.common.fs import write_text
from event_manager.common.models import TopNResult


def _title(text: str) -> str:
    return text.center(REPORT_TITLE_WIDTH, "*")


def build_peak_report(
    peak_hours: TopNResult,
    peak_weekdays: TopNResult,
    *,
    top_hours: int = 5,
    top_weekdays: int = 3,
) -> str:
    lines = [_title(f"TOP {top_hours} Peak Hours")]
    for hour, count in peak_hours:
        lines.append(f"Hour: {hour}, Number of registrations: {count}")

    lines.append("")
    lines.append(_title(f"TOP {top_weekdays} Peak Weekdays"))
    for weekday, count in peak_weekdays:
        lines.append(f"Weekday: {weekday}, Number of registrations: {count}")

    return "\n".join(lines) + "\n"


def write_peak_report(path: Path, report_text: str) -> Path:
    write_text(path, report_text)
    return path
