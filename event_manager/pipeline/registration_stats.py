"""Registration time aggregation and peak selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from event_manager.common.constants import WEEKDAY_NAMES
from event_manager.common.deterministic import stable_sorted
from event_manager.common.models import FrequencyTable, TopNResult
from event_manager.common.normalizers import parse_registration_time


def count_of(table: FrequencyTable, key: str) -> int:
    return table.get(key, 0)


def increment(table: FrequencyTable, key: str) -> None:
    table[key] = count_of(table, key) + 1


def hour_key(moment: datetime) -> str:
    return str(moment.hour)


def weekday_key(moment: datetime) -> str:
    # Independent of the process locale, unlike strftime("%A").
    return WEEKDAY_NAMES[moment.weekday()]


def log_registration_time(
    date_time_string,
    fmt: str,
    registration_hours: FrequencyTable,
    registration_weekdays: FrequencyTable,
) -> bool:
    """Count one registration in both tables.

    Returns False, leaving both tables untouched, when the timestamp does not
    parse with ``fmt``.
    """
    moment = parse_registration_time(date_time_string, fmt)
    if not isinstance(moment, datetime):
        return False

    increment(registration_hours, hour_key(moment))
    increment(registration_weekdays, weekday_key(moment))
    return True


def top_n(table: FrequencyTable, n: int) -> TopNResult:
    """Return the ``n`` highest counts, descending.

    Equal counts keep the order in which their keys were first seen.
    """
    if n <= 0:
        return []
    ranked = stable_sorted(table.items(), key=lambda item: -item[1])
    return ranked[:n]


@dataclass
class RegistrationStats:
    hours: FrequencyTable = field(default_factory=dict)
    weekdays: FrequencyTable = field(default_factory=dict)
    skipped: int = 0

    def record(self, date_time_string, fmt: str) -> bool:
        logged = log_registration_time(date_time_string, fmt, self.hours, self.weekdays)
        if not logged:
            self.skipped += 1
        return logged

    def peak_hours(self, n: int = 5) -> TopNResult:
        return top_n(self.hours, n)

    def peak_weekdays(self, n: int = 3) -> TopNResult:
        return top_n(self.weekdays, n)
