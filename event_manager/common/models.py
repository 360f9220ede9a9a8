"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from event_manager.common.constants import LOOKUP_FALLBACK_MESSAGE

FrequencyTable = dict[str, int]
TopNResult = list[tuple[str, int]]


@dataclass(frozen=True)
class AttendeeRecord:
    id: str
    first_name: str | None
    zipcode: str | None
    registration_datetime: str | None
    last_name: str | None = None
    home_phone: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class Official:
    name: str
    party: str | None = None
    phones: tuple[str, ...] = ()
    urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a legislator lookup: officials, or the fallback message."""

    officials: tuple[Official, ...] = ()
    fallback_message: str | None = None

    @classmethod
    def success(cls, officials) -> "LookupResult":
        return cls(officials=tuple(officials))

    @classmethod
    def failure(cls, message: str = LOOKUP_FALLBACK_MESSAGE) -> "LookupResult":
        return cls(fallback_message=message)

    @property
    def ok(self) -> bool:
        return self.fallback_message is None

    @property
    def official_names(self) -> list[str]:
        return [official.name for official in self.officials]


@dataclass(frozen=True)
class EnrichedRecord:
    attendee: AttendeeRecord
    name: str
    zipcode: str
    phone: str
    legislators: LookupResult
    registered_at: datetime | None = None
    letter: str | None = None

    @property
    def id(self) -> str:
        return self.attendee.id


@dataclass(frozen=True)
class RunResult:
    records: int
    letters_written: int
    lookup_fallbacks: int
    invalid_timestamps: int
    peak_hours: TopNResult = field(default_factory=list)
    peak_weekdays: TopNResult = field(default_factory=list)
    report_text: str = ""
    report_path: Any = None
