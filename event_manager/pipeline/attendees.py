"""Attendee CSV reading."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from event_manager.common.fs import iter_csv_rows
from event_manager.common.models import AttendeeRecord

_NON_WORD_RE = re.compile(r"[^\s\w]+")
_WHITESPACE_RE = re.compile(r"\s+")

FIELD_COLUMNS = {
    "first_name": "first_name",
    "zipcode": "zipcode",
    "registration_datetime": "regdate",
    "last_name": "last_name",
    "home_phone": "homephone",
    "email": "email_address",
}


def symbolize_header(header: str) -> str:
    cleaned = _NON_WORD_RE.sub("", header.lower()).strip()
    return _WHITESPACE_RE.sub("_", cleaned)


def _value(row: list[str], index: int | None) -> str | None:
    if index is None or index >= len(row):
        return None
    return row[index]


def parse_attendee_rows(rows: Iterable[list[str]]) -> Iterator[AttendeeRecord]:
    """Yield one record per data row; the first column is always the id."""
    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        return

    positions: dict[str, int] = {}
    for idx, name in enumerate(header):
        positions.setdefault(symbolize_header(name), idx)

    columns = {field: positions.get(column) for field, column in FIELD_COLUMNS.items()}
    for row in iterator:
        if not row:
            continue
        yield AttendeeRecord(
            id=row[0],
            **{field: _value(row, idx) for field, idx in columns.items()},
        )


def read_attendees(path: Path) -> Iterator[AttendeeRecord]:
    yield from parse_attendee_rows(iter_csv_rows(path))
