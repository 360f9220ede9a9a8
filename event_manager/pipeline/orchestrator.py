"""Single-pass attendee pipeline: normalise, enrich, render, aggregate."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable

from event_manager.common.constants import DEFAULT_DATETIME_FORMAT
from event_manager.common.errors import MissingPrerequisiteError, StageError
from event_manager.common.logging import log_event
from event_manager.common.models import AttendeeRecord, EnrichedRecord, LookupResult, Official, RunResult
from event_manager.common.normalizers import (
    capitalize_name,
    clean_phone_number,
    clean_zipcode,
    parse_registration_time,
)
from event_manager.common.time_utils import elapsed_ms
from event_manager.pipeline.registration_stats import RegistrationStats
from event_manager.pipeline.reports import build_peak_report

LookupFn = Callable[[str], LookupResult]
RenderFn = Callable[[EnrichedRecord], str]
WriteLetterFn = Callable[[EnrichedRecord], Any]
WriteReportFn = Callable[[str], Any]


class PipelineState(Enum):
    INIT = "init"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"


def check_required_inputs(paths: Iterable[Path]) -> None:
    missing = [path for path in paths if not Path(path).exists()]
    if missing:
        raise MissingPrerequisiteError(missing)


def _as_officials(result) -> list[Official]:
    if isinstance(result, (str, bytes)) or not isinstance(result, Iterable):
        raise TypeError(f"unexpected lookup result: {type(result).__name__}")
    officials = []
    for item in result:
        if isinstance(item, Official):
            officials.append(item)
        elif isinstance(item, str) and item:
            officials.append(Official(name=item))
        else:
            raise TypeError(f"unexpected official entry: {type(item).__name__}")
    return officials


def resolve_legislators(lookup: LookupFn, zipcode: str) -> LookupResult:
    """Call ``lookup``; any error or unusable result becomes the fallback message.

    Plain iterables of ``Official`` records or names count as success.
    """
    try:
        result = lookup(zipcode)
        if isinstance(result, LookupResult):
            return result
        return LookupResult.success(_as_officials(result))
    except Exception:
        return LookupResult.failure()


class RegistrationPipeline:
    """Drive every attendee record through the collaborators, then report.

    One instance handles exactly one run; build a new instance to start
    again from empty frequency tables.
    """

    def __init__(
        self,
        *,
        lookup: LookupFn,
        render: RenderFn,
        write_letter: WriteLetterFn,
        write_report: WriteReportFn,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
        top_hours: int = 5,
        top_weekdays: int = 3,
        logger: logging.Logger | None = None,
        run_id: str | None = None,
    ) -> None:
        self.lookup = lookup
        self.render = render
        self.write_letter = write_letter
        self.write_report = write_report
        self.datetime_format = datetime_format
        self.top_hours = top_hours
        self.top_weekdays = top_weekdays
        self.logger = logger or logging.getLogger("event_manager.pipeline")
        self.run_id = run_id
        self.stats = RegistrationStats()
        self.state = PipelineState.INIT

    def _log(self, message: str, *, level: int = logging.INFO, **fields: Any) -> None:
        log_event(self.logger, message, level=level, run_id=self.run_id, **fields)

    def enrich(self, attendee: AttendeeRecord) -> EnrichedRecord:
        zipcode = clean_zipcode(attendee.zipcode)
        legislators = resolve_legislators(self.lookup, zipcode)
        if not legislators.ok:
            self._log(
                "legislator lookup failed; using fallback message",
                level=logging.WARNING,
                stage="streaming",
                record_id=attendee.id,
                event="LOOKUP_FALLBACK",
                status="fallback",
            )

        registered_at = parse_registration_time(attendee.registration_datetime, self.datetime_format)
        return EnrichedRecord(
            attendee=attendee,
            name=capitalize_name(attendee.first_name),
            zipcode=zipcode,
            phone=clean_phone_number(attendee.home_phone),
            legislators=legislators,
            registered_at=registered_at if isinstance(registered_at, datetime) else None,
        )

    def run(self, records: Iterable[AttendeeRecord]) -> RunResult:
        if self.state is not PipelineState.INIT:
            raise StageError(f"Pipeline cannot run from state {self.state.value}")

        started = time.monotonic()
        self.state = PipelineState.STREAMING
        self._log("stage start", stage="streaming", event="STAGE_START", status="ok")

        processed = 0
        letters_written = 0
        fallbacks = 0
        for attendee in records:
            processed += 1
            record = self.enrich(attendee)
            if not record.legislators.ok:
                fallbacks += 1
            self.stats.record(attendee.registration_datetime, self.datetime_format)

            record = replace(record, letter=self.render(record))
            self.write_letter(record)
            letters_written += 1
            self._log(
                "letter written",
                level=logging.DEBUG,
                stage="streaming",
                record_id=record.id,
                event="LETTER_WRITTEN",
                status="ok",
            )

        self._log(
            "stage end",
            stage="streaming",
            event="STAGE_END",
            status="ok",
            rows_in=processed,
            rows_out=letters_written,
        )

        self.state = PipelineState.FINALIZING
        peak_hours = self.stats.peak_hours(self.top_hours)
        peak_weekdays = self.stats.peak_weekdays(self.top_weekdays)
        report_text = build_peak_report(
            peak_hours,
            peak_weekdays,
            top_hours=self.top_hours,
            top_weekdays=self.top_weekdays,
        )
        report_path = self.write_report(report_text)

        self.state = PipelineState.DONE
        self._log(
            "report written",
            stage="finalizing",
            event="STAGE_END",
            status="ok",
            duration_ms=elapsed_ms(started),
        )
        return RunResult(
            records=processed,
            letters_written=letters_written,
            lookup_fallbacks=fallbacks,
            invalid_timestamps=self.stats.skipped,
            peak_hours=peak_hours,
            peak_weekdays=peak_weekdays,
            report_text=report_text,
            report_path=report_path,
        )
