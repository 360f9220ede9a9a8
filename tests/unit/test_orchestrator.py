from __future__ import annotations

from pathlib import Path

import pytest

from event_manager.common.constants import LOOKUP_FALLBACK_MESSAGE
from event_manager.common.errors import MissingPrerequisiteError, StageError
from event_manager.common.models import AttendeeRecord, LookupResult, Official
from event_manager.pipeline.letters import LetterRenderer
from event_manager.pipeline.orchestrator import (
    PipelineState,
    RegistrationPipeline,
    check_required_inputs,
    resolve_legislators,
)


def _attendee(record_id: str, regdate: str | None, zipcode: str | None = "20010", name: str = "allison") -> AttendeeRecord:
    return AttendeeRecord(
        id=record_id,
        first_name=name,
        zipcode=zipcode,
        registration_datetime=regdate,
        home_phone="(941)979-2000",
    )


class Collector:
    def __init__(self, lookup=None):
        self.lookup_calls: list[str] = []
        self.letters = []
        self.reports: list[str] = []
        self._lookup = lookup or (lambda _zipcode: LookupResult.success([Official(name="Jane Doe")]))

    def lookup(self, zipcode: str) -> LookupResult:
        self.lookup_calls.append(zipcode)
        return self._lookup(zipcode)

    def render(self, record) -> str:
        return f"{record.name}|{record.zipcode}|{record.phone}"

    def write_letter(self, record) -> None:
        self.letters.append(record)

    def write_report(self, text: str) -> str:
        self.reports.append(text)
        return "report.txt"

    def pipeline(self, **kwargs) -> RegistrationPipeline:
        return RegistrationPipeline(
            lookup=self.lookup,
            render=self.render,
            write_letter=self.write_letter,
            write_report=self.write_report,
            **kwargs,
        )


def test_check_required_inputs_lists_every_missing_path(tmp_path: Path):
    present = tmp_path / "secret.key"
    present.write_text("k", encoding="utf-8")

    with pytest.raises(MissingPrerequisiteError) as exc_info:
        check_required_inputs([tmp_path / "event_attendees.csv", present, tmp_path / "form_letter.html"])

    assert exc_info.value.missing == [tmp_path / "event_attendees.csv", tmp_path / "form_letter.html"]


def test_check_required_inputs_passes_when_all_present(tmp_path: Path):
    present = tmp_path / "secret.key"
    present.write_text("k", encoding="utf-8")
    check_required_inputs([present])


def test_resolve_legislators_turns_exceptions_into_fallback():
    def boom(_zipcode):
        raise RuntimeError("service down")

    result = resolve_legislators(boom, "20010")
    assert not result.ok
    assert result.fallback_message == LOOKUP_FALLBACK_MESSAGE


def test_resolve_legislators_wraps_plain_official_lists():
    result = resolve_legislators(lambda _zipcode: [Official(name="A")], "20010")
    assert result.ok
    assert result.official_names == ["A"]


def test_pipeline_processes_records_in_order_and_reports():
    collector = Collector()
    pipeline = collector.pipeline()
    records = [
        _attendee("1", "11/12/08 10:47", zipcode="7306", name="SArah"),
        _attendee("2", "11/12/08 13:23", zipcode=None),
        _attendee("3", "not a date", zipcode="481040"),
    ]

    result = pipeline.run(records)

    assert pipeline.state is PipelineState.DONE
    assert collector.lookup_calls == ["07306", "00000", "48104"]
    assert [letter.id for letter in collector.letters] == ["1", "2", "3"]
    assert collector.letters[0].letter == "Sarah|07306|9419792000"
    assert collector.letters[2].registered_at is None
    assert result.records == 3
    assert result.letters_written == 3
    assert result.invalid_timestamps == 1
    assert result.lookup_fallbacks == 0
    assert result.peak_hours == [("10", 1), ("13", 1)]
    assert result.peak_weekdays == [("Wednesday", 2)]
    assert result.report_path == "report.txt"
    assert collector.reports == [result.report_text]


def test_pipeline_substitutes_fallback_when_lookup_always_fails():
    def fail(_zipcode):
        raise ConnectionError("no network")

    failing = Collector(lookup=fail)
    working = Collector()
    records = [_attendee("1", "11/12/08 10:47"), _attendee("2", "11/25/08 19:21")]

    failed_result = failing.pipeline().run(records)
    ok_result = working.pipeline().run(records)

    assert failed_result.letters_written == 2
    assert failed_result.lookup_fallbacks == 2
    assert all(letter.legislators.fallback_message == LOOKUP_FALLBACK_MESSAGE for letter in failing.letters)
    assert failing.reports == working.reports
    assert ok_result.lookup_fallbacks == 0


def test_pipeline_cannot_run_twice():
    collector = Collector()
    pipeline = collector.pipeline()
    pipeline.run([_attendee("1", "11/12/08 10:47")])

    with pytest.raises(StageError):
        pipeline.run([_attendee("2", "11/12/08 10:47")])


def test_fresh_pipeline_starts_with_empty_tables():
    collector = Collector()
    records = [_attendee("1", "11/12/08 10:47")]

    first = collector.pipeline().run(records)
    second = collector.pipeline().run(records)

    assert first.peak_hours == second.peak_hours == [("10", 1)]
    assert collector.reports[0] == collector.reports[1]


def test_pipeline_honours_custom_top_sizes():
    collector = Collector()
    records = [
        _attendee("1", "11/12/08 10:47"),
        _attendee("2", "11/12/08 11:47"),
        _attendee("3", "11/13/08 11:00"),
    ]

    result = collector.pipeline(top_hours=1, top_weekdays=1).run(records)

    assert result.peak_hours == [("11", 2)]
    assert result.peak_weekdays == [("Wednesday", 2)]
    assert "TOP 1 Peak Hours" in result.report_text


def test_write_failure_propagates_and_keeps_earlier_letters():
    collector = Collector()

    def write_letter(record):
        if record.id == "2":
            raise StageError("disk full")
        collector.letters.append(record)

    pipeline = RegistrationPipeline(
        lookup=collector.lookup,
        render=collector.render,
        write_letter=write_letter,
        write_report=collector.write_report,
    )

    with pytest.raises(StageError):
        pipeline.run([_attendee("1", "11/12/08 10:47"), _attendee("2", "11/12/08 10:47")])

    assert [letter.id for letter in collector.letters] == ["1"]
    assert collector.reports == []


def test_resolve_legislators_treats_unusable_results_as_fallback():
    assert resolve_legislators(lambda _zipcode: None, "20010") == LookupResult.failure()
    assert resolve_legislators(lambda _zipcode: "Jane Doe", "20010") == LookupResult.failure()
    assert resolve_legislators(lambda _zipcode: [42], "20010") == LookupResult.failure()


def test_resolve_legislators_accepts_bare_names():
    result = resolve_legislators(lambda _zipcode: ["Jane Doe", Official(name="John Roe")], "20010")

    assert result.ok
    assert result.officials == (Official(name="Jane Doe"), Official(name="John Roe"))


def test_pipeline_renders_letters_from_bare_name_lookups():
    collector = Collector(lookup=lambda _zipcode: ["Jane Doe"])
    pipeline = RegistrationPipeline(
        lookup=collector.lookup,
        render=LetterRenderer("$legislators"),
        write_letter=collector.write_letter,
        write_report=collector.write_report,
    )

    result = pipeline.run([_attendee("1", "11/12/08 10:47")])

    assert result.lookup_fallbacks == 0
    assert "<td>Jane Doe</td>" in collector.letters[0].letter


def test_pipeline_survives_lookup_returning_none():
    collector = Collector(lookup=lambda _zipcode: None)

    result = collector.pipeline().run([_attendee("1", "11/12/08 10:47")])

    assert result.letters_written == 1
    assert result.lookup_fallbacks == 1
    assert collector.letters[0].legislators.fallback_message == LOOKUP_FALLBACK_MESSAGE
