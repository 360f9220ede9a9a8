"""CLI entrypoint for the event manager attendee pipeline."""

from __future__ import annotations

import argparse
import sys

from event_manager.common.config_loader import DEFAULT_CONFIG_PATH, EventManagerConfig, load_config
from event_manager.common.constants import BANNER, EXIT_FAILURE, EXIT_SUCCESS
from event_manager.common.errors import MissingPrerequisiteError, PipelineError
from event_manager.common.ids import generate_run_id
from event_manager.common.logging import build_logger, close_logger, log_event
from event_manager.pipeline.attendees import read_attendees
from event_manager.pipeline.civic_lookup import CivicInfoLookup, read_api_key
from event_manager.pipeline.letters import LetterRenderer, LetterWriter
from event_manager.pipeline.orchestrator import RegistrationPipeline, check_required_inputs
from event_manager.pipeline.reports import write_peak_report


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    return parser.parse_args(argv)


def run_command(config: EventManagerConfig, run_id: str | None = None) -> int:
    run_id = run_id or generate_run_id()

    try:
        check_required_inputs(config.required_inputs)
    except MissingPrerequisiteError as exc:
        print(exc, file=sys.stderr)
        return EXIT_FAILURE

    print(BANNER, end="\n\n")

    logger = build_logger(run_id, log_dir=config.letters_dir / "run_meta", level=config.log_level)
    log_event(logger, "run start", run_id=run_id, event="RUN_START", status="ok")

    lookup = CivicInfoLookup.from_config(config.civic_info, read_api_key(config.secret_key))
    try:
        pipeline = RegistrationPipeline(
            lookup=lookup,
            render=LetterRenderer.from_path(config.template),
            write_letter=LetterWriter(config.letters_dir),
            write_report=lambda text: write_peak_report(config.report_path, text),
            datetime_format=config.datetime_format,
            top_hours=config.top_hours,
            top_weekdays=config.top_weekdays,
            logger=logger,
            run_id=run_id,
        )
        result = pipeline.run(read_attendees(config.attendees_csv))
        log_event(
            logger,
            "run end",
            run_id=run_id,
            event="RUN_END",
            status="ok",
            rows_in=result.records,
            rows_out=result.letters_written,
        )
        return EXIT_SUCCESS
    except PipelineError as exc:
        log_event(logger, str(exc), run_id=run_id, event="RUN_FAIL", status="error", error_code=exc.error_code)
        return EXIT_FAILURE
    finally:
        lookup.close()
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(DEFAULT_CONFIG_PATH)
    except PipelineError as exc:
        print(exc, file=sys.stderr)
        return EXIT_FAILURE
    try:
        return run_command(config)
    except Exception as exc:
        print(f"Event manager failed: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
