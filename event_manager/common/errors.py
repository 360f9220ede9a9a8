"""Domain errors and failure typing."""

from __future__ import annotations

from pathlib import Path


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class MissingPrerequisiteError(PipelineError):
    """Raised before any record is processed when required inputs are absent."""

    error_code = "MISSING_PREREQUISITE"

    def __init__(self, missing: list[Path]) -> None:
        self.missing = list(missing)
        label = "Files" if len(self.missing) > 1 else "File"
        names = ", ".join(str(path) for path in self.missing)
        super().__init__(f"Missing {label}: {names}")


class StageError(PipelineError):
    """Raised for stage failures that halt the run."""

    error_code = "STAGE_ERROR"


class LetterWriteError(StageError):
    error_code = "LETTER_WRITE_ERROR"
