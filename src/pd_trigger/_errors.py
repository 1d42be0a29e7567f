from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ._constants import EXIT_SUBMISSION_FAILED, EXIT_USAGE

if TYPE_CHECKING:
    from requests import Response


class PdTriggerError(Exception):
    """Base class for errors that end a ``pd-trigger`` run."""
    exit_code: int = EXIT_USAGE


class ConfigFileError(PdTriggerError):
    """A single config candidate could not be opened or parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f'{path}: {reason}')
        self.path = path
        self.reason = reason


class ConfigError(PdTriggerError):
    """
    No usable configuration was found.

    ``last_error`` is the failure of the last candidate that was tried,
    if any of them failed outright.
    """

    def __init__(self, message: str, *, last_error: ConfigFileError | None = None):
        super().__init__(message)
        self.last_error = last_error


class SubmissionError(PdTriggerError):
    """The event could not be delivered to PagerDuty."""
    exit_code = EXIT_SUBMISSION_FAILED

    def __init__(self, message: str, *, response: Response | None = None):
        super().__init__(message)
        self.response = response
