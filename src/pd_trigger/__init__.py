"""Top-level package for pd-trigger."""
from __future__ import annotations

__all__ = [
    # Event
    'build_event',
    'new_dedup_key',
    # Config
    'config_candidates',
    'load_config',
    'read_config_file',
    # Client
    'EventsClient',
    'SupportsSendEvent',
    # Classes
    'Event',
    'Payload',
    'Severity',
    'TriggerConfig',
    'LoadedConfig',
    'Reporter',
    # Errors
    'PdTriggerError',
    'ConfigError',
    'ConfigFileError',
    'SubmissionError',
]

from logging import NullHandler

from ._client import EventsClient, SupportsSendEvent
from ._config import load_config, read_config_file
from ._env_helpers import config_candidates
from ._errors import (PdTriggerError,
                      ConfigError,
                      ConfigFileError,
                      SubmissionError)
from ._event import build_event, new_dedup_key
from ._log import LOG
from ._models import Event, LoadedConfig, Payload, Severity, TriggerConfig
from ._report import Reporter


# Set up logging to ``/dev/null`` like a library is supposed to.
# http://docs.python.org/3.3/howto/logging.html#configuring-logging-for-a-library
LOG.addHandler(NullHandler())


def version():
    from importlib.metadata import version
    __version__ = version('pd-trigger')
    return __version__
