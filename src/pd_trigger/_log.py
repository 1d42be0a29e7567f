from logging import DEBUG, WARNING, getLogger

from rich.console import Console
from rich.logging import RichHandler

LOG = getLogger('pd_trigger')

# Loggers worth hearing from with --debug
_DEBUG_LOGGERS = ('pd_trigger', 'pdpyras', 'urllib3')


def quiet_third_party_logs(level: int = WARNING) -> None:
    # pdpyras / requests stack
    for name in (
        'pdpyras',
        'urllib3',
        'requests',
    ):
        getLogger(name).setLevel(level)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for a single CLI run.

    With ``debug``, log records from this package and the HTTP stack are
    rendered on stderr; otherwise third-party chatter is kept to warnings.
    """
    if not debug:
        quiet_third_party_logs()
        LOG.setLevel(WARNING)
        return

    handler = RichHandler(console=Console(stderr=True),
                          show_path=False,
                          markup=False)
    handler.setLevel(DEBUG)

    for name in _DEBUG_LOGGERS:
        log = getLogger(name)
        if not any(isinstance(h, RichHandler) for h in log.handlers):
            log.addHandler(handler)
        log.setLevel(DEBUG)
        log.propagate = False
