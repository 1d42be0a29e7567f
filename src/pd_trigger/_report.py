from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console

from ._constants import ISSUES_URL, STATUS_URL
from ._errors import ConfigError, SubmissionError
from ._redact import redact

if TYPE_CHECKING:
    from requests import PreparedRequest, Response

SETUP_HELP = """\
Setup:

1. Generate the auth token:
    - Open your Pagerduty dashboard
    - Integrations -> API Access Keys -> Create New API Key
    - Description: pd-trigger
    - Create Key

2. Generate the integration key:
    - Open your Pagerduty dashboard
    - Services -> Service Directory
    - Select a service, or create a new one
    - Integrations
    - "Events API V2" (create the integration if it does not exist)
    - Integration Key

3. Create ~/.config/pagerduty.yml (per XDG_CONFIG_HOME),
   or /etc/xdg/pagerduty.yml (per XDG_CONFIG_DIRS),
   with the following contents:

    authtoken: "<your auth token>"
    integrationkey: "<your integration key>"
"""

FAILURE_HINT = f"""
This may indicate an error within this application, or (unlikely) an
issue with PagerDuty itself. Check <{STATUS_URL}> and
the issue tracker at <{ISSUES_URL}>."""

_INDENT = ' ' * 10


def _decode_body(raw: Any) -> Any:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8', errors='replace')
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _render(value: Any) -> str:
    value = redact(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, default=str, ensure_ascii=False)
    return str(value)


class Reporter:
    """All user-facing output of a ``pd-trigger`` run."""

    __slots__ = (
        '_console',
        '_debug',
    )

    def __init__(self, console: Console | None = None, *, debug: bool = False):
        self._console = console or Console(highlight=False)
        self._debug = debug

    def _out(self, text: str = '') -> None:
        # plain text, printed as-is
        self._console.print(text, markup=False, emoji=False,
                            highlight=False, soft_wrap=True)

    def usage_error(self, usage: str, message: str) -> None:
        self._out(usage)
        self._out(f'Error: {message}')

    def setup_help(self) -> None:
        self._out(SETUP_HELP)

    def config_error(self, err: ConfigError) -> None:
        self._out(f'Error: {err}')
        if err.last_error is not None:
            self._out(f'       last failure: {err.last_error}')
        self.setup_help()

    def success(self, dedup_key: str, response: Response | None = None) -> None:
        if not self._debug:
            return
        self._out(f'Response: dedup_key={dedup_key}')
        if response is not None:
            self.exchange(response)

    def failure(self, err: SubmissionError, response: Response | None = None) -> None:
        response = response if response is not None else err.response

        self._out(f'Error:    {err}')
        self._out(f'{_INDENT}{err!r}')
        if response is not None:
            self._out(f'RawResp:  {response.status_code} {response.reason} '
                      f'{response.url}')
            self._out(f'{_INDENT}{_render(dict(response.headers))}')
            self._out(f'{_INDENT}{_render(_decode_body(response.content))}')
            if self._debug and response.request is not None:
                self.request(response.request)
        self._out(FAILURE_HINT)

    def exchange(self, response: Response) -> None:
        if response.request is not None:
            self.request(response.request)
        self._out(f'Response: {response.status_code} {response.reason}')
        self._out(_render(dict(response.headers)))
        self._out(_render(_decode_body(response.content)))

    def request(self, request: PreparedRequest) -> None:
        self._out(f'Request:  {request.method} {request.url}')
        self._out(_render(dict(request.headers)))
        self._out(_render(_decode_body(request.body)))
