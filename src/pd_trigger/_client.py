from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from pdpyras import EventsAPISession, PDClientError
from requests import HTTPError, RequestException

from ._errors import SubmissionError
from ._log import LOG
from ._models import Event, TriggerConfig

if TYPE_CHECKING:
    from requests import Response


def _refuse_retry(response: Response, *args, **kwargs) -> Response:
    if response.status_code == 429 or response.status_code >= 500:
        raise HTTPError(
            f"{response.status_code} {response.reason or ''}".rstrip(),
            response=response,
        )
    return response


class SupportsSendEvent(Protocol):

    def send_event(self, event: Event) -> str:
        """Submit ``event``; return the dedup key acknowledged by PagerDuty."""
        ...

    def last_response(self) -> Response | None:
        """Raw HTTP response of the last exchange, if one was captured."""
        ...


class EventsClient:
    """
    PagerDuty Events API v2 client.

    Thin wrapper around :class:`pdpyras.EventsAPISession` that:
        * authenticates with the configured auth token on top of the
          routing (integration) key
        * makes exactly one attempt per event
        * keeps the raw response of a failed call, and with ``debug``,
          of every call

    """
    __slots__ = (
        '_session',
        '_debug',
        '_last_response',
    )

    def __init__(
        self,
        auth_token: str,
        routing_key: str,
        *,
        debug: bool = False,
        session: EventsAPISession | None = None,
    ):
        self._session = session = session or EventsAPISession(routing_key)
        self._debug = debug
        self._last_response: Response | None = None

        session.headers['Authorization'] = f'Token token={auth_token}'

        # single attempt
        session.max_network_attempts = 0
        session.max_http_attempts = 1
        session.retry = {}

        if debug:
            session.hooks['response'].append(self._capture)
        # pdpyras sleeps and retries 429 unconditionally; end the exchange first
        session.hooks['response'].append(_refuse_retry)

    @classmethod
    def from_config(cls, config: TriggerConfig, *, debug: bool = False) -> EventsClient:
        return cls(config.auth_token, config.integration_key, debug=debug)

    def _capture(self, response: Response, *args, **kwargs) -> Response:
        self._last_response = response
        return response

    def last_response(self) -> Response | None:
        return self._last_response

    def send_event(self, event: Event) -> str:
        body: dict[str, Any] = event.to_dict()
        action = body.pop('event_action')
        dedup_key = body.pop('dedup_key')
        # the session adds its own routing key to every request body
        body.pop('routing_key')

        LOG.debug('Sending %s event (dedup_key=%s)', action, dedup_key)

        try:
            return self._session.send_event(action, dedup_key=dedup_key, **body)
        except PDClientError as e:
            cause = e.__cause__ or e.__context__
            if isinstance(cause, HTTPError) and cause.response is not None:
                # wrapped by pdpyras as a "network" failure
                err = self._failure(f'POST /v2/enqueue: {cause}', cause.response)
            else:
                err = self._failure(str(e), getattr(e, 'response', None))
            raise err from e
        except HTTPError as e:
            raise self._failure(f'POST /v2/enqueue: {e}', e.response) from e
        except RequestException as e:
            raise self._failure(str(e), e.response) from e

    def _failure(self, message: str, response: Response | None) -> SubmissionError:
        if response is not None:
            self._last_response = response
        return SubmissionError(message, response=response)
