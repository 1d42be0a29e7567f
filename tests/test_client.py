import json
import time
from datetime import datetime

import pytest
import requests
from pdpyras import EventsAPISession, PDClientError
from requests.adapters import BaseAdapter

from pd_trigger import (EventsClient,
                        Severity,
                        SubmissionError,
                        TriggerConfig,
                        build_event)

from ._helpers import make_response


class CannedAdapter(BaseAdapter):
    """Transport adapter that answers every request with a canned response."""

    def __init__(self, status: int, body: dict):
        super().__init__()
        self.status = status
        self.body = body
        self.requests: list[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        if len(self.requests) >= 3:
            raise RuntimeError(f'retried: {len(self.requests)} requests sent')
        self.requests.append(request)
        r = make_response(self.status, json.dumps(self.body).encode('utf-8'),
                          url=request.url)
        r.request = request
        return r

    def close(self):
        pass


def _event(**overrides):
    kwargs = dict(
        routing_key='rk-456',
        source='myhost',
        severity=Severity.CRITICAL,
        dedup_key='dk-1',
        hostname='myhost',
        username='ops',
        timestamp=datetime(2024, 1, 1).astimezone(),
    )
    kwargs.update(overrides)
    return build_event('disk full', **kwargs)


def _client(adapter=None, *, debug=False):
    session = EventsAPISession('rk-456')
    if adapter is not None:
        session.mount('https://', adapter)
    return EventsClient('tok-123', 'rk-456', debug=debug, session=session), session


def test_session_setup():
    _, session = _client()

    assert session.headers['Authorization'] == 'Token token=tok-123'
    assert session.max_network_attempts == 0
    assert session.max_http_attempts == 1
    assert session.retry == {}


def test_from_config():
    client = EventsClient.from_config(TriggerConfig('tok', 'rk'))
    assert client.last_response() is None


def test_send_event_arguments(monkeypatch):
    client, session = _client()
    calls = []

    def send_event(action, dedup_key=None, **properties):
        calls.append((action, dedup_key, properties))
        return dedup_key

    monkeypatch.setattr(session, 'send_event', send_event)

    assert client.send_event(_event()) == 'dk-1'

    (action, dedup_key, properties), = calls
    assert action == 'trigger'
    assert dedup_key == 'dk-1'
    assert 'routing_key' not in properties
    assert properties['client'] == 'pd-trigger'
    assert properties['payload']['severity'] == 'critical'
    assert properties['payload']['summary'] == 'disk full'


def test_client_error_keeps_response(monkeypatch):
    client, session = _client()
    resp = make_response(400, b'{"status": "invalid event"}', reason='Bad Request')

    def send_event(*args, **kwargs):
        raise PDClientError('POST /v2/enqueue: 400 Bad Request', response=resp)

    monkeypatch.setattr(session, 'send_event', send_event)

    with pytest.raises(SubmissionError) as exc_info:
        client.send_event(_event())

    assert exc_info.value.response is resp
    assert exc_info.value.exit_code == 1
    assert client.last_response() is resp


def test_network_error_without_response(monkeypatch):
    client, session = _client()

    def send_event(*args, **kwargs):
        raise PDClientError('POST /v2/enqueue: network error')

    monkeypatch.setattr(session, 'send_event', send_event)

    with pytest.raises(SubmissionError) as exc_info:
        client.send_event(_event())

    assert exc_info.value.response is None
    assert client.last_response() is None


def test_round_trip_through_transport():
    adapter = CannedAdapter(202, {'status': 'success',
                                  'message': 'Event processed',
                                  'dedup_key': 'dk-1'})
    client, _ = _client(adapter)

    assert client.send_event(_event()) == 'dk-1'

    (request,) = adapter.requests
    body = json.loads(request.body)
    assert request.url == 'https://events.pagerduty.com/v2/enqueue'
    assert request.headers['Authorization'] == 'Token token=tok-123'
    assert body['routing_key'] == 'rk-456'
    assert body['event_action'] == 'trigger'
    assert body['dedup_key'] == 'dk-1'
    assert body['payload']['source'] == 'myhost'

    # not in debug mode: successful exchanges are not retained
    assert client.last_response() is None


def test_debug_captures_last_response():
    adapter = CannedAdapter(202, {'status': 'success', 'dedup_key': 'dk-1'})
    client, _ = _client(adapter, debug=True)

    client.send_event(_event())

    resp = client.last_response()
    assert resp is not None
    assert resp.status_code == 202
    assert resp.request is adapter.requests[0]


def test_http_error_through_transport():
    adapter = CannedAdapter(400, {'status': 'invalid event',
                                  'errors': ['Event object is invalid']})
    client, _ = _client(adapter)

    with pytest.raises(SubmissionError) as exc_info:
        client.send_event(_event())

    assert exc_info.value.response is not None
    assert exc_info.value.response.status_code == 400
    assert client.last_response() is exc_info.value.response


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr(time, 'sleep', lambda seconds: None)


@pytest.mark.parametrize('status', [429, 500, 502, 503])
def test_retryable_status_is_sent_once(no_sleep, status):
    adapter = CannedAdapter(status, {'status': 'throttled'})
    client, _ = _client(adapter)

    with pytest.raises(SubmissionError) as exc_info:
        client.send_event(_event())

    assert len(adapter.requests) == 1
    err = exc_info.value
    assert err.exit_code == 1
    assert err.response is not None
    assert err.response.status_code == status
    assert str(status) in str(err)
    assert client.last_response() is err.response


def test_rate_limited_in_debug_keeps_exchange(no_sleep):
    adapter = CannedAdapter(429, {'status': 'throttled'})
    client, _ = _client(adapter, debug=True)

    with pytest.raises(SubmissionError):
        client.send_event(_event())

    assert len(adapter.requests) == 1
    resp = client.last_response()
    assert resp.status_code == 429
    assert resp.request is adapter.requests[0]
