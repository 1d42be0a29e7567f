from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from ._models import Event, Payload, Severity


def new_dedup_key() -> str:
    return str(uuid4())


def format_timestamp(ts: datetime) -> str:
    # RFC 3339; naive datetimes are taken as local time
    return ts.astimezone().isoformat(timespec='seconds')


def build_event(
    summary: str,
    *,
    routing_key: str,
    source: str,
    severity: Severity,
    dedup_key: str,
    hostname: str,
    username: str,
    timestamp: datetime,
) -> Event:
    """
    Assemble a ``trigger`` event ready for submission.

    Pure: everything that depends on the environment (host identity, clock,
    dedup key) is passed in by the caller.
    """
    payload = Payload(
        summary=summary,
        source=source,
        severity=severity,
        timestamp=format_timestamp(timestamp),
        details={
            'hostname': hostname,
            'username': username,
        },
    )
    return Event(
        routing_key=routing_key,
        dedup_key=dedup_key,
        payload=payload,
    )
