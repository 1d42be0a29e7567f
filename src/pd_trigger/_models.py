from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from ._constants import CLIENT_NAME, CLIENT_URL


class Severity(str, Enum):
    CRITICAL = 'critical'
    WARNING = 'warning'
    ERROR = 'error'
    INFO = 'info'

    @classmethod
    def from_prefix(cls, token: str | None) -> Severity:
        """
        Resolve a (possibly abbreviated) severity name.

        The token is matched case-insensitively as a prefix of each full
        name, in declaration order; the first match wins.

        :raises ValueError: if the token is empty or matches nothing
        """
        s = (token or '').strip().lower()
        if s:
            for member in cls:
                if member.value.startswith(s):
                    return member

        names = ', '.join(m.value for m in cls)
        raise ValueError(f'Severity must be one of: {names}')


def _as_str(v: Any) -> str:
    if v is None:
        return ''
    return v if isinstance(v, str) else str(v)


@dataclass(frozen=True, slots=True)
class TriggerConfig:
    auth_token: str = ''
    integration_key: str = ''
    # ignored; kept so config files shared with other PagerDuty tools still load
    log_level: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.auth_token and self.integration_key)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TriggerConfig:
        log_level = data.get('loglevel')
        return cls(
            auth_token=_as_str(data.get('authtoken')),
            integration_key=_as_str(data.get('integrationkey')),
            log_level=None if log_level is None else _as_str(log_level),
        )


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    config: TriggerConfig
    path: Path


@dataclass(slots=True)
class Payload:
    summary: str
    source: str
    severity: Severity
    timestamp: str                # RFC 3339, local offset
    details: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            'summary': self.summary,
            'source': self.source,
            'severity': self.severity.value,
            'timestamp': self.timestamp,
            'custom_details': dict(self.details),
        }


@dataclass(slots=True)
class Event:
    routing_key: str
    dedup_key: str
    payload: Payload
    action: str = 'trigger'
    client: str = CLIENT_NAME
    client_url: str = CLIENT_URL
    images: list[dict[str, Any]] = field(default_factory=list)
    links: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Events API v2 request body."""
        return {
            'routing_key': self.routing_key,
            'event_action': self.action,
            'dedup_key': self.dedup_key,
            'client': self.client,
            'client_url': self.client_url,
            'payload': self.payload.to_dict(),
            'images': list(self.images),
            'links': list(self.links),
        }
