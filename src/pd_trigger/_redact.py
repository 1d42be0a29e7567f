from __future__ import annotations

import re
from typing import Any

DEFAULT_SENSITIVE_KEYS = frozenset({
    # config file
    'authtoken',
    'integrationkey',
    # Events API v2 body
    'routing_key',
    # HTTP headers
    'authorization',
    'x-routing-key',
    'cookie',
    'set-cookie',
    # generic
    'token',
    'api_key',
    'secret',
})

BEARER_RE = re.compile(r'(?i)\bBearer\s+[A-Za-z0-9\-_.=+/]+')
TOKEN_RE = re.compile(r'(?i)\bToken\s+token=[^\s,"\']+')


def redact(value: Any,
           *,
           sensitive_keys: object = DEFAULT_SENSITIVE_KEYS,
           max_len: int = 4000) -> Any:

    # skip "falsy" values
    if not value:
        return value

    # string
    if isinstance(value, str):
        s = BEARER_RE.sub('Bearer [REDACTED]', value)
        s = TOKEN_RE.sub('Token token=[REDACTED]', s)
        if len(s) > max_len:
            return s[:max_len] + '…[TRUNCATED]'
        return s

    # dict (also covers requests' CaseInsensitiveDict via items())
    if hasattr(value, 'items'):
        out = {}
        for k, v in value.items():
            if str(k).lower() in sensitive_keys:
                out[k] = '[REDACTED]'
            else:
                out[k] = redact(
                    v,
                    sensitive_keys=sensitive_keys,
                    max_len=max_len,
                )
        return out

    # list/tuple
    if isinstance(value, (list, tuple)):
        return [redact(v, sensitive_keys=sensitive_keys, max_len=max_len)
                for v in value]

    # other scalars
    return value
