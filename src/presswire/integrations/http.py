"""JSON-over-HTTP helper shared by every outbound integration.

Non-2xx responses come back as an ``HttpResponse`` so callers decide what
counts as success (SendGrid answers 202, for instance).  Only
network-level failures raise.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from presswire.errors import HttpError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.text) if self.body else None


def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str] | None = None,
    timeout: float = 10,
) -> HttpResponse:
    """POST ``payload`` as JSON and return the response.

    Raises:
        HttpError: On connection failures, timeouts and malformed responses.
    """
    req = urllib.request.Request(
        url,
        data=json.dumps(payload).encode("utf-8"),
        method="POST",
        headers={"Content-Type": "application/json", **(headers or {})},
    )
    logger.debug("POST %s", url)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return HttpResponse(
                status=resp.status,
                body=resp.read(),
                headers=dict(resp.headers.items()),
            )
    except urllib.error.HTTPError as exc:
        return HttpResponse(
            status=exc.code,
            body=exc.read() or b"",
            headers=dict(exc.headers.items()) if exc.headers else {},
        )
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise HttpError(f"POST {url} failed: {exc}") from exc
