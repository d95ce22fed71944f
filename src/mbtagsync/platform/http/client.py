"""Where: src/mbtagsync/platform/http/client.py
What: Single-attempt HTTP transport built on ``requests``.
Why: Give catalog, inventory and media-index clients one seam to fake in tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, cast

import requests

from mbtagsync.platform.logging import logger


class HTTPError(Exception):
    """Raised when a request cannot be performed at the transport level."""


@dataclass(slots=True)
class HTTPResponse:
    """Response fields the remote clients care about."""

    status: int
    reason: str = ""
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def status_text(self) -> str:
        return f"{self.status} {self.reason}".strip()


class HTTPClient(Protocol):
    """Protocol for transports able to issue GET and PUT requests."""

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> HTTPResponse:
        ...


class RequestsHTTPClient:
    """Perform requests through a shared ``requests.Session``; no retries."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session: requests.Session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> HTTPResponse:
        try:
            response = self._session.request(
                method,
                url,
                params=dict(params) if params else None,
                headers=dict(headers) if headers else None,
                timeout=timeout,
            )
        except requests.RequestException as exc:
            logger.debug("HTTP %s %s failed: %s", method, url, exc)
            raise HTTPError(f"{method} {url} failed: {exc}") from exc

        header_items = cast(Iterable[tuple[str, str]], response.headers.items())
        return HTTPResponse(
            status=int(response.status_code),
            reason=str(response.reason or ""),
            text=response.text,
            headers={str(key): str(value) for key, value in header_items},
        )


__all__ = ["HTTPClient", "HTTPError", "HTTPResponse", "RequestsHTTPClient"]
