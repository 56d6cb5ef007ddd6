"""
Shared HTTP client with connection-level retry.

Provides a pre-configured ``requests.Session`` that retries failed
connections with a short backoff. Status-code retries are deliberately left
to the caller: the GBIF client must see every 429 immediately (to open its
circuit breaker) and counts 5xx exhaustion itself.

Usage::

    from species_resolver.services.http import create_session

    session = create_session(timeout=10)
    resp = session.get("https://api.gbif.org/v1/occurrence/search", params={...})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from species_resolver import __version__

#: Default retry strategy: reconnect only, no read or status retries.
DEFAULT_RETRY = Retry(
    total=2,
    connect=2,
    read=0,
    status=0,
    backoff_factor=0.5,  # 0s, 1s between reconnects
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = f"species-resolver/{__version__} (+https://www.gbif.org/developer/summary)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"

    # Inject a default timeout so no upstream call can block indefinitely.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
