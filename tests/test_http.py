"""Tests for the shared HTTP client with retry logic."""

from __future__ import annotations

from unittest.mock import patch

import requests
from urllib3.util.retry import Retry

from species_resolver.services.http import DEFAULT_RETRY, DEFAULT_TIMEOUT, create_session


class TestDefaultRetry:
    """Verify retry strategy configuration."""

    def test_reconnects_only(self) -> None:
        assert DEFAULT_RETRY.connect == 2
        assert DEFAULT_RETRY.read == 0

    def test_no_status_retries(self) -> None:
        # 429 and 5xx must reach the GBIF client untouched
        assert DEFAULT_RETRY.status == 0
        assert not DEFAULT_RETRY.status_forcelist

    def test_only_safe_methods(self) -> None:
        allowed = DEFAULT_RETRY.allowed_methods
        assert "GET" in allowed
        assert "POST" not in allowed

    def test_default_timeout(self) -> None:
        assert DEFAULT_TIMEOUT == 10


class TestCreateSession:
    """Verify session factory."""

    def test_returns_session(self) -> None:
        s = create_session()
        assert isinstance(s, requests.Session)

    def test_mounts_https_adapter(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://api.gbif.org")
        assert isinstance(adapter, requests.adapters.HTTPAdapter)

    def test_adapter_has_retry(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://api.gbif.org")
        assert adapter.max_retries.total == 2

    def test_custom_retry(self) -> None:
        custom = Retry(total=10, backoff_factor=1)
        s = create_session(retry=custom)
        adapter = s.get_adapter("https://api.gbif.org")
        assert adapter.max_retries.total == 10

    def test_headers(self) -> None:
        s = create_session()
        assert "species-resolver" in s.headers["User-Agent"]
        assert s.headers["Accept"] == "application/json"

    def test_default_timeout_injected(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.gbif.org/v1").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 42

    def test_explicit_timeout_not_overridden(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.gbif.org/v1").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep, timeout=99)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 99
