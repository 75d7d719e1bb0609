from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Callable, Generator, List
from unittest.mock import patch

import httpx
import pytest

from pipsbom.utils.http import HTTPClient, _parse_retry_after
from pipsbom.exceptions import NetworkError, PyPIError

URL = "https://pypi.org/pypi/requests/json"


def _client_with(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> HTTPClient:
    """Build an HTTPClient whose transport is served by ``handler``."""
    client = HTTPClient(**kwargs)
    client._client = httpx.Client(transport=httpx.MockTransport(handler))
    return client


@pytest.fixture(autouse=True)
def no_sleep() -> Generator[None, None, None]:
    """Skip real backoff delays."""
    with patch("pipsbom.utils.http.time.sleep"):
        yield


@pytest.mark.unit
class TestHTTPClientInit:
    """Tests for HTTPClient initialization and configuration."""

    def test_default_values(self) -> None:
        client = HTTPClient()

        assert client.timeout == 30
        assert client.max_retries == 3
        assert client.rate_limit_delay == 0.0
        assert client.verify_ssl is True
        assert client.user_agent.startswith("pipsbom/")
        assert client._client is None

    def test_custom_values(self) -> None:
        client = HTTPClient(
            timeout=10,
            max_retries=5,
            rate_limit_delay=0.5,
            verify_ssl=False,
            user_agent="CustomAgent/1.0",
        )

        assert client.timeout == 10
        assert client.max_retries == 5
        assert client.rate_limit_delay == 0.5
        assert client.verify_ssl is False
        assert client.user_agent == "CustomAgent/1.0"


@pytest.mark.unit
class TestHTTPClientLifecycle:
    """Tests for the context manager protocol."""

    def test_context_manager_creates_and_closes_client(self) -> None:
        client = HTTPClient()

        with client:
            assert isinstance(client._client, httpx.Client)

        assert client._client is None

    def test_close_without_client(self) -> None:
        client = HTTPClient()

        client.close()

        assert client._client is None

    def test_ensure_client_creates_once(self) -> None:
        client = HTTPClient()
        try:
            first = client._ensure_client()
            second = client._ensure_client()
            assert first is second
            assert first.headers["User-Agent"] == client.user_agent
        finally:
            client.close()


@pytest.mark.unit
class TestHTTPClientRequests:
    """Tests for retry and error mapping."""

    def test_get_json(self) -> None:
        client = _client_with(lambda request: httpx.Response(200, json={"info": {}}))

        assert client.get_json(URL) == {"info": {}}

    def test_strips_quotes_and_whitespace(self) -> None:
        seen: List[str] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        client = _client_with(_handler)
        client.get(f"  '{URL}' ")

        assert seen == [URL]

    def test_404_raises_pypi_error(self) -> None:
        client = _client_with(lambda request: httpx.Response(404))

        with pytest.raises(PyPIError) as exc_info:
            client.get(URL)

        assert exc_info.value.status_code == 404

    def test_4xx_raises_network_error_without_retry(self) -> None:
        calls: List[int] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(403, text="forbidden")

        client = _client_with(_handler)

        with pytest.raises(NetworkError) as exc_info:
            client.get(URL)

        assert exc_info.value.status_code == 403
        assert len(calls) == 1

    def test_5xx_retries_then_succeeds(self) -> None:
        responses = [httpx.Response(503), httpx.Response(200, json={"ok": True})]
        client = _client_with(lambda request: responses.pop(0))

        assert client.get_json(URL) == {"ok": True}

    def test_5xx_exhausts_retries(self) -> None:
        calls: List[int] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(500)

        client = _client_with(_handler, max_retries=2)

        with pytest.raises(NetworkError) as exc_info:
            client.get(URL)

        assert "after 3 attempts" in str(exc_info.value)
        assert len(calls) == 3

    def test_network_error_retries(self) -> None:
        calls: List[int] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                raise httpx.ConnectError("boom", request=request)
            return httpx.Response(200, json={})

        client = _client_with(_handler)

        assert client.get_json(URL) == {}
        assert len(calls) == 2

    def test_timeout_retries(self) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client_with(_handler, max_retries=1)

        with pytest.raises(NetworkError):
            client.get(URL)

    def test_429_honours_retry_after(self) -> None:
        responses = [
            httpx.Response(429, headers={"Retry-After": "2"}),
            httpx.Response(200, json={}),
        ]
        client = _client_with(lambda request: responses.pop(0))

        with patch("pipsbom.utils.http.time.sleep") as sleep_mock:
            client.get(URL)

        sleep_mock.assert_called_once_with(2)

    def test_429_limit(self) -> None:
        client = _client_with(lambda request: httpx.Response(429), max_retries=10)

        with pytest.raises(NetworkError) as exc_info:
            client.get(URL)

        assert exc_info.value.status_code == 429

    def test_invalid_json(self) -> None:
        client = _client_with(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(NetworkError) as exc_info:
            client.get_json(URL)

        assert "Invalid JSON" in str(exc_info.value)

    def test_non_object_json(self) -> None:
        client = _client_with(lambda request: httpx.Response(200, json=[1, 2]))

        with pytest.raises(NetworkError) as exc_info:
            client.get_json(URL)

        assert "Expected JSON object" in str(exc_info.value)


@pytest.mark.unit
class TestHTTPClientRateLimit:
    def test_no_delay_by_default(self) -> None:
        client = HTTPClient()

        with patch("pipsbom.utils.http.time.sleep") as sleep_mock:
            client._rate_limit()

        sleep_mock.assert_not_called()

    def test_enforces_delay(self) -> None:
        client = HTTPClient(rate_limit_delay=1.0)

        with patch("pipsbom.utils.http.time.monotonic", side_effect=[100.0, 100.25]), patch(
            "pipsbom.utils.http.time.sleep"
        ) as sleep_mock:
            client._rate_limit()
            client._rate_limit()

        sleep_mock.assert_called_once()
        assert sleep_mock.call_args[0][0] == pytest.approx(0.75)


@pytest.mark.unit
class TestHTTPClientTransportErrors:
    """Tests for failures raised by httpx before a response arrives."""

    def test_missing_scheme_raises_network_error(self) -> None:
        with HTTPClient(max_retries=0) as client:
            with pytest.raises(NetworkError) as exc_info:
                client.get("pypi.org/pypi/requests/json")

        assert isinstance(exc_info.value.__cause__, httpx.UnsupportedProtocol)

    def test_invalid_url_raises_network_error(self) -> None:
        client = _client_with(lambda request: httpx.Response(200, json={}))

        with pytest.raises(NetworkError):
            client.get("http://[invalid")

    def test_remote_protocol_error_retries(self) -> None:
        calls: List[int] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                raise httpx.RemoteProtocolError("peer closed connection", request=request)
            return httpx.Response(200, json={"ok": True})

        client = _client_with(_handler)

        assert client.get_json(URL) == {"ok": True}
        assert len(calls) == 2

    def test_remote_protocol_error_exhausts_retries(self) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.RemoteProtocolError("peer closed connection", request=request)

        client = _client_with(_handler, max_retries=1)

        with pytest.raises(NetworkError) as exc_info:
            client.get(URL)

        assert "after 2 attempts" in str(exc_info.value)


@pytest.mark.unit
class TestRetryAfterHeader:
    """Tests for Retry-After values other than delta-seconds."""

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Wed, 21 Oct 2015 07:28:00 GMT", 0.0),
            ("soon", 1.0),
            ("-5", 0.0),
        ],
        ids=["past-http-date", "garbage", "negative"],
    )
    def test_429_with_unusual_retry_after(self, header: str, expected: float) -> None:
        responses = [
            httpx.Response(429, headers={"Retry-After": header}),
            httpx.Response(200, json={}),
        ]
        client = _client_with(lambda request: responses.pop(0))

        with patch("pipsbom.utils.http.time.sleep") as sleep_mock:
            client.get(URL)

        sleep_mock.assert_called_once_with(expected)

    def test_future_http_date(self) -> None:
        later = datetime.now(timezone.utc) + timedelta(seconds=120)

        delay = _parse_retry_after(format_datetime(later, usegmt=True))

        assert 100 < delay <= 120

    def test_missing_header_uses_default(self) -> None:
        assert _parse_retry_after(None) == 1.0
