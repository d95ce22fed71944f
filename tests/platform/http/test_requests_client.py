from __future__ import annotations

import pytest
import requests
from pytest_mock import MockerFixture

from mbtagsync.platform.http import HTTPError, HTTPResponse, RequestsHTTPClient


def test_request_maps_response_fields(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.request.return_value = mocker.MagicMock(
        status_code=200,
        reason="OK",
        text='{"id": "rel-1"}',
        headers={"Content-Type": "application/json"},
    )
    client = RequestsHTTPClient(session)

    response = client.request(
        "GET",
        "https://example.org/ws/2/release/rel-1",
        params={"fmt": "json"},
        headers={"User-Agent": "app/1.0"},
        timeout=5.0,
    )

    assert response == HTTPResponse(
        status=200,
        reason="OK",
        text='{"id": "rel-1"}',
        headers={"Content-Type": "application/json"},
    )
    assert response.ok
    session.request.assert_called_once_with(
        "GET",
        "https://example.org/ws/2/release/rel-1",
        params={"fmt": "json"},
        headers={"User-Agent": "app/1.0"},
        timeout=5.0,
    )


def test_request_wraps_transport_errors(mocker: MockerFixture) -> None:
    session = mocker.MagicMock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("connection refused")
    client = RequestsHTTPClient(session)

    with pytest.raises(HTTPError, match="connection refused"):
        _ = client.request("GET", "http://localhost:1/", timeout=1.0)
    assert session.request.call_count == 1


def test_status_text_and_ok() -> None:
    response = HTTPResponse(status=503, reason="Service Unavailable")

    assert not response.ok
    assert response.status_text == "503 Service Unavailable"
    assert HTTPResponse(status=204).status_text == "204"
