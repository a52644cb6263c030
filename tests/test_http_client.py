"""Tests for sfg2pem.http_client.

All tests mock requests.Session.get so no real HTTP calls are made.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from sfg2pem.errors import TransportError, TransportErrorKind
from sfg2pem.http_client import ApiResponse, HttpResourceClient
from sfg2pem.secret_buffer import SecretBuffer


URL = "https://sfg-prod.example.com/B2BAPIs/svc/tradingpartners/"


def _requests_response(status=200, reason="OK", body=b"", headers=None, version=11):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = body
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = MagicMock(version=version)
    return response


def _get(client, url=URL, host="sfg-prod.example.com", password="secret"):
    return client.get(url, {"Accept": "application/json"}, "admin", SecretBuffer(password), host)


# ---------------------------------------------------------------------------
# ApiResponse
# ---------------------------------------------------------------------------


def test_header_lookup_is_case_insensitive():
    response = ApiResponse("200", "HTTP/1.1 200 OK", "", (("content-range", "items 0-999/2500"),))
    assert response.header("Content-Range") == "items 0-999/2500"
    assert response.header("CONTENT-RANGE") == "items 0-999/2500"
    assert response.header("ETag") is None


def test_header_last_occurrence_wins():
    response = ApiResponse("200", "HTTP/1.1 200 OK", "", (("X-Total", "1"), ("x-total", "2")))
    assert response.header("X-Total") == "2"


def test_from_requests():
    raw = _requests_response(404, "Not Found", b"<errors/>", {"Content-Type": "application/xml"})
    response = ApiResponse.from_requests(raw)
    assert response.status_code == "404"
    assert response.status_line == "HTTP/1.1 404 Not Found"
    assert response.response == "<errors/>"
    assert response.response_headers == (("Content-Type", "application/xml"),)


def test_from_requests_http_10():
    response = ApiResponse.from_requests(_requests_response(version=10))
    assert response.status_line == "HTTP/1.0 200 OK"


# ---------------------------------------------------------------------------
# get()
# ---------------------------------------------------------------------------


def test_get_returns_error_statuses_without_raising():
    client = HttpResourceClient()
    with patch.object(client._session, "get", return_value=_requests_response(500, "Server Error")):
        response = _get(client)
    assert response.status_code == "500"


def test_get_sends_headers_and_basic_auth():
    client = HttpResourceClient(verify="/etc/certs/corp.pem", timeout=15)
    with patch.object(client._session, "get", return_value=_requests_response()) as mock_get:
        _get(client)
    args, kwargs = mock_get.call_args
    assert args[0] == URL
    assert kwargs["headers"] == {"Accept": "application/json"}
    assert kwargs["auth"].username == "admin"
    assert kwargs["auth"].password == "secret"
    assert kwargs["verify"] == "/etc/certs/corp.pem"
    assert kwargs["timeout"] == 15


def test_host_with_port_still_in_scope():
    client = HttpResourceClient()
    with patch.object(client._session, "get", return_value=_requests_response()) as mock_get:
        _get(client, host="SFG-PROD.example.com:443")
    assert mock_get.call_args[1]["auth"] is not None


def test_credentials_not_sent_to_other_host():
    client = HttpResourceClient()
    with patch.object(client._session, "get", return_value=_requests_response()) as mock_get:
        _get(client, host="other.example.com")
    assert mock_get.call_args[1]["auth"] is None


def test_default_timeout_is_not_overridden():
    client = HttpResourceClient()
    with patch.object(client._session, "get", return_value=_requests_response()) as mock_get:
        _get(client)
    assert mock_get.call_args[1]["timeout"] is None


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


def test_connection_error_wrapped():
    client = HttpResourceClient()
    cause = requests.exceptions.ConnectionError("Connection refused")
    with patch.object(client._session, "get", side_effect=cause):
        with pytest.raises(TransportError) as excinfo:
            _get(client)
    assert excinfo.value.kind is TransportErrorKind.IO
    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause


def test_certificate_error_wrapped():
    client = HttpResourceClient()
    cause = requests.exceptions.SSLError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")
    with patch.object(client._session, "get", side_effect=cause):
        with pytest.raises(TransportError) as excinfo:
            _get(client)
    assert excinfo.value.kind is TransportErrorKind.CERTIFICATE


def test_malformed_url():
    client = HttpResourceClient()
    with pytest.raises(TransportError) as excinfo:
        _get(client, url="sfg-prod.example.com/no-scheme", host="")
    assert excinfo.value.kind is TransportErrorKind.MALFORMED_URL


def test_empty_url_rejected_before_sending():
    client = HttpResourceClient()
    with patch.object(client._session, "get") as mock_get:
        with pytest.raises(TransportError) as excinfo:
            _get(client, url="")
    assert excinfo.value.kind is TransportErrorKind.VALIDATION
    mock_get.assert_not_called()


def test_missing_username_rejected_before_sending():
    client = HttpResourceClient()
    with patch.object(client._session, "get") as mock_get:
        with pytest.raises(TransportError) as excinfo:
            client.get(URL, {}, "", SecretBuffer("secret"), "sfg-prod.example.com")
    assert excinfo.value.kind is TransportErrorKind.VALIDATION
    mock_get.assert_not_called()


def test_ipv6_host_with_port_in_scope():
    client = HttpResourceClient()
    with patch.object(client._session, "get", return_value=_requests_response()) as mock_get:
        _get(client, url="https://[::1]:8443/B2BAPIs/svc/", host="[::1]:8443")
    assert mock_get.call_args[1]["auth"] is not None


def test_close_closes_session():
    client = HttpResourceClient()
    with patch.object(client._session, "close") as mock_close:
        client.close()
    mock_close.assert_called_once()
