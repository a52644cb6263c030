"""
HTTP Resource Client — Performs single authenticated GET calls.

This module is responsible for all HTTP communication with SFG and PEM. It is
pure transport: every HTTP answer, including 4xx and 5xx, is returned as an
ApiResponse for the caller to interpret. Only failures that prevent an answer
from being received are raised, always as a TransportError:

  - malformed or unsupported URLs
  - TLS handshake and certificate verification problems
  - an unreadable CA bundle
  - connection, timeout and other I/O failures
  - requests rejected before sending (empty URL, missing username)

Authentication is HTTP Basic. Credentials are attached only when the target
URL's host matches the host configured for the environment, so a redirect or
a mistyped base URL never receives them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union
from urllib.parse import urlparse

import requests
from requests.auth import HTTPBasicAuth
from requests.structures import CaseInsensitiveDict

from .errors import TransportError, TransportErrorKind
from .secret_buffer import SecretBuffer

logger = logging.getLogger(__name__)

_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


@dataclass(frozen=True)
class ApiResponse:
    """Result of one HTTP call.

    Attributes:
        status_code: The numeric HTTP status, as a string (e.g. "200").
        status_line: Protocol status text (e.g. "HTTP/1.1 404 Not Found").
        response: Body text; empty when the server sent no body.
        response_headers: (name, value) pairs in the order they were received.
    """

    status_code: str
    status_line: str
    response: str = ""
    response_headers: Tuple[Tuple[str, str], ...] = ()

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup. The last occurrence wins."""
        return CaseInsensitiveDict(self.response_headers).get(name)

    @classmethod
    def from_requests(cls, response: requests.Response) -> "ApiResponse":
        version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "HTTP/1.1")
        return cls(
            status_code=str(response.status_code),
            status_line=f"{version} {response.status_code} {response.reason or ''}".rstrip(),
            response=response.text or "",
            response_headers=tuple(response.headers.items()),
        )


class HttpResourceClient:
    """Issues GET requests through one requests.Session.

    Attributes:
        verify: TLS verification flag, or the path of a CA bundle.
        timeout: Seconds to wait for the server; None keeps the requests default.
    """

    def __init__(self, verify: Union[bool, str] = True, timeout: Optional[float] = None):
        self.verify = verify
        self.timeout = timeout
        self._session = requests.Session()

    @classmethod
    def from_config(cls, config) -> "HttpResourceClient":
        return cls(verify=config.verify, timeout=config.http_timeout)

    def get(self, url: str, headers: Dict[str, str], user_name: str,
            password: SecretBuffer, host: str) -> ApiResponse:
        """Send one GET request.

        Args:
            url: Absolute URL to fetch.
            headers: Request headers (e.g. {"Accept": "application/json"}).
            user_name: Basic-auth username.
            password: Basic-auth password; read, never stored.
            host: Host name the credentials are scoped to.

        Returns:
            The ApiResponse, whatever its status code.

        Raises:
            TransportError: If no HTTP response could be obtained.
        """
        if not url:
            raise TransportError("Request URL is empty", kind=TransportErrorKind.VALIDATION)
        if not user_name:
            raise TransportError(f"No username configured for {url}",
                                 kind=TransportErrorKind.VALIDATION)

        try:
            auth = None
            if _in_scope(url, host):
                auth = HTTPBasicAuth(user_name, password.reveal())
            response = self._session.get(
                url, headers=headers, auth=auth, verify=self.verify, timeout=self.timeout,
            )
        except (requests.RequestException, OSError, ValueError) as e:
            logger.debug("GET %s failed: %s", url, e)
            raise TransportError.from_exception(e) from e

        return ApiResponse.from_requests(response)

    def close(self) -> None:
        self._session.close()


def _in_scope(url: str, host: str) -> bool:
    """True if credentials may be sent to url for the configured host."""
    if not host:
        return True
    url_host = urlparse(url).hostname or ""
    # Configured hosts may carry a port ("sfg.example.com:443", "[::1]:8443")
    scope_host = urlparse("//" + host).hostname or host
    return url_host.lower() == scope_host.lower()
