"""
Errors raised by the resource-retrieval engine.

  TransportError       The GET never produced an HTTP response: malformed URL,
                       TLS/certificate problems, connection or I/O failures,
                       or a request rejected by local validation. The kind is
                       classified once, when the error is built.
  ResourceImportError  The remote call answered with a status other than "200".
                       The message is the normalized error description.
"""

import ssl
from enum import Enum
from typing import Optional

import requests


class TransportErrorKind(Enum):
    KEY_MANAGEMENT = "key_management"
    ALGORITHM_UNAVAILABLE = "algorithm_unavailable"
    CERTIFICATE = "certificate"
    KEYSTORE = "keystore"
    PROTOCOL = "protocol"
    IO = "io"
    MALFORMED_URL = "malformed_url"
    VALIDATION = "validation"


_MALFORMED_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.URLRequired,
)

_PROTOCOL_ERRORS = (
    requests.exceptions.InvalidHeader,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
    requests.exceptions.TooManyRedirects,
)


class TransportError(Exception):
    """A GET could not be completed at the network, TLS or URL layer.

    Attributes:
        kind: The TransportErrorKind assigned when the error was built.
        cause: The original exception, kept for diagnostics only.
    """

    def __init__(self, message: str, kind: TransportErrorKind = TransportErrorKind.IO,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.cause = cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        """Wrap a transport-layer exception, classifying it by type and message."""
        return cls(f"{type(exc).__name__}: {exc}", kind=classify(exc), cause=exc)


def classify(exc: BaseException) -> TransportErrorKind:
    """Map an exception raised while issuing a request to a TransportErrorKind."""
    if isinstance(exc, _MALFORMED_URL_ERRORS):
        return TransportErrorKind.MALFORMED_URL
    if isinstance(exc, (requests.exceptions.SSLError, ssl.SSLError)):
        text = str(exc).upper()
        if "CERTIFICATE" in text:
            return TransportErrorKind.CERTIFICATE
        if "CIPHER" in text or "UNSUPPORTED" in text or "NO PROTOCOLS" in text:
            return TransportErrorKind.ALGORITHM_UNAVAILABLE
        return TransportErrorKind.KEY_MANAGEMENT
    if isinstance(exc, _PROTOCOL_ERRORS):
        return TransportErrorKind.PROTOCOL
    if isinstance(exc, requests.exceptions.RequestException):
        return TransportErrorKind.IO
    # requests raises a bare OSError when the configured CA bundle cannot be read
    if isinstance(exc, OSError) and "CERTIFICATE" in str(exc).upper():
        return TransportErrorKind.KEYSTORE
    if isinstance(exc, ValueError):
        return TransportErrorKind.VALIDATION
    return TransportErrorKind.IO


class ResourceImportError(Exception):
    """A remote call returned a non-success status.

    Attributes:
        response: The ApiResponse that failed, when one is available.
    """

    def __init__(self, message: str, response=None):
        super().__init__(message)
        self.response = response
