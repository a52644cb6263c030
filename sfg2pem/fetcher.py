"""
Resource Fetcher — Retrieve SFG resources one by one or as complete lists.

Two retrieval modes are offered against the production or test SFG:

  fetch_resource(environment, resource_uri, resource_key)
      GET {base_url}{resource_uri}{resource_key} as application/xml.
      Returns the response on "200", raises ResourceImportError otherwise.

  fetch_resource_list(environment, resource_uri)
      GET {base_url}{resource_uri} as application/json, then keep requesting
      pages with a _range=<start>-<end> query parameter until the total
      announced by the first page's Content-Range header is covered.

Pagination:
    The first call is unranged and is assumed to return PAGE_SIZE records.
    The remaining count is therefore total - PAGE_SIZE, whatever the first
    page really contained. Call n (starting at 1) asks for records
    n * PAGE_SIZE through (n + 1) * PAGE_SIZE - 1. A failure on any page
    aborts the whole list: pages already collected are dropped.

Two partner look-ups (get_sfg_partner, get_pem_partner) return the raw
response without checking the status; the caller inspects it.

Every request and response summary is logged at INFO. Passwords are copied
for the duration of one fetch and wiped when it ends.
"""

import logging
from typing import List, Optional

from .configuration import Configuration
from .environment import Environment, EnvironmentCredentials, pem_credentials, resolve_environment
from .error_normalizer import describe_error
from .errors import ResourceImportError
from .http_client import ApiResponse, HttpResourceClient
from .settings import (
    HEADER_ACCEPT,
    HEADER_CONTENT_RANGE,
    MEDIA_TYPE_APPLICATION_JSON,
    MEDIA_TYPE_APPLICATION_XML,
    PAGE_SIZE,
    PEM_PARTNER_REST_URI,
    RANGE_PARAMETER,
    SFG_PARTNER_REST_URI,
    STATUS_OK,
)

logger = logging.getLogger(__name__)


class ResourceFetcher:
    """Fetches SFG and PEM resources for one configuration.

    Attributes:
        config: Connection settings for all environments.
        client: Transport used for every GET.
    """

    def __init__(self, config: Configuration, client: Optional[HttpResourceClient] = None):
        self.config = config
        self.client = client or HttpResourceClient.from_config(config)

    def close(self) -> None:
        """Close the transport session."""
        self.client.close()

    def __enter__(self) -> "ResourceFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_resource(self, environment: Environment, resource_uri: str,
                       resource_key: str) -> ApiResponse:
        """Fetch a single resource by key.

        Args:
            environment: Environment.PRODUCTION or Environment.TEST.
            resource_uri: Resource path relative to the REST base URL (e.g. "tradingpartners/").
            resource_key: Key of the resource, appended to the path as-is.

        Returns:
            The "200" ApiResponse; the body is left unparsed.

        Raises:
            ResourceImportError: If the status is not "200".
            TransportError: If the request could not be sent.
        """
        headers = {HEADER_ACCEPT: MEDIA_TYPE_APPLICATION_XML}
        with resolve_environment(environment, self.config) as credentials:
            url = credentials.base_url + resource_uri + resource_key
            response = self._get(url, headers, credentials)
        _check(response)
        return response

    def fetch_resource_list(self, environment: Environment, resource_uri: str) -> List[ApiResponse]:
        """Fetch every page of a resource listing.

        Args:
            environment: Environment.PRODUCTION or Environment.TEST.
            resource_uri: Listing path relative to the REST base URL; may carry a query string.

        Returns:
            One ApiResponse per page, in ascending range order.

        Raises:
            ResourceImportError: If any page returns a status other than "200".
            TransportError: If a request could not be sent.
        """
        headers = {HEADER_ACCEPT: MEDIA_TYPE_APPLICATION_JSON}
        pages = []
        with resolve_environment(environment, self.config) as credentials:
            url = credentials.base_url + resource_uri
            response = self._get(url, headers, credentials)
            _check(response)
            pages.append(response)

            remaining = total_record_count(response) - PAGE_SIZE
            call = 1
            while remaining > 0:
                response = self._get(range_url(url, call), headers, credentials)
                _check(response)
                pages.append(response)
                remaining -= PAGE_SIZE
                call += 1

        logger.info("Fetched %d page(s) from %s", len(pages), url)
        return pages

    def get_sfg_partner(self, environment: Environment, partner_key: str) -> ApiResponse:
        """GET a trading partner from SFG. The status is not checked."""
        headers = {HEADER_ACCEPT: MEDIA_TYPE_APPLICATION_XML}
        with resolve_environment(environment, self.config) as credentials:
            url = credentials.base_url + SFG_PARTNER_REST_URI + partner_key
            return self._get(url, headers, credentials)

    def get_pem_partner(self, partner_key: str) -> ApiResponse:
        """GET a partner from PEM. The status is not checked."""
        headers = {HEADER_ACCEPT: MEDIA_TYPE_APPLICATION_XML}
        with pem_credentials(self.config) as credentials:
            url = credentials.base_url + PEM_PARTNER_REST_URI + partner_key + "/"
            return self._get(url, headers, credentials)

    def _get(self, url: str, headers: dict, credentials: EnvironmentCredentials) -> ApiResponse:
        logger.info("Running API: GET %s", url)
        response = self.client.get(
            url, headers, credentials.user_name, credentials.password, credentials.host,
        )
        logger.info("Response: %s %s", response.status_code, response.status_line)
        logger.debug("Response body:\n%s", response.response)
        return response


def _check(response: ApiResponse) -> None:
    if response.status_code != STATUS_OK:
        raise ResourceImportError(error_text(response), response=response)


def error_text(response: ApiResponse) -> str:
    """Normalized description of a failed response: parsed body, raw body or status line."""
    if response.response:
        return describe_error(response.response, True)
    return describe_error(response.status_line, False)


def total_record_count(response: ApiResponse) -> int:
    """Total number of records announced by the Content-Range header, 0 when absent.

    Only the part after the last "/" is read ("items 0-999/2500" -> 2500).
    """
    content_range = response.header(HEADER_CONTENT_RANGE)
    if content_range is None:
        return 0
    total = content_range[content_range.rfind("/") + 1:].strip()
    try:
        return int(total)
    except ValueError:
        raise ResourceImportError(
            f"Invalid {HEADER_CONTENT_RANGE} header: {content_range!r}", response=response,
        ) from None


def range_url(url: str, call: int, page_size: int = PAGE_SIZE) -> str:
    """Append the _range parameter for the given call number (1 = second page)."""
    start = call * page_size
    end = (call + 1) * page_size - 1
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{RANGE_PARAMETER}={start}-{end}"


def log_api_response(response: ApiResponse) -> None:
    logger.info("API Status Code: %s, Status Line: %s", response.status_code, response.status_line)
    logger.info("API Response: %s", response.response)
