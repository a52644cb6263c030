"""
sfg2pem — Retrieve partner configuration from SFG for migration into PEM.

  configuration.py          Environment settings loaded from .env
  environment.py            Production/test selection and scoped credentials
  http_client.py            Single authenticated GET calls
  error_normalizer.py       Readable text for failed responses
  fetcher.py                Single-resource and paginated list retrieval
  credential_transformer.py XSLT-built user credential documents
"""

from .configuration import Configuration, EnvironmentSettings, configure_logging
from .credential_transformer import CredentialTransformer, build_dom_doc
from .environment import Environment, EnvironmentCredentials, pem_credentials, resolve_environment
from .error_normalizer import describe_error
from .errors import ResourceImportError, TransportError, TransportErrorKind
from .fetcher import ResourceFetcher, log_api_response, range_url, total_record_count
from .http_client import ApiResponse, HttpResourceClient
from .secret_buffer import SecretBuffer
