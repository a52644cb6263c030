"""
Settings — Constants and default configuration values for the SFG to PEM migrator.

DEFAULT_SETTINGS holds the fallback values Configuration uses when an
environment variable is not set. Connection details (REST URLs, hosts,
usernames, passwords) have no defaults and must come from .env or the
process environment.

Configuration precedence (highest to lowest):
  1. Environment variables (from .env file or the shell)
  2. DEFAULT_SETTINGS (this file)

Settings reference:
  XSLT_DIRECTORY   Directory containing userCredential.xsl (default: packaged copy)
  CA_BUNDLE        Path to a CA bundle used for TLS verification (empty = system store)
  VERIFY_SSL       Set to "false" to disable TLS verification
  HTTP_TIMEOUT     Request timeout in seconds (empty = no override)
  DEBUG            Whether to log at DEBUG level
"""

from pathlib import Path

# Wire constants
HEADER_ACCEPT = "Accept"
MEDIA_TYPE_APPLICATION_XML = "application/xml"
MEDIA_TYPE_APPLICATION_JSON = "application/json"
HEADER_CONTENT_RANGE = "Content-Range"
RANGE_PARAMETER = "_range"
STATUS_OK = "200"

# Listing endpoints return at most this many records per call
PAGE_SIZE = 1000

# Resource URIs, relative to an environment's REST base URL
SFG_PARTNER_REST_URI = "tradingpartners/"
PEM_PARTNER_REST_URI = "partners/"

# Credential types written into the user credential document
PROD = "PROD"
TEST = "TEST"

USER_CREDENTIAL_XSLT = "userCredential.xsl"
PACKAGED_XSLT_DIRECTORY = str(Path(__file__).resolve().parent / "xslt")

DEFAULT_SETTINGS = {
    "XSLT_DIRECTORY": PACKAGED_XSLT_DIRECTORY,
    "CA_BUNDLE": "",
    "VERIFY_SSL": True,
    "HTTP_TIMEOUT": "",
    "DEBUG": False,
}
