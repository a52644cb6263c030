"""
Configuration — Connection settings for the SFG environments and the PEM target.

Three environments are configured, each with a REST base URL, a host name, a
username and a password:

  SFG_PROD_*   Production SFG, the usual source of partner resources
  SFG_TEST_*   Test SFG, queried when migrating test-side configuration
  PEM_*        The PEM target system, used for partner look-ups

Values are read from a .env file (via python-dotenv) and the process
environment, with DEFAULT_SETTINGS from settings.py as the fallback for the
non-connection options. Passwords are held as SecretBuffer instances and can
be wiped with clear_secrets() once the migration run is over.

Typical usage:
    config = Configuration.from_env("./.env")
    if config.validate_config():
        fetcher = ResourceFetcher(config)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from .secret_buffer import SecretBuffer
from .settings import DEFAULT_SETTINGS


@dataclass
class EnvironmentSettings:
    """REST endpoint and credentials of one environment."""

    rest_url: str = ""
    host: str = ""
    user_name: str = ""
    password: SecretBuffer = field(default_factory=SecretBuffer)

    @classmethod
    def from_env(cls, prefix: str) -> "EnvironmentSettings":
        """Build settings from {prefix}_REST_URL, _HOST, _USERNAME and _PASSWORD."""
        return cls(
            rest_url=os.getenv(f"{prefix}_REST_URL", ""),
            host=os.getenv(f"{prefix}_HOST", ""),
            user_name=os.getenv(f"{prefix}_USERNAME", ""),
            password=SecretBuffer(os.getenv(f"{prefix}_PASSWORD", "")),
        )

    def missing(self, prefix: str) -> List[str]:
        errors = []
        if not self.rest_url:
            errors.append(f"{prefix}_REST_URL is required")
        if not self.user_name:
            errors.append(f"{prefix}_USERNAME is required")
        if not self.password:
            errors.append(f"{prefix}_PASSWORD is required")
        return errors


@dataclass
class Configuration:
    """All settings needed by the resource fetcher and the credential transformer.

    Attributes:
        sfg_prod: Production SFG environment.
        sfg_test: Test SFG environment.
        pem: PEM target environment.
        xslt_directory: Directory containing userCredential.xsl.
        verify: TLS verification flag, or a CA bundle path.
        http_timeout: Request timeout in seconds; None leaves the transport default.
        debug: Whether verbose logging was requested.
    """

    sfg_prod: EnvironmentSettings = field(default_factory=EnvironmentSettings)
    sfg_test: EnvironmentSettings = field(default_factory=EnvironmentSettings)
    pem: EnvironmentSettings = field(default_factory=EnvironmentSettings)
    xslt_directory: str = DEFAULT_SETTINGS["XSLT_DIRECTORY"]
    verify: Union[bool, str] = True
    http_timeout: Optional[float] = None
    debug: bool = False

    @classmethod
    def from_env(cls, env_file: str = "./.env") -> "Configuration":
        """Load configuration from a .env file and the process environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        ca_bundle = os.getenv("CA_BUNDLE", DEFAULT_SETTINGS["CA_BUNDLE"])
        verify_ssl = os.getenv("VERIFY_SSL", str(DEFAULT_SETTINGS["VERIFY_SSL"])).lower() == "true"
        timeout = os.getenv("HTTP_TIMEOUT", DEFAULT_SETTINGS["HTTP_TIMEOUT"])

        return cls(
            sfg_prod=EnvironmentSettings.from_env("SFG_PROD"),
            sfg_test=EnvironmentSettings.from_env("SFG_TEST"),
            pem=EnvironmentSettings.from_env("PEM"),
            xslt_directory=os.getenv("XSLT_DIRECTORY", DEFAULT_SETTINGS["XSLT_DIRECTORY"]),
            verify=(ca_bundle or True) if verify_ssl else False,
            http_timeout=float(timeout) if timeout else None,
            debug=os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true",
        )

    def validate_config(self) -> bool:
        """Check that every required connection value is present.

        Both SFG environments are required. PEM settings are only checked
        when PEM_REST_URL is set.

        Returns:
            True if all required values are present, False otherwise.
            Prints specific error messages for each missing value.
        """
        errors = self.sfg_prod.missing("SFG_PROD") + self.sfg_test.missing("SFG_TEST")
        if self.pem.rest_url:
            errors += self.pem.missing("PEM")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def clear_secrets(self) -> None:
        """Wipe the stored password of every environment."""
        for env in (self.sfg_prod, self.sfg_test, self.pem):
            env.password.clear()


def configure_logging(debug: bool = False) -> None:
    """Set up root logging for a migration run."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(name)s - %(levelname)s - %(message)s",
    )
    # urllib3 connection chatter is only useful when debugging
    logging.getLogger("urllib3").setLevel(logging.DEBUG if debug else logging.WARNING)
