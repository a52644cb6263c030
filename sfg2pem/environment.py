"""
Environment selection — Pick the SFG environment a request is sent to.

Every call against SFG needs four values that must belong together: the REST
base URL, the host name the credentials are scoped to, the username and the
password. resolve_environment() returns all four from one EnvironmentSettings
block, so a production URL can never be paired with test credentials.

The password in the returned EnvironmentCredentials is a private copy of the
configured one. Use the credentials as a context manager (or call clear())
so the copy is wiped when the request sequence is finished.
"""

from dataclasses import dataclass
from enum import Enum

from .configuration import Configuration, EnvironmentSettings
from .secret_buffer import SecretBuffer


class Environment(Enum):
    PRODUCTION = "production"
    TEST = "test"

    @classmethod
    def from_flag(cls, use_production: bool) -> "Environment":
        return cls.PRODUCTION if use_production else cls.TEST


@dataclass(frozen=True)
class EnvironmentCredentials:
    """Base URL, host and login of a single environment."""

    base_url: str
    host: str
    user_name: str
    password: SecretBuffer

    def clear(self) -> None:
        self.password.clear()

    def __enter__(self) -> "EnvironmentCredentials":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()


def _credentials(settings: EnvironmentSettings) -> EnvironmentCredentials:
    return EnvironmentCredentials(
        base_url=settings.rest_url,
        host=settings.host,
        user_name=settings.user_name,
        password=settings.password.copy(),
    )


def resolve_environment(environment: Environment, config: Configuration) -> EnvironmentCredentials:
    """Return the credentials of the production or test SFG environment."""
    if environment is Environment.PRODUCTION:
        return _credentials(config.sfg_prod)
    return _credentials(config.sfg_test)


def pem_credentials(config: Configuration) -> EnvironmentCredentials:
    """Return the credentials of the PEM target environment."""
    return _credentials(config.pem)
