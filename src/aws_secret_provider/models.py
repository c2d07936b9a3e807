"""Value types shared across the lookup pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Generic, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")


class SecretType(str, Enum):
    """Shape of a secret's payload."""

    STRING = "string"
    JSON = "json"

    @classmethod
    def parse(cls, text: str) -> "SecretType":
        try:
            return cls(text.strip().lower())
        except ValueError as e:
            raise ConfigurationError(f"Unsupported secret type: {text}") from e


class AuthMode(str, Enum):
    """How the Secrets Manager client obtains credentials."""

    CREDENTIALS = "credentials"
    DEFAULT = "default"

    @classmethod
    def parse(cls, text: str) -> "AuthMode":
        try:
            return cls(text.strip().lower())
        except ValueError as e:
            raise ConfigurationError(f"Unsupported auth mode: {text}") from e


@dataclass(frozen=True)
class AwsCredentials:
    """Static access key pair used in CREDENTIALS mode."""

    access_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True)
class Ttl:
    """Expiry information for a fetched secret.

    When derived from rotation, both fields are set. Otherwise
    ``rotation_interval`` is None and ``expires_at`` comes from the
    configured default TTL (None meaning no expiry).
    """

    rotation_interval: timedelta | None
    expires_at: datetime | None


@dataclass(frozen=True)
class ValueWithTtl(Generic[T]):
    """A decoded value paired with the TTL it may be cached for."""

    ttl: Ttl | None
    value: T
