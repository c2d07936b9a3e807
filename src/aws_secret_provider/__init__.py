"""Secret materialization from AWS Secrets Manager.

This package fetches secrets, derives how long they may be cached from their
rotation schedule, and decodes their keys (plain, base64 or file-backed).
"""

from .client_factory import create_client, validate_settings
from .config import ProviderSettings, load_provider_settings
from .encoding import NO_FILE_SENTINEL, Encoding, classify_key, decode_value
from .errors import (
    ConfigurationError,
    DecodeFailure,
    MalformedSecretPayload,
    SecretProviderError,
    SecretValueMissing,
)
from .factory import create_secret_lookup, get_default_secret_lookup, reset_secret_lookup
from .file_writer import FileWriter, LocalFileWriter
from .interface import SecretLookup
from .lookup import AWSSecretLookup
from .models import AuthMode, AwsCredentials, SecretType, Ttl, ValueWithTtl
from .parser import parse_raw
from .ttl import TtlResolver

__all__ = [
    "AWSSecretLookup",
    "AuthMode",
    "AwsCredentials",
    "ConfigurationError",
    "DecodeFailure",
    "Encoding",
    "FileWriter",
    "LocalFileWriter",
    "MalformedSecretPayload",
    "NO_FILE_SENTINEL",
    "ProviderSettings",
    "SecretLookup",
    "SecretProviderError",
    "SecretType",
    "SecretValueMissing",
    "Ttl",
    "TtlResolver",
    "ValueWithTtl",
    "classify_key",
    "create_client",
    "create_secret_lookup",
    "decode_value",
    "get_default_secret_lookup",
    "load_provider_settings",
    "parse_raw",
    "reset_secret_lookup",
    "validate_settings",
]
