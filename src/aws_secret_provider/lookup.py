"""AWS Secrets Manager secret lookup.

Fetches a secret, derives its TTL from rotation metadata and decodes its
keys into a mapping the configuration layer can consume.
"""

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from .encoding import NO_FILE_SENTINEL, classify_key, decode_value
from .errors import SecretValueMissing
from .file_writer import FileWriter
from .interface import SecretLookup
from .logging_utils import log_debug
from .models import SecretType, Ttl, ValueWithTtl
from .parser import STRING_VALUE_KEY, parse_raw
from .ttl import Clock, TtlResolver, local_now

logger = logging.getLogger(__name__)

FileWriterFactory = Callable[[str], FileWriter | None]


class AWSSecretLookup(SecretLookup):
    """Secret lookup backed by AWS Secrets Manager.

    Each lookup makes one DescribeSecret call (for the TTL) and one
    GetSecretValue call, then decodes locally.

    JSON secrets are decoded key by key. FILE keys are written through the
    file writer as they are reached, so a decode failure on a later key
    leaves files already written for earlier keys in place.
    """

    def __init__(
        self,
        client: Any,
        secret_type: SecretType = SecretType.JSON,
        default_ttl: timedelta | None = None,
        file_writer_factory: FileWriterFactory | None = None,
        clock: Clock = local_now,
    ):
        """Initialize the lookup.

        Args:
            client: boto3 secretsmanager client, shared across lookups
            secret_type: How secret payloads are interpreted
            default_ttl: TTL for secrets that are not rotated (None: no expiry)
            file_writer_factory: Called with the secret id once per lookup;
                returns the writer for FILE keys, or None
            clock: Time source for TTL computation
        """
        self._client = client
        self._secret_type = secret_type
        self._file_writer_factory = file_writer_factory
        self._ttl_resolver = TtlResolver(client, default_ttl=default_ttl, clock=clock)

    @property
    def secret_type(self) -> SecretType:
        return self._secret_type

    def lookup(self, secret_id: str) -> ValueWithTtl[dict[str, str]]:
        ttl = self._ttl_resolver.resolve(secret_id)
        raw = self._get_secret_string(secret_id)

        if self._secret_type is SecretType.STRING:
            value = {STRING_VALUE_KEY: raw}
        else:
            value = self._decode(secret_id, parse_raw(secret_id, raw, self._secret_type))

        log_debug(logger, "Resolved secret", secret_id=secret_id, keys=len(value), ttl=_describe(ttl))
        return ValueWithTtl(ttl=ttl, value=value)

    def _get_secret_string(self, secret_id: str) -> str:
        response = self._client.get_secret_value(SecretId=secret_id)
        secret_string = response.get("SecretString")
        if secret_string is None:
            raise SecretValueMissing(secret_id)
        return secret_string

    def _decode(self, secret_id: str, raw_values: dict[str, str]) -> dict[str, str]:
        writer = self._file_writer_factory(secret_id) if self._file_writer_factory else None

        def write_file_for(key: str) -> Callable[[bytes], str]:
            def write_file(content: bytes) -> str:
                if writer is None:
                    return NO_FILE_SENTINEL
                return str(writer.write(key.lower(), content, key))

            return write_file

        return {
            key: decode_value(key, value, classify_key(key), write_file_for(key))
            for key, value in raw_values.items()
        }


def _describe(ttl: Ttl | None) -> str:
    if ttl is None or ttl.expires_at is None:
        return "none"
    return ttl.expires_at.isoformat()
