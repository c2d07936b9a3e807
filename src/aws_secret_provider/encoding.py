"""Per-key value encodings.

A key's encoding is named by the last ``_``-separated segment of the key:

- ``keystore_file``: base64 payload written to disk through a file writer
- ``password_base64`` / ``password_b64``: base64 payload decoded to text
- anything else: plain text, returned unchanged
"""

import base64
import binascii
from collections.abc import Callable
from enum import Enum

from .errors import DecodeFailure

# Returned in place of a file reference when no file writer is configured
NO_FILE_SENTINEL = "nofile"

KEY_SEPARATOR = "_"


class Encoding(str, Enum):
    """Encoding of a single secret value."""

    PLAIN = "plain"
    BASE64 = "base64"
    FILE = "file"


_MARKERS: dict[str, Encoding] = {
    "file": Encoding.FILE,
    "base64": Encoding.BASE64,
    "b64": Encoding.BASE64,
}


def classify_key(key: str) -> Encoding:
    """Derive the encoding of a value from its key name.

    Args:
        key: Key name within the secret (e.g. "keystore_file")

    Returns:
        The encoding named by the key's trailing marker, or PLAIN
    """
    if KEY_SEPARATOR not in key:
        return Encoding.PLAIN
    marker = key.rsplit(KEY_SEPARATOR, 1)[1].lower()
    return _MARKERS.get(marker, Encoding.PLAIN)


def _decode_bytes(key: str, value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailure(key, "invalid base64") from e


def decode_value(
    key: str,
    value: str,
    encoding: Encoding,
    write_file: Callable[[bytes], str],
) -> str:
    """Decode a raw secret value according to its encoding.

    Args:
        key: Key name the value was stored under
        value: Raw value from the secret payload
        encoding: Encoding of the value (see classify_key)
        write_file: Called with the decoded bytes of FILE values; returns
            the reference that replaces the value

    Returns:
        The decoded value, or the file reference for FILE values

    Raises:
        DecodeFailure: If the value is not valid under its encoding
    """
    if encoding is Encoding.PLAIN:
        return value
    elif encoding is Encoding.BASE64:
        content = _decode_bytes(key, value)
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailure(key, "decoded bytes are not valid UTF-8") from e
    elif encoding is Encoding.FILE:
        return write_file(_decode_bytes(key, value))
    else:
        raise DecodeFailure(key, f"unsupported encoding {encoding!r}")
