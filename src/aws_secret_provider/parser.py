"""Parse raw secret strings into key/value mappings."""

import json
import logging
from typing import Any

from .errors import MalformedSecretPayload
from .logging_utils import log_warning
from .models import SecretType

logger = logging.getLogger(__name__)

# Key used for STRING secrets, which carry a single opaque value
STRING_VALUE_KEY = "value"


def _to_text(key: str, value: Any) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(
        f"Secret value for key [{key}] must be a string, got {type(value).__name__}"
    )


def parse_raw(secret_id: str, raw: str, secret_type: SecretType) -> dict[str, str]:
    """Parse a raw secret value into a mapping of key to raw string.

    Args:
        secret_id: Id of the secret, used in error messages
        raw: SecretString returned by the store
        secret_type: STRING wraps raw as {"value": raw}; JSON parses an object

    Returns:
        Mapping of key to undecoded string value

    Raises:
        MalformedSecretPayload: If a JSON secret is not valid JSON
        TypeError: If the JSON is valid but not an object of scalar values
    """
    if secret_type is SecretType.STRING:
        return {STRING_VALUE_KEY: raw}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        log_warning(logger, "Secret does not contain valid JSON", secret_id=secret_id)
        raise MalformedSecretPayload(secret_id) from e

    if not isinstance(data, dict):
        raise TypeError(
            f"Secret [{secret_id}] must contain a JSON object, got {type(data).__name__}"
        )

    return {key: _to_text(key, value) for key, value in data.items()}
