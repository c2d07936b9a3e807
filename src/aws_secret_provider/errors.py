"""Exception types raised by the secret lookup pipeline.

Remote failures from the Secrets Manager client (``botocore`` ``ClientError``
and ``BotoCoreError``) are not wrapped: they reach the caller unchanged.
"""


class SecretProviderError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(SecretProviderError):
    """Provider settings are missing or invalid."""


class MalformedSecretPayload(SecretProviderError):
    """A JSON-typed secret does not contain valid JSON."""

    def __init__(self, secret_id: str):
        self.secret_id = secret_id
        super().__init__(f"Unable to parse JSON in secret [{secret_id}]")


class DecodeFailure(SecretProviderError):
    """A single key could not be decoded under its encoding."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to decode key [{key}]: {reason}")


class SecretValueMissing(SecretProviderError):
    """The store returned no string value for the secret."""

    def __init__(self, secret_id: str):
        self.secret_id = secret_id
        super().__init__(f"No string value stored for secret [{secret_id}]")
