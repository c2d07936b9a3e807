"""Secret lookup interface definition.

Defines the contract used by the caching and configuration layers that sit
on top of a secret store.
"""

from abc import ABC, abstractmethod

from .models import ValueWithTtl


class SecretLookup(ABC):
    """Abstract interface for materializing secrets from a store.

    Implementations must be safe to call concurrently and must not keep
    mutable state between lookups. A lookup either returns the complete
    decoded secret or raises; partial results are never returned.
    """

    @abstractmethod
    def lookup(self, secret_id: str) -> ValueWithTtl[dict[str, str]]:
        """Fetch and decode a secret.

        Args:
            secret_id: Identifier of the secret in the store

        Returns:
            Decoded key/value mapping with the TTL it may be cached for

        Raises:
            Exception: If any stage of the lookup fails
        """
        pass
