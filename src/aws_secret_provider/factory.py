"""Factory for creating secret lookup instances.

This module wires provider settings into an AWSSecretLookup and keeps a
lazily created process-wide instance.
"""

import logging
from pathlib import Path
from urllib.parse import quote

from .client_factory import create_client
from .config import ProviderSettings, load_provider_settings
from .file_writer import FileWriter, LocalFileWriter
from .lookup import AWSSecretLookup, FileWriterFactory

logger = logging.getLogger(__name__)


def secret_directory_name(secret_id: str) -> str:
    """Map a secret id to a single directory name.

    The mapping is injective: ARNs, path separators and dot-only names are
    percent-encoded, so distinct ids never share a directory.

    Raises:
        ValueError: If secret_id is empty
    """
    if not secret_id:
        raise ValueError("Secret id must not be empty")
    # quote() escapes "%" itself, so encoding "." keeps the mapping reversible
    return quote(secret_id, safe="").replace(".", "%2E")


def _local_writer_factory(base_dir: str) -> FileWriterFactory:
    root = Path(base_dir).resolve()

    def make_writer(secret_id: str) -> FileWriter:
        directory = (root / secret_directory_name(secret_id)).resolve()
        if directory.parent != root:
            raise ValueError(f"Refusing to write secret {secret_id} outside {root}")
        return LocalFileWriter(directory)

    return make_writer


def create_secret_lookup(settings: ProviderSettings) -> AWSSecretLookup:
    """Create a secret lookup from settings.

    Args:
        settings: Provider settings

    Returns:
        An AWSSecretLookup sharing one Secrets Manager client

    Raises:
        ConfigurationError: If settings are incomplete
    """
    client = create_client(settings)

    writer_factory = None
    if settings.file_write_dir:
        writer_factory = _local_writer_factory(settings.file_write_dir)
    else:
        logger.info("No file write directory configured, file keys resolve to 'nofile'")

    return AWSSecretLookup(
        client,
        secret_type=settings.secret_type,
        default_ttl=settings.default_ttl,
        file_writer_factory=writer_factory,
    )


# Singleton instance (lazy-loaded)
_secret_lookup: AWSSecretLookup | None = None


def get_default_secret_lookup() -> AWSSecretLookup:
    """Get the default secret lookup singleton.

    Settings are loaded from the environment on first access. Subsequent
    calls return the same instance.
    """
    global _secret_lookup
    if _secret_lookup is None:
        _secret_lookup = create_secret_lookup(load_provider_settings())
    return _secret_lookup


def reset_secret_lookup() -> None:
    """Reset the secret lookup singleton.

    This is primarily useful for testing to force recreation of the lookup.
    """
    global _secret_lookup
    _secret_lookup = None
