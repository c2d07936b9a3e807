"""File writers for secret values that must live on disk.

Keystores, certificates and other binary material are written to files and
the lookup result carries the file path instead of the content.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class FileWriter(ABC):
    """Abstract interface for persisting decoded secret content."""

    @abstractmethod
    def write(self, name: str, content: bytes, key: str) -> Path:
        """Write content and return a reference to it.

        Args:
            name: File name to write (the lower-cased key)
            content: Decoded bytes
            key: Original key name, for logging

        Returns:
            Path of the written file
        """
        pass


class LocalFileWriter(FileWriter):
    """Writes secret content into a local directory.

    The directory is created with owner-only permissions and each file is
    written with mode 0600.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory).resolve()

    def write(self, name: str, content: bytes, key: str) -> Path:
        target = (self.directory / name).resolve()
        if target.parent != self.directory:
            raise ValueError(f"Refusing to write key {key} outside {self.directory}")

        self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)

        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            # The open mode only applies on creation; tighten files that already existed
            os.fchmod(f.fileno(), 0o600)
            f.write(content)

        logger.info("Wrote key %s to %s (%d bytes)", key, target, len(content))
        return target
