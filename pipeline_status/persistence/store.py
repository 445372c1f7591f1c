"""Object store capability used by the status driver."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WriteOptions:
    """Per-write object options."""
    content_type: str = "text/plain"
    server_side_encryption: Optional[str] = None


class Store(ABC):
    """Key/value blob store holding one status document per key."""

    @abstractmethod
    def fetch(self, key: str) -> Optional[bytes]:
        """
        Read the object stored under ``key``.

        Returns:
            Object body, or None when the key does not exist

        Raises:
            StoreError: On any transport, permission or backend failure
        """
        pass

    @abstractmethod
    def write(self, key: str, body: bytes, options: Optional[WriteOptions] = None) -> None:
        """
        Unconditionally overwrite the object stored under ``key``.

        Raises:
            StoreError: On any transport, permission or backend failure
        """
        pass
