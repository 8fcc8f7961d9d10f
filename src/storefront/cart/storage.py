"""Cart storage port: the local key-value store the cart snapshot lives in."""

from abc import ABC, abstractmethod


class CartStorage(ABC):
    """Abstract interface for local key-value cart storage adapters."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the raw value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        ...
