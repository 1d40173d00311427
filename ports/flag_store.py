"""
Port interface for durable idempotency flags.

Implementations: DynamoFlagStoreAdapter, JsonFlagStoreAdapter (adapters/)
"""

from __future__ import annotations

from typing import Iterable, Protocol, Set, runtime_checkable


@runtime_checkable
class FlagStorePort(Protocol):
    """Abstract key -> string-set store."""

    def get_flag(self, key: str) -> Set[str]:
        """Return the set stored under ``key`` (empty when absent)."""
        ...

    def set_flag(self, key: str, values: Iterable[str]) -> None:
        """Replace the set stored under ``key``."""
        ...

    def delete_flag(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        ...
