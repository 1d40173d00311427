"""
Processed-meeting registry.

Wraps the flag store key holding the ids of meetings whose full pipeline has
completed. Ids are only ever added, except by an explicit reset.
"""

from __future__ import annotations

from typing import FrozenSet

from ports.flag_store import FlagStorePort
from shared_utils.constants import Defaults, LogScope
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.DISCOVERY)


class ProcessedMeetingRegistry:
    """Membership view over the idempotency flag set."""

    def __init__(self, flag_store: FlagStorePort, key: str = Defaults.PROCESSED_MEETINGS_KEY) -> None:
        self._store = flag_store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._store.get_flag(self._key))

    def contains(self, meeting_id: str) -> bool:
        return meeting_id in self._store.get_flag(self._key)

    def mark(self, meeting_id: str) -> None:
        """Add ``meeting_id`` to the processed set."""
        values = set(self._store.get_flag(self._key))
        if meeting_id in values:
            return
        values.add(meeting_id)
        self._store.set_flag(self._key, values)
        logger.info("meeting_marked_processed", meeting_id=meeting_id, total=len(values))

    def reset(self) -> None:
        """Forget every processed meeting; all become eligible again."""
        self._store.delete_flag(self._key)
        logger.warning("processed_meetings_cleared", key=self._key)
