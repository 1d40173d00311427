"""
Local JSON-file adapter for FlagStorePort.

Stores every key in a single JSON object on disk, replaced atomically on each
write. An unreadable file raises instead of reading as empty. No extra infra,
good for local development; production uses the DynamoDB adapter behind the same port.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from typing import Dict, Iterable, List, Set

from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import ContextualLogger


_base_logger = ContextualLogger(scope=LogScope.ADAPTER)


class JsonFlagStoreAdapter:
    """Thread-safe JSON file store mapping keys to sorted string lists."""

    def __init__(self, path: str = Defaults.FLAG_STORE_PATH) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._log = _base_logger.bind(path=path)
        os.makedirs(os.path.dirname(self._path) or ".", exist_ok=True)

    # ------------------------------------------------------------------
    # FlagStorePort implementation
    # ------------------------------------------------------------------

    def get_flag(self, key: str) -> Set[str]:
        with self._lock:
            data = self._read_all()
        return set(data.get(key, []))

    def set_flag(self, key: str, values: Iterable[str]) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = sorted(set(values))
            self._write_all(data)
        self._log.info("flag_saved", key=key, size=len(data[key]))

    def delete_flag(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)
        self._log.info("flag_deleted", key=key)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_all(self) -> Dict[str, List[str]]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            self._log.error("flag_store_unreadable", error=str(exc))
            raise ExternalServiceError(
                "JSON flag store",
                f"cannot read {self._path}: {exc}",
                context={"path": self._path},
            ) from exc

    def _write_all(self, data: Dict[str, List[str]]) -> None:
        # Sibling temp file, then os.replace over the original.
        directory = os.path.dirname(self._path) or "."
        fd, tmp_path = tempfile.mkstemp(prefix=".flags-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
