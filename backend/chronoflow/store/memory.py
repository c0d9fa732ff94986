"""Process-local key-value store."""
from __future__ import annotations

import copy
import logging
from threading import Lock
from typing import Any, Dict

from chronoflow.store.base import KeyValueStore


logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; values are deep-copied in and out so callers never share state."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._lock = Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._data:
                return None
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)
        logger.debug("Stored key %s", key)
