"""Key-value store interface."""
from __future__ import annotations

from typing import Any


class KeyValueStore:
    """Base interface for persistence providers.

    Values are JSON-compatible plain data; ``get`` returns None for a missing
    key. A ``set`` must be visible to the next ``get`` on the same store.
    """

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError
