"""Store provider factory."""
from __future__ import annotations

import logging
from functools import lru_cache

from chronoflow.core.config import settings
from chronoflow.store.base import KeyValueStore
from chronoflow.store.memory import InMemoryKeyValueStore


logger = logging.getLogger(__name__)


@lru_cache
def get_store() -> KeyValueStore:
    provider = settings.store_provider.lower()
    if provider != "memory":
        logger.warning("Unknown store provider %r; using in-memory store", settings.store_provider)
    return InMemoryKeyValueStore()
