"""Process-wide Opik client used by tracing and metrics."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from chronoflow.core.config import settings

try:
    from opik import Opik
except ImportError:  # pragma: no cover
    Opik = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_lock = Lock()
_client: Optional["Opik"] = None
_resolved = False


def _build_client() -> Optional["Opik"]:
    if Opik is None:
        logger.debug("opik is not importable; planner traces are skipped")
        return None
    if not settings.opik_enabled:
        logger.debug("OPIK_ENABLED is off; planner traces are skipped")
        return None
    if not settings.opik_api_key:
        logger.warning("OPIK_ENABLED is on without OPIK_API_KEY; planner traces are skipped")
        return None
    try:
        client = Opik(project_name=settings.opik_project, api_key=settings.opik_api_key)
    except Exception as exc:  # pragma: no cover - SDK failures must not break planning
        logger.warning("Opik client could not be created (%s); planner traces are skipped", exc)
        return None
    logger.info("Planner traces go to Opik project %s", settings.opik_project)
    return client


def init_opik() -> Optional["Opik"]:
    """Resolve the client on first use; later calls return the same answer."""
    global _client, _resolved
    with _lock:
        if not _resolved:
            _client = _build_client()
            _resolved = True
        return _client


def get_opik_client() -> Optional["Opik"]:
    if _resolved:
        return _client
    return init_opik()


def reset_opik_client() -> None:
    """Forget the resolved client so the next call re-reads settings."""
    global _client, _resolved
    with _lock:
        _client = None
        _resolved = False
