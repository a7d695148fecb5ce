from __future__ import annotations

import asyncio
import copy
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from .models import TodoRecord
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoRepository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    async def list(self) -> List[TodoRecord]:
        """Return every stored todo record."""

    @abstractmethod
    async def create(self, record: Mapping[str, Any]) -> TodoRecord:
        """
        Persist a todo record and return the stored representation, which may
        carry backend metadata in addition to the given fields.
        """


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class InMemoryRepository(TodoRepository):
    """
    In-memory repository suitable for testing and default runtime.

    Stored records get a 'meta' block and a '$loki' sequence number, the way
    a document store would annotate them.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._items: List[Dict[str, Any]] = []
        self._next_loki = 1

    async def list(self) -> List[TodoRecord]:
        async with self._lock:
            # Return copies to avoid external mutation
            return [copy.deepcopy(item) for item in self._items]  # type: ignore[misc]

    async def create(self, record: Mapping[str, Any]) -> TodoRecord:
        async with self._lock:
            stored: Dict[str, Any] = dict(record)
            stored["meta"] = {"revision": 0, "created": _epoch_ms(), "version": 0}
            stored["$loki"] = self._next_loki
            self._next_loki += 1
            self._items.append(stored)
            logger.debug("Stored todo %s as $loki=%s", stored.get("id"), stored["$loki"])
            return copy.deepcopy(stored)  # type: ignore[return-value]


# PUBLIC_INTERFACE
def get_repository(settings: Settings | None = None) -> TodoRepository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using sqlite backend at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory backend")
    return InMemoryRepository()
