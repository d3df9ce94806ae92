from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import TodoEntity
from .settings import get_settings

logger = logging.getLogger(__name__)


def sort_key(entity: TodoEntity):
    """
    Ordering key for listing: priority descending, then name ascending.
    Records without a priority go last.
    """
    priority = entity["priority"]
    return (priority is None, -(priority or 0), entity["name"])


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def list_all(self) -> List[TodoEntity]:
        """Return every TodoEntity, ordered by priority desc then name asc."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def find_by_priority(self, priority: int) -> List[TodoEntity]:
        """Return all TodoEntities with the given priority."""

    @abstractmethod
    def find_by_name_ignore_case(self, name: str) -> List[TodoEntity]:
        """Return all TodoEntities whose name equals `name`, ignoring case."""

    @abstractmethod
    def exists_by_id(self, todo_id: int) -> bool:
        """Return True if a TodoEntity with this id exists."""

    @abstractmethod
    def exists_by_priority(self, priority: int) -> bool:
        """Return True if at least one TodoEntity has this priority."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Return True if at least one TodoEntity name matches, ignoring case."""

    @abstractmethod
    def save(self, entity: TodoEntity) -> TodoEntity:
        """
        Persist a TodoEntity and return the stored copy.
        - id None: insert with a newly allocated id
        - id set: replace every field of the record stored under that id
        """

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> None:
        """Remove the TodoEntity with this id, if any."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def list_all(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in sorted(self._items.values(), key=sort_key)]

    def find_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def find_by_priority(self, priority: int) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items.values() if t["priority"] == priority]

    def find_by_name_ignore_case(self, name: str) -> List[TodoEntity]:
        key = name.lower()
        with self._lock:
            return [t.copy() for t in self._items.values() if t["name"].lower() == key]

    def exists_by_id(self, todo_id: int) -> bool:
        with self._lock:
            return todo_id in self._items

    def exists_by_priority(self, priority: int) -> bool:
        with self._lock:
            return any(t["priority"] == priority for t in self._items.values())

    def exists_by_name(self, name: str) -> bool:
        key = name.lower()
        with self._lock:
            return any(t["name"].lower() == key for t in self._items.values())

    def save(self, entity: TodoEntity) -> TodoEntity:
        stored = entity.copy()
        with self._lock:
            if stored["id"] is None:
                stored["id"] = self._allocate_id()
            elif stored["id"] >= self._next_id:
                # Keep allocated ids ahead of anything saved explicitly
                self._next_id = stored["id"] + 1
            self._items[stored["id"]] = stored
            return stored.copy()

    def delete_by_id(self, todo_id: int) -> None:
        with self._lock:
            self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by SQLITE_DB_PATH

    The instance is created once and shared by every request.
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using SQLite persistence at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory persistence")
    return InMemoryRepository()
