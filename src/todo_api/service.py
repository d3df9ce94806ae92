"""
Validation and orchestration between the HTTP layer and the repository.

Every public method performs its checks, then issues a single repository
call. Failures are raised as `TodoError` subclasses and mapped to HTTP
statuses in `main`.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .errors import (
    BlankNameError,
    InvalidPriorityError,
    NameNotFoundError,
    NullCompletionError,
    TodoError,
    TodoNotFoundError,
)
from .models import TodoEntity
from .repositories import Repository, sort_key
from .schemas import TodoIn

logger = logging.getLogger(__name__)


def _reject(error: TodoError) -> TodoError:
    logger.warning("Rejected request: %s", error.message)
    return error


def _to_entity(payload: TodoIn, todo_id: Optional[int]) -> TodoEntity:
    return {
        "id": todo_id,
        "name": payload.name,
        "description": payload.description,
        "priority": payload.priority,
        "completed": payload.completed,
    }


# PUBLIC_INTERFACE
class TodoService:
    """Business rules for reading and mutating todo items."""

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    def list_all(self) -> List[TodoEntity]:
        """Return every todo, highest priority first, then by name."""
        return sorted(self._repo.list_all(), key=sort_key)

    def find_by_priority(self, priority: Optional[int]) -> List[TodoEntity]:
        """
        Return the todos holding `priority`.

        Raises:
            InvalidPriorityError: priority missing or below 1, or held by no todo.
        """
        if priority is None or priority < 1:
            raise _reject(InvalidPriorityError("Error: this priority is invalid."))
        if not self._repo.exists_by_priority(priority):
            raise _reject(InvalidPriorityError("Error: Priority does not exist."))
        return self._repo.find_by_priority(priority)

    def find_by_name(self, name: str) -> List[TodoEntity]:
        """
        Return the todos whose name matches `name`, ignoring case.

        The existence check runs before the blank check, so a blank name
        always fails with NameNotFoundError.

        Raises:
            NameNotFoundError: no todo has this name.
            BlankNameError: name is blank.
        """
        if not self._repo.exists_by_name(name):
            raise _reject(NameNotFoundError("Error: Name not found."))
        if not name.strip():
            raise _reject(BlankNameError("Error: The name cannot be null or empty."))
        return self._repo.find_by_name_ignore_case(name)

    def find_by_id(self, todo_id: int) -> TodoEntity:
        """
        Raises:
            TodoNotFoundError: no todo has this id.
        """
        item = self._repo.find_by_id(todo_id)
        if item is None:
            raise _reject(TodoNotFoundError(f"Error: Todo not found with id {todo_id}"))
        return item

    def create(self, payload: TodoIn) -> TodoEntity:
        """
        Persist a new todo under a freshly assigned id. Any id on the payload
        is ignored.

        Raises:
            InvalidPriorityError: priority missing or below 1.
            NullCompletionError: completed flag missing.
        """
        if payload.priority is None or payload.priority < 1:
            raise _reject(InvalidPriorityError("Error: This priority is invalid."))
        if payload.completed is None:
            raise _reject(NullCompletionError("Error: Your task cannot have a null completion status."))

        created = self._repo.save(_to_entity(payload, None))
        logger.info("Created todo %s", created["id"])
        return created

    def update(self, todo_id: int, payload: TodoIn) -> TodoEntity:
        """
        Replace every field of an existing todo. The stored id stays
        `todo_id` whatever the payload says; priority and completion are not
        re-validated.

        Raises:
            TodoNotFoundError: no todo has this id.
        """
        self._ensure_exists(todo_id)
        updated = self._repo.save(_to_entity(payload, todo_id))
        logger.info("Replaced todo %s", todo_id)
        return updated

    def delete(self, todo_id: int) -> None:
        """
        Raises:
            TodoNotFoundError: no todo has this id.
        """
        self._ensure_exists(todo_id)
        self._repo.delete_by_id(todo_id)
        logger.info("Deleted todo %s", todo_id)

    def _ensure_exists(self, todo_id: int) -> None:
        if not self._repo.exists_by_id(todo_id):
            raise _reject(TodoNotFoundError(f"Error: Todo not found with id {todo_id}"))
