from __future__ import annotations

from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item as held by the
    storage backends.

    Fields:
    - id: Unique integer identifier, None until the record is first saved
    - name: Task name (non-blank, trimmed on input via schemas)
    - description: Optional free-text description
    - priority: Positive integer; higher sorts first. May be None after an update
    - completed: Completion flag. May be None after an update
    """

    id: Optional[int]
    name: str
    description: Optional[str]
    priority: Optional[int]
    completed: Optional[bool]
