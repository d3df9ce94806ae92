from __future__ import annotations


class TodoError(Exception):
    """Base class for failures raised by the todo service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidPriorityError(TodoError):
    """Priority is missing, below 1, or not held by any record."""


class NullCompletionError(TodoError):
    """A new task was submitted without a completion flag."""


class TodoNotFoundError(TodoError):
    """No task exists with the requested id."""


class NameNotFoundError(TodoError):
    """No task name matches the requested name."""


class BlankNameError(TodoError):
    """A name lookup was attempted with a blank name."""
