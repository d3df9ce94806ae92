from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Range of a signed 64-bit sqlite INTEGER; ids and priorities must fit in it
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


# PUBLIC_INTERFACE
class TodoIn(BaseModel):
    """
    Schema for creating or replacing a Todo item.

    priority and completed are optional here on purpose: their absence is
    reported by the service with its own error kinds rather than as a
    request validation failure.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": 3,
                "completed": False,
            }
        }
    )

    id: Optional[int] = Field(
        default=None, ge=INT_MIN, le=INT_MAX, description="Ignored; ids are assigned by the server"
    )
    name: str = Field(..., description="Name of the todo item", min_length=1)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    priority: Optional[int] = Field(
        default=None, ge=INT_MIN, le=INT_MAX, description="Priority, 1 or higher; higher sorts first"
    )
    completed: Optional[bool] = Field(default=None, description="Completion status flag")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """
        Reject blank names. The name is kept exactly as sent.
        """
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "name": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": 3,
                "completed": False,
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    name: str = Field(..., description="Name of the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    priority: Optional[int] = Field(default=None, description="Priority; higher sorts first")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")
