from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from ..repositories import Repository, get_repository
from ..schemas import INT_MAX, INT_MIN, TodoIn, TodoOut
from ..service import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_service(repo: Repository = Depends(get_repository)) -> TodoService:
    """
    Dependency building the service over the configured repository.
    """
    return TodoService(repo)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every todo, ordered by priority (highest first) and then by name.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(service: TodoService = Depends(_get_service)) -> List[TodoOut]:
    """
    List all todos.
    """
    return [TodoOut(**it) for it in service.list_all()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/priority/{priority}",
    response_model=List[TodoOut],
    summary="List Todos by Priority",
    description="List the todos holding the given priority.",
    responses={
        200: {"description": "Todos found"},
        400: {"description": "Priority is below 1 or held by no todo"},
    },
)
def list_todos_by_priority(
    priority: int = Path(..., ge=INT_MIN, le=INT_MAX, description="Priority to filter by"),
    service: TodoService = Depends(_get_service),
) -> List[TodoOut]:
    return [TodoOut(**it) for it in service.find_by_priority(priority)]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/name/{name}",
    response_model=List[TodoOut],
    summary="List Todos by Name",
    description="List the todos whose name matches, ignoring case.",
    responses={
        200: {"description": "Todos found"},
        400: {"description": "Name is blank (checked only after a matching name was found)"},
        404: {"description": "No todo has this name"},
    },
)
def list_todos_by_name(name: str, service: TodoService = Depends(_get_service)) -> List[TodoOut]:
    return [TodoOut(**it) for it in service.find_by_name(name)]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(
    todo_id: int = Path(..., ge=INT_MIN, le=INT_MAX, description="Todo id"),
    service: TodoService = Depends(_get_service),
) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**service.find_by_id(todo_id))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Invalid priority or missing completion status"},
    },
)
def create_todo(payload: TodoIn, service: TodoService = Depends(_get_service)) -> TodoOut:
    """
    Create a new Todo. Any id in the payload is ignored.
    """
    return TodoOut(**service.create(payload))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description=(
        "Replace an existing Todo item. Every field is overwritten with the payload; "
        "the id in the path wins over any id in the body."
    ),
    responses={
        200: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
    },
)
def put_todo(
    todo_id: int = Path(..., ge=INT_MIN, le=INT_MAX, description="Todo id"),
    payload: TodoIn = Body(...),
    service: TodoService = Depends(_get_service),
) -> TodoOut:
    return TodoOut(**service.update(todo_id, payload))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(
    todo_id: int = Path(..., ge=INT_MIN, le=INT_MAX, description="Todo id"),
    service: TodoService = Depends(_get_service),
) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    service.delete(todo_id)
    return None
