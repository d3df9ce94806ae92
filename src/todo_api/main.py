import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import (
    BlankNameError,
    InvalidPriorityError,
    NameNotFoundError,
    NullCompletionError,
    TodoError,
    TodoNotFoundError,
)
from .routers import todos as todos_router
from .settings import get_settings

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items with lookups by priority and name.",
    },
]

app = FastAPI(
    title="Todo API",
    description="Task-list API with priority ordering and pluggable storage backends.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Service failure kinds and the status each one is answered with
ERROR_STATUS = {
    InvalidPriorityError: 400,
    NullCompletionError: 400,
    BlankNameError: 400,
    TodoNotFoundError: 404,
    NameNotFoundError: 404,
}


@app.exception_handler(TodoError)
async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    """
    Answer a service failure with its mapped status and its message as the body.
    """
    status_code = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(status_code=status_code, content=exc.message)


def _jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold the raised ValueError, which JSONResponse cannot encode
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


# Global exception handlers for consistent JSON on validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": _jsonable_errors(exc),
        },
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


# Include routers
app.include_router(todos_router.router)
logger.debug("Todo API configured with %s backend", _settings.persistence_backend)
