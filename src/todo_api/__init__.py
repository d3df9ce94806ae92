"""
FastAPI Todo API package.

The application instance lives in `todo_api.main` (`todo_api.main:app`).
"""
