"""
Todo API package.

A small FastAPI service exposing CRUD operations for todo items stored in a
MongoDB collection. The ASGI application lives in ``todo_api.main:app``.
"""

__version__ = "0.1.0"
