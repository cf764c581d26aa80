from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ..schemas import ErrorOut, MessageOut, TodoCreate, TodoOut
from ..service import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={
        500: {"model": ErrorOut, "description": "Service error (including not found and invalid id)"},
    },
)


# PUBLIC_INTERFACE
def get_todo_service(request: Request) -> TodoService:
    """
    Return the TodoService built during application startup.
    """
    return request.app.state.todo_service


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return it, including the generated id.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Malformed request body"},
    },
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(get_todo_service)) -> TodoOut:
    """
    Create a new Todo.
    """
    return service.create(payload)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every Todo item in the store's natural order.",
)
def list_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoOut]:
    return service.get_all()


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by its hex id.",
)
def get_todo(todo_id: str, service: TodoService = Depends(get_todo_service)) -> TodoOut:
    """
    Retrieve a single Todo item. Unknown and malformed ids are reported as 500.
    """
    return service.get_by_id(todo_id)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Update Todo",
    description="Overwrite the title and completed flag of a Todo item.",
    responses={
        400: {"model": ErrorOut, "description": "Malformed request body"},
    },
)
def update_todo(
    todo_id: str,
    payload: TodoCreate,
    service: TodoService = Depends(get_todo_service),
) -> MessageOut:
    """
    Update a Todo. Succeeds even when no item has the given id.
    """
    service.update(todo_id, payload)
    return MessageOut(message="Todo updated successfully")


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Delete Todo",
    description="Delete a Todo item by its hex id.",
)
def delete_todo(todo_id: str, service: TodoService = Depends(get_todo_service)) -> MessageOut:
    service.delete(todo_id)
    return MessageOut(message="Todo deleted successfully")
