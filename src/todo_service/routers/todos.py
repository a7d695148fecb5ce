from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..models import Todo
from ..schemas import ErrorOut, TodoCreate, TodoOut
from ..services import TodoService

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
def get_todo_service(request: Request) -> TodoService:
    """
    Dependency returning the TodoService built for this application.
    """
    return request.app.state.todo_service


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every stored todo with its text uppercased.",
    responses={200: {"description": "List retrieved successfully"}},
)
async def list_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoOut]:
    """
    List todos.
    """
    items = await service.list()
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description=(
        "Create a new todo. The status is derived from 'when' against the current time: "
        "'pending' if it lies in the future, 'late' otherwise."
    ),
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Empty or unparseable text/when"},
    },
)
async def create_todo(payload: TodoCreate, service: TodoService = Depends(get_todo_service)):
    """
    Create a new todo, or return 400 with the rejected data.
    """
    result = await service.create(Todo(text=payload.text, when=payload.when))
    if "error" in result:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(result),
        )
    return TodoOut(**result)  # type: ignore[arg-type]
