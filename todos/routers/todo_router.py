from fastapi import APIRouter, Depends, HTTPException

from todos.dependencies import get_todo_service
from todos.exceptions import DuplicateTitleError
from todos.schemas.todo import TodoCreate, TodoListCreate, TodoListSummary, TodoOut
from todos.services.todo_service import TodoService

router = APIRouter()


def not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Not found.")


@router.get("/", response_model=list[TodoListSummary])
async def list_todo_lists(service: TodoService = Depends(get_todo_service)):
    return await service.list_todo_lists()


@router.post("/", status_code=201)
async def create_todo_list(body: TodoListCreate, service: TodoService = Depends(get_todo_service)):
    try:
        await service.create_todo_list(body.title)
    except DuplicateTitleError:
        raise HTTPException(status_code=409, detail="List title must be unique.")
    return {"detail": "The todo list has been created."}


@router.get("/{todo_list_id}", response_model=TodoListSummary)
async def get_todo_list(todo_list_id: int, service: TodoService = Depends(get_todo_service)):
    summary = await service.get_todo_list(todo_list_id)
    if summary is None:
        raise not_found()
    return summary


@router.post("/{todo_list_id}/edit")
async def edit_todo_list(
    todo_list_id: int, body: TodoListCreate, service: TodoService = Depends(get_todo_service)
):
    try:
        renamed = await service.rename_todo_list(todo_list_id, body.title)
    except DuplicateTitleError:
        raise HTTPException(status_code=409, detail="List title must be unique.")
    if not renamed:
        raise not_found()
    return {"detail": "Todo list updated."}


@router.post("/{todo_list_id}/destroy")
async def delete_todo_list(todo_list_id: int, service: TodoService = Depends(get_todo_service)):
    if not await service.delete_todo_list(todo_list_id):
        raise not_found()
    return {"detail": "Todo list deleted."}


@router.post("/{todo_list_id}/complete_all")
async def complete_all_todos(todo_list_id: int, service: TodoService = Depends(get_todo_service)):
    completed = await service.complete_all_todos(todo_list_id)
    if completed is None:
        raise not_found()
    return {"completed": completed}


@router.post("/{todo_list_id}/todos", status_code=201)
async def create_todo(todo_list_id: int, body: TodoCreate, service: TodoService = Depends(get_todo_service)):
    if not await service.create_todo(todo_list_id, body.title):
        raise not_found()
    return {"detail": "The todo has been created."}


@router.post("/{todo_list_id}/todos/{todo_id}/toggle", response_model=TodoOut)
async def toggle_todo(todo_list_id: int, todo_id: int, service: TodoService = Depends(get_todo_service)):
    todo = await service.toggle_todo(todo_list_id, todo_id)
    if todo is None:
        raise not_found()
    return todo


@router.post("/{todo_list_id}/todos/{todo_id}/destroy")
async def delete_todo(todo_list_id: int, todo_id: int, service: TodoService = Depends(get_todo_service)):
    if not await service.delete_todo(todo_list_id, todo_id):
        raise not_found()
    return {"detail": "The todo has been deleted."}
