from fastapi import Depends, Request

from todos import config, database
from todos.persistence.base import StoreBackend
from todos.persistence.relational import RelationalBackend
from todos.persistence.session import SessionBackend
from todos.services.todo_service import TodoService
from todos.services.user_service import UserService
from todos.sessions import session_data


def get_store(request: Request) -> StoreBackend:
    """One backend per request, selected by TODOS_BACKEND."""
    if config.TODOS_BACKEND == "session":
        return SessionBackend(session_data(request.session))
    return RelationalBackend(database.AsyncSessionLocal)


def get_todo_service(store: StoreBackend = Depends(get_store)) -> TodoService:
    return TodoService(store)


def get_user_service(store: StoreBackend = Depends(get_store)) -> UserService:
    return UserService(store)
