from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class TodoOut(BaseModel):
    id: int
    todolist_id: int
    title: str
    done: bool = False
    model_config = ConfigDict(from_attributes=True)


class TodoListOut(BaseModel):
    id: int
    title: str
    todos: list[TodoOut] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class TodoListInfo(BaseModel):
    count_all: int
    count_done: int
    is_done: bool


class TodoListCreate(BaseModel):
    title: Title


class TodoCreate(BaseModel):
    title: Title


class TodoListSummary(BaseModel):
    """A todo list as rendered on the lists page."""

    todo_list: TodoListOut
    info: TodoListInfo
