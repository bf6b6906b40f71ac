"""
Canonical ordering shared by every backend.

Undone entries come first, done entries after; each group is ordered by
title, case-insensitively. ``sorted`` is stable, so equal titles keep the
order the backend fetched them in.
"""

from typing import Iterable, TypeVar

from todos.schemas.todo import TodoListOut, TodoOut

T = TypeVar("T", TodoListOut, TodoOut)


def is_done_todo_list(todo_list: TodoListOut) -> bool:
    """A list is done when it has at least one todo and all of them are done."""
    return len(todo_list.todos) > 0 and all(todo.done for todo in todo_list.todos)


def is_done_todo(todo: TodoOut) -> bool:
    return todo.done


def _by_title(entries: Iterable[T]) -> list[T]:
    return sorted(entries, key=lambda entry: entry.title.lower())


def sort_todo_lists(undone: Iterable[TodoListOut], done: Iterable[TodoListOut]) -> list[TodoListOut]:
    return _by_title(undone) + _by_title(done)


def sort_todos(undone: Iterable[TodoOut], done: Iterable[TodoOut]) -> list[TodoOut]:
    return _by_title(undone) + _by_title(done)


def partition_todo_lists(todo_lists: Iterable[TodoListOut]) -> list[TodoListOut]:
    undone: list[TodoListOut] = []
    done: list[TodoListOut] = []
    for todo_list in todo_lists:
        (done if is_done_todo_list(todo_list) else undone).append(todo_list)
    return sort_todo_lists(undone, done)


def partition_todos(todos: Iterable[TodoOut]) -> list[TodoOut]:
    undone: list[TodoOut] = []
    done: list[TodoOut] = []
    for todo in todos:
        (done if is_done_todo(todo) else undone).append(todo)
    return sort_todos(undone, done)
