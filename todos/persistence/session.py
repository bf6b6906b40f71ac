from typing import Any, MutableMapping

import structlog

from todos.exceptions import UnsupportedOperationError
from todos.persistence import ordering
from todos.persistence.base import StoreBackend
from todos.persistence.identity import next_id
from todos.schemas.todo import TodoListOut, TodoOut

log = structlog.get_logger()

SESSION_KEY = "todo_lists"


class SessionBackend(StoreBackend):
    """
    Todo lists kept in a session mapping (see ``todos.sessions``).

    The lists live in ``session["todo_lists"]`` as plain JSON-compatible dicts.
    The backend works on that very list object and never copies it. Every
    successful write assigns it back to ``session["todo_lists"]`` so session
    implementations that only track top-level keys see the change. Reads build
    fresh records from the dicts and never return the dicts themselves.

    Title uniqueness is the caller's job: ``create_todo_list`` and
    ``set_todo_list_title`` do not check ``exists_todo_list_title``.
    """

    name = "session"

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session
        self._todo_lists: list[dict] = session.setdefault(SESSION_KEY, [])

    def is_unique_constraint_violation(self, error: Any) -> bool:
        return False

    # ------------------------ Read ------------------------

    def sorted_todo_lists(self) -> list[TodoListOut]:
        return ordering.partition_todo_lists(self._snapshot(t) for t in self._todo_lists)

    def sorted_todos(self, todo_list: TodoListOut) -> list[TodoOut]:
        return ordering.partition_todos(todo.model_copy() for todo in todo_list.todos)

    def load_todo_list(self, todo_list_id: int) -> TodoListOut | None:
        todo_list = self._find_todo_list(todo_list_id)
        return self._snapshot(todo_list) if todo_list is not None else None

    def load_todo(self, todo_list_id: int, todo_id: int) -> TodoOut | None:
        todo = self._find_todo(todo_list_id, todo_id)
        return TodoOut.model_validate(todo) if todo is not None else None

    def exists_todo_list_title(self, title: str) -> bool:
        return any(todo_list["title"] == title for todo_list in self._todo_lists)

    # ------------------------ Write ------------------------

    def toggled_todo(self, todo_list_id: int, todo_id: int) -> bool:
        todo = self._find_todo(todo_list_id, todo_id)
        if todo is None:
            return False
        todo["done"] = not todo["done"]
        return self._save()

    def deleted_todo(self, todo_list_id: int, todo_id: int) -> bool:
        todo_list = self._find_todo_list(todo_list_id)
        if todo_list is None:
            return False
        for index, todo in enumerate(todo_list["todos"]):
            if todo["id"] == todo_id:
                del todo_list["todos"][index]
                return self._save()
        return False

    def delete_todo_list(self, todo_list_id: int) -> bool:
        for index, todo_list in enumerate(self._todo_lists):
            if todo_list["id"] == todo_list_id:
                # the todos go with their parent dict
                del self._todo_lists[index]
                log.info("todo list deleted", backend=self.name, todo_list_id=todo_list_id)
                return self._save()
        return False

    def complete_all_todos(self, todo_list_id: int) -> bool:
        """False when the list is missing or no todo was left to complete."""
        todo_list = self._find_todo_list(todo_list_id)
        if todo_list is None:
            return False
        pending = [todo for todo in todo_list["todos"] if not todo["done"]]
        if not pending:
            return False
        for todo in pending:
            todo["done"] = True
        return self._save()

    def create_todo(self, todo_list_id: int, title: str) -> bool:
        todo_list = self._find_todo_list(todo_list_id)
        if todo_list is None:
            return False
        todo_list["todos"].append(
            {
                "id": next_id(self._all_todos()),
                "todolist_id": todo_list_id,
                "title": title,
                "done": False,
            }
        )
        return self._save()

    def create_todo_list(self, title: str) -> bool:
        todo_list = {"id": next_id(self._todo_lists), "title": title, "todos": []}
        self._todo_lists.append(todo_list)
        log.info("todo list created", backend=self.name, todo_list_id=todo_list["id"])
        return self._save()

    def set_todo_list_title(self, todo_list_id: int, title: str) -> bool:
        todo_list = self._find_todo_list(todo_list_id)
        if todo_list is None:
            return False
        todo_list["title"] = title
        return self._save()

    # ------------------------ Auth ------------------------

    def authenticate(self, username: str, password: str) -> bool:
        # credentials only exist in the relational store
        raise UnsupportedOperationError(self.name, "authenticate")

    # ------------------------ Internals ------------------------

    def _save(self) -> bool:
        # same list object; the assignment marks the session as modified
        self._session[SESSION_KEY] = self._todo_lists
        return True

    @staticmethod
    def _snapshot(todo_list: dict) -> TodoListOut:
        # model_validate builds new objects all the way down
        return TodoListOut.model_validate(todo_list)

    def _find_todo_list(self, todo_list_id: int) -> dict | None:
        return next((t for t in self._todo_lists if t["id"] == todo_list_id), None)

    def _find_todo(self, todo_list_id: int, todo_id: int) -> dict | None:
        todo_list = self._find_todo_list(todo_list_id)
        if todo_list is None:
            return None
        return next((t for t in todo_list["todos"] if t["id"] == todo_id), None)

    def _all_todos(self) -> list[dict]:
        return [todo for todo_list in self._todo_lists for todo in todo_list["todos"]]
