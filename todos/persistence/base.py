"""
StoreBackend: the contract shared by the session and relational backends.

Both backends expose the same method names and the same semantics:

- lookups return a record, or ``None`` when an id does not resolve
- mutations return ``True`` on success, ``False`` when an id does not resolve
- reads never hand out references to backend-owned state

The relational backend implements the I/O methods as coroutines, the session
backend as plain methods. ``todo_list_info``, ``is_done_todo_list`` and
``is_unique_constraint_violation`` do no I/O and are synchronous everywhere.
"""

from abc import ABC, abstractmethod
from typing import Any

from todos.persistence import ordering
from todos.schemas.todo import TodoListInfo, TodoListOut


class StoreBackend(ABC):
    name = "store"

    # ------------------------ Shared ------------------------

    def is_done_todo_list(self, todo_list: TodoListOut) -> bool:
        return ordering.is_done_todo_list(todo_list)

    def todo_list_info(self, todo_list: TodoListOut) -> TodoListInfo:
        """Counts for a list whose todos are already loaded."""
        return TodoListInfo(
            count_all=len(todo_list.todos),
            count_done=sum(1 for todo in todo_list.todos if todo.done),
            is_done=self.is_done_todo_list(todo_list),
        )

    @abstractmethod
    def is_unique_constraint_violation(self, error: Any) -> bool:
        """True if ``error`` is a duplicate-key failure from the store."""

    # ------------------------ Read ------------------------

    @abstractmethod
    def sorted_todo_lists(self):
        """All lists with their todos attached, undone lists first, then by title."""

    @abstractmethod
    def sorted_todos(self, todo_list: TodoListOut):
        """The list's todos, undone first, then by title."""

    @abstractmethod
    def load_todo_list(self, todo_list_id: int):
        """The list with its (unsorted) todos, or None."""

    @abstractmethod
    def load_todo(self, todo_list_id: int, todo_id: int):
        """The todo, or None if either id does not resolve."""

    @abstractmethod
    def exists_todo_list_title(self, title: str):
        """Exact-match existence check on list titles."""

    # ------------------------ Write ------------------------

    @abstractmethod
    def toggled_todo(self, todo_list_id: int, todo_id: int):
        pass

    @abstractmethod
    def deleted_todo(self, todo_list_id: int, todo_id: int):
        pass

    @abstractmethod
    def delete_todo_list(self, todo_list_id: int):
        """Delete the list and, with it, all of its todos."""

    @abstractmethod
    def complete_all_todos(self, todo_list_id: int):
        """Mark every todo done. False if the list is missing or no todo changed."""

    @abstractmethod
    def create_todo(self, todo_list_id: int, title: str):
        pass

    @abstractmethod
    def create_todo_list(self, title: str):
        pass

    @abstractmethod
    def set_todo_list_title(self, todo_list_id: int, title: str):
        pass

    # ------------------------ Auth ------------------------

    @abstractmethod
    def authenticate(self, username: str, password: str):
        """True if the credentials identify a provisioned user."""
