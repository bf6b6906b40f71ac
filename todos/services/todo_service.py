import inspect

from todos.exceptions import DuplicateTitleError
from todos.persistence.base import StoreBackend
from todos.schemas.todo import TodoListSummary, TodoOut


async def resolve(value):
    """Await results from the relational backend, pass session results through."""
    if inspect.isawaitable(value):
        return await value
    return value


class TodoService:
    def __init__(self, store: StoreBackend):
        self.store = store

    async def list_todo_lists(self) -> list[TodoListSummary]:
        todo_lists = await resolve(self.store.sorted_todo_lists())
        return [
            TodoListSummary(todo_list=todo_list, info=self.store.todo_list_info(todo_list))
            for todo_list in todo_lists
        ]

    async def get_todo_list(self, todo_list_id: int) -> TodoListSummary | None:
        todo_list = await resolve(self.store.load_todo_list(todo_list_id))
        if todo_list is None:
            return None
        info = self.store.todo_list_info(todo_list)
        todo_list.todos = await resolve(self.store.sorted_todos(todo_list))
        return TodoListSummary(todo_list=todo_list, info=info)

    async def create_todo_list(self, title: str) -> bool:
        # the session backend has no unique index, so check first for both
        if await resolve(self.store.exists_todo_list_title(title)):
            raise DuplicateTitleError(title)
        if not await resolve(self.store.create_todo_list(title)):
            raise DuplicateTitleError(title)
        return True

    async def rename_todo_list(self, todo_list_id: int, title: str) -> bool:
        if await resolve(self.store.exists_todo_list_title(title)):
            raise DuplicateTitleError(title)
        return await resolve(self.store.set_todo_list_title(todo_list_id, title))

    async def delete_todo_list(self, todo_list_id: int) -> bool:
        return await resolve(self.store.delete_todo_list(todo_list_id))

    async def complete_all_todos(self, todo_list_id: int) -> bool | None:
        """True if todos were completed, False if none needed it, None if the list is missing."""
        if await resolve(self.store.complete_all_todos(todo_list_id)):
            return True
        if await resolve(self.store.load_todo_list(todo_list_id)) is None:
            return None
        return False

    async def create_todo(self, todo_list_id: int, title: str) -> bool:
        return await resolve(self.store.create_todo(todo_list_id, title))

    async def toggle_todo(self, todo_list_id: int, todo_id: int) -> TodoOut | None:
        if not await resolve(self.store.toggled_todo(todo_list_id, todo_id)):
            return None
        return await resolve(self.store.load_todo(todo_list_id, todo_id))

    async def delete_todo(self, todo_list_id: int, todo_id: int) -> bool:
        return await resolve(self.store.deleted_todo(todo_list_id, todo_id))

