import asyncio
import re
from typing import Any

import structlog
from sqlalchemy import delete, false, func, insert, literal, not_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todos.models.todo import Todo, TodoList
from todos.models.user import User
from todos.persistence import ordering
from todos.persistence.base import StoreBackend
from todos.schemas.todo import TodoListOut, TodoOut
from todos.security import verify_password

log = structlog.get_logger()

# PostgreSQL, SQLite and MySQL wording for a duplicate key
DUPLICATE_KEY_MESSAGE = re.compile(
    r"duplicate key value violates unique constraint|UNIQUE constraint failed|Duplicate entry"
)
PG_UNIQUE_VIOLATION = "23505"
MYSQL_DUP_ENTRY = 1062


class RelationalBackend(StoreBackend):
    """
    Todo lists in a relational store, through SQLAlchemy asyncio.

    Every public coroutine opens its own AsyncSession from ``sessionmaker``,
    runs the statements it needs and closes the session before returning,
    whether it succeeds or fails. Nothing is held between calls.

    Mutations report success from the rowcount of their statement: no
    affected rows means the list or todo does not exist.
    """

    name = "relational"

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    def is_unique_constraint_violation(self, error: Any) -> bool:
        orig = getattr(error, "orig", None) or error
        if getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
            return True
        if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
            return True
        args = getattr(orig, "args", ())
        if args and args[0] == MYSQL_DUP_ENTRY:
            return True
        return DUPLICATE_KEY_MESSAGE.search(str(orig)) is not None

    # ------------------------ Read ------------------------

    async def sorted_todo_lists(self) -> list[TodoListOut]:
        async with self._sessionmaker() as db:
            rows = (
                await db.execute(select(TodoList.id, TodoList.title).order_by(func.lower(TodoList.title)))
            ).all()
            todo_lists = [
                TodoListOut(id=row.id, title=row.title, todos=await self._select_todos(db, row.id))
                for row in rows
            ]
        return ordering.partition_todo_lists(todo_lists)

    async def sorted_todos(self, todo_list: TodoListOut) -> list[TodoOut]:
        async with self._sessionmaker() as db:
            todos = await self._select_todos(db, todo_list.id)
        return ordering.partition_todos(todos)

    async def load_todo_list(self, todo_list_id: int) -> TodoListOut | None:
        row, todos = await asyncio.gather(
            self._fetch_todo_list_row(todo_list_id),
            self._fetch_todos(todo_list_id),
            return_exceptions=True,
        )
        if isinstance(row, BaseException):
            raise row
        if row is None:
            return None
        if isinstance(todos, BaseException):
            raise todos
        return TodoListOut(id=row.id, title=row.title, todos=todos)

    async def load_todo(self, todo_list_id: int, todo_id: int) -> TodoOut | None:
        stmt = select(Todo).where(Todo.todolist_id == todo_list_id, Todo.id == todo_id)
        async with self._sessionmaker() as db:
            todo = (await db.execute(stmt)).scalar_one_or_none()
            return TodoOut.model_validate(todo) if todo is not None else None

    async def exists_todo_list_title(self, title: str) -> bool:
        stmt = select(func.count()).select_from(TodoList).where(TodoList.title == title)
        async with self._sessionmaker() as db:
            return int((await db.execute(stmt)).scalar_one()) > 0

    # ------------------------ Write ------------------------

    async def toggled_todo(self, todo_list_id: int, todo_id: int) -> bool:
        stmt = (
            update(Todo)
            .where(Todo.todolist_id == todo_list_id, Todo.id == todo_id)
            .values(done=not_(Todo.done))
            .execution_options(synchronize_session=False)
        )
        return await self._write(stmt) > 0

    async def deleted_todo(self, todo_list_id: int, todo_id: int) -> bool:
        stmt = (
            delete(Todo)
            .where(Todo.todolist_id == todo_list_id, Todo.id == todo_id)
            .execution_options(synchronize_session=False)
        )
        return await self._write(stmt) > 0

    async def delete_todo_list(self, todo_list_id: int) -> bool:
        # todos go through ON DELETE CASCADE
        stmt = delete(TodoList).where(TodoList.id == todo_list_id).execution_options(synchronize_session=False)
        deleted = await self._write(stmt) > 0
        if deleted:
            log.info("todo list deleted", backend=self.name, todo_list_id=todo_list_id)
        return deleted

    async def complete_all_todos(self, todo_list_id: int) -> bool:
        # only rows that change count, so an already complete list reports False
        stmt = (
            update(Todo)
            .where(Todo.todolist_id == todo_list_id, Todo.done == false())
            .values(done=True)
            .execution_options(synchronize_session=False)
        )
        return await self._write(stmt) > 0

    async def create_todo(self, todo_list_id: int, title: str) -> bool:
        # INSERT ... SELECT inserts nothing when the list does not exist
        parent = select(literal(title), literal(False), TodoList.id).where(TodoList.id == todo_list_id)
        stmt = insert(Todo.__table__).from_select(["title", "done", "todolist_id"], parent)
        return await self._write(stmt) > 0

    async def create_todo_list(self, title: str) -> bool:
        try:
            created = await self._write(insert(TodoList).values(title=title)) > 0
        except IntegrityError as exc:
            if not self.is_unique_constraint_violation(exc):
                raise
            log.info("duplicate todo list title", backend=self.name, title=title)
            return False
        if created:
            log.info("todo list created", backend=self.name, title=title)
        return created

    async def set_todo_list_title(self, todo_list_id: int, title: str) -> bool:
        stmt = (
            update(TodoList)
            .where(TodoList.id == todo_list_id)
            .values(title=title)
            .execution_options(synchronize_session=False)
        )
        try:
            return await self._write(stmt) > 0
        except IntegrityError as exc:
            if not self.is_unique_constraint_violation(exc):
                raise
            log.info("duplicate todo list title", backend=self.name, todo_list_id=todo_list_id, title=title)
            return False

    # ------------------------ Auth ------------------------

    async def authenticate(self, username: str, password: str) -> bool:
        stmt = select(User.password_hash).where(User.username == username)
        async with self._sessionmaker() as db:
            password_hash = (await db.execute(stmt)).scalar_one_or_none()
        if password_hash is None:
            return False
        return verify_password(password, password_hash)

    # ------------------------ Internals ------------------------

    async def _write(self, stmt) -> int:
        """Execute one write statement in its own session and return the rowcount."""
        async with self._sessionmaker() as db:
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount or 0

    @staticmethod
    async def _select_todos(db: AsyncSession, todo_list_id: int) -> list[TodoOut]:
        stmt = (
            select(Todo)
            .where(Todo.todolist_id == todo_list_id)
            .order_by(func.lower(Todo.title), Todo.id)
        )
        return [TodoOut.model_validate(todo) for todo in (await db.execute(stmt)).scalars().all()]

    async def _fetch_todo_list_row(self, todo_list_id: int):
        async with self._sessionmaker() as db:
            result = await db.execute(select(TodoList.id, TodoList.title).where(TodoList.id == todo_list_id))
            return result.one_or_none()

    async def _fetch_todos(self, todo_list_id: int) -> list[TodoOut]:
        async with self._sessionmaker() as db:
            return await self._select_todos(db, todo_list_id)
