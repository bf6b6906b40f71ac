import pytest

from todos.services.todo_service import resolve

pytestmark = pytest.mark.anyio


async def titles(store):
    return [t.title for t in await resolve(store.sorted_todo_lists())]


async def make_groceries(store):
    assert await resolve(store.create_todo_list("Groceries")) is True
    todo_list = await resolve(store.sorted_todo_lists())
    return todo_list[0].id


async def test_milk_and_eggs(store):
    list_id = await make_groceries(store)
    assert await resolve(store.create_todo(list_id, "Milk")) is True
    milk = (await resolve(store.load_todo_list(list_id))).todos[0]
    assert await resolve(store.toggled_todo(list_id, milk.id)) is True

    todo_list = await resolve(store.load_todo_list(list_id))
    todos = await resolve(store.sorted_todos(todo_list))
    assert [(t.title, t.done) for t in todos] == [("Milk", True)]

    await resolve(store.create_todo(list_id, "Eggs"))
    todo_list = await resolve(store.load_todo_list(list_id))
    todos = await resolve(store.sorted_todos(todo_list))
    assert [(t.title, t.done) for t in todos] == [("Eggs", False), ("Milk", True)]


async def test_sorted_todo_lists_puts_done_lists_last(store):
    for title in ["zoo", "Apples", "chores", "Bills"]:
        await resolve(store.create_todo_list(title))
    by_title = {t.title: t.id for t in await resolve(store.sorted_todo_lists())}
    await resolve(store.create_todo(by_title["Apples"], "buy"))
    await resolve(store.complete_all_todos(by_title["Apples"]))
    await resolve(store.create_todo(by_title["chores"], "sweep"))

    assert await titles(store) == ["Bills", "chores", "zoo", "Apples"]


async def test_sorted_todos_of_empty_list(store):
    list_id = await make_groceries(store)
    todo_list = await resolve(store.load_todo_list(list_id))
    assert todo_list.todos == []
    assert await resolve(store.sorted_todos(todo_list)) == []


async def test_toggle_twice_restores_done(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))
    todo = (await resolve(store.load_todo_list(list_id))).todos[0]

    await resolve(store.toggled_todo(list_id, todo.id))
    await resolve(store.toggled_todo(list_id, todo.id))
    assert (await resolve(store.load_todo(list_id, todo.id))).done is False


async def test_unknown_ids_are_not_found(store):
    list_id = await make_groceries(store)
    assert await resolve(store.load_todo_list(999)) is None
    assert await resolve(store.load_todo(list_id, 999)) is None
    assert await resolve(store.load_todo(999, 1)) is None
    assert await resolve(store.toggled_todo(list_id, 999)) is False
    assert await resolve(store.deleted_todo(list_id, 999)) is False
    assert await resolve(store.delete_todo_list(999)) is False
    assert await resolve(store.complete_all_todos(999)) is False
    assert await resolve(store.create_todo(999, "Milk")) is False
    assert await resolve(store.set_todo_list_title(999, "Other")) is False


async def test_todo_belongs_to_its_list(store):
    await resolve(store.create_todo_list("A"))
    await resolve(store.create_todo_list("B"))
    lists = {t.title: t.id for t in await resolve(store.sorted_todo_lists())}
    await resolve(store.create_todo(lists["A"], "only in A"))
    todo = (await resolve(store.load_todo_list(lists["A"]))).todos[0]

    assert todo.todolist_id == lists["A"]
    assert await resolve(store.load_todo(lists["B"], todo.id)) is None
    assert await resolve(store.toggled_todo(lists["B"], todo.id)) is False


async def test_complete_all_on_empty_list_is_false(store):
    list_id = await make_groceries(store)
    assert await resolve(store.complete_all_todos(list_id)) is False


async def test_complete_all_on_already_done_list_is_false(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))
    milk = (await resolve(store.load_todo_list(list_id))).todos[0]
    await resolve(store.toggled_todo(list_id, milk.id))

    assert await resolve(store.complete_all_todos(list_id)) is False
    assert (await resolve(store.load_todo(list_id, milk.id))).done is True


async def test_complete_all_twice(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))

    assert await resolve(store.complete_all_todos(list_id)) is True
    assert await resolve(store.complete_all_todos(list_id)) is False


async def test_complete_all_marks_every_todo_done(store):
    list_id = await make_groceries(store)
    for title in ["Milk", "Eggs", "Bread"]:
        await resolve(store.create_todo(list_id, title))
    eggs = next(t for t in (await resolve(store.load_todo_list(list_id))).todos if t.title == "Eggs")
    await resolve(store.toggled_todo(list_id, eggs.id))

    assert await resolve(store.complete_all_todos(list_id)) is True
    todo_list = await resolve(store.load_todo_list(list_id))
    assert all(t.done for t in todo_list.todos)
    assert store.todo_list_info(todo_list).model_dump() == {"count_all": 3, "count_done": 3, "is_done": True}


async def test_delete_todo_list_removes_its_todos(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))
    await resolve(store.create_todo(list_id, "Eggs"))
    todo_ids = [t.id for t in (await resolve(store.load_todo_list(list_id))).todos]

    assert await resolve(store.delete_todo_list(list_id)) is True
    assert await resolve(store.load_todo_list(list_id)) is None
    for todo_id in todo_ids:
        assert await resolve(store.load_todo(list_id, todo_id)) is None


async def test_deleted_todo(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))
    todo = (await resolve(store.load_todo_list(list_id))).todos[0]

    assert await resolve(store.deleted_todo(list_id, todo.id)) is True
    assert await resolve(store.deleted_todo(list_id, todo.id)) is False
    assert (await resolve(store.load_todo_list(list_id))).todos == []


async def test_set_todo_list_title(store):
    list_id = await make_groceries(store)
    assert await resolve(store.set_todo_list_title(list_id, "Shopping")) is True
    assert (await resolve(store.load_todo_list(list_id))).title == "Shopping"
    assert await resolve(store.exists_todo_list_title("Shopping")) is True
    assert await resolve(store.exists_todo_list_title("Groceries")) is False


async def test_todo_list_info(store):
    list_id = await make_groceries(store)
    await resolve(store.create_todo(list_id, "Milk"))
    await resolve(store.create_todo(list_id, "Eggs"))
    milk = next(t for t in (await resolve(store.load_todo_list(list_id))).todos if t.title == "Milk")
    await resolve(store.toggled_todo(list_id, milk.id))

    info = store.todo_list_info(await resolve(store.load_todo_list(list_id)))
    assert (info.count_all, info.count_done, info.is_done) == (2, 1, False)
