import asyncio

import pytest

from domain.common.exceptions import DomainValidationException
from domain.todo import Todo


pytestmark = pytest.mark.asyncio


async def test_append_assigns_sequential_ids(store):
    first = await store.append("buy milk")
    second = await store.append("walk dog")

    assert first == Todo(id="1", text="buy milk")
    assert second == Todo(id="2", text="walk dog")


async def test_append_accepts_empty_text(store):
    todo = await store.append("")
    assert todo.id == "1"
    assert todo.text == ""
    assert await store.list() == [todo]


async def test_list_on_fresh_store_is_empty(store):
    assert await store.list() == []


async def test_list_preserves_insertion_order_and_text(store):
    texts = ["ä ö ü", "  padded  ", "emoji 🚀", "line\nbreak"]
    for text in texts:
        await store.append(text)

    todos = await store.list()
    assert [t.id for t in todos] == ["1", "2", "3", "4"]
    assert [t.text for t in todos] == texts


async def test_list_returns_a_snapshot_copy(store):
    await store.append("a")
    snapshot = await store.list()
    await store.append("b")

    assert [t.id for t in snapshot] == ["1"]
    snapshot.clear()
    assert len(await store.list()) == 2


async def test_returned_todo_is_the_stored_todo(store):
    created = await store.append("same")
    (stored,) = await store.list()
    assert created is stored


async def test_concurrent_appends_get_unique_sequential_ids(store):
    results = await asyncio.gather(*(store.append(f"todo-{i}") for i in range(200)))

    ids = [t.id for t in results]
    assert len(set(ids)) == 200
    assert sorted(ids, key=int) == [str(i) for i in range(1, 201)]

    listed = await store.list()
    assert [t.id for t in listed] == [str(i) for i in range(1, 201)]
    for todo in listed:
        assert todo in results


async def test_rejected_todo_leaves_store_unchanged(store):
    await store.append("ok")
    with pytest.raises(DomainValidationException):
        await store.append(None)  # type: ignore[arg-type]

    assert [t.text for t in await store.list()] == ["ok"]
    assert (await store.append("next")).id == "2"


async def test_todo_is_immutable():
    todo = Todo(id="1", text="x")
    with pytest.raises(AttributeError):
        todo.text = "y"  # type: ignore[misc]
