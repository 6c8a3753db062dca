"""In-memory implementation of TodoStore.

Single-process only. Contents live as long as the instance does.
"""
from __future__ import annotations

from typing import List
import asyncio

from domain.todo import Todo, TodoStore


class InMemoryTodoStore(TodoStore):
    def __init__(self) -> None:
        self._todos: List[Todo] = []
        self._lock = asyncio.Lock()

    async def append(self, text: str) -> Todo:
        async with self._lock:
            # Todo is built before it is appended, a rejected record leaves the list untouched
            todo = Todo(id=str(len(self._todos) + 1), text=text)
            self._todos.append(todo)
        return todo

    async def list(self) -> list[Todo]:
        async with self._lock:
            return list(self._todos)
