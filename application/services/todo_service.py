"""Application layer orchestration for todos (application/services)."""
from __future__ import annotations

from typing import AsyncIterator

from domain.todo import Todo, TodoStore
from application.dto import TodoCreateDTO, TodoDTO, TodoListDTO
from core.logging_config import get_logger


logger = get_logger(__name__)


class TodoApplicationService:
    """Todo workflows bridging the gRPC transport and the store.

    Stateless between calls; all state lives in the injected store.
    """

    def __init__(self, store: TodoStore) -> None:
        self._store = store

    def _to_dto(self, todo: Todo) -> TodoDTO:
        return TodoDTO.model_validate(todo)

    async def create_todo(self, dto: TodoCreateDTO) -> TodoDTO:
        # The echoed todo is the stored todo; id is computed once inside the store
        todo = await self._store.append(dto.text)
        logger.info("todo_created", todo_id=todo.id, text_length=len(todo.text))
        return self._to_dto(todo)

    async def list_todos(self) -> TodoListDTO:
        todos = await self._store.list()
        logger.info("todos_fetched", count=len(todos))
        return TodoListDTO(todos=[self._to_dto(t) for t in todos])

    async def iter_todos(self) -> AsyncIterator[TodoDTO]:
        """Yield todos one by one from a snapshot taken before the first yield.

        Todos created while the caller is still consuming are not included.
        """
        snapshot = await self._store.list()
        logger.info("todos_streaming", count=len(snapshot))
        for todo in snapshot:
            yield self._to_dto(todo)
