from __future__ import annotations

from typing import AsyncIterator

import grpc

from application.dto import TodoCreateDTO
from application.services.todo_service import TodoApplicationService
from grpc_app.generated import todo_pb2, todo_pb2_grpc
from grpc_app.mappers.todo import todo_dto_to_proto, todo_list_to_proto


class TodoService(todo_pb2_grpc.TodoServicer):
    def __init__(self, svc: TodoApplicationService) -> None:
        self._svc = svc

    async def CreateTodo(self, request: todo_pb2.NewTodo, context: grpc.aio.ServicerContext) -> todo_pb2.TodoItem:  # type: ignore[override]
        todo = await self._svc.create_todo(TodoCreateDTO(text=request.text))
        return todo_dto_to_proto(todo)

    async def GetTodos(self, request: todo_pb2.NoParams, context: grpc.aio.ServicerContext) -> todo_pb2.TodoItems:  # type: ignore[override]
        todos = await self._svc.list_todos()
        return todo_list_to_proto(todos)

    async def GetTodosStream(self, request: todo_pb2.NoParams, context: grpc.aio.ServicerContext) -> AsyncIterator[todo_pb2.TodoItem]:  # type: ignore[override]
        # A client hang-up cancels this generator between messages; the store is only read
        async for todo in self._svc.iter_todos():
            yield todo_dto_to_proto(todo)
