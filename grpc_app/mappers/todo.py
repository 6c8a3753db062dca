from __future__ import annotations

from application.dto import TodoDTO, TodoListDTO
from grpc_app.generated import todo_pb2


def todo_dto_to_proto(dto: TodoDTO) -> todo_pb2.TodoItem:
    return todo_pb2.TodoItem(id=dto.id, text=dto.text)


def todo_list_to_proto(dto: TodoListDTO) -> todo_pb2.TodoItems:
    return todo_pb2.TodoItems(todos=[todo_dto_to_proto(t) for t in dto.todos])
