"""Demo client: create a todo, optionally print the whole list."""
import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

import grpc
from google.protobuf.json_format import MessageToDict

from core.config import settings
from core.logging_config import get_logger
from grpc_app.generated import todo_pb2, todo_pb2_grpc


logger = get_logger(__name__)


def _to_json(message) -> str:
    return json.dumps(
        MessageToDict(message, preserving_proto_field_name=True, always_print_fields_with_no_presence=True),
        ensure_ascii=False,
    )


async def run(text: str, *, target: str, timeout: float, show_list: bool, show_stream: bool) -> None:
    async with grpc.aio.insecure_channel(target) as channel:
        stub = todo_pb2_grpc.TodoStub(channel)

        print(f"Sending message: {text}")
        created = await stub.CreateTodo(todo_pb2.NewTodo(text=text), timeout=timeout)
        print(f"Received response: {_to_json(created)}")

        if show_list:
            todos = await stub.GetTodos(todo_pb2.NoParams(), timeout=timeout)
            print(f"Todos: {_to_json(todos)}")

        if show_stream:
            async for todo in stub.GetTodosStream(todo_pb2.NoParams(), timeout=timeout):
                print(_to_json(todo))


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Todo gRPC demo client")
    ap.add_argument("text", nargs="?", default="Hello, gRPC!", help="Text of the todo to create")
    ap.add_argument("--target", default=settings.client.target)
    ap.add_argument("--timeout", type=float, default=settings.client.timeout)
    ap.add_argument("--list", dest="show_list", action="store_true", help="Print GetTodos afterwards")
    ap.add_argument("--stream", dest="show_stream", action="store_true", help="Print GetTodosStream afterwards")
    args = ap.parse_args(argv)

    try:
        asyncio.run(run(
            args.text,
            target=args.target,
            timeout=args.timeout,
            show_list=args.show_list,
            show_stream=args.show_stream,
        ))
    except grpc.aio.AioRpcError as exc:
        logger.error("grpc_client_error", target=args.target, code=str(exc.code()), details=exc.details())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
