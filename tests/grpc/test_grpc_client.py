import json

import pytest

import grpc_client


pytestmark = pytest.mark.asyncio


async def test_client_creates_then_lists_and_streams(grpc_todo_server, capsys):
    target, store = grpc_todo_server
    await store.append("existing")

    await grpc_client.run("Hello, gRPC!", target=target, timeout=5.0, show_list=True, show_stream=True)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Sending message: Hello, gRPC!"
    assert json.loads(lines[1].removeprefix("Received response: ")) == {"id": "2", "text": "Hello, gRPC!"}
    assert json.loads(lines[2].removeprefix("Todos: ")) == {
        "todos": [{"id": "1", "text": "existing"}, {"id": "2", "text": "Hello, gRPC!"}]
    }
    assert [json.loads(line) for line in lines[3:]] == [
        {"id": "1", "text": "existing"},
        {"id": "2", "text": "Hello, gRPC!"},
    ]


async def test_client_echoes_empty_text(grpc_todo_server, capsys):
    target, _ = grpc_todo_server
    await grpc_client.run("", target=target, timeout=5.0, show_list=False, show_stream=False)

    lines = capsys.readouterr().out.splitlines()
    assert json.loads(lines[1].removeprefix("Received response: ")) == {"id": "1", "text": ""}
