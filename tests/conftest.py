"""Pytest bootstrap configuration.

Ensure environment defaults are set before test collection and module
imports that depend on application settings.
"""
import os

# JSON logs keep test output readable; loopback only
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("GRPC__HOST", "127.0.0.1")

import pytest  # noqa: E402


@pytest.fixture
def store():
    from infrastructure.stores import InMemoryTodoStore

    return InMemoryTodoStore()


@pytest.fixture
def todo_service(store):
    from application.services.todo_service import TodoApplicationService

    return TodoApplicationService(store)


@pytest.fixture
async def grpc_todo_server(store):
    """Start the real server stack on an ephemeral port (port 0).

    Yields the target address and the store backing it.
    """
    from grpc_app.server import create_server, stop_server

    server, port = await create_server(store=store, address="127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}", store
    finally:
        await stop_server(server, grace=None)
