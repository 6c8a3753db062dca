"""gRPC transport layer for the todo service.

This package hosts:
- The service contract (`protos/todo.proto`) and the modules compiled from it (`generated/`).
- Server bootstrap and interceptors.
- A thin servicer that maps gRPC requests to the todo application service.
"""
