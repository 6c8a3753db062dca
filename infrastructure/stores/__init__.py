from .inmemory import InMemoryTodoStore

__all__ = ["InMemoryTodoStore"]
