"""Todo domain exports."""
from .entity import Todo
from .store import TodoStore

__all__ = ["Todo", "TodoStore"]
