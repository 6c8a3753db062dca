"""Store abstraction for todos."""
from __future__ import annotations

from abc import ABC, abstractmethod

from .entity import Todo


class TodoStore(ABC):
    """Ordered, append-only collection of todos.

    Implementations must serialize ``append`` and ``list`` against each
    other: the N-th appended todo gets id ``"N"`` and ``list`` never sees a
    half-built record.
    """

    @abstractmethod
    async def append(self, text: str) -> Todo:
        ...

    @abstractmethod
    async def list(self) -> list[Todo]:
        """Return a point-in-time copy of all todos in insertion order."""
        ...
