"""Domain entity representing a single todo item."""
from __future__ import annotations

from dataclasses import dataclass

from domain.common.exceptions import DomainValidationException


@dataclass(frozen=True)
class Todo:
    """An identifier plus a text string; both fixed once created."""

    id: str
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise DomainValidationException("todo id 必须是非空字符串", field="id")
        # Empty text is a valid todo
        if not isinstance(self.text, str):
            raise DomainValidationException(
                "todo text 必须是字符串",
                field="text",
                details={"type": type(self.text).__name__},
            )
