"""
数据传输对象（DTO）- 应用层与表现层（gRPC）之间的数据传输
"""
from pydantic import BaseModel, ConfigDict, Field


class DTOBase(BaseModel):
    """Base DTO: DTOs are immutable value objects once built."""

    model_config = ConfigDict(frozen=True)


class TodoCreateDTO(DTOBase):
    """创建 todo 的请求 DTO（空文本同样合法）"""
    text: str = Field(default="", description="todo 文本，原样保存")


class TodoDTO(DTOBase):
    """todo 响应 DTO"""
    id: str
    text: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class TodoListDTO(DTOBase):
    """完整 todo 列表（按创建顺序）"""
    todos: list[TodoDTO] = Field(default_factory=list)
