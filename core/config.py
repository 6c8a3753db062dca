"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, model_validator
from typing import Optional


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    # Seconds in-flight RPCs get to finish on shutdown
    grace_period: float = 5.0
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class GrpcClientSettings(BaseModel):
    target: str = "localhost:50051"
    timeout: float = 10.0


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="Todo gRPC Service")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=True)
    ENVIRONMENT: str = Field(default="development")

    # gRPC settings
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)
    client: GrpcClientSettings = Field(default_factory=GrpcClientSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @model_validator(mode="after")
    def _validate_grpc(self):
        if not 0 <= self.grpc.port <= 65535:
            raise ValueError(f"GRPC__PORT 超出范围: {self.grpc.port}")
        if self.grpc.grace_period < 0:
            raise ValueError("GRPC__GRACE_PERIOD 不能为负数")
        return self


settings = Settings()
