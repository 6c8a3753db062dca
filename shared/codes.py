"""
Shared business codes used across layers (Domain/Application/gRPC).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """业务状态码定义（单一来源）"""

    # 参数错误 (1xxxx)
    PARAM_VALIDATION_ERROR = 10003

    # 系统错误 (4xxxx)
    SYSTEM_ERROR = 40000


__all__ = ["BusinessCode"]
