from __future__ import annotations

from typing import Callable, Awaitable
import contextvars

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id
from domain.common.exceptions import BusinessException
from shared.codes import BusinessCode


logger = get_logger(__name__)

# Mark that the current request has been mapped to a gRPC status
_mapped_error: contextvars.ContextVar[bool] = contextvars.ContextVar("grpc_mapped_error", default=False)


def set_mapped_error() -> None:
    _mapped_error.set(True)


def is_mapped_error() -> bool:
    return bool(_mapped_error.get())


def _business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    try:
        bc = BusinessCode(code)
    except ValueError:
        return grpc.StatusCode.FAILED_PRECONDITION

    mapping = {
        BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
        BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
    }

    return mapping.get(bc, grpc.StatusCode.FAILED_PRECONDITION)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return handler

        method = handler_call_details.method

        async def _abort_with(context: grpc.aio.ServicerContext, exc: Exception) -> None:
            if isinstance(exc, BusinessException):
                code = str(exc.code)
                status = _business_code_to_grpc_status(exc.code)
                error_type = exc.error_type or "BusinessError"
                message = exc.message
                details = exc.message
            else:
                code = str(BusinessCode.SYSTEM_ERROR.value)
                status = grpc.StatusCode.INTERNAL
                error_type = "SystemError"
                message = str(exc)
                details = "系统内部错误"
            trailing = [("x-biz-code", code), ("x-error-type", error_type)]
            request_id = get_request_id()
            if request_id:
                trailing.append((REQUEST_ID_META_KEY, request_id))
            try:
                context.set_trailing_metadata(tuple(trailing))
            except Exception:
                pass
            set_mapped_error()
            # Concise error log (no stack)
            logger.error(
                "grpc_mapped_error",
                method=method,
                code=code,
                status=str(status),
                message=message,
                request_id=get_request_id(),
            )
            await context.abort(status, details)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort_with(context, exc)

        async def _unary_stream(request, context: grpc.aio.ServicerContext):
            try:
                async for response in handler.unary_stream(request, context):
                    yield response
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort_with(context, exc)

        if handler.unary_unary:
            return grpc.unary_unary_rpc_method_handler(
                _unary_unary,
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        if handler.unary_stream:
            return grpc.unary_stream_rpc_method_handler(
                _unary_stream,
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        return handler
