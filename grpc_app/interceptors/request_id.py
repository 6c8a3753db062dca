from __future__ import annotations

import uuid
import contextvars
from typing import Callable, Awaitable

import grpc
from structlog.contextvars import bind_contextvars, bound_contextvars


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("grpc_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


class RequestIdInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return handler

        def _resolve_request_id(context: grpc.aio.ServicerContext) -> str:
            # Try to get request-id from incoming metadata
            md = dict(handler_call_details.invocation_metadata or [])
            request_id = md.get(REQUEST_ID_META_KEY) or str(uuid.uuid4())
            # Attach as trailing metadata so the client can correlate
            try:
                context.set_trailing_metadata(((REQUEST_ID_META_KEY, request_id),))
            except Exception:
                pass
            return request_id

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            request_id = _resolve_request_id(context)
            token = _request_id_var.set(request_id)
            try:
                with bound_contextvars(request_id=request_id):
                    return await handler.unary_unary(request, context)
            finally:
                _request_id_var.reset(token)

        async def _unary_stream(request, context: grpc.aio.ServicerContext):
            # No reset: each RPC runs in its own task context, and a cancelled
            # stream is finalised outside of it where a token reset would fail
            request_id = _resolve_request_id(context)
            _request_id_var.set(request_id)
            bind_contextvars(request_id=request_id)
            async for response in handler.unary_stream(request, context):
                yield response

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
