from __future__ import annotations

from typing import Optional, Sequence, Tuple
import grpc
from grpc_health.v1 import health_pb2_grpc, health_pb2
from grpc_health.v1._async import HealthServicer

from core.config import settings
from core.logging_config import get_logger
from domain.todo import TodoStore
from infrastructure.stores import InMemoryTodoStore
from application.services.todo_service import TodoApplicationService
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.generated import SERVICE_NAME, todo_pb2_grpc
from grpc_app.services.todo_service import TodoService


logger = get_logger(__name__)

_HEALTH_ATTR = "_todo_health_servicer"


def _read(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise RuntimeError(f"GRPC TLS file not readable: {path} ({exc})") from exc


def _bind(server: grpc.aio.Server, address: str) -> int:
    if settings.grpc.tls.enabled:
        if not (settings.grpc.tls.cert and settings.grpc.tls.key):
            raise RuntimeError("GRPC TLS enabled but cert/key not provided")
        root_certificates = _read(settings.grpc.tls.ca) if settings.grpc.tls.ca else None
        creds = grpc.ssl_server_credentials(
            [(_read(settings.grpc.tls.key), _read(settings.grpc.tls.cert))],
            root_certificates=root_certificates,
            require_client_auth=bool(root_certificates),
        )
        port = server.add_secure_port(address, creds)
    else:
        port = server.add_insecure_port(address)
    # Older grpcio reports a failed bind as port 0 instead of raising
    if not port:
        raise RuntimeError(f"Failed to bind gRPC server to {address}")
    return port


async def create_server(
    *,
    store: Optional[TodoStore] = None,
    address: Optional[str] = None,
) -> Tuple[grpc.aio.Server, int]:
    """Build an unstarted server wired to a todo store.

    A fresh in-memory store is created unless one is given. Returns the
    server together with the bound port (useful when binding port 0).
    Raises RuntimeError when the address cannot be bound or TLS material
    cannot be loaded.
    """
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, settings.grpc.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    # Register services
    svc = TodoApplicationService(store if store is not None else InMemoryTodoStore())
    todo_pb2_grpc.add_TodoServicer_to_server(TodoService(svc), server)

    # Health service (asyncio flavour, the interceptors await every handler)
    health_svc = HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)

    address = address or settings.grpc.address
    try:
        port = _bind(server, address)
    except RuntimeError:
        # Never leave a half-built server behind
        await server.stop(grace=None)
        raise

    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)
    setattr(server, _HEALTH_ATTR, health_svc)
    return server, port


async def stop_server(server: grpc.aio.Server, grace: Optional[float] = None) -> None:
    """Report NOT_SERVING to health checks, then stop accepting calls."""
    health_svc = getattr(server, _HEALTH_ATTR, None)
    if health_svc is not None:
        await health_svc.enter_graceful_shutdown()
    await server.stop(grace=grace)
