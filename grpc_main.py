import asyncio
import sys

from core.config import settings
from core.logging_config import get_logger
from grpc_app.server import create_server, stop_server


logger = get_logger(__name__)


async def main() -> int:
    if not settings.grpc.enabled:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")
        return 0

    address = settings.grpc.address
    try:
        server, port = await create_server(address=address)
    except RuntimeError as exc:
        logger.error("grpc_bind_failed", address=address, error=str(exc))
        return 1

    logger.info("grpc_starting", address=address, port=port)
    await server.start()
    logger.info("grpc_started", address=address, port=port)
    try:
        await server.wait_for_termination()
    except asyncio.CancelledError:
        logger.info("grpc_stopping")
        await stop_server(server, grace=settings.grpc.grace_period)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
