from typing import Optional

from redis.asyncio import ConnectionPool as AsyncConnectionPool, Redis as AsyncRedis

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class KvrocksClient:
    """
    Async Kvrocks Client with connection pool.

    Usage:
        await kvrocks_client.initialize()  # In startup
        client = kvrocks_client.get_client()  # In store adapters
    """

    def __init__(self) -> None:
        self._client: Optional[AsyncRedis] = None

    async def initialize(self) -> AsyncRedis:
        """Initialize connection pool (idempotent)"""
        if self._client is not None:
            return self._client

        pool = AsyncConnectionPool.from_url(
            settings.KVROCKS_URL,
            password=settings.KVROCKS_PASSWORD if settings.KVROCKS_PASSWORD else None,
            decode_responses=settings.REDIS_DECODE_RESPONSES,
            max_connections=settings.KVROCKS_POOL_MAX_CONNECTIONS,
            socket_timeout=settings.KVROCKS_POOL_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT,
            socket_keepalive=settings.KVROCKS_POOL_SOCKET_KEEPALIVE,
            health_check_interval=settings.KVROCKS_POOL_HEALTH_CHECK_INTERVAL,
        )
        client = AsyncRedis.from_pool(pool)
        await client.ping()  # Fail-fast
        Logger.base.info(f'📡 [KVROCKS] Connected to {settings.KVROCKS_URL}')
        self._client = client
        return client

    def get_client(self) -> AsyncRedis:
        if self._client is None:
            raise RuntimeError(
                'Kvrocks client not initialized. '
                'Call await kvrocks_client.initialize() during startup.'
            )
        return self._client

    async def disconnect(self) -> None:
        """Close connection pool"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Global singleton
kvrocks_client = KvrocksClient()
