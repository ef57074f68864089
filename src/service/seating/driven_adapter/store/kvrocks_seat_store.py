from typing import Callable, Dict, List, Optional

from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.seating.driven_adapter.store.key_value_seat_store import KeyValueSeatStore


class KvrocksSeatStore(KeyValueSeatStore):
    """
    Kvrocks-backed seat store.

    Storage Format:
        Type: String per document (orjson bytes)
        Writes: MSET, so a library record and its ledger partition land together

    The client is resolved per call so the store can be built before the
    connection pool is initialized in the lifespan.
    """

    def __init__(self, *, client_factory: Callable[[], AsyncRedis], **kwargs) -> None:
        super().__init__(**kwargs)
        self.client_factory = client_factory

    async def _get_many(self, keys: List[str]) -> List[Optional[bytes | str]]:
        try:
            return await self.client_factory().mget(keys)
        except RedisError as e:
            raise StorageUnavailableError(f'Kvrocks read failed: {e}') from e

    async def _set_many(self, mapping: Dict[str, bytes]) -> None:
        try:
            await self.client_factory().mset(mapping)
        except RedisError as e:
            Logger.base.error(f'❌ [SEAT-STORE] Kvrocks write failed: {e}')
            raise StorageUnavailableError(f'Kvrocks write failed: {e}') from e

    async def _clear_all(self) -> None:
        client = self.client_factory()
        try:
            keys = [key async for key in client.scan_iter(match=self._key('seat:*'))]
            if keys:
                await client.delete(*keys)
        except RedisError as e:
            raise StorageUnavailableError(f'Kvrocks clear failed: {e}') from e
