from typing import Dict, List, Optional

from src.service.seating.driven_adapter.store.key_value_seat_store import KeyValueSeatStore


class InMemorySeatStore(KeyValueSeatStore):
    """
    Process-local store holding the same encoded documents Kvrocks would.

    Default backend for development and tests; contents are lost on restart.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.documents: Dict[str, bytes | str] = {}

    async def _get_many(self, keys: List[str]) -> List[Optional[bytes | str]]:
        return [self.documents.get(key) for key in keys]

    async def _set_many(self, mapping: Dict[str, bytes]) -> None:
        self.documents.update(mapping)

    async def _clear_all(self) -> None:
        self.documents.clear()
