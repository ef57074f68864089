from typing import List

import orjson

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.library_roster import build_roster
from src.service.seating.driven_adapter.store.in_memory_seat_store import InMemorySeatStore
from src.service.seating.driven_adapter.store.kvrocks_seat_store import KvrocksSeatStore


def load_seed_roster(settings: Settings) -> List[Library]:
    """Built-in campus roster, or the JSON list at LIBRARY_ROSTER_FILE"""
    if settings.LIBRARY_ROSTER_FILE is None:
        return build_roster()

    entries = orjson.loads(settings.LIBRARY_ROSTER_FILE.read_bytes())
    if not isinstance(entries, list) or not entries:
        raise ValueError(f'{settings.LIBRARY_ROSTER_FILE} must hold a non-empty JSON list')
    Logger.base.info(f'📚 [ROSTER] Loaded {len(entries)} libraries from {settings.LIBRARY_ROSTER_FILE}')
    return build_roster(entries)


def build_seat_store(settings: Settings) -> ISeatStore:
    seed_roster = load_seed_roster(settings)
    if settings.STORE_BACKEND == 'kvrocks':
        return KvrocksSeatStore(
            client_factory=kvrocks_client.get_client,
            seed_roster=seed_roster,
            key_prefix=settings.KVROCKS_KEY_PREFIX,
        )
    return InMemorySeatStore(seed_roster=seed_roster, key_prefix=settings.KVROCKS_KEY_PREFIX)
