from enum import StrEnum


class SpotStatus(StrEnum):
    AVAILABLE = 'available'
    LIMITED = 'limited'
    FULL = 'full'
