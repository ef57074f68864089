from enum import StrEnum


class ReleaseReason(StrEnum):
    """Why a held seat went back to the pool"""

    CHECKOUT = 'checkout'
    EXPIRED = 'expired'
    SESSION_ENDED = 'session_ended'
    ADMIN = 'admin'
