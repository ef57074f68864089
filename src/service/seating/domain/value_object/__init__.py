"""Seating Domain Value Objects"""

from src.service.seating.domain.value_object.admin_scope import AdminScope
from src.service.seating.domain.value_object.ledger_outcome import (
    AdminReleaseOutcome,
    LibrarySweep,
    ReconcileReport,
    ReservationOutcome,
    ScanResult,
)

__all__ = [
    'AdminReleaseOutcome',
    'AdminScope',
    'LibrarySweep',
    'ReconcileReport',
    'ReservationOutcome',
    'ScanResult',
]
