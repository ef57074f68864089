from typing import List

import attrs

from src.service.seating.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingHistory:
    bookings: List[Booking]  # Newest first
    degraded: bool = False
