from prometheus_client import Counter, Gauge


class SeatingMetrics:
    """
    Seat booking lifecycle metrics

    Counts engine outcomes per library and tracks free seats as last observed
    by a commit or a sweep.
    """

    def __init__(self) -> None:
        self.booking_requests = Counter(
            'seat_booking_requests_total',
            'Create-booking attempts',
            ['library_id', 'result'],  # result: created/no_seats/duplicate_active_booking/...
        )

        self.scan_events = Counter(
            'seat_scan_events_total',
            'Entrance code scans',
            ['library_id', 'outcome'],
        )

        self.seats_released = Counter(
            'seat_releases_total',
            'Seats returned to the pool',
            ['library_id', 'reason'],  # reason: checkout/expired/session_ended/admin
        )

        self.available_seats = Gauge(
            'seat_available_spots',
            'Free seats per library',
            ['library_id'],
        )

        self.storage_degraded_reads = Counter(
            'seat_store_degraded_reads_total',
            'Store reads that fell back to defaults',
            ['document'],
        )

    # ========== Helper Methods ==========

    def record_booking_request(self, *, library_id: str, result: str) -> None:
        self.booking_requests.labels(library_id=library_id, result=result).inc()

    def record_scan(self, *, library_id: str, outcome: str) -> None:
        self.scan_events.labels(library_id=library_id, outcome=outcome).inc()

    def record_release(self, *, library_id: str, reason: str, count: int = 1) -> None:
        if count > 0:
            self.seats_released.labels(library_id=library_id, reason=reason).inc(count)

    def record_sweep(self, *, library_id: str, expired: int, completed: int, available: int) -> None:
        self.record_release(library_id=library_id, reason='expired', count=expired)
        self.record_release(library_id=library_id, reason='session_ended', count=completed)
        self.update_available_seats(library_id=library_id, available=available)

    def update_available_seats(self, *, library_id: str, available: int) -> None:
        self.available_seats.labels(library_id=library_id).set(available)

    def record_degraded_read(self, *, document: str) -> None:
        self.storage_degraded_reads.labels(document=document).inc()


# Global metrics instance
metrics = SeatingMetrics()
