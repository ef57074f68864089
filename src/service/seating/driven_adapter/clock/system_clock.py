from datetime import datetime, timezone

from src.service.seating.app.interface.i_clock import IClock


class SystemClock(IClock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
