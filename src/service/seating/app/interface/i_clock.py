from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Wall-clock source for every deadline decision"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime"""
        pass
