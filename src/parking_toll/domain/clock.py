# File: src/parking_toll/domain/clock.py
"""
Time source used by the parking lot to date arrivals and departures
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """
    Abstract time source
    Successive calls separated by real time are expected to return later
    instants; a clock going backwards makes departures fail to bill.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant"""
        pass


class SystemClock(Clock):
    """Real time clock reading the system UTC wall clock"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"
