"""
Test doubles for the parking lot collaborators

ManualClock lets a test move time at will; the faulty collaborators raise on
demand to check that the parking lot state survives their failures.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, List, Tuple

from parking_toll.domain.clock import Clock
from parking_toll.domain.models import Vehicle, VehicleType
from parking_toll.domain.strategies import PricingStrategy


class CollaboratorFailure(RuntimeError):
    """Raised by the faulty collaborators below"""
    pass


class ManualClock(Clock):
    """Clock whose current instant only changes when the test says so"""

    def __init__(self, start: Optional[datetime] = None):
        self._instant = start or datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        self.fail_next = False

    def now(self) -> datetime:
        if self.fail_next:
            self.fail_next = False
            raise CollaboratorFailure("clock failure")
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, amount: timedelta) -> None:
        self._instant = self._instant + amount


class FaultyVehicle(Vehicle):
    """Vehicle whose accessors can be told to raise"""

    def __init__(
        self,
        registration_number: Optional[str],
        vehicle_type: VehicleType,
        fail_registration: bool = False,
        fail_type: bool = False
    ):
        self._registration_number = registration_number
        self._vehicle_type = vehicle_type
        self.fail_registration = fail_registration
        self.fail_type = fail_type

    @property
    def registration_number(self) -> Optional[str]:
        if self.fail_registration:
            raise CollaboratorFailure("registration number failure")
        return self._registration_number

    @property
    def vehicle_type(self) -> VehicleType:
        if self.fail_type:
            raise CollaboratorFailure("vehicle type failure")
        return self._vehicle_type


class ScriptedPricingStrategy(PricingStrategy):
    """Returns a fixed amount, or raises, and remembers what it was asked"""

    def __init__(self, amount=0, fail: bool = False):
        super().__init__()
        self.amount = amount
        self.fail = fail
        self.calls: List[Tuple[Vehicle, datetime, datetime]] = []

    def bill(self, vehicle, arrival_time, departure_time):
        self.calls.append((vehicle, arrival_time, departure_time))
        if self.fail:
            raise CollaboratorFailure("pricing failure")
        return self.amount
