# File: src/parking_toll/domain/exceptions.py
"""
Exceptions intentionally raised by the parking lot

Anything else escaping a parking operation comes from a caller-supplied
collaborator (vehicle accessor, clock, pricing strategy) and is propagated
unwrapped.
"""

from datetime import datetime
from typing import Optional

from .models import VehicleType


class ParkingError(Exception):
    """Base exception for parking lot errors"""
    pass


class AlreadyParkedError(ParkingError):
    """Raised when parking a registration number that is already parked"""

    def __init__(self, registration_number: Optional[str]):
        self.registration_number = registration_number
        super().__init__(
            f"Vehicle with registration number '{registration_number}' is already parked"
        )


class UnknownVehicleTypeError(ParkingError):
    """Raised when no capacity was configured for a vehicle type"""

    def __init__(self, vehicle_type: VehicleType):
        self.vehicle_type = vehicle_type
        super().__init__(f"Parking does not provide slots for vehicles of type '{vehicle_type}'")


class NotParkedError(ParkingError):
    """Raised when a departure is requested for a vehicle that is not parked"""

    def __init__(self, registration_number: Optional[str]):
        self.registration_number = registration_number
        super().__init__(
            f"Vehicle with registration number '{registration_number}' is not parked"
        )


class ClockWentBackwardsError(ParkingError):
    """
    Raised when the departure instant is earlier than the arrival instant
    The vehicle has already left when this is raised
    """

    def __init__(
        self,
        registration_number: Optional[str],
        arrival_time: datetime,
        departure_time: datetime
    ):
        self.registration_number = registration_number
        self.arrival_time = arrival_time
        self.departure_time = departure_time
        super().__init__(
            f"Unable to bill vehicle with registration number '{registration_number}' "
            f"which has just left: departure '{departure_time.isoformat()}' is earlier "
            f"than arrival '{arrival_time.isoformat()}'"
        )
