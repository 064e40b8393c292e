# File: src/parking_toll/__init__.py
"""
Parking Toll library

Thread-safe allocation of parking slots by vehicle type, and billing of
departing vehicles through a pluggable pricing strategy.

    >>> from parking_toll import create_parking, DefaultPricingStrategy, DefaultVehicle, VehicleType
    >>> parking = create_parking({VehicleType.GASOLINE: 2}, DefaultPricingStrategy(0, 1.5))
    >>> parking.park(DefaultVehicle("AI-241-SP", VehicleType.GASOLINE))
    '0'
"""

from .domain.models import VehicleType, Vehicle, DefaultVehicle, OccupancyRecord
from .domain.clock import Clock, SystemClock
from .domain.strategies import PricingStrategy, DurationPricingStrategy, DefaultPricingStrategy
from .domain.aggregates import ParkingLot
from .domain.exceptions import (
    ParkingError, AlreadyParkedError, UnknownVehicleTypeError,
    NotParkedError, ClockWentBackwardsError
)
from .infrastructure.factories import ParkingFactory, DefaultParkingFactory, create_parking

__version__ = "1.0.0"

__all__ = [
    "VehicleType", "Vehicle", "DefaultVehicle", "OccupancyRecord",
    "Clock", "SystemClock",
    "PricingStrategy", "DurationPricingStrategy", "DefaultPricingStrategy",
    "ParkingLot",
    "ParkingError", "AlreadyParkedError", "UnknownVehicleTypeError",
    "NotParkedError", "ClockWentBackwardsError",
    "ParkingFactory", "DefaultParkingFactory", "create_parking",
]
