# File: src/parking_toll/domain/models.py
"""
Domain Models for the Parking Toll library

This module contains:
1. Enums: vehicle types, each owning its own slot pool
2. Entities: the Vehicle capability interface and its default implementation
3. Value Objects: the occupancy record kept while a vehicle is parked
4. Domain Events: events raised by the parking lot aggregate

Vehicles are supplied by the caller on every call; the parking lot never
stores them, it only stores what it read from them at arrival.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any
import uuid
from enum import Enum


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleType(Enum):
    """
    Enumeration of vehicle types
    Each type gets its own pool of slots and may be priced differently
    """
    GASOLINE = "Gas"                  # Thermal engine (gasoline or diesel)
    ELECTRIC_20KW = "20 kW"           # Electric engine, 20kW power supply
    ELECTRIC_50KW = "50 kW"           # Electric engine, 50kW power supply

    @property
    def label(self) -> str:
        """Short human-readable description of the type"""
        return self.value

    @property
    def is_electric(self) -> bool:
        return self is not VehicleType.GASOLINE

    @property
    def slot_prefix(self) -> str:
        """Prefix of the slot identifiers generated for this type"""
        if self is VehicleType.GASOLINE:
            return ""
        return f"{self.label} - "

    @classmethod
    def parse(cls, text: str) -> 'VehicleType':
        """
        Resolve a vehicle type from a member name or a label
        Raises: ValueError if nothing matches
        """
        if isinstance(text, cls):
            return text

        normalized = str(text).strip()
        for vehicle_type in cls:
            if normalized.upper() == vehicle_type.name:
                return vehicle_type
            if normalized.lower() == vehicle_type.label.lower():
                return vehicle_type

        raise ValueError(f"Unknown vehicle type: {text!r}")

    def __str__(self) -> str:
        return self.label


# ============================================================================
# ENTITIES
# ============================================================================

class Vehicle(ABC):
    """
    Entity: a vehicle presented to the parking lot

    Implement this interface to park your own objects, or use DefaultVehicle.
    Both accessors are read once per parking operation and may raise; a raising
    accessor aborts the operation without touching the parking lot state.
    """

    @property
    @abstractmethod
    def registration_number(self) -> Optional[str]:
        """
        Identity correlating a park call with its later departure
        None is a valid registration number, distinct from every string
        """
        pass

    @property
    @abstractmethod
    def vehicle_type(self) -> VehicleType:
        """
        Current type of the vehicle
        The type read at arrival selects the slot pool; the type read at
        departure is the one the pricing strategy sees.
        """
        pass


class DefaultVehicle(Vehicle):
    """Immutable Vehicle implementation holding the values it was built with"""

    __slots__ = ("_registration_number", "_vehicle_type")

    def __init__(self, registration_number: Optional[str], vehicle_type: VehicleType):
        self._registration_number = registration_number
        self._vehicle_type = vehicle_type

    @property
    def registration_number(self) -> Optional[str]:
        return self._registration_number

    @property
    def vehicle_type(self) -> VehicleType:
        return self._vehicle_type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefaultVehicle):
            return False
        return (self._registration_number == other._registration_number
                and self._vehicle_type == other._vehicle_type)

    def __hash__(self) -> int:
        return hash((self._registration_number, self._vehicle_type))

    def __repr__(self) -> str:
        return f"DefaultVehicle({self._registration_number!r}, {self._vehicle_type.name})"

    def __str__(self) -> str:
        return f"{self._registration_number} ({self._vehicle_type})"


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)  # Value objects are immutable
class OccupancyRecord:
    """
    Value Object: what the parking lot remembers about a parked vehicle
    Created on arrival, consumed on departure
    """
    vehicle_type: VehicleType
    slot_id: str
    arrival_time: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "vehicle_type": self.vehicle_type.name,
            "slot_id": self.slot_id,
            "arrival_time": self.arrival_time.isoformat(),
        }


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    event_type = "domain.event"

    def __init__(self, timestamp: datetime):
        self.event_id = str(uuid.uuid4())
        self.timestamp = timestamp
        self.version = "1.0"

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class VehicleParkedEvent(DomainEvent):
    """Event raised when a vehicle is given a slot"""

    event_type = "vehicle.parked"

    def __init__(
        self,
        parking_lot_id: str,
        slot_id: str,
        registration_number: Optional[str],
        vehicle_type: VehicleType,
        arrival_time: datetime
    ):
        super().__init__(arrival_time)
        self.parking_lot_id = parking_lot_id
        self.slot_id = slot_id
        self.registration_number = registration_number
        self.vehicle_type = vehicle_type
        self.arrival_time = arrival_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "data": {
                "parking_lot_id": self.parking_lot_id,
                "slot_id": self.slot_id,
                "registration_number": self.registration_number,
                "vehicle_type": self.vehicle_type.name,
            }
        }


class VehicleLeftEvent(DomainEvent):
    """
    Event raised when a vehicle releases its slot
    Raised before billing, so it carries the arrival time only
    """

    event_type = "vehicle.left"

    def __init__(
        self,
        parking_lot_id: str,
        slot_id: str,
        registration_number: Optional[str],
        vehicle_type: VehicleType,
        arrival_time: datetime
    ):
        super().__init__(arrival_time)
        self.parking_lot_id = parking_lot_id
        self.slot_id = slot_id
        self.registration_number = registration_number
        self.vehicle_type = vehicle_type
        self.arrival_time = arrival_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "data": {
                "parking_lot_id": self.parking_lot_id,
                "slot_id": self.slot_id,
                "registration_number": self.registration_number,
                "vehicle_type": self.vehicle_type.name,
                "arrival_time": self.arrival_time.isoformat(),
            }
        }
