# File: src/parking_toll/application/parking_service.py
"""
Parking Application Service

This module implements the application service layer on top of the parking
lot aggregate. It accepts request DTOs (pydantic models, validated when they
are created), turns them into domain objects, runs the use case and reports
the outcome as a result DTO.

Responsibilities:
1. Translate requests into vehicles and call the parking lot
2. Report parking errors as unsuccessful results instead of exceptions
3. Publish the domain events raised by the parking lot
4. Provide a clean API for the interface layer (CLI)

Exceptions raised by collaborators (clock, pricing strategy) are not parking
errors and are propagated.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Any
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import DefaultVehicle, VehicleType
from ..domain.aggregates import ParkingLot
from ..domain.exceptions import ParkingError
from ..infrastructure.config import ParkingConfig
from ..infrastructure.factories import ParkingFactory, create_parking
from ..infrastructure.messaging import EventBus
from ..domain.clock import Clock


# ============================================================================
# DATA TRANSFER OBJECTS (DTOs)
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO for requests, validated at creation"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        """Create DTO from dictionary"""
        return cls(**data)


class VehicleRequestDTO(BaseDTO):
    """A vehicle as described by a client: plate and type name or label"""
    license_plate: Optional[str] = Field(description="Registration number, None allowed")
    vehicle_type: VehicleType = Field(description="Vehicle type name (GASOLINE) or label (Gas)")

    @field_validator('vehicle_type', mode='before')
    @classmethod
    def parse_vehicle_type(cls, v):
        """Accept member names and labels, case insensitive"""
        return VehicleType.parse(v)

    def to_vehicle(self) -> DefaultVehicle:
        return DefaultVehicle(self.license_plate, self.vehicle_type)


class ParkingRequestDTO(VehicleRequestDTO):
    """DTO for parking requests"""
    pass


@dataclass
class ParkingAllocationDTO:
    """DTO for parking allocation results"""
    success: bool
    license_plate: Optional[str] = None
    slot_id: Optional[str] = None
    vehicle_type: Optional[str] = None
    message: Optional[str] = None


class ExitRequestDTO(VehicleRequestDTO):
    """DTO for exit requests, vehicle_type being the type at departure"""
    pass


@dataclass
class ParkingExitDTO:
    """DTO for parking exit results"""
    success: bool
    license_plate: Optional[str] = None
    total_fee: Optional[Any] = None
    message: Optional[str] = None


@dataclass
class ParkingLotStatusDTO:
    """DTO for parking lot status"""
    parking_lot_id: str
    total_slots: int
    occupied_slots: int
    available_slots: int
    occupancy_rate: float
    slots_by_type: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    timestamp: Optional[datetime] = None


# ============================================================================
# APPLICATION SERVICE
# ============================================================================

class ParkingService:
    """
    Application service for parking use cases
    Thread safe as long as the parking lot and the event bus are.
    """

    def __init__(self, parking_lot: ParkingLot, event_bus: Optional[EventBus] = None):
        self.parking_lot = parking_lot
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.logger = logging.getLogger(self.__class__.__name__)

    def park_vehicle(self, request: ParkingRequestDTO) -> ParkingAllocationDTO:
        """Use case: a vehicle arrives and asks for a slot"""
        vehicle = request.to_vehicle()

        try:
            slot_id = self.parking_lot.park(vehicle)
        except ParkingError as e:
            self.logger.debug(f"Parking request for {request.license_plate} refused: {e}")
            return ParkingAllocationDTO(
                success=False,
                license_plate=request.license_plate,
                vehicle_type=vehicle.vehicle_type.name,
                message=str(e)
            )
        finally:
            self._publish_pending_events()

        if slot_id is None:
            return ParkingAllocationDTO(
                success=False,
                license_plate=request.license_plate,
                vehicle_type=vehicle.vehicle_type.name,
                message=f"No slot available for {vehicle.vehicle_type} vehicles"
            )

        return ParkingAllocationDTO(
            success=True,
            license_plate=request.license_plate,
            slot_id=slot_id,
            vehicle_type=vehicle.vehicle_type.name,
            message=f"Vehicle parked in slot {slot_id}"
        )

    def exit_vehicle(self, request: ExitRequestDTO) -> ParkingExitDTO:
        """Use case: a vehicle leaves and pays"""
        vehicle = request.to_vehicle()

        try:
            fee = self.parking_lot.unpark_and_bill(vehicle)
        except ParkingError as e:
            self.logger.debug(f"Exit request for {request.license_plate} refused: {e}")
            return ParkingExitDTO(success=False, license_plate=request.license_plate, message=str(e))
        finally:
            self._publish_pending_events()

        return ParkingExitDTO(
            success=True,
            license_plate=request.license_plate,
            total_fee=fee,
            message=f"Vehicle left, fee: {fee}"
        )

    def is_parked(self, license_plate: Optional[str]) -> bool:
        # Only the registration number is looked up
        return self.parking_lot.is_parked(DefaultVehicle(license_plate, VehicleType.GASOLINE))

    def get_parking_lot_status(self) -> ParkingLotStatusDTO:
        report = self.parking_lot.get_status_report()
        return ParkingLotStatusDTO(
            parking_lot_id=report["parking_lot_id"],
            total_slots=report["total_slots"],
            occupied_slots=report["occupied_slots"],
            available_slots=report["available_slots"],
            occupancy_rate=report["occupancy_rate"],
            slots_by_type=report["vehicle_types"],
            timestamp=self.parking_lot.clock.now()
        )

    def _publish_pending_events(self) -> None:
        events = self.parking_lot.clear_events()
        if events:
            self.event_bus.publish_all(events)


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class ParkingServiceFactory:
    """Factory for creating parking service instances"""

    @staticmethod
    def create_default_service() -> ParkingService:
        """Create service with the default configuration"""
        return ParkingServiceFactory.create_service_with_config(ParkingConfig())

    @staticmethod
    def create_service_with_config(
        config: ParkingConfig,
        clock: Optional[Clock] = None,
        event_bus: Optional[EventBus] = None,
        factory: Optional[ParkingFactory] = None
    ) -> ParkingService:
        """Create service with custom configuration"""
        parking_lot = create_parking(
            config.slots_per_type,
            config.create_pricing_strategy(),
            clock=clock,
            factory=factory,
            collect_events=True
        )
        return ParkingService(parking_lot, event_bus)
