# File: src/parking_toll/infrastructure/factories.py
"""
Factory Pattern Implementation for the Parking Toll library

Parking lots are created through a ParkingFactory. There is no process-wide
default instance to replace: callers that need another implementation pass
their factory explicitly when wiring the application, and create_parking()
falls back to DefaultParkingFactory otherwise.

Key Benefits:
- Decouples parking lot creation from usage
- Enables dependency injection of alternative implementations
- Facilitates testing with fake factories
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional
import logging

from ..domain.models import VehicleType
from ..domain.clock import Clock
from ..domain.strategies import PricingStrategy
from ..domain.aggregates import ParkingLot


# ============================================================================
# FACTORY INTERFACES
# ============================================================================

class ParkingFactory(ABC):
    """Base factory interface for parking lots"""

    @abstractmethod
    def create(
        self,
        slots_per_type: Mapping[VehicleType, int],
        pricing_strategy: PricingStrategy,
        clock: Optional[Clock] = None,
        collect_events: bool = False
    ) -> ParkingLot:
        """
        Create a parking lot

        Args:
            slots_per_type: number of slots for each vehicle type; negative
                counts mean no slot, omitted types are unknown to the lot
            pricing_strategy: strategy billing departing vehicles
            clock: time source, a real time clock when None
            collect_events: keep domain events until clear_events() drains
                them, for callers that publish them
        """
        pass


# ============================================================================
# DOMAIN OBJECT FACTORIES
# ============================================================================

class DefaultParkingFactory(ParkingFactory):
    """Factory creating the thread-safe ParkingLot aggregate"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def create(
        self,
        slots_per_type: Mapping[VehicleType, int],
        pricing_strategy: PricingStrategy,
        clock: Optional[Clock] = None,
        collect_events: bool = False
    ) -> ParkingLot:
        parking_lot = ParkingLot(
            dict(slots_per_type), pricing_strategy, clock, collect_events=collect_events
        )
        self.logger.debug(f"Created parking lot {parking_lot.id} with {pricing_strategy}")
        return parking_lot


def create_parking(
    slots_per_type: Mapping[VehicleType, int],
    pricing_strategy: PricingStrategy,
    clock: Optional[Clock] = None,
    factory: Optional[ParkingFactory] = None,
    collect_events: bool = False
) -> ParkingLot:
    """Create a parking lot with the given factory, DefaultParkingFactory if None"""
    if factory is None:
        factory = DefaultParkingFactory()
    return factory.create(slots_per_type, pricing_strategy, clock, collect_events=collect_events)
