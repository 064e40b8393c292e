# File: src/parking_toll/domain/aggregates.py
"""
Aggregate Roots for the Parking Toll library
Following Domain-Driven Design (DDD) Aggregate Pattern

Aggregates:
1. ParkingLot - Root aggregate allocating slots and billing departures

Internal structures (only ever touched through the ParkingLot):
- SlotPool - free slot identifiers per vehicle type
- OccupancyTable - occupancy record per registration number

Key Concepts:
- The slot pool and the occupancy table are guarded by a single lock and are
  always mutated together, so a slot id is either free or referenced by
  exactly one occupancy record
- Collaborators (vehicle accessors, clock, pricing strategy) are called
  outside the lock
- Domain events are raised for arrivals and departures
"""

from datetime import datetime
from typing import List, Optional, Dict, Any, Mapping, Set, Iterator, Tuple
import heapq
import logging
import threading
import uuid

from .models import (
    Vehicle, VehicleType, OccupancyRecord,
    DomainEvent, VehicleParkedEvent, VehicleLeftEvent
)
from .clock import Clock, SystemClock
from .strategies import PricingStrategy, Amount
from .exceptions import (
    ParkingError, AlreadyParkedError, UnknownVehicleTypeError,
    NotParkedError, ClockWentBackwardsError
)


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """
    Base class for all aggregate roots
    Provides identity, domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def id(self) -> str:
        """Get aggregate ID"""
        return self._id

    @property
    def version(self) -> int:
        """Get current aggregate version"""
        return self._version

    def _increment_version(self) -> None:
        """Increment version after state change"""
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add a domain event to the list of changes"""
        self._changes.append(event)

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        """Check if aggregate has pending domain events"""
        return len(self._changes) > 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


# ============================================================================
# SLOT POOL
# ============================================================================

class SlotPool:
    """
    Free slot identifiers per vehicle type

    Slot ids are generated once as <type prefix><index> for index in
    [0, capacity). Free slots are handed out lowest index first. Not thread
    safe: the owning ParkingLot serializes every call.
    """

    def __init__(self, slots_per_type: Mapping[VehicleType, int]):
        self._capacity: Dict[VehicleType, int] = {}
        self._free_heaps: Dict[VehicleType, List[int]] = {}
        self._free_sets: Dict[VehicleType, Set[int]] = {}

        for vehicle_type, slots_count in slots_per_type.items():
            # Negative capacities are treated as zero
            capacity = max(0, slots_count)
            self._capacity[vehicle_type] = capacity
            self._free_heaps[vehicle_type] = list(range(capacity))
            self._free_sets[vehicle_type] = set(range(capacity))

    @property
    def vehicle_types(self) -> List[VehicleType]:
        return list(self._capacity)

    def knows(self, vehicle_type: VehicleType) -> bool:
        """Check if a capacity was configured for the vehicle type"""
        return vehicle_type in self._capacity

    def capacity(self, vehicle_type: VehicleType) -> int:
        return self._capacity[vehicle_type]

    def available(self, vehicle_type: VehicleType) -> int:
        return len(self._free_sets[vehicle_type])

    def acquire(self, vehicle_type: VehicleType) -> Optional[str]:
        """
        Take a free slot for the vehicle type
        Returns: the slot id, None if every slot of the type is taken
        """
        free_heap = self._free_heaps[vehicle_type]
        if not free_heap:
            return None

        index = heapq.heappop(free_heap)
        self._free_sets[vehicle_type].discard(index)
        return self._slot_id(vehicle_type, index)

    def release(self, vehicle_type: VehicleType, slot_id: str) -> None:
        """Give a slot back to the free slots of its vehicle type"""
        index = self._slot_index(vehicle_type, slot_id)
        free_set = self._free_sets[vehicle_type]
        if index in free_set:
            raise ValueError(f"Slot {slot_id!r} is already free")

        free_set.add(index)
        heapq.heappush(self._free_heaps[vehicle_type], index)

    @staticmethod
    def _slot_id(vehicle_type: VehicleType, index: int) -> str:
        return f"{vehicle_type.slot_prefix}{index}"

    def _slot_index(self, vehicle_type: VehicleType, slot_id: str) -> int:
        prefix = vehicle_type.slot_prefix
        if not slot_id.startswith(prefix):
            raise ValueError(f"Slot {slot_id!r} does not belong to type {vehicle_type.name}")

        index = int(slot_id[len(prefix):])
        if not 0 <= index < self._capacity[vehicle_type]:
            raise ValueError(f"Slot {slot_id!r} is out of range for type {vehicle_type.name}")
        return index


# ============================================================================
# OCCUPANCY TABLE
# ============================================================================

class OccupancyTable:
    """
    Occupancy record per registration number
    Keyed by the registration value only: two vehicle objects with the same
    registration number are the same vehicle. None is a regular key.
    """

    def __init__(self):
        self._records: Dict[Optional[str], OccupancyRecord] = {}

    def __contains__(self, registration_number: Optional[str]) -> bool:
        return registration_number in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Tuple[Optional[str], OccupancyRecord]]:
        return iter(self._records.items())

    def get(self, registration_number: Optional[str]) -> Optional[OccupancyRecord]:
        return self._records.get(registration_number)

    def add(self, registration_number: Optional[str], record: OccupancyRecord) -> None:
        if registration_number in self._records:
            raise KeyError(registration_number)
        self._records[registration_number] = record

    def remove(self, registration_number: Optional[str]) -> OccupancyRecord:
        return self._records.pop(registration_number)

    def count_by_type(self, vehicle_type: VehicleType) -> int:
        return sum(1 for record in self._records.values() if record.vehicle_type is vehicle_type)


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

class ParkingLot(AggregateRoot):
    """
    Aggregate Root: Parking lot allocating slots by vehicle type
    Thread safe; every operation is a single immediate attempt.
    """

    def __init__(
        self,
        slots_per_type: Mapping[VehicleType, int],
        pricing_strategy: PricingStrategy,
        clock: Optional[Clock] = None,
        id: Optional[str] = None,
        collect_events: bool = False
    ):
        """
        Args:
            slots_per_type: number of slots for each vehicle type; types left
                out are unknown to the lot, negative counts mean no slot
            pricing_strategy: strategy billing departing vehicles
            clock: time source, SystemClock when omitted
            id: aggregate id, generated when omitted
            collect_events: keep VehicleParkedEvent / VehicleLeftEvent objects
                until clear_events() drains them; off by default, so a lot
                nobody drains does not grow
        """
        if pricing_strategy is None:
            raise ValueError("Pricing strategy is required")

        super().__init__(id)

        # Guards _slot_pool, _occupancy, and the aggregate version and events
        self._lock = threading.Lock()
        self._slot_pool = SlotPool(slots_per_type)
        self._occupancy = OccupancyTable()

        self._pricing_strategy = pricing_strategy
        self._clock = clock if clock is not None else SystemClock()
        self._collect_events = collect_events

        self._logger.info(
            f"Parking lot {self.id} created with "
            + ", ".join(f"{vehicle_type.name}={self._slot_pool.capacity(vehicle_type)}"
                        for vehicle_type in self._slot_pool.vehicle_types)
        )

    @property
    def pricing_strategy(self) -> PricingStrategy:
        return self._pricing_strategy

    @property
    def clock(self) -> Clock:
        return self._clock

    # ========================================================================
    # PUBLIC BUSINESS METHODS
    # ========================================================================

    def park(self, vehicle: Vehicle) -> Optional[str]:
        """
        Park a vehicle in a slot of its type
        Returns: the slot id, None if no slot is left for the vehicle type
        Raises:
            AlreadyParkedError if the registration number is already parked
            UnknownVehicleTypeError if no capacity was configured for the type
        """
        # Collaborators are read before anything is committed
        registration_number = vehicle.registration_number
        vehicle_type = vehicle.vehicle_type
        arrival_time = self._clock.now()

        try:
            slot_id = self._allocate(registration_number, vehicle_type, arrival_time)
        except ParkingError as e:
            self._logger.warning(f"Park rejected: {e}")
            raise

        if slot_id is None:
            self._logger.info(
                f"No slot left for {vehicle_type.name}, vehicle {registration_number} not parked"
            )
        else:
            self._logger.info(f"Vehicle {registration_number} parked in slot {slot_id!r}")
        return slot_id

    def unpark_and_bill(self, vehicle: Vehicle) -> Amount:
        """
        Release the slot of a vehicle and bill it

        The slot goes back to the pool of the arrival type before billing, and
        the vehicle stays departed whatever happens afterwards. The vehicle is
        billed by the pricing strategy with its current type.

        Returns: the amount returned by the pricing strategy, unchecked
        Raises:
            NotParkedError if the registration number is not parked
            ClockWentBackwardsError if the departure precedes the arrival
        """
        registration_number = vehicle.registration_number

        try:
            record = self._release(registration_number)
        except NotParkedError as e:
            self._logger.warning(f"Departure rejected: {e}")
            raise

        self._logger.info(f"Vehicle {registration_number} left slot {record.slot_id!r}")

        departure_time = self._clock.now()
        if departure_time < record.arrival_time:
            error = ClockWentBackwardsError(registration_number, record.arrival_time, departure_time)
            self._logger.error(str(error))
            raise error

        amount = self._pricing_strategy.bill(vehicle, record.arrival_time, departure_time)
        self._logger.info(
            f"Vehicle {registration_number} billed {amount} for "
            f"{departure_time - record.arrival_time}"
        )
        return amount

    def is_parked(self, vehicle: Vehicle) -> bool:
        """Check if the registration number of the vehicle is parked"""
        registration_number = vehicle.registration_number

        with self._lock:
            return registration_number in self._occupancy

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def vehicle_types(self) -> List[VehicleType]:
        """Vehicle types the lot was configured for"""
        return self._slot_pool.vehicle_types

    def capacity(self, vehicle_type: VehicleType) -> int:
        self._check_known(vehicle_type)
        return self._slot_pool.capacity(vehicle_type)

    def available_slots(self, vehicle_type: VehicleType) -> int:
        self._check_known(vehicle_type)
        with self._lock:
            return self._slot_pool.available(vehicle_type)

    def occupied_slots(self, vehicle_type: Optional[VehicleType] = None) -> int:
        """Number of parked vehicles, for one type or overall"""
        if vehicle_type is not None:
            self._check_known(vehicle_type)

        with self._lock:
            if vehicle_type is None:
                return len(self._occupancy)
            return self._occupancy.count_by_type(vehicle_type)

    def total_slots(self) -> int:
        return sum(self._slot_pool.capacity(vehicle_type) for vehicle_type in self.vehicle_types)

    def get_occupancy_rate(self) -> float:
        total = self.total_slots()
        if total == 0:
            return 0.0
        return self.occupied_slots() / total

    def get_slot_of(self, vehicle: Vehicle) -> Optional[str]:
        """Slot id held by the vehicle, None if it is not parked"""
        registration_number = vehicle.registration_number

        with self._lock:
            record = self._occupancy.get(registration_number)
        return record.slot_id if record is not None else None

    def get_status_report(self) -> Dict[str, Any]:
        """Consistent snapshot of the occupancy per vehicle type"""
        with self._lock:
            per_type = {
                vehicle_type.name: {
                    "label": vehicle_type.label,
                    "capacity": self._slot_pool.capacity(vehicle_type),
                    "available": self._slot_pool.available(vehicle_type),
                    "occupied": self._occupancy.count_by_type(vehicle_type),
                }
                for vehicle_type in self._slot_pool.vehicle_types
            }
            occupied = len(self._occupancy)
            version = self._version

        total = sum(entry["capacity"] for entry in per_type.values())
        return {
            "parking_lot_id": self.id,
            "version": version,
            "total_slots": total,
            "occupied_slots": occupied,
            "available_slots": total - occupied,
            "occupancy_rate": (occupied / total) if total else 0.0,
            "vehicle_types": per_type,
            "pricing_strategy": str(self._pricing_strategy),
        }

    def clear_events(self) -> List[DomainEvent]:
        with self._lock:
            return super().clear_events()

    # ========================================================================
    # CRITICAL SECTIONS
    # ========================================================================

    def _allocate(
        self,
        registration_number: Optional[str],
        vehicle_type: VehicleType,
        arrival_time: datetime
    ) -> Optional[str]:
        with self._lock:
            if registration_number in self._occupancy:
                raise AlreadyParkedError(registration_number)

            if not self._slot_pool.knows(vehicle_type):
                raise UnknownVehicleTypeError(vehicle_type)

            slot_id = self._slot_pool.acquire(vehicle_type)
            if slot_id is None:
                return None

            self._occupancy.add(
                registration_number,
                OccupancyRecord(vehicle_type, slot_id, arrival_time)
            )
            self._increment_version()
            if self._collect_events:
                self._add_domain_event(VehicleParkedEvent(
                    parking_lot_id=self.id,
                    slot_id=slot_id,
                    registration_number=registration_number,
                    vehicle_type=vehicle_type,
                    arrival_time=arrival_time
                ))
            return slot_id

    def _release(self, registration_number: Optional[str]) -> OccupancyRecord:
        with self._lock:
            if registration_number not in self._occupancy:
                raise NotParkedError(registration_number)

            # The slot pool validates the release before either structure changes
            record = self._occupancy.get(registration_number)
            self._slot_pool.release(record.vehicle_type, record.slot_id)
            self._occupancy.remove(registration_number)
            self._increment_version()
            if self._collect_events:
                self._add_domain_event(VehicleLeftEvent(
                    parking_lot_id=self.id,
                    slot_id=record.slot_id,
                    registration_number=registration_number,
                    vehicle_type=record.vehicle_type,
                    arrival_time=record.arrival_time
                ))
            return record

    def _check_known(self, vehicle_type: VehicleType) -> None:
        if not self._slot_pool.knows(vehicle_type):
            raise UnknownVehicleTypeError(vehicle_type)

    def __str__(self) -> str:
        return f"ParkingLot {self.id} ({self.occupied_slots()}/{self.total_slots()} occupied)"
