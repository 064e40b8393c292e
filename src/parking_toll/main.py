# File: src/parking_toll/main.py
"""
Command line entry point for the Parking Toll library
Runs a threaded arrival/departure simulation against a configured parking lot
and prints the final status report as JSON.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
import argparse
import json
import logging
import random
import sys

from .application.parking_service import (
    ParkingService, ParkingServiceFactory,
    ParkingRequestDTO, ExitRequestDTO, ParkingAllocationDTO
)
from .domain.models import VehicleType
from .infrastructure.config import ParkingConfig
from .infrastructure.logging_config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="parking-toll",
        description="Simulate concurrent arrivals and departures in a parking lot"
    )
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--vehicles", type=int, default=50, help="Number of arriving vehicles")
    parser.add_argument("--workers", type=int, default=8, help="Number of worker threads")
    parser.add_argument("--departures", type=float, default=0.5,
                        help="Share of parked vehicles leaving at the end (0 to 1)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    args = parser.parse_args(argv)

    if args.vehicles < 0:
        parser.error("--vehicles must be positive or zero")
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    if not 0.0 <= args.departures <= 1.0:
        parser.error("--departures must be between 0 and 1")
    return args


def run_simulation(
    service: ParkingService,
    vehicles: int,
    workers: int,
    departure_share: float,
    seed: Optional[int] = None
) -> dict:
    """Park vehicles concurrently, let a share of them leave, and summarize"""
    rng = random.Random(seed)
    vehicle_types = service.parking_lot.vehicle_types or list(VehicleType)
    requests = [
        ParkingRequestDTO(license_plate=f"SIM-{index:05d}", vehicle_type=rng.choice(vehicle_types))
        for index in range(vehicles)
    ]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        allocations: List[ParkingAllocationDTO] = list(executor.map(service.park_vehicle, requests))

    parked = [allocation for allocation in allocations if allocation.success]
    leaving = rng.sample(parked, int(len(parked) * departure_share))
    exit_requests = [
        ExitRequestDTO(license_plate=allocation.license_plate, vehicle_type=allocation.vehicle_type)
        for allocation in leaving
    ]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        exits = list(executor.map(service.exit_vehicle, exit_requests))

    billed = [str(result.total_fee) for result in exits if result.success]
    return {
        "arrivals": vehicles,
        "parked": len(parked),
        "refused": vehicles - len(parked),
        "departures": len(billed),
        "bills": billed,
        "status": service.parking_lot.get_status_report(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = ParkingConfig.from_json_file(args.config) if args.config else ParkingConfig()
        if args.log_level:
            if not isinstance(logging.getLevelName(args.log_level.upper()), int):
                raise ValueError(f"Unknown log level: {args.log_level}")
            config.log_level = args.log_level.upper()
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(config.log_level, config.log_file)
    logger.info(f"Starting simulation with {args.vehicles} vehicles on {args.workers} workers")

    service = ParkingServiceFactory.create_service_with_config(config)
    summary = run_simulation(service, args.vehicles, args.workers, args.departures, args.seed)

    print(json.dumps(summary, indent=2, default=str))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Simulation interrupted")
        sys.exit(130)
