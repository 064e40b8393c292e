# File: src/parking_toll/infrastructure/config.py
"""
Configuration for a parking lot deployment

A configuration holds the number of slots for each vehicle type, the amounts
of the default pricing strategy and the logging settings. It can be built
from a dictionary, from a JSON file, and the logging settings can be
overridden by environment variables:

    PARKING_LOG_LEVEL   log level name (DEBUG, INFO, ...)
    PARKING_LOG_FILE    path of a log file, empty to disable it

Example JSON file:

    {
        "slots_per_type": {"GASOLINE": 42, "ELECTRIC_20KW": 23, "ELECTRIC_50KW": 11},
        "pricing": {"fixed_amount": "0", "hourly_amount": "1.5"},
        "logging": {"level": "INFO", "file": "logs/parking.log"}
    }
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Any, Optional, Mapping, Union
import json
import logging
import os

from ..domain.models import VehicleType
from ..domain.strategies import DefaultPricingStrategy


ENV_LOG_LEVEL = "PARKING_LOG_LEVEL"
ENV_LOG_FILE = "PARKING_LOG_FILE"

DEFAULT_SLOTS_PER_TYPE: Dict[VehicleType, int] = {
    VehicleType.GASOLINE: 100,
    VehicleType.ELECTRIC_20KW: 20,
    VehicleType.ELECTRIC_50KW: 10,
}


@dataclass
class ParkingConfig:
    """Value Object: parking lot deployment settings"""
    slots_per_type: Dict[VehicleType, int] = field(
        default_factory=lambda: dict(DEFAULT_SLOTS_PER_TYPE)
    )
    fixed_amount: Decimal = Decimal('0')
    hourly_amount: Decimal = Decimal('1.5')
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Normalize and validate configuration values"""
        slots_per_type: Dict[VehicleType, int] = {}
        for vehicle_type, slots_count in self.slots_per_type.items():
            if isinstance(slots_count, bool) or not isinstance(slots_count, int):
                raise ValueError(
                    f"Slots count for {vehicle_type} must be an integer, got: {slots_count!r}"
                )
            slots_per_type[VehicleType.parse(vehicle_type)] = slots_count
        self.slots_per_type = slots_per_type

        self.fixed_amount = self._to_decimal("fixed_amount", self.fixed_amount)
        self.hourly_amount = self._to_decimal("hourly_amount", self.hourly_amount)

        self.log_level = str(self.log_level).strip().upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @staticmethod
    def _to_decimal(name: str, value: Union[Decimal, float, int, str]) -> Decimal:
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"{name} must be a number, got: {value!r}") from None

    # ========================================================================
    # LOADERS
    # ========================================================================

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        environ: Optional[Mapping[str, str]] = None
    ) -> 'ParkingConfig':
        """Create configuration from a dictionary, then apply environment overrides"""
        if not isinstance(data, Mapping):
            raise ValueError(f"Configuration must be a mapping, got: {data!r}")

        pricing = cls._section(data, "pricing")
        logging_settings = cls._section(data, "logging")

        kwargs: Dict[str, Any] = {}
        if data.get("slots_per_type") is not None:
            kwargs["slots_per_type"] = dict(cls._section(data, "slots_per_type"))
        if "fixed_amount" in pricing:
            kwargs["fixed_amount"] = pricing["fixed_amount"]
        if "hourly_amount" in pricing:
            kwargs["hourly_amount"] = pricing["hourly_amount"]
        if "level" in logging_settings:
            kwargs["log_level"] = logging_settings["level"]
        if "file" in logging_settings:
            kwargs["log_file"] = logging_settings["file"]

        config = cls(**kwargs)
        config.apply_env_overrides(environ)
        return config

    @staticmethod
    def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
        # A missing or null section means defaults
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ValueError(f"Configuration section {name!r} must be a mapping, got: {section!r}")
        return section

    @classmethod
    def from_json_file(
        cls,
        path: Union[str, Path],
        environ: Optional[Mapping[str, str]] = None
    ) -> 'ParkingConfig':
        """Create configuration from a JSON file"""
        with open(path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object")
        return cls.from_dict(data, environ)

    def apply_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Override logging settings from the environment"""
        if environ is None:
            environ = os.environ

        if environ.get(ENV_LOG_LEVEL):
            level = environ[ENV_LOG_LEVEL].strip().upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ValueError(f"Unknown log level in {ENV_LOG_LEVEL}: {level}")
            self.log_level = level

        if ENV_LOG_FILE in environ:
            self.log_file = environ[ENV_LOG_FILE] or None

    # ========================================================================
    # BUILDERS
    # ========================================================================

    def create_pricing_strategy(self) -> DefaultPricingStrategy:
        return DefaultPricingStrategy(self.fixed_amount, self.hourly_amount)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "slots_per_type": {
                vehicle_type.name: slots_count
                for vehicle_type, slots_count in self.slots_per_type.items()
            },
            "pricing": {
                "fixed_amount": str(self.fixed_amount),
                "hourly_amount": str(self.hourly_amount),
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
            },
        }
