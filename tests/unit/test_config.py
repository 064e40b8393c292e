#!/usr/bin/env python3
"""
Configuration Unit Tests
"""

import json
import os
import tempfile
import unittest
from decimal import Decimal

from parking_toll.domain.models import VehicleType
from parking_toll.domain.strategies import DefaultPricingStrategy
from parking_toll.infrastructure.config import (
    ParkingConfig, DEFAULT_SLOTS_PER_TYPE, ENV_LOG_LEVEL, ENV_LOG_FILE
)


class TestParkingConfig(unittest.TestCase):

    def test_defaults(self):
        config = ParkingConfig()

        self.assertEqual(DEFAULT_SLOTS_PER_TYPE, config.slots_per_type)
        self.assertEqual(Decimal('0'), config.fixed_amount)
        self.assertEqual(Decimal('1.5'), config.hourly_amount)
        self.assertEqual("INFO", config.log_level)
        self.assertIsNone(config.log_file)

    def test_defaults_are_not_shared(self):
        first = ParkingConfig()
        first.slots_per_type[VehicleType.GASOLINE] = 1

        self.assertEqual(100, ParkingConfig().slots_per_type[VehicleType.GASOLINE])

    def test_vehicle_types_are_parsed(self):
        config = ParkingConfig(slots_per_type={"GASOLINE": 3, "20 kW": 2, VehicleType.ELECTRIC_50KW: 1})

        self.assertEqual({
            VehicleType.GASOLINE: 3,
            VehicleType.ELECTRIC_20KW: 2,
            VehicleType.ELECTRIC_50KW: 1,
        }, config.slots_per_type)

    def test_invalid_values(self):
        cases = [
            dict(slots_per_type={"DIESEL": 3}),
            dict(slots_per_type={"GASOLINE": "3"}),
            dict(slots_per_type={"GASOLINE": 2.5}),
            dict(slots_per_type={"GASOLINE": True}),
            dict(fixed_amount="cheap"),
            dict(hourly_amount="1,5"),
            dict(log_level="CHATTY"),
        ]

        for kwargs in cases:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    ParkingConfig(**kwargs)

    def test_negative_slots_are_accepted(self):
        config = ParkingConfig(slots_per_type={"GASOLINE": -1})

        self.assertEqual(-1, config.slots_per_type[VehicleType.GASOLINE])

    def test_from_dict(self):
        config = ParkingConfig.from_dict({
            "slots_per_type": {"GASOLINE": 42, "ELECTRIC_20KW": 23},
            "pricing": {"fixed_amount": "4.3", "hourly_amount": 2},
            "logging": {"level": "debug", "file": "logs/parking.log"},
        }, environ={})

        self.assertEqual({VehicleType.GASOLINE: 42, VehicleType.ELECTRIC_20KW: 23},
                         config.slots_per_type)
        self.assertEqual(Decimal('4.3'), config.fixed_amount)
        self.assertEqual(Decimal('2'), config.hourly_amount)
        self.assertEqual("DEBUG", config.log_level)
        self.assertEqual("logs/parking.log", config.log_file)

    def test_from_empty_dict(self):
        config = ParkingConfig.from_dict({}, environ={})

        self.assertEqual(ParkingConfig().to_dict(), config.to_dict())

    def test_null_sections_mean_defaults(self):
        config = ParkingConfig.from_dict(
            {"slots_per_type": None, "pricing": None, "logging": None}, environ={}
        )

        self.assertEqual(ParkingConfig().to_dict(), config.to_dict())

    def test_sections_must_be_mappings(self):
        cases = [
            {"slots_per_type": [["GASOLINE", 3]]},
            {"pricing": "1.5"},
            {"logging": ["DEBUG"]},
            ["slots_per_type"],
        ]

        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    ParkingConfig.from_dict(data, environ={})

    def test_environment_overrides(self):
        config = ParkingConfig.from_dict(
            {"logging": {"level": "INFO", "file": "logs/parking.log"}},
            environ={ENV_LOG_LEVEL: "warning", ENV_LOG_FILE: ""}
        )

        self.assertEqual("WARNING", config.log_level)
        self.assertIsNone(config.log_file)

    def test_invalid_environment_level(self):
        with self.assertRaises(ValueError):
            ParkingConfig.from_dict({}, environ={ENV_LOG_LEVEL: "LOUD"})

    def test_empty_environment_level_is_ignored(self):
        config = ParkingConfig.from_dict({}, environ={ENV_LOG_LEVEL: ""})

        self.assertEqual("INFO", config.log_level)

    def test_from_json_file(self):
        data = {
            "slots_per_type": {"ELECTRIC_50KW": 11},
            "pricing": {"hourly_amount": "0.7"},
        }
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "parking.json")
            with open(path, "w", encoding="utf-8") as config_file:
                json.dump(data, config_file)

            config = ParkingConfig.from_json_file(path, environ={})

        self.assertEqual({VehicleType.ELECTRIC_50KW: 11}, config.slots_per_type)
        self.assertEqual(Decimal('0.7'), config.hourly_amount)

    def test_json_file_must_hold_an_object(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "parking.json")
            with open(path, "w", encoding="utf-8") as config_file:
                json.dump([1, 2, 3], config_file)

            with self.assertRaises(ValueError):
                ParkingConfig.from_json_file(path, environ={})

    def test_missing_json_file(self):
        with self.assertRaises(OSError):
            ParkingConfig.from_json_file("/nonexistent/parking.json", environ={})

    def test_create_pricing_strategy(self):
        config = ParkingConfig(fixed_amount="4.3", hourly_amount="1.5")

        strategy = config.create_pricing_strategy()

        self.assertIsInstance(strategy, DefaultPricingStrategy)
        self.assertEqual(Decimal('4.3'), strategy.fixed_amount)
        self.assertEqual(Decimal('1.5'), strategy.hourly_amount)

    def test_to_dict(self):
        config = ParkingConfig(slots_per_type={"GASOLINE": 5}, log_file="parking.log")

        self.assertEqual({
            "slots_per_type": {"GASOLINE": 5},
            "pricing": {"fixed_amount": "0", "hourly_amount": "1.5"},
            "logging": {"level": "INFO", "file": "parking.log"},
        }, config.to_dict())


if __name__ == '__main__':
    unittest.main()
