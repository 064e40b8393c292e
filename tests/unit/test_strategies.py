#!/usr/bin/env python3
"""
Pricing Strategy Unit Tests
"""

import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from parking_toll.domain.models import DefaultVehicle, VehicleType
from parking_toll.domain.strategies import (
    PricingStrategy, DurationPricingStrategy, DefaultPricingStrategy
)


ARRIVAL = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


class TestDefaultPricingStrategy(unittest.TestCase):
    """Fixed amount plus an amount per completed hour"""

    def setUp(self):
        self.vehicle = DefaultVehicle("AI-241-SP", VehicleType.GASOLINE)

    def bill_after(self, strategy, duration):
        return strategy.bill(self.vehicle, ARRIVAL, ARRIVAL + duration)

    def test_only_completed_hours_are_charged(self):
        strategy = DefaultPricingStrategy(0, 5)
        cases = [
            (timedelta(0), Decimal('0')),
            (timedelta(minutes=59), Decimal('0')),
            (timedelta(minutes=60), Decimal('5')),
            (timedelta(minutes=61), Decimal('5')),
            (timedelta(minutes=125), Decimal('10')),
            (timedelta(hours=23, minutes=59, seconds=59), Decimal('115')),
        ]

        for duration, expected in cases:
            with self.subTest(duration=duration):
                self.assertEqual(expected, self.bill_after(strategy, duration))

    def test_fixed_amount_is_always_charged(self):
        strategy = DefaultPricingStrategy(Decimal('4.3'), Decimal('1.5'))

        self.assertEqual(Decimal('4.3'), self.bill_after(strategy, timedelta(0)))
        self.assertEqual(Decimal('7.3'), self.bill_after(strategy, timedelta(hours=2, minutes=30)))

    def test_float_amounts_are_kept_exact(self):
        strategy = DefaultPricingStrategy(0, 0.7)

        self.assertEqual(Decimal('2.1'), self.bill_after(strategy, timedelta(hours=3)))

    def test_defaults_to_free(self):
        self.assertEqual(Decimal('0'), self.bill_after(DefaultPricingStrategy(), timedelta(days=3)))

    def test_negative_amounts_are_not_checked(self):
        strategy = DefaultPricingStrategy(-1, -2)

        self.assertEqual(Decimal('-5'), self.bill_after(strategy, timedelta(hours=2)))

    def test_vehicle_type_is_ignored(self):
        strategy = DefaultPricingStrategy(1, 1)
        electric = DefaultVehicle("AI-241-SP", VehicleType.ELECTRIC_50KW)

        self.assertEqual(
            self.bill_after(strategy, timedelta(hours=4)),
            strategy.bill(electric, ARRIVAL, ARRIVAL + timedelta(hours=4))
        )

    def test_string_representation(self):
        strategy = DefaultPricingStrategy(0, 1.5)

        self.assertEqual("Default", strategy.get_strategy_name())
        self.assertEqual("Default Pricing Strategy", str(strategy))
        self.assertEqual("DefaultPricingStrategy(fixed_amount=0, hourly_amount=1.5)", repr(strategy))


class TestDurationPricingStrategy(unittest.TestCase):
    """Strategies billing from the duration only"""

    def test_bill_passes_the_duration(self):
        durations = []

        class RecordingStrategy(DurationPricingStrategy):
            def bill_duration(self, duration):
                durations.append(duration)
                return 42

        strategy = RecordingStrategy()
        vehicle = DefaultVehicle(None, VehicleType.ELECTRIC_20KW)

        self.assertEqual(42, strategy.bill(vehicle, ARRIVAL, ARRIVAL + timedelta(minutes=17)))
        self.assertEqual([timedelta(minutes=17)], durations)

    def test_cannot_instantiate_abstract_strategies(self):
        with self.assertRaises(TypeError):
            PricingStrategy()
        with self.assertRaises(TypeError):
            DurationPricingStrategy()


if __name__ == '__main__':
    unittest.main()
