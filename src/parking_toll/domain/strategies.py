# File: src/parking_toll/domain/strategies.py
"""
Strategy Pattern Implementation for parking billing

Pricing strategies encapsulate how a vehicle leaving the parking lot is
billed. The parking lot calls the strategy outside of its lock, once the slot
is already released, and returns whatever the strategy returns: no check is
performed on the amount, and exceptions raised by the strategy are propagated.

Strategies:
1. PricingStrategy - bill from the vehicle and its arrival/departure instants
2. DurationPricingStrategy - bill from the parking duration only
3. DefaultPricingStrategy - fixed amount plus an amount per completed hour
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Union
import logging

from .models import Vehicle


Amount = Union[Decimal, float, int]


# ============================================================================
# STRATEGY INTERFACES
# ============================================================================

class PricingStrategy(ABC):
    """
    Abstract base class for pricing strategies
    Defines the interface for fee calculation algorithms
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def bill(
        self,
        vehicle: Vehicle,
        arrival_time: datetime,
        departure_time: datetime
    ) -> Amount:
        """
        Calculate the price to pay to leave the parking lot
        departure_time is never earlier than arrival_time.
        Returns: the amount, any sign or magnitude
        """
        pass

    def get_strategy_name(self) -> str:
        """Get human-readable strategy name"""
        return self.__class__.__name__.replace("PricingStrategy", "") or "Pricing"

    def __str__(self) -> str:
        return f"{self.get_strategy_name()} Pricing Strategy"


class DurationPricingStrategy(PricingStrategy):
    """
    Partial implementation billing from the parking duration only
    Subclasses implement bill_duration(); the vehicle is not passed on. If the
    vehicle matters, implement PricingStrategy directly.
    """

    def bill(
        self,
        vehicle: Vehicle,
        arrival_time: datetime,
        departure_time: datetime
    ) -> Amount:
        return self.bill_duration(departure_time - arrival_time)

    @abstractmethod
    def bill_duration(self, duration: timedelta) -> Amount:
        """
        Calculate the price for a parking duration
        duration is always positive or zero
        """
        pass


# ============================================================================
# PRICING STRATEGIES
# ============================================================================

class DefaultPricingStrategy(DurationPricingStrategy):
    """
    Default pricing strategy
    - A fixed amount charged on every departure
    - An hourly amount charged for each completed hour only

    Set a strictly positive fixed amount if the first hour should not be free.
    Invalid (negative) amounts are accepted and produce invalid bills.
    """

    _ONE_HOUR = timedelta(hours=1)

    def __init__(self, fixed_amount: Amount = Decimal('0'), hourly_amount: Amount = Decimal('0')):
        super().__init__()
        self.fixed_amount = Decimal(str(fixed_amount))
        self.hourly_amount = Decimal(str(hourly_amount))

    def bill_duration(self, duration: timedelta) -> Decimal:
        completed_hours = duration // self._ONE_HOUR
        amount = self.fixed_amount + completed_hours * self.hourly_amount
        self.logger.debug(f"Billing {completed_hours} completed hour(s) for {duration}: {amount}")
        return amount

    def __repr__(self) -> str:
        return (f"DefaultPricingStrategy(fixed_amount={self.fixed_amount}, "
                f"hourly_amount={self.hourly_amount})")
