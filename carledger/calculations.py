"""Helper functions for fuel economy and expense calculations."""

import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from .fuel_entry import FuelEntry
from .unit_mode import UnitMode
from .vehicle import Vehicle

NOT_AVAILABLE = "N/A"

DateLike = Union[date, datetime]


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, returning inf/nan instead of raising on a zero denominator."""
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def economy(entry: FuelEntry, unit_mode: UnitMode) -> float:
    """
    Calculate the economy figure shown for a fuel entry.

    - Miles per Gallon: fuel_quantity / cost
    - Kilometers per Liter: cost / fuel_quantity

    This is a cost-normalized ratio, not distance over volume: the odometer
    reading taken with the entry is not used. Zero divisors give inf or nan.
    """
    if unit_mode is UnitMode.DISTANCE_PER_VOLUME:
        return _ratio(entry.fuel_quantity, entry.cost)
    return _ratio(entry.cost, entry.fuel_quantity)


def _local(value: DateLike) -> DateLike:
    """Move aware datetimes onto the local calendar; naive values are already local."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone()
    return value


def same_month(value: DateLike, reference: DateLike) -> bool:
    """Check if two dates fall in the same calendar year and month."""
    value = _local(value)
    reference = _local(reference)
    return (value.year, value.month) == (reference.year, reference.month)


def entries_in_month(
    entries: Iterable[FuelEntry], reference_date: DateLike
) -> List[FuelEntry]:
    """Entries dated in the same calendar month as reference_date, in order."""
    return [e for e in entries if same_month(e.date, reference_date)]


def monthly_total(entries: Iterable[FuelEntry], reference_date: DateLike) -> float:
    """Sum of costs for the calendar month containing reference_date (0 if none)."""
    return sum((e.cost for e in entries_in_month(entries, reference_date)), 0.0)


def find_vehicle_by_model(
    car_model: str, vehicles: Iterable[Vehicle]
) -> Optional[Vehicle]:
    """Find the first vehicle whose model matches exactly (case-sensitive)."""
    for vehicle in vehicles:
        if vehicle.model == car_model:
            return vehicle
    return None


def expense_mileage(entry: FuelEntry, vehicles: Iterable[Vehicle]) -> str:
    """
    Mileage column of the expense list.

    Shown only when a vehicle with the entry's model is tracked; the value
    is always fuel_quantity / cost and ignores the vehicle's own mileage.
    """
    if find_vehicle_by_model(entry.car_model, vehicles) is None:
        return NOT_AVAILABLE
    return str(economy(entry, UnitMode.DISTANCE_PER_VOLUME))
