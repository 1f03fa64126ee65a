"""
Vehicle and fuel ledger models.

This package provides the in-memory core of the fuel ledger:
- Vehicle: A tracked car with maintenance attributes
- FuelEntry: A fuel purchase, linked to a vehicle by model name
- UnitMode: Economy display units (mpg / kpl)
- VehicleStore, FuelLedger: Ordered stores with change events
- economy, monthly_total, find_vehicle_by_model: Derived metrics
"""

from .unit_mode import UnitMode
from .vehicle import Vehicle
from .fuel_entry import FuelEntry
from .events import EventKind, StoreEvent
from .vehicle_store import VehicleStore
from .fuel_ledger import FuelLedger
from .calculations import (
    NOT_AVAILABLE,
    economy,
    entries_in_month,
    expense_mileage,
    find_vehicle_by_model,
    monthly_total,
)
from .config import Settings, load_settings

__all__ = [
    "UnitMode",
    "Vehicle",
    "FuelEntry",
    "EventKind",
    "StoreEvent",
    "VehicleStore",
    "FuelLedger",
    "NOT_AVAILABLE",
    "economy",
    "entries_in_month",
    "expense_mileage",
    "find_vehicle_by_model",
    "monthly_total",
    "Settings",
    "load_settings",
]
