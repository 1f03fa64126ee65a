"""FuelEntry dataclass for fuel purchase records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class FuelEntry:
    """
    A single fuel purchase.

    car_model is matched by name against Vehicle.model, never by id, so
    entries outlive renamed or deleted vehicles.
    """

    fuel_quantity: float
    cost: float
    car_model: str = ""
    date: datetime = field(default_factory=datetime.now)
    id: Optional[UUID] = None  # Assigned by FuelLedger.add
