"""Vehicle dataclass for tracked cars."""

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID


@dataclass
class Vehicle:
    """A tracked car and its maintenance attributes."""

    model: str
    mileage: int
    oil_change_date: date
    tire_condition: str = ""
    id: Optional[UUID] = None  # Assigned by VehicleStore.add
