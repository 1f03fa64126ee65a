"""UnitMode enum for fuel economy display units."""

from enum import Enum


class UnitMode(Enum):
    """Economy display units. Value is the label shown to the user."""

    DISTANCE_PER_VOLUME = "Miles per Gallon"
    VOLUME_PER_DISTANCE = "Kilometers per Liter"

    @property
    def short_name(self) -> str:
        return "mpg" if self is UnitMode.DISTANCE_PER_VOLUME else "kpl"

    @classmethod
    def from_name(cls, name: str) -> "UnitMode":
        """Resolve a unit from its short name ('mpg', 'kpl') or full label."""
        normalized = name.strip().lower()
        for mode in cls:
            if normalized in (mode.short_name, mode.value.lower()):
                return mode
        raise ValueError(f"Unknown unit '{name}' (expected 'mpg' or 'kpl')")
