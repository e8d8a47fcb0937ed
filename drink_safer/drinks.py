"""Drink entries, drink-type presets and alcohol content helpers.

Volumes are US fluid ounces, alcohol content is ABV as a percentage (0 to 100).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# 1 US fl oz in liters.
LITERS_PER_OUNCE = 0.0295735

# Ethanol density (g/L) for volume x ABV -> grams.
ETHANOL_DENSITY_G_PER_L = 789.0


@dataclass(frozen=True)
class DrinkType:
    """A drink category offered by the add-drink form."""

    name: str
    default_oz: float
    abv: float  # percent, e.g. 5.0 for 5%


# Drink types offered by the form. Entries may use any other type name.
DRINK_TYPES = {
    "Beer": DrinkType("Beer", 12.0, 5.0),
    "Wine": DrinkType("Wine", 5.0, 12.0),
    "Spirits": DrinkType("Spirits", 1.5, 40.0),
}

DEFAULT_DRINK_TYPE = "Beer"

MAX_VOLUME_OZ = 200.0
MAX_DRINK_TYPE_LENGTH = 40


@dataclass(frozen=True)
class DrinkEntry:
    """One logged drink. Entries are never edited after they are created."""

    id: str
    timestamp: datetime
    drink_type: str
    volume: float  # fl oz
    alcohol_content: float  # ABV percent

    @property
    def grams(self) -> float:
        return grams_from_volume_abv(self.volume, self.alcohol_content)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "drink_type": self.drink_type,
            "volume": self.volume,
            "alcohol_content": self.alcohol_content,
            "label": f"{self.volume:.1f} oz - {self.alcohol_content:.1f}% ABV",
        }


def grams_from_volume_abv(volume_oz: float, abv_percent: float) -> float:
    """Convert fluid ounces and ABV (0 to 100) to grams of ethanol."""
    liters = volume_oz * LITERS_PER_OUNCE
    return liters * ETHANOL_DENSITY_G_PER_L * (abv_percent / 100.0)


def get_drink_type(name: str) -> Optional[DrinkType]:
    return DRINK_TYPES.get(name)


def list_drink_types():
    """Return presets as dicts for form dropdowns."""
    return [
        {"name": d.name, "default_oz": d.default_oz, "abv": d.abv}
        for d in DRINK_TYPES.values()
    ]
