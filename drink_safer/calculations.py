"""BAC estimate using a single-shot Widmark formula.

Model:
- grams = volume_oz * 0.0295735 L/oz * 789 g/L * ABV/100
- BAC = [total grams / (weight * r * 1000)] * 100
- r = 0.73 (male), 0.66 (female)

No elimination over time is applied.
"""

from typing import Iterable

from drink_safer.drinks import DrinkEntry
from drink_safer.profile import UserProfile


def total_alcohol_grams(drinks: Iterable[DrinkEntry]) -> float:
    return sum((d.grams for d in drinks), 0.0)


def body_water_grams(profile: UserProfile) -> float:
    # The weight is in pounds but is used as if it were kilograms. Weights read
    # from the health store are pounds too, so estimates stay consistent.
    return profile.weight_lbs * profile.alcohol_distribution_ratio * 1000.0


def estimate_bac(profile: UserProfile, drinks: Iterable[DrinkEntry]) -> float:
    """Estimated BAC (%) for all logged drinks. Order of ``drinks`` does not matter."""
    grams = total_alcohol_grams(drinks)
    return grams / body_water_grams(profile) * 100.0
