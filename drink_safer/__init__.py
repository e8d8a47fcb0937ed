"""
Drink Safer: drink log, Widmark BAC estimate and driving guidance.
Use from project root: python -m drink_safer.main
"""

from drink_safer.drinks import (
    DRINK_TYPES,
    DrinkEntry,
    grams_from_volume_abv,
    list_drink_types,
)
from drink_safer.calculations import (
    body_water_grams,
    estimate_bac,
    total_alcohol_grams,
)
from drink_safer.drive import classify
from drink_safer.drink_log import DrinkLog
from drink_safer.gauge import gauge_data, save_gauge_image
from drink_safer.health import HealthBridge, HealthDataError
from drink_safer.profile import UserProfile, load_profile

__all__ = [
    "DrinkEntry",
    "DrinkLog",
    "HealthBridge",
    "HealthDataError",
    "UserProfile",
    "body_water_grams",
    "classify",
    "estimate_bac",
    "gauge_data",
    "grams_from_volume_abv",
    "list_drink_types",
    "load_profile",
    "save_gauge_image",
    "total_alcohol_grams",
    "DRINK_TYPES",
]
