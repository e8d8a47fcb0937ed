"""User profile used by the BAC estimate, and loading it from the health store."""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from drink_safer.health import HealthBridge, HealthDataError

logger = logging.getLogger(__name__)

# Widmark distribution ratio (r)
R_MALE = 0.73
R_FEMALE = 0.66

# BAC percentage points eliminated per hour. Carried on the profile, not applied.
DEFAULT_METABOLISM_RATE = 0.015

SEXES = ("male", "female")

DEFAULT_WEIGHT_LBS = 75.0
DEFAULT_AGE = 25
DEFAULT_SEX = "male"


@dataclass(frozen=True)
class UserProfile:
    weight_lbs: float = DEFAULT_WEIGHT_LBS
    age: int = DEFAULT_AGE
    sex: str = DEFAULT_SEX
    metabolism_rate: float = DEFAULT_METABOLISM_RATE

    @property
    def is_male(self) -> bool:
        return self.sex == "male"

    @property
    def alcohol_distribution_ratio(self) -> float:
        return R_MALE if self.is_male else R_FEMALE

    def to_dict(self) -> dict:
        return {
            "weight_lbs": self.weight_lbs,
            "age": self.age,
            "sex": self.sex,
            "metabolism_rate": self.metabolism_rate,
            "alcohol_distribution_ratio": self.alcohol_distribution_ratio,
        }


def load_profile(bridge: HealthBridge, profile: Optional[UserProfile] = None) -> UserProfile:
    """Return ``profile`` with sex, age and weight overridden by health-store values.

    Each field is read on its own; a field that is missing or fails to load
    keeps its current value. Nothing is read if authorization is denied.
    """
    profile = profile or UserProfile()
    if not bridge.request_authorization():
        logger.warning("Health store authorization denied; keeping profile defaults")
        return profile

    updates = {}
    try:
        sex = bridge.get_biological_sex()
    except HealthDataError as exc:
        logger.warning("Failed to read biological sex: %s", exc)
    else:
        if sex in SEXES:
            updates["sex"] = sex

    try:
        age = bridge.get_age()
    except HealthDataError as exc:
        logger.warning("Failed to read age: %s", exc)
    else:
        if age is not None:
            updates["age"] = age

    try:
        weight = bridge.get_weight()
    except HealthDataError as exc:
        logger.warning("Failed to fetch weight: %s", exc)
    else:
        if weight is not None and weight > 0:
            updates["weight_lbs"] = weight

    return replace(profile, **updates)
