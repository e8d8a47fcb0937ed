"""Health data bridge: body mass, biological sex, date of birth and drink samples.

The health store is a SQLite file. A single ``HealthBridge`` is built at
startup and handed to whatever needs it.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

LB_PER_KG = 2.20462

ALCOHOLIC_BEVERAGES = "alcoholic_beverages"
BODY_MASS = "body_mass"


class HealthDataError(Exception):
    """A health store read or write failed."""


@dataclass(frozen=True)
class HealthSample:
    kind: str
    value: float
    unit: str
    start: datetime

    def to_dict(self) -> dict:
        return {"kind": self.kind, "value": self.value, "unit": self.unit, "start": self.start.isoformat()}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def init_db(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS samples (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL,
                value REAL NOT NULL,
                unit TEXT NOT NULL,
                start_at TEXT NOT NULL
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_samples_kind_start ON samples(kind, start_at)")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS characteristics (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        conn.commit()


class HealthBridge:
    def __init__(self, db_path: str, enabled: bool = True):
        self.db_path = db_path
        self.enabled = enabled
        self.is_authorized = False
        self.user_weight: float | None = None
        self.drink_samples: list[HealthSample] = []

    def request_authorization(self) -> bool:
        """Open the health store. Returns whether reads and writes are allowed."""
        if not self.enabled:
            logger.error("Health store authorization failed: health data is disabled")
            self.is_authorized = False
            return False
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            init_db(self.db_path)
        except (OSError, sqlite3.Error) as exc:
            logger.error("Health store authorization failed: %s", exc)
            self.is_authorized = False
            return False
        self.is_authorized = True
        return True

    def _connect(self) -> sqlite3.Connection:
        if not self.is_authorized:
            raise HealthDataError("health store access is not authorized")
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _characteristic(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT value FROM characteristics WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise HealthDataError(str(exc)) from exc
        return row["value"] if row else None

    def set_characteristics(self, *, date_of_birth: date | None = None, sex: str | None = None) -> None:
        values = []
        if date_of_birth is not None:
            values.append(("date_of_birth", date_of_birth.isoformat()))
        if sex is not None:
            values.append(("biological_sex", sex))
        try:
            with self._connect() as conn:
                conn.executemany(
                    "INSERT INTO characteristics (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    values,
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise HealthDataError(str(exc)) from exc

    def get_biological_sex(self) -> str | None:
        sex = self._characteristic("biological_sex")
        if sex in ("male", "female"):
            return sex
        return None

    def get_age(self, today: date | None = None) -> int | None:
        raw = self._characteristic("date_of_birth")
        if raw is None:
            return None
        try:
            born = date.fromisoformat(raw)
        except ValueError as exc:
            raise HealthDataError(f"incomplete date of birth: {raw!r}") from exc
        today = today or date.today()
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

    def get_weight(self) -> float | None:
        """Most recent body mass, in pounds."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM samples WHERE kind = ? ORDER BY start_at DESC, id DESC LIMIT 1",
                    (BODY_MASS,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise HealthDataError(str(exc)) from exc
        self.user_weight = round(row["value"] * LB_PER_KG, 2) if row else None
        return self.user_weight

    def get_drink_samples(self) -> list[HealthSample]:
        """All alcoholic beverage samples, newest first."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT kind, value, unit, start_at FROM samples WHERE kind = ? ORDER BY start_at DESC, id DESC",
                    (ALCOHOLIC_BEVERAGES,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise HealthDataError(str(exc)) from exc
        self.drink_samples = [
            HealthSample(r["kind"], r["value"], r["unit"], datetime.fromisoformat(r["start_at"]))
            for r in rows
        ]
        return self.drink_samples

    def _save_sample(self, kind: str, value: float, unit: str, start: datetime) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO samples (kind, value, unit, start_at) VALUES (?, ?, ?, ?)",
                    (kind, float(value), unit, start.isoformat()),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise HealthDataError(str(exc)) from exc

    def log_drink(self, amount_grams: float, timestamp: datetime | None = None) -> bool:
        """Write an alcoholic beverage sample. Failures are logged, not raised."""
        try:
            self._save_sample(ALCOHOLIC_BEVERAGES, amount_grams, "g", timestamp or _utcnow())
            logger.info("Successfully logged alcoholic drink.")
            self.get_drink_samples()
        except HealthDataError as exc:
            logger.warning("Failed to log alcoholic drink: %s", exc)
            return False
        return True

    def log_weight(self, weight_kg: float, timestamp: datetime | None = None) -> bool:
        """Write a body mass sample. Failures are logged, not raised."""
        try:
            self._save_sample(BODY_MASS, weight_kg, "kg", timestamp or _utcnow())
            logger.info("Successfully logged weight.")
            self.get_weight()
        except HealthDataError as exc:
            logger.warning("Failed to log weight: %s", exc)
            return False
        return True
