"""Drink Safer Flask app.

Run from project root:
    python app.py
"""

import logging
import math
import os
from pathlib import Path
from typing import Any

from flask import Flask, Response, current_app, jsonify, render_template, request, session as flask_session

from drink_safer.app_logging import configure_logging, log_level_from_env
from drink_safer.calculations import estimate_bac, total_alcohol_grams
from drink_safer.drink_log import DrinkLog
from drink_safer.drinks import (
    DEFAULT_DRINK_TYPE,
    MAX_DRINK_TYPE_LENGTH,
    MAX_VOLUME_OZ,
    get_drink_type,
    list_drink_types,
)
from drink_safer.drive import classify
from drink_safer.gauge import DEFAULT_MAX_BAC, gauge_data, gauge_png
from drink_safer.health import HealthBridge
from drink_safer.profile import SEXES, UserProfile, load_profile

logger = logging.getLogger("drink_safer.app")

PROFILE_KEY = "profile"

DEFAULT_DRINK_LOG_DB_PATH = str(Path("instance") / "drinks.db")
DEFAULT_HEALTH_DB_PATH = str(Path("instance") / "health.db")


class InvalidInput(ValueError):
    pass


def _parse_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    lowered = str(value).strip().lower()
    if lowered in {"1", "true", "yes", "y", "on"}:
        return True
    if lowered in {"0", "false", "no", "n", "off", ""}:
        return False
    return default


def _env_config() -> dict[str, Any]:
    return {
        "SECRET_KEY": os.environ.get("APP_SECRET_KEY", "dev-only-change-me"),
        "DRINK_LOG_DB_PATH": os.environ.get("DRINK_LOG_DB_PATH", DEFAULT_DRINK_LOG_DB_PATH),
        "HEALTH_DB_PATH": os.environ.get("HEALTH_DB_PATH", DEFAULT_HEALTH_DB_PATH),
        "HEALTH_ENABLED": _parse_bool(os.environ.get("HEALTH_ENABLED"), default=True),
        "GAUGE_MAX_BAC": float(os.environ.get("GAUGE_MAX_BAC", DEFAULT_MAX_BAC)),
        "LOG_LEVEL": log_level_from_env(),
    }


def _drink_log() -> DrinkLog:
    return current_app.extensions["drink_log"]


def _health_bridge() -> HealthBridge:
    return current_app.extensions["health_bridge"]


def _parse_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number")
    if not math.isfinite(parsed):
        raise InvalidInput(f"{name} must be a finite number")
    return parsed


def _profile_from_json(data: dict[str, Any], base: UserProfile) -> UserProfile:
    weight = base.weight_lbs
    if data.get("weight_lbs") is not None:
        weight = _parse_float(data["weight_lbs"], "weight_lbs")
        if weight <= 0:
            raise InvalidInput("weight_lbs must be > 0")

    age = base.age
    if data.get("age") is not None:
        try:
            age = int(data["age"])
        except (TypeError, ValueError):
            raise InvalidInput("age must be an integer")
        if age < 0:
            raise InvalidInput("age must be >= 0")

    sex = base.sex
    if data.get("sex") is not None:
        sex = str(data["sex"]).strip().lower()
        if sex not in SEXES:
            raise InvalidInput("sex must be male or female")

    return UserProfile(weight_lbs=weight, age=age, sex=sex, metabolism_rate=base.metabolism_rate)


def get_profile() -> UserProfile:
    raw = flask_session.get(PROFILE_KEY)
    if not isinstance(raw, dict):
        return UserProfile()
    try:
        return _profile_from_json(raw, UserProfile())
    except InvalidInput:
        return UserProfile()


def set_profile(profile: UserProfile) -> None:
    flask_session[PROFILE_KEY] = {"weight_lbs": profile.weight_lbs, "age": profile.age, "sex": profile.sex}


def _drink_from_json(data: dict[str, Any]) -> tuple[str, float, float]:
    drink_type = str(data.get("drink_type") or DEFAULT_DRINK_TYPE).strip()
    if not drink_type:
        raise InvalidInput("drink_type is required")
    if len(drink_type) > MAX_DRINK_TYPE_LENGTH:
        raise InvalidInput(f"drink_type must be {MAX_DRINK_TYPE_LENGTH} characters or fewer")
    preset = get_drink_type(drink_type)

    raw_volume = data.get("volume")
    if raw_volume is None or raw_volume == "":
        if preset is None:
            raise InvalidInput("volume is required")
        volume = preset.default_oz
    else:
        volume = _parse_float(raw_volume, "volume")
    if volume <= 0 or volume > MAX_VOLUME_OZ:
        raise InvalidInput("volume must be between 0 and 200 oz")

    raw_abv = data.get("alcohol_content")
    if raw_abv is None or raw_abv == "":
        if preset is None:
            raise InvalidInput("alcohol_content is required")
        abv = preset.abv
    else:
        abv = _parse_float(raw_abv, "alcohol_content")
    if abv < 0 or abv > 100:
        raise InvalidInput("alcohol_content must be between 0 and 100")

    return drink_type, volume, abv


def _state() -> dict[str, Any]:
    profile = get_profile()
    entries = _drink_log().entries()
    bac = estimate_bac(profile, entries)
    return {
        "profile": profile.to_dict(),
        "bac": round(bac, 4),
        "bac_display": f"{bac:.3f}",
        "guidance": classify(bac),
        "gauge": gauge_data(bac, current_app.config["GAUGE_MAX_BAC"]),
        "drinks": [e.to_dict() for e in entries],
        "drink_count": len(entries),
        "total_alcohol_grams": round(total_alcohol_grams(entries), 2),
    }


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(_env_config())
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    if config:
        app.config.update(config)

    configure_logging(app.config["LOG_LEVEL"])
    app.extensions["drink_log"] = DrinkLog(app.config["DRINK_LOG_DB_PATH"])
    app.extensions["health_bridge"] = HealthBridge(
        app.config["HEALTH_DB_PATH"],
        enabled=app.config["HEALTH_ENABLED"],
    )

    @app.errorhandler(InvalidInput)
    def invalid_input(exc: InvalidInput):
        logger.info("Rejected request to %s: %s", request.path, exc)
        return jsonify({"error": str(exc)}), 400

    @app.route("/")
    def index():
        return render_template("index.html", state=_state(), drink_types=list_drink_types())

    @app.route("/healthz")
    def healthz():
        return jsonify({"ok": True})

    @app.route("/api/drink-types")
    def api_drink_types():
        return jsonify({"drink_types": list_drink_types()})

    @app.route("/api/profile")
    def api_profile():
        return jsonify(get_profile().to_dict())

    @app.route("/api/profile", methods=["POST"])
    def api_profile_update():
        data = request.get_json(silent=True) or {}
        profile = _profile_from_json(data, get_profile())
        set_profile(profile)
        return jsonify({"ok": True, "profile": profile.to_dict()})

    @app.route("/api/health/sync", methods=["POST"])
    def api_health_sync():
        bridge = _health_bridge()
        profile = load_profile(bridge, get_profile())
        set_profile(profile)
        return jsonify({"ok": True, "authorized": bridge.is_authorized, "profile": profile.to_dict()})

    @app.route("/api/drink", methods=["POST"])
    def api_drink():
        data = request.get_json(silent=True) or {}
        drink_type, volume, abv = _drink_from_json(data)
        entry = _drink_log().add_drink(drink_type, volume, abv)
        bridge = _health_bridge()
        if bridge.is_authorized:
            bridge.log_drink(entry.grams, entry.timestamp)
        return jsonify({"ok": True, "drink": entry.to_dict()})

    @app.route("/api/drinks/delete", methods=["POST"])
    def api_drinks_delete():
        data = request.get_json(silent=True) or {}
        indices = data.get("indices")
        if not isinstance(indices, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in indices):
            raise InvalidInput("indices must be a list of integers")
        removed = _drink_log().delete_drinks(indices)
        return jsonify({"ok": True, "deleted": len(removed)})

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        _drink_log().clear()
        return jsonify({"ok": True})

    @app.route("/api/state")
    def api_state():
        return jsonify(_state())

    @app.route("/api/gauge.png")
    def api_gauge_png():
        bac = estimate_bac(get_profile(), _drink_log().entries())
        return Response(gauge_png(bac, current_app.config["GAUGE_MAX_BAC"]), mimetype="image/png")

    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
