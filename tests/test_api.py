"""API-level tests for the Flask app."""

from datetime import date

import pytest

from app import _env_config, create_app


def add(client, **payload):
    res = client.post("/api/drink", json=payload)
    assert res.status_code == 200
    return res.get_json()["drink"]


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_index_renders(client):
    add(client, drink_type="Beer")
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "Current BAC: 0.026" in body
    assert "You are safe to drive." in body
    assert "12.0 oz - 5.0% ABV" in body


def test_drink_types(client):
    data = client.get("/api/drink-types").get_json()
    assert [t["name"] for t in data["drink_types"]] == ["Beer", "Wine", "Spirits"]


def test_state_empty(client):
    data = client.get("/api/state").get_json()
    assert data["bac"] == 0
    assert data["bac_display"] == "0.000"
    assert data["drink_count"] == 0
    assert data["guidance"]["tier"] == "safe"
    assert data["gauge"]["fraction"] == 0
    assert data["gauge"]["max_value"] == 0.3
    assert data["profile"]["weight_lbs"] == 75


def test_add_drink_uses_preset_defaults(client):
    drink = add(client, drink_type="Spirits")
    assert drink["volume"] == 1.5
    assert drink["alcohol_content"] == 40.0


def test_drink_and_state_roundtrip(client):
    add(client, drink_type="Beer", volume=12, alcohol_content=5.0)
    data = client.get("/api/state").get_json()
    assert data["drink_count"] == 1
    assert data["bac"] == pytest.approx(0.0256, abs=1e-4)
    assert data["bac_display"] == "0.026"
    assert data["guidance"]["message"] == "You are safe to drive."
    assert data["total_alcohol_grams"] == pytest.approx(14.0, abs=0.01)
    assert data["drinks"][0]["drink_type"] == "Beer"


def test_guidance_escalates(client):
    for _ in range(4):
        add(client, drink_type="Beer")
    data = client.get("/api/state").get_json()
    assert data["guidance"]["tier"] == "unsafe"
    assert data["gauge"]["band"] == "unsafe"


@pytest.mark.parametrize(
    "payload",
    [
        {"drink_type": "Beer", "volume": -1},
        {"drink_type": "Beer", "volume": "abc"},
        {"drink_type": "Beer", "alcohol_content": 101},
        {"drink_type": "Cider"},
        {"drink_type": "Beer", "volume": True},
        {"drink_type": "Wine", "volume": "nan"},
        {"drink_type": "Beer", "volume": 12, "alcohol_content": "nan"},
        {"drink_type": "Beer", "volume": "inf"},
        {"drink_type": "x" * 41, "volume": 12, "alcohol_content": 5},
    ],
)
def test_drink_rejects_invalid_input(client, payload):
    res = client.post("/api/drink", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()
    assert client.get("/api/state").get_json()["drink_count"] == 0


def test_long_custom_type_kept_whole(client):
    name = "Homemade " + "y" * 31
    drink = add(client, drink_type=name, volume=8, alcohol_content=7)
    assert drink["drink_type"] == name
    assert len(name) == 40


def test_profile_rejects_nan_weight(client):
    res = client.post("/api/profile", json={"weight_lbs": "nan"})
    assert res.status_code == 400


def test_delete_drinks(client):
    add(client, drink_type="Beer")
    add(client, drink_type="Wine")
    add(client, drink_type="Spirits")
    res = client.post("/api/drinks/delete", json={"indices": [1, 10]})
    assert res.get_json() == {"ok": True, "deleted": 1}
    names = [d["drink_type"] for d in client.get("/api/state").get_json()["drinks"]]
    assert names == ["Beer", "Spirits"]


def test_delete_rejects_bad_indices(client):
    res = client.post("/api/drinks/delete", json={"indices": "0"})
    assert res.status_code == 400


def test_reset(client):
    add(client, drink_type="Beer")
    assert client.post("/api/reset").status_code == 200
    assert client.get("/api/state").get_json()["drink_count"] == 0


def test_profile_update(client):
    res = client.post("/api/profile", json={"weight_lbs": 60, "sex": "Female", "age": 30})
    assert res.status_code == 200
    profile = client.get("/api/profile").get_json()
    assert profile["weight_lbs"] == 60
    assert profile["sex"] == "female"
    assert profile["alcohol_distribution_ratio"] == 0.66


@pytest.mark.parametrize(
    "payload",
    [{"weight_lbs": 0}, {"age": -1}, {"sex": "x"}, {"age": "old"}],
)
def test_profile_rejects_invalid(client, payload):
    res = client.post("/api/profile", json=payload)
    assert res.status_code == 400
    assert client.get("/api/profile").get_json()["weight_lbs"] == 75


def test_profile_changes_bac(client):
    add(client, drink_type="Beer")
    male = client.get("/api/state").get_json()["bac"]
    client.post("/api/profile", json={"sex": "female"})
    female = client.get("/api/state").get_json()["bac"]
    assert female > male


def test_health_sync_applies_profile(client, flask_app):
    bridge = flask_app.extensions["health_bridge"]
    assert bridge.request_authorization()
    bridge.set_characteristics(date_of_birth=date(1995, 3, 1), sex="female")
    bridge.log_weight(68.0)

    res = client.post("/api/health/sync")
    data = res.get_json()
    assert data["authorized"] is True
    assert data["profile"]["sex"] == "female"
    assert data["profile"]["weight_lbs"] == pytest.approx(149.91, abs=0.01)
    assert client.get("/api/profile").get_json()["sex"] == "female"


def test_health_sync_denied_keeps_defaults(app_config):
    app = create_app({**app_config, "HEALTH_ENABLED": False})
    with app.test_client() as c:
        data = c.post("/api/health/sync").get_json()
    assert data["authorized"] is False
    assert data["profile"]["weight_lbs"] == 75


def test_drink_logged_to_health_store_when_authorized(client, flask_app):
    client.post("/api/health/sync")
    add(client, drink_type="Beer")
    samples = flask_app.extensions["health_bridge"].get_drink_samples()
    assert len(samples) == 1
    assert samples[0].value == pytest.approx(14.0, abs=0.01)


def test_gauge_png(client):
    add(client, drink_type="Wine")
    res = client.get("/api/gauge.png")
    assert res.status_code == 200
    assert res.mimetype == "image/png"
    assert res.data.startswith(b"\x89PNG")


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, True),
        ("1", True),
        ("true", True),
        ("Yes", True),
        ("on", True),
        ("0", False),
        ("false", False),
        ("no", False),
        ("off", False),
    ],
)
def test_health_enabled_env_spellings(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("HEALTH_ENABLED", raising=False)
    else:
        monkeypatch.setenv("HEALTH_ENABLED", raw)
    assert _env_config()["HEALTH_ENABLED"] is expected


def test_log_level_from_env_reaches_app(monkeypatch, app_config):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    app = create_app(app_config)
    assert app.config["LOG_LEVEL"] == "WARNING"
