from __future__ import annotations

from starstation.game.catalog import BUILDINGS, EVENTS, STARTING_RESOURCES, seed_catalogs
from starstation.models.building import Building
from starstation.models.building_definition import BuildingDefinition
from starstation.models.event_definition import EventDefinition
from starstation.models.game_state import GameState


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


# ----------------------------
# Auth
# ----------------------------

def test_register_rejects_duplicate_username(client, register_and_login):
    register_and_login("ripley")

    r = client.post("/auth/register", json={"username": "ripley", "password": "another1"})

    assert r.status_code == 409
    assert r.json()["detail"]["error"] == "Username already exists"


def test_register_requires_username_and_password(client):
    assert client.post("/auth/register", json={"username": "ripley"}).status_code == 422
    assert client.post("/auth/register", json={"password": "secret12"}).status_code == 422


def test_login_with_wrong_password(client, register_and_login):
    register_and_login("ripley", "nostromo")

    r = client.post("/auth/login", json={"username": "ripley", "password": "sulaco"})

    assert r.status_code == 401


def test_game_routes_require_token(client):
    assert client.get("/game/state").status_code in (401, 403)
    r = client.get("/game/state", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401


def test_me(client, register_and_login):
    headers = register_and_login("ripley")

    assert client.get("/auth/me", headers=headers).json()["username"] == "ripley"


# ----------------------------
# State + harvest
# ----------------------------

def test_new_player_scenario(client, clock, register_and_login):
    headers = register_and_login()

    state = client.get("/game/state", headers=headers).json()
    assert state["resources"] == STARTING_RESOURCES
    assert [(b["type"], b["level"]) for b in state["buildings"]] == [("habitat", 1)]
    assert state["active_event"] is None
    assert set(state["stocked_resources"].values()) == {0}

    clock.advance(seconds=90)
    state = client.get("/game/state", headers=headers).json()

    # 1 whole minute, two 30s cycles, base 5, level 1
    assert state["stocked_resources"]["oxygen"] == 10
    assert state["resources"] == STARTING_RESOURCES


def test_missing_state_is_recreated_with_seed_data(client, db_session, clock, register_and_login):
    headers = register_and_login()
    user_id = client.get("/auth/me", headers=headers).json()["user_id"]
    db_session.delete(db_session.query(GameState).filter(GameState.user_id == user_id).one())
    db_session.commit()
    assert db_session.query(Building).count() == 0

    clock.advance(minutes=5)
    state = client.get("/game/state", headers=headers).json()

    assert state["resources"] == STARTING_RESOURCES
    assert [b["type"] for b in state["buildings"]] == ["habitat"]
    assert state["buildings"][0]["last_harvest_at"] == clock.now.isoformat()
    assert set(state["stocked_resources"].values()) == {0}

    db_session.expire_all()
    saved = db_session.query(GameState).filter(GameState.user_id == user_id).one()
    assert saved.resources == STARTING_RESOURCES
    assert [b.type for b in saved.buildings] == ["habitat"]


def test_mutating_routes_also_recreate_a_missing_state(client, db_session, register_and_login):
    headers = register_and_login()
    user_id = client.get("/auth/me", headers=headers).json()["user_id"]
    db_session.delete(db_session.query(GameState).filter(GameState.user_id == user_id).one())
    db_session.commit()

    r = client.post("/game/build", headers=headers, json={"building_type": "hydroponic_farm"})

    assert r.status_code == 201, r.text
    assert [b["type"] for b in r.json()["game_state"]["buildings"]] == ["habitat", "hydroponic_farm"]
    assert r.json()["game_state"]["resources"]["water"] == STARTING_RESOURCES["water"] - 30


def test_state_is_a_read_only_preview(client, clock, register_and_login):
    headers = register_and_login()
    clock.advance(minutes=3)

    first = client.get("/game/state", headers=headers).json()
    second = client.get("/game/state", headers=headers).json()

    assert first["stocked_resources"] == second["stocked_resources"]
    assert first["buildings"] == second["buildings"]


def test_harvest_then_immediate_harvest_yields_zero(client, clock, register_and_login):
    headers = register_and_login()
    clock.advance(minutes=2)

    r = client.post("/game/harvest", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["harvested"] == {"oxygen": 20}
    assert body["resources"]["oxygen"] == STARTING_RESOURCES["oxygen"] + 20

    again = client.post("/game/harvest", headers=headers).json()
    assert again["harvested"] == {"oxygen": 0}
    assert again["resources"]["oxygen"] == STARTING_RESOURCES["oxygen"] + 20

    state = client.get("/game/state", headers=headers).json()
    assert state["stocked_resources"]["oxygen"] == 0


# ----------------------------
# Build
# ----------------------------

def test_build_success(client, clock, register_and_login):
    headers = register_and_login()
    clock.advance(minutes=1)

    r = client.post("/game/build", headers=headers, json={"building_type": "hydroponic_farm"})

    assert r.status_code == 201, r.text
    body = r.json()
    assert body["new_building"]["type"] == "hydroponic_farm"
    assert body["new_building"]["last_harvest_at"] == clock.now.isoformat()
    assert body["game_state"]["resources"]["oxygen"] == STARTING_RESOURCES["oxygen"] - 20
    assert body["game_state"]["resources"]["water"] == STARTING_RESOURCES["water"] - 30
    assert len(body["game_state"]["buildings"]) == 2


def test_build_unaffordable_changes_nothing(client, register_and_login):
    headers = register_and_login()

    r = client.post("/game/build", headers=headers, json={"building_type": "solar_panel"})

    assert r.status_code == 409
    assert r.json()["detail"]["missing"] == {"metal": 5}
    state = client.get("/game/state", headers=headers).json()
    assert state["resources"] == STARTING_RESOURCES
    assert len(state["buildings"]) == 1


def test_build_unknown_type(client, register_and_login):
    headers = register_and_login()

    r = client.post("/game/build", headers=headers, json={"building_type": "warp_gate"})

    assert r.status_code == 404
    assert r.json()["detail"]["building_type"] == "warp_gate"


def test_build_requires_type(client, register_and_login):
    headers = register_and_login()

    assert client.post("/game/build", headers=headers, json={}).status_code == 422


# ----------------------------
# Events
# ----------------------------

def test_trigger_event_then_conflict_then_expiry(client, clock, register_and_login):
    headers = register_and_login()

    r = client.post("/game/trigger-event", headers=headers)
    assert r.status_code == 200, r.text
    active = r.json()["active_event"]
    assert active["type"] in {e.type for e in EVENTS}
    assert active["started_at"] == clock.now.isoformat()

    state = client.get("/game/state", headers=headers).json()
    assert state["active_event"]["type"] == active["type"]

    r = client.post("/game/trigger-event", headers=headers)
    assert r.status_code == 409

    clock.advance(milliseconds=active["duration_ms"])
    state = client.get("/game/state", headers=headers).json()
    assert state["active_event"] is None


def test_trigger_event_reports_wait_when_all_cooling_down(client, db_session, clock, register_and_login):
    headers = register_and_login()

    # Only the solar eclipse left: 5 min duration, 10 min cooldown
    db_session.query(EventDefinition).filter(EventDefinition.type != "solar_eclipse").delete()
    db_session.commit()

    first = client.post("/game/trigger-event", headers=headers).json()
    assert first["active_event"]["type"] == "solar_eclipse"

    clock.advance(minutes=5)
    body = client.post("/game/trigger-event", headers=headers).json()

    assert body["none_eligible"] is True
    assert body["next_eligible_in_ms"] == 300_000

    clock.advance(minutes=5)
    again = client.post("/game/trigger-event", headers=headers).json()
    assert again["active_event"]["started_at"] == clock.now.isoformat()


def test_event_modifies_stocked_resources(client, db_session, clock, register_and_login):
    headers = register_and_login()

    # Only nebula passage left in the catalog: oxygen x3
    db_session.query(EventDefinition).filter(EventDefinition.type != "nebula_passage").delete()
    db_session.commit()

    r = client.post("/game/trigger-event", headers=headers)
    assert r.json()["active_event"]["type"] == "nebula_passage"

    clock.advance(seconds=90)
    state = client.get("/game/state", headers=headers).json()
    assert state["stocked_resources"]["oxygen"] == 30


# ----------------------------
# Catalog
# ----------------------------

def test_catalog_listings(client, register_and_login):
    headers = register_and_login()

    buildings = client.get("/catalog/buildings", headers=headers).json()["buildings"]
    by_type = {b["type"]: b for b in buildings}
    assert set(by_type) == set(BUILDINGS)
    assert by_type["habitat"]["owned"] == 1
    assert by_type["habitat"]["affordable"] is True
    assert by_type["habitat"]["production_rate"] == 30

    events = client.get("/catalog/events", headers=headers).json()["events"]
    assert [e["type"] for e in events] == [e.type for e in EVENTS]
    assert {e["rarity"]: e["weight"] for e in events}["rare"] == 0.2


def test_seed_catalogs_is_idempotent(db_session):
    assert seed_catalogs(db_session) == {"buildings_added": 0, "events_added": 0}
    assert db_session.query(BuildingDefinition).count() == len(BUILDINGS)
    assert db_session.query(EventDefinition).count() == len(EVENTS)
