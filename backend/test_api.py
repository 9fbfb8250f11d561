"""HTTP endpoints for generation, edits and validation."""

import pytest
from fastapi.testclient import TestClient

from main import API_VERSION, app

GARAGE_HOUSE = {
    "name": "Garage House",
    "rooms": [
        {"type": "garage", "label": "Double Garage", "width": 5.8, "height": 5.5},
        {"type": "living", "label": "Living", "width": 5.0, "height": 4.5},
        {"type": "kitchen", "label": "Kitchen", "width": 4.0, "height": 4.0},
        {"type": "master_bedroom", "label": "Master", "width": 4.5, "height": 3.8},
        {"type": "ensuite", "label": "Ensuite", "width": 2.0, "height": 2.5},
    ],
}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def plan(client):
    resp = client.post("/api/layout/generate", json=GARAGE_HOUSE)
    assert resp.status_code == 200, resp.text
    return resp.json()


def _room(plan, label):
    return next(r for r in plan["rooms"] if r["label"] == label)


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": API_VERSION}


def test_generate_returns_camel_case_plan(plan):
    assert plan["name"] == "Garage House"
    assert plan["width"] == 9.9 and plan["depth"] == 15.9
    assert plan["garageWingWidth"] == 6.4
    assert plan["totalArea"] == 76.5
    assert plan["createdAt"] == plan["updatedAt"]
    assert "notes" not in plan["rooms"][0]
    assert {r["type"] for r in plan["rooms"]} >= {"garage", "hallway", "ensuite"}


def test_generate_rejects_malformed_body(client):
    resp = client.post("/api/layout/generate", json={"rooms": 5})
    assert resp.status_code == 422


def test_resize_round_trip(client, plan):
    master = _room(plan, "Master")
    resp = client.post("/api/layout/rooms/resize", json={
        "plan": plan, "roomId": master["id"], "width": 1.0, "height": 1.0,
    })
    assert resp.status_code == 200, resp.text
    edited = resp.json()
    assert (_room(edited, "Master")["width"], _room(edited, "Master")["height"]) == (4.0, 3.5)
    assert edited["totalArea"] == 64.5
    assert edited["garageWingDepth"] == 5.8, "the wing survives edits"


def test_move_room(client, plan):
    kitchen = _room(plan, "Kitchen")
    resp = client.post("/api/layout/rooms/move", json={
        "plan": plan, "roomId": kitchen["id"], "x": -3.0, "y": 6.1,
    })
    assert resp.status_code == 200
    moved = _room(resp.json(), "Kitchen")
    assert (moved["x"], moved["y"]) == (0.2, 6.0)


def test_add_and_remove_room(client, plan):
    resp = client.post("/api/layout/rooms/add", json={"plan": plan, "room": {"type": "study", "label": "Office"}})
    assert resp.status_code == 200
    grown = resp.json()
    office = _room(grown, "Office")
    assert office["type"] == "study"
    assert grown["depth"] > plan["depth"]

    resp = client.post("/api/layout/rooms/remove", json={"plan": grown, "roomId": office["id"]})
    assert resp.status_code == 200
    assert all(r["label"] != "Office" for r in resp.json()["rooms"])


def test_unknown_room_id_returns_plan_unchanged(client, plan):
    resp = client.post("/api/layout/rooms/remove", json={"plan": plan, "roomId": "no-such-room"})
    assert resp.status_code == 200
    assert resp.json() == plan


def test_recalculate_rebuilds_walls(client, plan):
    stale = dict(plan, walls=[], totalArea=0)
    resp = client.post("/api/layout/recalculate", json={"plan": stale})
    assert resp.status_code == 200
    fixed = resp.json()
    assert fixed["totalArea"] == plan["totalArea"]
    assert len(fixed["walls"]) == len(plan["walls"])


def test_validate_reports_overlap(client, plan):
    resp = client.post("/api/layout/validate", json={"plan": plan})
    assert resp.status_code == 200
    assert resp.json()["valid"] is True

    kitchen = _room(plan, "Kitchen")
    living = _room(plan, "Living")
    resp = client.post("/api/layout/rooms/move", json={
        "plan": plan, "roomId": kitchen["id"], "x": living["x"], "y": living["y"],
    })
    report = client.post("/api/layout/validate", json={"plan": resp.json()}).json()
    assert report["valid"] is False
    assert [living["id"], kitchen["id"]] in report["overlaps"]
    assert "duplicateWalls" in report and "areaMismatch" in report
