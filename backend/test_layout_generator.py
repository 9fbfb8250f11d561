"""End-to-end plan generation: zones, footprint, L-shape and plan invariants."""

import math

import pytest

from models import PlanRequest, RoomSpec, RoomType, WallType
from services.layout_engine import (
    LayoutGenerator,
    detect_overlaps,
    fixed_clock,
    generate_floor_plan,
    has_overlaps,
    sequential_ids,
    validate_plan,
)
from services.layout_engine.sizing import min_dims

EXAMPLE_ROOMS = [
    {"type": "garage", "label": "Double Garage", "width": 5.8, "height": 5.5},
    {"type": "living", "label": "Living", "width": 5.0, "height": 4.5},
    {"type": "kitchen", "label": "Kitchen", "width": 4.0, "height": 4.0},
    {"type": "master_bedroom", "label": "Master", "width": 4.5, "height": 3.8},
    {"type": "ensuite", "label": "Ensuite", "width": 2.0, "height": 2.5},
]

MIXED_PROGRAMMES = [
    EXAMPLE_ROOMS,
    [{"type": "living"}, {"type": "kitchen"}, {"type": "bedroom"}, {"type": "bedroom"}, {"type": "bathroom"}],
    [{"type": "garage", "width": 6.0}, {"type": "living", "width": 8.0}],
    [{"type": "dining"}, {"type": "study"}, {"type": "laundry"}, {"type": "storage"}],
    [{"type": "bedroom", "width": 4.2, "height": 3.3}],
]


def _generate(rooms, **kwargs):
    return LayoutGenerator(id_factory=sequential_ids(), clock=fixed_clock()).generate(
        {"rooms": rooms, **kwargs}
    )


def _by_label(plan):
    return {r.label: r for r in plan.rooms}


# ---------- Worked examples ----------

def test_example_garage_house_is_l_shaped():
    plan = _generate(EXAMPLE_ROOMS)
    rooms = _by_label(plan)

    assert plan.is_l_shaped
    assert plan.width == 9.9 and plan.depth == 15.9, f"plan is {plan.width}x{plan.depth}"
    assert plan.garage_wing_width == 6.4
    assert plan.garage_wing_depth == 5.8

    garage = rooms["Double Garage"]
    assert (garage.x, garage.y, garage.width, garage.height) == (0.2, 0.2, 6.0, 5.5)

    assert "Hallway" in rooms, "a hallway is inserted between living and private zones"
    hallway = rooms["Hallway"]
    assert (hallway.x, hallway.y, hallway.width, hallway.height) == (0.2, 10.4, 9.5, 1.2)

    assert (rooms["Living"].x, rooms["Living"].y, rooms["Living"].width) == (0.2, 5.8, 5.0)
    assert (rooms["Kitchen"].x, rooms["Kitchen"].width, rooms["Kitchen"].height) == (5.3, 4.0, 4.5)
    assert (rooms["Master"].y, rooms["Master"].width, rooms["Master"].height) == (11.7, 6.5, 4.0)
    assert (rooms["Ensuite"].x, rooms["Ensuite"].width, rooms["Ensuite"].height) == (6.8, 2.5, 4.0)

    # living 22.5 + kitchen 18.0 + master 26.0 + ensuite 10.0
    assert plan.total_area == 76.5

    exterior = [w for w in plan.walls if w.type is WallType.EXTERIOR]
    assert len(exterior) == 6, "an L-shaped footprint has six exterior walls"


def test_example_single_bedroom_uses_minimums():
    plan = _generate([{"type": "bedroom"}])
    assert len(plan.rooms) == 1
    room = plan.rooms[0]
    assert (room.x, room.y, room.width, room.height) == (0.2, 0.2, 3.0, 3.0)
    assert (plan.width, plan.depth) == (3.4, 3.4)
    assert plan.total_area == 9.0
    assert not plan.is_l_shaped
    assert len(plan.walls) == 4
    assert all(w.type is WallType.EXTERIOR for w in plan.walls)


def test_zero_rooms_gives_minimal_plan():
    plan = _generate([])
    assert plan.rooms == ()
    assert plan.total_area == 0.0
    assert (plan.width, plan.depth) == (0.4, 0.4)
    assert [w.type for w in plan.walls] == [WallType.EXTERIOR] * 4


# ---------- Footprint decisions ----------

def test_front_zone_close_to_house_width_is_rectangular_and_filled():
    plan = _generate([{"type": "garage", "width": 6.0}, {"type": "living", "width": 8.0}])
    assert not plan.is_l_shaped
    assert plan.garage_wing_width is None and plan.garage_wing_depth is None
    assert plan.width == 8.4

    entry = _by_label(plan)["Entry / Porch"]
    assert entry.type is RoomType.STORAGE
    assert (entry.x, entry.width, entry.height) == (6.3, 1.5, 5.5)
    assert plan.total_area == 32.0, "fillers and garages are not habitable"


def test_garage_only_is_not_l_shaped():
    plan = _generate([{"type": "garage"}])
    assert not plan.is_l_shaped
    assert (plan.width, plan.depth) == (3.4, 5.9)
    assert plan.total_area == 0.0


def test_garage_only_with_wide_target_is_l_shaped():
    # 3.0m garage against a 14.0m house: the front becomes a wing, not fillers
    plan = _generate([{"type": "garage"}], targetWidth=14.0)
    assert plan.is_l_shaped, "a narrow front zone is a wing even when it is the only zone"
    assert (plan.garage_wing_width, plan.garage_wing_depth) == (3.4, 5.8)
    assert (plan.width, plan.depth) == (14.4, 5.9)
    assert [(r.label, r.width) for r in plan.rooms] == [("Garage", 3.0)]
    exterior = [w for w in plan.walls if w.type is WallType.EXTERIOR]
    assert len(exterior) == 6


def test_habitable_area_rounds_halves_up():
    # 3.5 x 3.5 = 12.25
    plan = _generate([{"type": "bedroom", "width": 3.5, "height": 3.5}])
    assert plan.total_area == 12.3, f"got {plan.total_area}"


def test_rear_zone_gets_linen_and_hallway_connections():
    plan = _generate([{"type": "living"}, {"type": "bedroom"}])
    rooms = _by_label(plan)
    assert plan.width == 8.4, "multi-zone plans are at least 8.0m inside"
    assert rooms["Linen"].type is RoomType.STORAGE

    hallway = rooms["Hallway"]
    neighbours = {rooms["Living"].id, rooms["Bedroom"].id, rooms["Linen"].id}
    assert set(hallway.connections) == neighbours
    for label in ("Living", "Bedroom", "Linen"):
        assert rooms[label].connections == (hallway.id,)


def test_example_hallway_connections():
    plan = _generate(EXAMPLE_ROOMS)
    rooms = _by_label(plan)
    hallway = rooms["Hallway"]
    expected = [rooms[label].id for label in ("Living", "Kitchen", "Master", "Ensuite")]
    assert list(hallway.connections) == expected
    assert rooms["Double Garage"].connections == ()


def test_no_hallway_without_both_sides():
    plan = _generate([{"type": "bedroom"}, {"type": "study"}])
    assert all(r.type is not RoomType.HALLWAY for r in plan.rooms)


def test_requested_hallways_are_dropped():
    plan = _generate([{"type": "hallway"}, {"type": "corridor"}, {"type": "bedroom"}])
    assert [r.type for r in plan.rooms] == [RoomType.BEDROOM]


def test_target_width_sets_house_floor():
    plan = _generate([{"type": "living"}, {"type": "bedroom"}], targetWidth=12.0)
    assert plan.width == 12.4
    hallway = _by_label(plan)["Hallway"]
    assert hallway.width == 12.0


def test_unknown_type_is_laid_out_as_bedroom():
    plan = _generate([{"type": "ballroom", "label": "Ballroom"}])
    assert plan.rooms[0].type is RoomType.BEDROOM
    assert plan.rooms[0].label == "Ballroom"


# ---------- Plan invariants ----------

@pytest.mark.parametrize("rooms", MIXED_PROGRAMMES)
def test_plan_invariants(rooms):
    plan = _generate(rooms)

    assert detect_overlaps(plan.rooms) == [], "rooms must not overlap"
    assert not has_overlaps(plan.rooms)

    for room in plan.rooms:
        min_w, min_h = min_dims(room.type)
        assert room.width >= min_w and room.height >= min_h, (
            f"{room.label} is {room.width}x{room.height}, minimum {min_w}x{min_h}"
        )
        if room.type is RoomType.HALLWAY:
            continue
        for value in (room.width, room.height):
            steps = value / 0.5
            assert math.isclose(steps, round(steps)), f"{room.label}: {value} is off-grid"

    for room in plan.rooms:
        assert room.x + room.width <= plan.width - 0.2 + 1e-6, f"{room.label} pokes through the right wall"
        assert room.y + room.height <= plan.depth - 0.2 + 1e-6, f"{room.label} pokes through the rear wall"

    report = validate_plan(plan)
    assert report.valid, f"validation failed: {report}"


def test_generation_is_deterministic():
    a = _generate(EXAMPLE_ROOMS).to_json_dict()
    b = _generate(EXAMPLE_ROOMS).to_json_dict()
    assert a == b


def test_ids_and_timestamps_come_from_injected_sources():
    plan = generate_floor_plan(
        [{"type": "bedroom"}],
        id_factory=sequential_ids("t"),
        clock=fixed_clock("2025-05-01T12:00:00+00:00"),
    )
    # room first, then the four walls, then the plan
    assert plan.rooms[0].id == "t-1"
    assert [w.id for w in plan.walls] == ["t-2", "t-3", "t-4", "t-5"]
    assert plan.id == "t-6"
    assert plan.created_at == plan.updated_at == "2025-05-01T12:00:00+00:00"


def test_default_ids_are_unique_uuids():
    plan = generate_floor_plan([{"type": "living"}, {"type": "bedroom"}])
    ids = [plan.id] + [r.id for r in plan.rooms] + [w.id for w in plan.walls]
    assert len(set(ids)) == len(ids)
    assert all(len(i) == 36 for i in ids)


def test_accepts_request_model_and_room_list():
    request = PlanRequest(name="Cottage", rooms=(RoomSpec(type="bedroom"),))
    plan = generate_floor_plan(request)
    assert plan.name == "Cottage"

    plan = generate_floor_plan([RoomSpec(type="bedroom")])
    assert plan.name == "New Floor Plan"


def test_json_shape_uses_camel_case():
    data = _generate(EXAMPLE_ROOMS, name="Garage House").to_json_dict()
    assert data["name"] == "Garage House"
    for key in ("id", "totalArea", "width", "depth", "rooms", "walls",
                "garageWingWidth", "garageWingDepth", "createdAt", "updatedAt"):
        assert key in data, f"missing {key}"
    room = data["rooms"][0]
    assert room["type"] == "garage"
    assert "notes" not in room, "unset optional fields are omitted"
    assert data["walls"][0]["type"] == "exterior"

    rect = _generate([{"type": "bedroom"}]).to_json_dict()
    assert "garageWingWidth" not in rect
