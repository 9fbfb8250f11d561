"""
Zone-based floor plan layout engine.

Zone-based, closed-form packing of a room programme into a single-storey
footprint, plus pure edit operations that re-derive walls and area.
All geometry checks use Shapely.
"""

from .edit_ops import (
    PlanEditor,
    add_room,
    move_room,
    recalculate_walls,
    remove_room,
    resize_room,
)
from .generator import LayoutGenerator, generate_floor_plan
from .geometry_utils import ValidationReport, detect_overlaps, has_overlaps, validate_plan
from .ids import fixed_clock, new_id, sequential_ids, utc_now
from .walls import build_walls, total_area
from models import FloorPlan, PlanRequest, Room, RoomSpec, RoomType, Wall, WallType

__all__ = [
    "LayoutGenerator",
    "generate_floor_plan",
    "PlanEditor",
    "resize_room",
    "move_room",
    "add_room",
    "remove_room",
    "recalculate_walls",
    "build_walls",
    "total_area",
    "validate_plan",
    "ValidationReport",
    "detect_overlaps",
    "has_overlaps",
    "new_id",
    "utc_now",
    "sequential_ids",
    "fixed_clock",
    "FloorPlan",
    "PlanRequest",
    "Room",
    "RoomSpec",
    "RoomType",
    "Wall",
    "WallType",
]
