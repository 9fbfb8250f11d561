"""
Overlap and consistency validation utilities.

Audits a plan against the engine's invariants (no overlaps, minimum room
sizes, no duplicate walls, consistent habitable area). The checks report
problems instead of raising, so callers can surface them after an
interactive edit, which the engine does not constrain.
"""

from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from shapely.geometry import Polygon, box

from models import FloorPlan, Room, Wall
from services.layout_constants import OVERLAP_TOLERANCE
from .sizing import min_dims
from .walls import total_area, wall_key


def room_polygon(room: Room) -> Polygon:
    """Room rectangle as a Shapely polygon."""
    return box(*room.bounds)


def detect_overlaps(rooms: Sequence[Room],
                    tolerance: float = OVERLAP_TOLERANCE) -> List[Tuple[int, int]]:
    """
    Return a list of (i, j) index pairs for rooms that overlap.

    Rooms that only share an edge, or whose intersection is no deeper
    than *tolerance* in either direction, are **not** considered
    overlapping.

    Parameters
    ----------
    rooms : list[Room]
        Placed rooms to check.
    tolerance : float
        Overlap depth (m) still treated as touching.
    """
    polys = [room_polygon(r) for r in rooms]
    overlaps = []
    for i in range(len(polys)):
        for j in range(i + 1, len(polys)):
            inter = polys[i].intersection(polys[j])
            if inter.is_empty:
                continue
            minx, miny, maxx, maxy = inter.bounds
            if maxx - minx > tolerance and maxy - miny > tolerance:
                overlaps.append((i, j))
    return overlaps


def has_overlaps(rooms: Sequence[Room], tolerance: float = OVERLAP_TOLERANCE) -> bool:
    """True if any pair of rooms overlaps."""
    return len(detect_overlaps(rooms, tolerance)) > 0


def undersized_rooms(rooms: Sequence[Room]) -> List[str]:
    """Ids of rooms smaller than their type minimum in either direction."""
    result = []
    for r in rooms:
        min_w, min_h = min_dims(r.type)
        if r.width + 1e-6 < min_w or r.height + 1e-6 < min_h:
            result.append(r.id)
    return result


def duplicate_walls(walls: Sequence[Wall]) -> List[Tuple[str, str]]:
    """(first_id, duplicate_id) pairs for walls that share a quantised segment."""
    seen = {}
    dupes = []
    for w in walls:
        key = wall_key(w.x1, w.y1, w.x2, w.y2)
        if key in seen:
            dupes.append((seen[key], w.id))
        else:
            seen[key] = w.id
    return dupes


class ValidationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    valid: bool
    overlaps: List[Tuple[str, str]] = []
    undersized: List[str] = []
    duplicate_walls: List[Tuple[str, str]] = []
    area_mismatch: bool = False


def validate_plan(plan: FloorPlan) -> ValidationReport:
    """Run every invariant check against *plan*."""
    rooms = plan.rooms
    overlaps = [(rooms[i].id, rooms[j].id) for i, j in detect_overlaps(rooms)]
    undersized = undersized_rooms(rooms)
    dupes = duplicate_walls(plan.walls)
    area_mismatch = abs(total_area(rooms) - plan.total_area) > 0.05
    return ValidationReport(
        valid=not (overlaps or undersized or dupes or area_mismatch),
        overlaps=overlaps,
        undersized=undersized,
        duplicate_walls=dupes,
        area_mismatch=area_mismatch,
    )
