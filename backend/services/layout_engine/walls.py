"""
Wall network synthesis.

Derives the exterior perimeter (rectangle or six-vertex L) and the
deduplicated interior partitions from a plan's room rectangles. Nothing
here depends on how the rooms were placed, so the same code serves both
fresh layouts and edited plans.
"""

import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry

from models import Room, Wall, WallType
from services.layout_constants import (
    EXTERIOR_TOLERANCE,
    NON_HABITABLE,
    WALL_EXTERNAL_M as WALL_EXT,
    WALL_INTERNAL_M as WALL_INT,
    WALL_KEY_SCALE,
)
from .ids import IdFactory, new_id

Segment = Tuple[float, float, float, float]
WallKey = Tuple[Tuple[int, int], Tuple[int, int]]


# =============================================================================
# EXTERIOR
# =============================================================================

def exterior_vertices(
    width: float,
    depth: float,
    wing_width: Optional[float] = None,
    wing_depth: Optional[float] = None,
) -> List[Tuple[float, float]]:
    """
    Outline of the footprint, starting at the origin.

    With a garage wing the outline runs along the top of the wing, down to
    the step, across to the main body's right side, down to the rear and
    back to the origin.
    """
    if wing_width is not None and wing_depth is not None:
        return [
            (0.0, 0.0),
            (wing_width, 0.0),
            (wing_width, wing_depth),
            (width, wing_depth),
            (width, depth),
            (0.0, depth),
        ]
    return [(0.0, 0.0), (width, 0.0), (width, depth), (0.0, depth)]


def footprint_polygon(
    width: float,
    depth: float,
    wing_width: Optional[float] = None,
    wing_depth: Optional[float] = None,
) -> Polygon:
    """Shapely polygon of the exterior footprint."""
    return Polygon(exterior_vertices(width, depth, wing_width, wing_depth))


def exterior_segments(
    width: float,
    depth: float,
    wing_width: Optional[float] = None,
    wing_depth: Optional[float] = None,
) -> List[Segment]:
    vertices = exterior_vertices(width, depth, wing_width, wing_depth)
    closed = vertices + vertices[:1]
    return [
        (round(a[0], 2), round(a[1], 2), round(b[0], 2), round(b[1], 2))
        for a, b in zip(closed, closed[1:])
    ]


def _envelope(footprint: Polygon) -> BaseGeometry:
    """
    Region in which a room edge counts as exterior.

    Covers the outer outline and its inner face (the outline inset by the
    exterior wall thickness), since placed rooms start at the inner face.
    """
    envelope = footprint.exterior.buffer(EXTERIOR_TOLERANCE)
    inset = footprint.buffer(-WALL_EXT, join_style="mitre")
    if not inset.is_empty:
        envelope = envelope.union(inset.boundary.buffer(EXTERIOR_TOLERANCE))
    return envelope


# =============================================================================
# INTERIOR
# =============================================================================

def room_edges(room: Room) -> List[Segment]:
    """Top, right, bottom and left edges of a room rectangle."""
    x1, y1 = room.x, room.y
    x2, y2 = round(room.x + room.width, 2), round(room.y + room.height, 2)
    return [
        (x1, y1, x2, y1),
        (x2, y1, x2, y2),
        (x1, y2, x2, y2),
        (x1, y1, x1, y2),
    ]


def wall_key(x1: float, y1: float, x2: float, y2: float) -> WallKey:
    """
    Quantised, direction-free key for a segment.

    Endpoints are rounded to 1/WALL_KEY_SCALE m and ordered, so a segment
    and its reverse share a key.
    """
    a = (round(x1 * WALL_KEY_SCALE), round(y1 * WALL_KEY_SCALE))
    b = (round(x2 * WALL_KEY_SCALE), round(y2 * WALL_KEY_SCALE))
    return (a, b) if a <= b else (b, a)


def interior_segments(rooms: Iterable[Room], envelope: BaseGeometry) -> Iterator[Segment]:
    seen = set()
    for room in rooms:
        for x1, y1, x2, y2 in room_edges(room):
            if envelope.contains(LineString([(x1, y1), (x2, y2)])):
                continue
            key = wall_key(x1, y1, x2, y2)
            if key in seen:
                continue
            seen.add(key)
            yield (x1, y1, x2, y2)


# =============================================================================
# PUBLIC API
# =============================================================================

def build_walls(
    rooms: Sequence[Room],
    width: float,
    depth: float,
    wing_width: Optional[float] = None,
    wing_depth: Optional[float] = None,
    id_factory: IdFactory = new_id,
) -> Tuple[Wall, ...]:
    """
    Derive the full wall set for a plan.

    Parameters
    ----------
    rooms : sequence of Room
        Placed rooms.
    width, depth : float
        Exterior footprint extents (m).
    wing_width, wing_depth : float, optional
        Outer extent of the narrower front wing of an L-shaped plan.
    id_factory : callable
        Source of wall ids.

    Returns
    -------
    tuple[Wall, ...]
        Exterior walls first (4 or 6), then one interior wall per distinct
        room edge that does not lie on the envelope.
    """
    walls: List[Wall] = []
    for x1, y1, x2, y2 in exterior_segments(width, depth, wing_width, wing_depth):
        walls.append(Wall(
            id=id_factory(), x1=x1, y1=y1, x2=x2, y2=y2,
            thickness=WALL_EXT, type=WallType.EXTERIOR,
        ))

    envelope = _envelope(footprint_polygon(width, depth, wing_width, wing_depth))
    for x1, y1, x2, y2 in interior_segments(rooms, envelope):
        walls.append(Wall(
            id=id_factory(), x1=x1, y1=y1, x2=x2, y2=y2,
            thickness=WALL_INT, type=WallType.INTERIOR,
        ))
    return tuple(walls)


def total_area(rooms: Iterable[Room]) -> float:
    """
    Habitable floor area: garages, hallways and storage/fillers excluded.

    Rounded to 0.1 m2 with halves going up (12.25 -> 12.3).
    """
    area = sum(r.area for r in rooms if r.type not in NON_HABITABLE)
    return math.floor(area * 10 + 0.5 + 1e-9) / 10
