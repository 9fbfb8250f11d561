"""
Room sizing and zone assignment.

Every dimension the engine produces passes through the grid helpers here,
so a room is always at least its registered minimum and lands on the
0.5 m planning grid.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from models import RoomSpec, RoomType
from services.layout_constants import (
    DEFAULT_MAX_ASPECT,
    DEFAULT_MIN_DIMS,
    GRID_SNAP,
    MAX_ASPECT,
    MIN_DIMS,
    ZONE_COUNT,
    ZONE_MAP,
    ZONE_REAR,
)

# Guards floor/ceil against binary noise such as 4.999999999
_EPS = 1e-6


# =============================================================================
# GRID HELPERS
# =============================================================================

def snap(val: float) -> float:
    """Snap to nearest GRID_SNAP increment (halves round up)."""
    return round(math.floor(val / GRID_SNAP + 0.5) * GRID_SNAP, 2)


def snap_down(val: float) -> float:
    """Snap down to nearest GRID_SNAP."""
    return round(math.floor(val / GRID_SNAP + _EPS) * GRID_SNAP, 2)


def snap_up(val: float) -> float:
    """Snap up to nearest GRID_SNAP."""
    return round(math.ceil(val / GRID_SNAP - _EPS) * GRID_SNAP, 2)


def snap_at_least(val: float, floor: float) -> float:
    """
    Snap *val* to the grid without dropping below *floor*.

    Minimums that are not grid multiples (1.2, 1.8, 2.4) round up to the
    next grid line instead of down past the minimum.
    """
    return max(snap(max(val, floor)), snap_up(floor))


# =============================================================================
# PER-TYPE LOOKUPS
# =============================================================================

def min_dims(room_type: RoomType) -> Tuple[float, float]:
    """Registered minimum (width, height) for a room type."""
    return MIN_DIMS.get(room_type, DEFAULT_MIN_DIMS)


def max_aspect(room_type: RoomType) -> float:
    """Get max allowed width/height ratio for a room type."""
    return MAX_ASPECT.get(room_type, DEFAULT_MAX_ASPECT)


def zone_for(room_type: RoomType) -> int:
    """Zone index 0-4 for a room type."""
    return ZONE_MAP.get(room_type, ZONE_REAR)


# =============================================================================
# SIZED ROOMS
# =============================================================================

@dataclass(frozen=True)
class SizedRoom:
    """A room with resolved dimensions that has not been placed yet."""

    type: RoomType
    label: str
    w: float
    h: float
    filler: bool = False


def resolve_size(spec: RoomSpec) -> SizedRoom:
    """
    Resolve a spec's width/height hints against the type minimum.

    Absent, zero or negative hints all resolve to the minimum; there is
    no error path.
    """
    min_w, min_h = min_dims(spec.type)
    width = spec.width if spec.width is not None else min_w
    height = spec.height if spec.height is not None else min_h
    return SizedRoom(
        type=spec.type,
        label=spec.label,
        w=snap_at_least(width, min_w),
        h=snap_at_least(height, min_h),
    )


def bucket_by_zone(rooms: Sequence[SizedRoom]) -> List[List[SizedRoom]]:
    """Split rooms into the five zones, keeping input order within each zone."""
    zones: Dict[int, List[SizedRoom]] = {i: [] for i in range(ZONE_COUNT)}
    for room in rooms:
        zones[zone_for(room.type)].append(room)
    return [zones[i] for i in range(ZONE_COUNT)]
