"""
Fixed design constants for the layout engine.

Exposes the fixed design constants every part of the engine shares:
  - Wall thicknesses and grid snap
  - Room dimension minimums and display colours
  - Aspect ratio limits used during width distribution
  - Zone classification and per-zone auto-fill policy
  - Footprint constants (hallway depth, house width floor, L-shape threshold)

These values are part of the output contract consumed by the renderer and the
DXF/JPEG exporters, so they are deliberately not configurable per call.
"""

from typing import Dict, NamedTuple, Optional, Tuple

from models import RoomType

# ===========================================================================
# STRUCTURAL CONSTANTS (metres)
# ===========================================================================

GRID_SNAP = 0.5  # 500 mm planning grid

WALL_EXTERNAL_M = 0.2
WALL_INTERNAL_M = 0.1

# Geometric tolerances
FIT_TOLERANCE = 0.05        # slack below which a zone counts as already full
EXTERIOR_TOLERANCE = 0.05   # distance at which a room edge sits on the envelope
OVERLAP_TOLERANCE = 0.05    # overlap depth still treated as touching
WALL_KEY_SCALE = 10         # wall dedup key resolution: 1 / 10 m

# ===========================================================================
# FOOTPRINT CONSTANTS
# ===========================================================================

HALLWAY_DEPTH_M = 1.2
MIN_HOUSE_WIDTH_M = 8.0

# Front zone narrower than this fraction of the house width becomes a wing
L_SHAPE_THRESHOLD = 0.72

# ===========================================================================
# ROOM DIMENSION STANDARDS (metres)
# ===========================================================================

# Minimum room dimensions (width, height)
MIN_DIMS: Dict[RoomType, Tuple[float, float]] = {
    RoomType.BEDROOM:        (3.0, 3.0),
    RoomType.MASTER_BEDROOM: (4.0, 3.5),
    RoomType.BATHROOM:       (1.8, 2.4),
    RoomType.ENSUITE:        (1.5, 2.0),
    RoomType.KITCHEN:        (3.0, 3.5),
    RoomType.LIVING:         (4.0, 4.0),
    RoomType.DINING:         (3.0, 3.5),
    RoomType.GARAGE:         (3.0, 5.5),
    RoomType.LAUNDRY:        (1.8, 2.0),
    RoomType.HALLWAY:        (1.2, 1.2),
    RoomType.CORRIDOR:       (1.2, 1.2),
    RoomType.STUDY:          (2.5, 2.5),
    RoomType.STORAGE:        (1.2, 1.5),
}

DEFAULT_MIN_DIMS = (3.0, 3.0)

# Maximum width-to-height ratio a room may grow to during distribution
MAX_ASPECT: Dict[RoomType, float] = {
    RoomType.LIVING:         3.5,
    RoomType.DINING:         3.0,
    RoomType.KITCHEN:        2.5,
    RoomType.MASTER_BEDROOM: 2.0,
    RoomType.BEDROOM:        2.0,
    RoomType.STUDY:          2.0,
    RoomType.BATHROOM:       2.0,
    RoomType.ENSUITE:        2.0,
    RoomType.LAUNDRY:        2.5,
    RoomType.GARAGE:         2.5,
    RoomType.STORAGE:        4.0,
    RoomType.HALLWAY:        50.0,
    RoomType.CORRIDOR:       50.0,
}

DEFAULT_MAX_ASPECT = 2.5

ROOM_COLORS: Dict[RoomType, str] = {
    RoomType.BEDROOM:        '#E8F4FD',
    RoomType.MASTER_BEDROOM: '#DBEAFE',
    RoomType.BATHROOM:       '#E0F4F1',
    RoomType.ENSUITE:        '#CCFBF1',
    RoomType.KITCHEN:        '#FEF3E2',
    RoomType.LIVING:         '#E8F5E9',
    RoomType.DINING:         '#FFFDE7',
    RoomType.GARAGE:         '#F5F5F5',
    RoomType.LAUNDRY:        '#F3E5F5',
    RoomType.HALLWAY:        '#FAFAFA',
    RoomType.CORRIDOR:       '#FAFAFA',
    RoomType.STUDY:          '#FFF8F0',
    RoomType.STORAGE:        '#EEEEEE',
}

# Not counted toward totalArea
NON_HABITABLE = frozenset({
    RoomType.GARAGE,
    RoomType.HALLWAY,
    RoomType.CORRIDOR,
    RoomType.STORAGE,
})

# ===========================================================================
# ZONE CLASSIFICATION
# ===========================================================================

ZONE_FRONT = 0
ZONE_LIVING = 1
ZONE_HALLWAY = 2
ZONE_PRIVATE = 3
ZONE_REAR = 4

ZONE_COUNT = 5

ZONE_MAP: Dict[RoomType, int] = {
    RoomType.GARAGE:         ZONE_FRONT,
    RoomType.LIVING:         ZONE_LIVING,
    RoomType.KITCHEN:        ZONE_LIVING,
    RoomType.DINING:         ZONE_LIVING,
    RoomType.HALLWAY:        ZONE_HALLWAY,
    RoomType.CORRIDOR:       ZONE_HALLWAY,
    RoomType.MASTER_BEDROOM: ZONE_PRIVATE,
    RoomType.ENSUITE:        ZONE_PRIVATE,
    RoomType.BATHROOM:       ZONE_PRIVATE,
    RoomType.LAUNDRY:        ZONE_PRIVATE,
    RoomType.BEDROOM:        ZONE_REAR,
    RoomType.STUDY:          ZONE_REAR,
    RoomType.STORAGE:        ZONE_REAR,
}


class FillerRule(NamedTuple):
    """A filler room appended when a zone leaves more than ``trigger`` metres unused."""

    label: str
    trigger: float
    max_width: Optional[float]
    room_type: RoomType = RoomType.STORAGE


class ZonePolicy(NamedTuple):
    label: str
    fillers: Tuple[FillerRule, ...] = ()


ZONE_POLICIES: Dict[int, ZonePolicy] = {
    ZONE_FRONT: ZonePolicy(
        label='Front',
        fillers=(
            FillerRule('Entry / Porch', trigger=1.4, max_width=3.0),
            FillerRule('Alfresco', trigger=1.4, max_width=None),
        ),
    ),
    ZONE_LIVING: ZonePolicy(label='Living'),
    ZONE_HALLWAY: ZonePolicy(label='Hallway'),
    ZONE_PRIVATE: ZonePolicy(label='Private'),
    ZONE_REAR: ZonePolicy(
        label='Rear',
        fillers=(
            FillerRule('Linen', trigger=2.0, max_width=2.0),
        ),
    ),
}
