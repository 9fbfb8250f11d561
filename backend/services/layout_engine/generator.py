"""
Plan generation from a room programme.

Coordinates sizing, zone bucketing, auto-fill, width distribution,
zone stacking, L-shape detection and wall synthesis. The algorithm is
closed form: every zone is sized and placed in a single pass, so the same
programme always yields the same plan.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from config import DEFAULT_PLAN_NAME
from models import FloorPlan, PlanRequest, Room, RoomSpec, RoomType
from services.layout_constants import (
    HALLWAY_DEPTH_M,
    L_SHAPE_THRESHOLD,
    MIN_HOUSE_WIDTH_M,
    ROOM_COLORS,
    WALL_EXTERNAL_M as WALL_EXT,
    WALL_INTERNAL_M as WALL_INT,
    ZONE_COUNT,
    ZONE_FRONT,
    ZONE_HALLWAY,
    ZONE_LIVING,
    ZONE_PRIVATE,
    ZONE_REAR,
)
from .distribution import auto_fill, distribute_width, natural_width
from .ids import Clock, IdFactory, new_id, utc_now
from .sizing import SizedRoom, bucket_by_zone, resolve_size, snap_up, zone_for
from .walls import build_walls, total_area

logger = logging.getLogger(__name__)

PlanInput = Union[PlanRequest, Dict[str, Any], Sequence[Union[RoomSpec, Dict[str, Any]]]]


def _coerce_request(request: PlanInput) -> PlanRequest:
    if isinstance(request, PlanRequest):
        return request
    if isinstance(request, dict):
        return PlanRequest.model_validate(request)
    return PlanRequest(rooms=tuple(request))


class LayoutGenerator:
    """
    Build a complete floor plan from an unordered room programme.

    Typical workflow::

        gen = LayoutGenerator()
        plan = gen.generate({"rooms": [{"type": "living", "label": "Living"}]})

    Zones are stacked front to rear:

        0  garage (plus Entry / Alfresco fillers)
        1  living, kitchen, dining
        2  generated hallway spine, full width
        3  master bedroom, ensuite, bathroom, laundry
        4  bedrooms, study, storage (plus Linen filler)
    """

    def __init__(self, id_factory: Optional[IdFactory] = None, clock: Optional[Clock] = None):
        """
        Parameters
        ----------
        id_factory : callable, optional
            Zero-argument callable returning a fresh id string. Defaults
            to random UUID4s.
        clock : callable, optional
            Zero-argument callable returning an ISO-8601 timestamp.
            Defaults to the current UTC time.
        """
        self.id_factory = id_factory or new_id
        self.clock = clock or utc_now

    # ------------------------------------------------------------------
    # Footprint decisions
    # ------------------------------------------------------------------

    @staticmethod
    def _house_width(
        zones: Sequence[Sequence[SizedRoom]],
        occupied: int,
        target_width: Optional[float],
    ) -> float:
        """
        Interior width of the main body.

        The widest zone always fits. A caller-supplied exterior target
        width replaces the default floor; otherwise multi-zone programmes
        are at least MIN_HOUSE_WIDTH_M wide and a single-zone programme
        keeps its natural width.
        """
        widths = [natural_width(z) for z in zones if z]
        if target_width is not None:
            floor = target_width - 2 * WALL_EXT
        elif occupied > 1:
            floor = MIN_HOUSE_WIDTH_M
        else:
            floor = 0.0
        return snap_up(max(widths + [floor]))

    @staticmethod
    def _needs_hallway(zones: Sequence[Sequence[SizedRoom]]) -> bool:
        """The spine only exists between a front/living zone and a private/rear zone."""
        rear = bool(zones[ZONE_PRIVATE] or zones[ZONE_REAR])
        front = bool(zones[ZONE_FRONT] or zones[ZONE_LIVING])
        return rear and front

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _room_fields(self, room_type: RoomType, label: str,
                     x: float, y: float, w: float, h: float) -> Dict[str, Any]:
        return {
            "id": self.id_factory(),
            "type": room_type,
            "label": label,
            "x": round(x, 2),
            "y": round(y, 2),
            "width": round(w, 2),
            "height": round(h, 2),
            "color": ROOM_COLORS[room_type],
            "connections": [],
        }

    def _place(
        self,
        zones: Sequence[Sequence[SizedRoom]],
        heights: Sequence[float],
        house_w: float,
    ) -> List[Tuple[int, List[Dict[str, Any]]]]:
        """Stack present zones from the front, one interior wall apart."""
        rows = []
        y = WALL_EXT
        for i in range(ZONE_COUNT):
            h = heights[i]
            if h <= 0:
                continue
            if i == ZONE_HALLWAY:
                row = [self._room_fields(RoomType.HALLWAY, "Hallway", WALL_EXT, y, house_w, h)]
            else:
                row = []
                x = WALL_EXT
                for r in zones[i]:
                    row.append(self._room_fields(r.type, r.label, x, y, r.w, h))
                    x = round(x + r.w + WALL_INT, 2)
            rows.append((i, row))
            y = round(y + h + WALL_INT, 2)
        return rows

    @staticmethod
    def _connect_hallway(rows: List[Tuple[int, List[Dict[str, Any]]]]) -> None:
        """Link the hallway with the rooms directly in front of and behind it."""
        for pos, (zone, row) in enumerate(rows):
            if zone != ZONE_HALLWAY:
                continue
            hallway = row[0]
            neighbours = []
            if pos > 0:
                neighbours += rows[pos - 1][1]
            if pos + 1 < len(rows):
                neighbours += rows[pos + 1][1]
            hallway["connections"] = [n["id"] for n in neighbours]
            for n in neighbours:
                n["connections"] = [hallway["id"]]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, request: PlanInput) -> FloorPlan:
        """
        Lay out a plan.

        Parameters
        ----------
        request : PlanRequest, dict or sequence of RoomSpec
            ``{"name"?, "rooms": [...], "targetWidth"?}`` or just the rooms.

        Returns
        -------
        FloorPlan
            Rooms, walls, extents, habitable area and, for L-shaped
            footprints, the garage wing extents.
        """
        request = _coerce_request(request)

        sized: List[SizedRoom] = []
        for spec in request.rooms:
            if zone_for(spec.type) == ZONE_HALLWAY:
                logger.debug(f"Dropping requested {spec.type.value} '{spec.label}': the hallway is generated")
                continue
            sized.append(resolve_size(spec))

        zones = bucket_by_zone(sized)
        occupied = sum(1 for z in zones if z)

        heights = [max((r.h for r in z), default=0.0) for z in zones]
        heights[ZONE_HALLWAY] = HALLWAY_DEPTH_M if self._needs_hallway(zones) else 0.0
        zones = [[replace(r, h=heights[i]) for r in z] for i, z in enumerate(zones)]

        house_w = self._house_width(zones, occupied, request.target_width)

        # L-shape test uses the front zone's natural width, before any filling
        front_w = natural_width(zones[ZONE_FRONT])
        is_l = bool(zones[ZONE_FRONT]) and front_w < house_w * L_SHAPE_THRESHOLD

        for i in (ZONE_FRONT, ZONE_LIVING, ZONE_PRIVATE, ZONE_REAR):
            if i == ZONE_FRONT and is_l:
                zones[i] = distribute_width(zones[i], front_w)
                continue
            zones[i] = auto_fill(zones[i], i, house_w, heights[i])
            zones[i] = distribute_width(zones[i], house_w)

        rows = self._place(zones, heights, house_w)
        self._connect_hallway(rows)
        rooms = tuple(Room(**fields) for _, row in rows for fields in row)

        interior_depth = sum(heights[i] for i, _ in rows) + max(len(rows) - 1, 0) * WALL_INT
        plan_w = round(house_w + 2 * WALL_EXT, 2)
        plan_d = round(interior_depth + 2 * WALL_EXT, 2)

        wing_w = wing_d = None
        if is_l:
            wing_w = round(front_w + 2 * WALL_EXT, 2)
            wing_d = round(WALL_EXT + heights[ZONE_FRONT] + WALL_INT, 2)

        walls = build_walls(rooms, plan_w, plan_d, wing_w, wing_d, self.id_factory)
        area = total_area(rooms)
        now = self.clock()

        logger.info(
            f"Generated plan: {len(rooms)} rooms, {plan_w:.2f}x{plan_d:.2f}m, "
            f"{len(walls)} walls, habitable area {area:.1f}m2"
            + (f", L-shaped (wing {wing_w:.2f}x{wing_d:.2f}m)" if is_l else "")
        )

        return FloorPlan(
            id=self.id_factory(),
            name=request.name or DEFAULT_PLAN_NAME,
            total_area=area,
            width=plan_w,
            depth=plan_d,
            rooms=rooms,
            walls=walls,
            garage_wing_width=wing_w,
            garage_wing_depth=wing_d,
            created_at=now,
            updated_at=now,
        )


def generate_floor_plan(
    request: PlanInput,
    id_factory: Optional[IdFactory] = None,
    clock: Optional[Clock] = None,
) -> FloorPlan:
    """Convenience wrapper: ``LayoutGenerator(id_factory, clock).generate(request)``."""
    return LayoutGenerator(id_factory=id_factory, clock=clock).generate(request)
