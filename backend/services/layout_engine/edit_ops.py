"""
Incremental plan edits.

Each operation takes a FloorPlan and returns a new one with the wall set
and habitable area re-derived from the updated room list; the input plan
is never modified. Edits are bookkeeping only: moving a room onto another
is the interactive editor's concern, not something rejected here.

An edit naming a room id the plan does not contain is a no-op: the same
plan value comes back and a warning is logged.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from models import FloorPlan, Room, RoomSpec
from services.layout_constants import (
    ROOM_COLORS,
    WALL_EXTERNAL_M as WALL_EXT,
    WALL_INTERNAL_M as WALL_INT,
)
from .ids import Clock, IdFactory, new_id, utc_now
from .sizing import min_dims, resolve_size, snap, snap_at_least
from .walls import build_walls, total_area

logger = logging.getLogger(__name__)


class PlanEditor:
    """Pure edit operations sharing one id factory and clock."""

    def __init__(self, id_factory: Optional[IdFactory] = None, clock: Optional[Clock] = None):
        self.id_factory = id_factory or new_id
        self.clock = clock or utc_now

    def _rebuild(
        self,
        plan: FloorPlan,
        rooms: Iterable[Room],
        width: Optional[float] = None,
        depth: Optional[float] = None,
    ) -> FloorPlan:
        """New plan value with walls, area and updatedAt re-derived from *rooms*."""
        rooms = tuple(rooms)
        width = plan.width if width is None else width
        depth = plan.depth if depth is None else depth
        walls = build_walls(
            rooms, width, depth,
            plan.garage_wing_width, plan.garage_wing_depth,
            self.id_factory,
        )
        return plan.model_copy(update={
            "rooms": rooms,
            "walls": walls,
            "width": width,
            "depth": depth,
            "total_area": total_area(rooms),
            "updated_at": self.clock(),
        })

    def _update_room(self, plan: FloorPlan, room: Room, **changes: Any) -> FloorPlan:
        updated = room.model_copy(update=changes)
        return self._rebuild(plan, (updated if r.id == room.id else r for r in plan.rooms))

    @staticmethod
    def _missing(plan: FloorPlan, room_id: str, op: str) -> FloorPlan:
        logger.warning(f"{op}: room {room_id!r} not in plan {plan.id!r}, leaving plan unchanged")
        return plan

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def resize_room(self, plan: FloorPlan, room_id: str, width: float, height: float) -> FloorPlan:
        """Resize a room in place, clamped to its type minimum and snapped to the grid."""
        room = plan.find_room(room_id)
        if room is None:
            return self._missing(plan, room_id, "resize_room")
        min_w, min_h = min_dims(room.type)
        return self._update_room(
            plan, room,
            width=snap_at_least(width, min_w),
            height=snap_at_least(height, min_h),
        )

    def move_room(self, plan: FloorPlan, room_id: str, x: float, y: float) -> FloorPlan:
        """Move a room's origin corner; it cannot cross the exterior wall line."""
        room = plan.find_room(room_id)
        if room is None:
            return self._missing(plan, room_id, "move_room")
        return self._update_room(
            plan, room,
            x=max(WALL_EXT, snap(x)),
            y=max(WALL_EXT, snap(y)),
        )

    def add_room(self, plan: FloorPlan, spec: Union[RoomSpec, Dict[str, Any]]) -> FloorPlan:
        """
        Append a room below the current lowest room edge.

        The plan grows to contain the new room but never shrinks.
        """
        if not isinstance(spec, RoomSpec):
            spec = RoomSpec.model_validate(spec)
        sized = resolve_size(spec)
        if plan.rooms:
            y = round(max(r.y + r.height for r in plan.rooms) + WALL_INT, 2)
        else:
            y = WALL_EXT
        room = Room(
            id=self.id_factory(),
            type=sized.type,
            label=sized.label,
            x=WALL_EXT,
            y=y,
            width=sized.w,
            height=sized.h,
            color=ROOM_COLORS[sized.type],
        )
        width = max(plan.width, round(WALL_EXT + sized.w + WALL_EXT, 2))
        depth = max(plan.depth, round(y + sized.h + WALL_EXT, 2))
        logger.debug(f"add_room: {sized.type.value} '{sized.label}' at y={y:.2f}, plan now {width:.2f}x{depth:.2f}m")
        return self._rebuild(plan, plan.rooms + (room,), width, depth)

    def remove_room(self, plan: FloorPlan, room_id: str) -> FloorPlan:
        """Drop a room; the remaining rooms and plan extents stay where they are."""
        if plan.find_room(room_id) is None:
            return self._missing(plan, room_id, "remove_room")
        return self._rebuild(plan, (r for r in plan.rooms if r.id != room_id))

    def recalculate_walls(self, plan: FloorPlan) -> FloorPlan:
        """Re-derive walls and area after the room list was changed externally."""
        return self._rebuild(plan, plan.rooms)


# ---------- Module-level convenience wrappers ----------

def resize_room(plan: FloorPlan, room_id: str, width: float, height: float, **kwargs: Any) -> FloorPlan:
    return PlanEditor(**kwargs).resize_room(plan, room_id, width, height)


def move_room(plan: FloorPlan, room_id: str, x: float, y: float, **kwargs: Any) -> FloorPlan:
    return PlanEditor(**kwargs).move_room(plan, room_id, x, y)


def add_room(plan: FloorPlan, spec: Union[RoomSpec, Dict[str, Any]], **kwargs: Any) -> FloorPlan:
    return PlanEditor(**kwargs).add_room(plan, spec)


def remove_room(plan: FloorPlan, room_id: str, **kwargs: Any) -> FloorPlan:
    return PlanEditor(**kwargs).remove_room(plan, room_id)


def recalculate_walls(plan: FloorPlan, **kwargs: Any) -> FloorPlan:
    return PlanEditor(**kwargs).recalculate_walls(plan)
