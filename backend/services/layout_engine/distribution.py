"""
Width distribution and auto-fill within a single zone.

A zone is a left-to-right run of rooms separated by interior walls. Both
operations here are single pass and return new lists; the input rooms are
never modified.
"""

import logging
from dataclasses import replace
from typing import List, Sequence

from services.layout_constants import (
    FIT_TOLERANCE,
    WALL_INTERNAL_M as WALL_INT,
    ZONE_POLICIES,
)
from .sizing import SizedRoom, max_aspect, min_dims, snap_down, snap_up

logger = logging.getLogger(__name__)


def natural_width(rooms: Sequence[SizedRoom]) -> float:
    """Sum of room widths plus one interior wall between each neighbour."""
    if not rooms:
        return 0.0
    return round(sum(r.w for r in rooms) + (len(rooms) - 1) * WALL_INT, 2)


def distribute_width(rooms: Sequence[SizedRoom], target: float) -> List[SizedRoom]:
    """
    Grow rooms so the zone fills *target* metres.

    The excess is shared in proportion to each room's width, but no room
    grows past ``height * max_aspect``. Whatever the caps leave over goes
    to the last room. Widths are snapped down, so the zone never ends up
    wider than *target*.

    Parameters
    ----------
    rooms : sequence of SizedRoom
        The zone's rooms, already at their resolved sizes.
    target : float
        Interior width to fill (m).
    """
    rooms = list(rooms)
    if not rooms:
        return rooms
    extra = target - natural_width(rooms)
    if extra <= FIT_TOLERANCE:
        return rooms

    total = sum(r.w for r in rooms)
    remaining = extra
    grown: List[SizedRoom] = []
    for room in rooms:
        share = extra * (room.w / total)
        cap = room.h * max_aspect(room.type)
        growth = max(0.0, min(share, cap - room.w, remaining))
        new_w = snap_down(room.w + growth)
        remaining -= new_w - room.w
        grown.append(replace(room, w=new_w))

    if remaining > FIT_TOLERANCE:
        last = grown[-1]
        grown[-1] = replace(last, w=snap_down(last.w + remaining))

    return grown


def auto_fill(rooms: Sequence[SizedRoom], zone: int, target: float, height: float) -> List[SizedRoom]:
    """
    Append the zone's filler rooms while it leaves significant width unused.

    Rules come from ``ZONE_POLICIES``; each filler is tried in order and
    sized to ``min(unused - wall, max_width)`` on the grid. A filler that
    would come out narrower than its type minimum is skipped, and so are
    the ones after it.
    """
    filled = list(rooms)
    policy = ZONE_POLICIES.get(zone)
    if not filled or policy is None:
        return filled

    for rule in policy.fillers:
        unused = target - natural_width(filled)
        if unused <= rule.trigger:
            break
        width = unused - WALL_INT
        if rule.max_width is not None:
            width = min(width, rule.max_width)
        width = snap_down(width)
        min_w, _ = min_dims(rule.room_type)
        if width < snap_up(min_w):
            logger.debug(f"Skipping filler '{rule.label}': {width:.1f}m is below minimum")
            break
        logger.debug(f"Zone {policy.label}: adding filler '{rule.label}' {width:.1f}m wide")
        filled.append(SizedRoom(type=rule.room_type, label=rule.label, w=width, h=height, filler=True))

    return filled
