"""Immutable plan value types matching the JSON shape the renderer and exporters consume."""

import enum
import logging
import math
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class RoomType(str, enum.Enum):
    BEDROOM = "bedroom"
    MASTER_BEDROOM = "master_bedroom"
    BATHROOM = "bathroom"
    ENSUITE = "ensuite"
    KITCHEN = "kitchen"
    LIVING = "living"
    DINING = "dining"
    GARAGE = "garage"
    LAUNDRY = "laundry"
    HALLWAY = "hallway"
    CORRIDOR = "corridor"
    STUDY = "study"
    STORAGE = "storage"

    @classmethod
    def parse(cls, value: Any) -> "RoomType":
        """
        Normalise a loosely formatted type string.

        ``"Master Bedroom"`` and ``"master-bedroom"`` both map to
        ``MASTER_BEDROOM``; anything unrecognised falls back to
        ``DEFAULT_ROOM_TYPE`` with a warning instead of failing.
        """
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            logger.warning(f"Unknown room type {value!r}, using {DEFAULT_ROOM_TYPE.value}")
            return DEFAULT_ROOM_TYPE

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


DEFAULT_ROOM_TYPE = RoomType.BEDROOM


class WallType(str, enum.Enum):
    EXTERIOR = "exterior"
    INTERIOR = "interior"


def _optional_dimension(value: Any) -> Optional[float]:
    """Coerce a dimension hint to a finite float, or None when it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class _PlanValue(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# ---------- Input ----------

class RoomSpec(_PlanValue):
    """One requested room. Width/height are optional hints in metres."""

    type: RoomType = DEFAULT_ROOM_TYPE
    label: str = ""
    width: Optional[float] = None
    height: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        room_type = RoomType.parse(data.get("type"))
        data["type"] = room_type
        label = data.get("label")
        if not isinstance(label, str) or not label.strip():
            data["label"] = room_type.display_name
        return data

    @field_validator("width", "height", mode="before")
    @classmethod
    def _coerce_dimension(cls, value: Any) -> Optional[float]:
        return _optional_dimension(value)


class PlanRequest(_PlanValue):
    """Room programme for a new plan: ``{name?, rooms, targetWidth?}``."""

    name: Optional[str] = None
    rooms: Tuple[RoomSpec, ...] = ()
    target_width: Optional[float] = None

    @field_validator("target_width", mode="before")
    @classmethod
    def _coerce_target(cls, value: Any) -> Optional[float]:
        return _optional_dimension(value)


# ---------- Output ----------

class Room(_PlanValue):
    """
    A placed room.

    ``(x, y)`` is the corner nearest the plan origin; y grows from the
    front of the house towards the rear. ``connections`` lists hallway
    adjacency only.
    """

    id: str
    type: RoomType
    label: str
    x: float
    y: float
    width: float
    height: float
    color: str = "#F5F5F5"
    connections: Tuple[str, ...] = ()
    notes: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> RoomType:
        return RoomType.parse(value)

    @property
    def area(self) -> float:
        return round(self.width * self.height, 2)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class Wall(_PlanValue):
    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float
    type: WallType

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


class FloorPlan(_PlanValue):
    """
    A complete single-storey plan.

    ``width``/``depth`` are the exterior footprint including wall
    thickness. ``garage_wing_width``/``garage_wing_depth`` are only set
    for L-shaped footprints and describe the narrower front wing.
    """

    id: str
    name: str
    total_area: float = 0.0
    width: float
    depth: float
    rooms: Tuple[Room, ...] = ()
    walls: Tuple[Wall, ...] = ()
    garage_wing_width: Optional[float] = None
    garage_wing_depth: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_l_shaped(self) -> bool:
        return self.garage_wing_width is not None and self.garage_wing_depth is not None

    def find_room(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_json_dict(self) -> dict:
        """Serialise with camelCase keys, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
