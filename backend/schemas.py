"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models import FloorPlan, RoomSpec


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


# ---------- Edits ----------
class PlanBody(_Request):
    plan: FloorPlan


class ResizeRoomRequest(PlanBody):
    room_id: str
    width: float
    height: float


class MoveRoomRequest(PlanBody):
    room_id: str
    x: float
    y: float


class AddRoomRequest(PlanBody):
    room: RoomSpec


class RemoveRoomRequest(PlanBody):
    room_id: str


# ---------- Health ----------
class HealthResponse(BaseModel):
    status: str
    version: str
