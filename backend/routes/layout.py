"""
Layout engine routes.

Stateless JSON endpoints: the client sends a room programme or its current
plan and gets the new plan back. Nothing is stored server-side.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, HTTPException

from models import FloorPlan, PlanRequest
from schemas import (
    AddRoomRequest,
    MoveRoomRequest,
    PlanBody,
    RemoveRoomRequest,
    ResizeRoomRequest,
)
from services.layout_engine import (
    ValidationReport,
    add_room,
    generate_floor_plan,
    move_room,
    recalculate_walls,
    remove_room,
    resize_room,
    validate_plan,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/layout", tags=["layout"])

_PLAN_RESPONSE = dict(
    response_model=FloorPlan,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)


def _run(action: str, fn: Callable[..., Any], *args: Any) -> Any:
    try:
        return fn(*args)
    except Exception as e:
        logger.error(f"{action} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# ---------- Generation ----------

@router.post("/generate", **_PLAN_RESPONSE)
async def generate(req: PlanRequest):
    """Lay out a new plan from a room programme."""
    return _run("generate", generate_floor_plan, req)


# ---------- Edits ----------

@router.post("/rooms/resize", **_PLAN_RESPONSE)
async def resize(req: ResizeRoomRequest):
    """Resize one room; walls and area are re-derived."""
    return _run("resize_room", resize_room, req.plan, req.room_id, req.width, req.height)


@router.post("/rooms/move", **_PLAN_RESPONSE)
async def move(req: MoveRoomRequest):
    return _run("move_room", move_room, req.plan, req.room_id, req.x, req.y)


@router.post("/rooms/add", **_PLAN_RESPONSE)
async def add(req: AddRoomRequest):
    """Append a room below the current layout."""
    return _run("add_room", add_room, req.plan, req.room)


@router.post("/rooms/remove", **_PLAN_RESPONSE)
async def remove(req: RemoveRoomRequest):
    return _run("remove_room", remove_room, req.plan, req.room_id)


@router.post("/recalculate", **_PLAN_RESPONSE)
async def recalculate(req: PlanBody):
    """Rebuild walls and area for a plan whose rooms were edited client-side."""
    return _run("recalculate_walls", recalculate_walls, req.plan)


# ---------- Validation ----------

@router.post("/validate", response_model=ValidationReport, response_model_by_alias=True)
async def validate(req: PlanBody):
    """Report overlaps, undersized rooms, duplicate walls and area drift."""
    return _run("validate_plan", validate_plan, req.plan)
