from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from starlette.concurrency import run_in_threadpool

from clubapi.routers.deps import error_response, get_store, publish
from clubapi.services.club_service import ClubService, SliderService
from clubapi.services.errors import ServiceError

router = APIRouter(prefix="/api", tags=["club"])


@router.get("/club")
def get_club(request: Request):
    return ClubService(get_store(request)).get_settings()


@router.get("/ground")
def get_ground(request: Request):
    return ClubService(get_store(request)).get_settings()


@router.put("/club")
async def update_club(request: Request, payload: Any = Body(...)):
    try:
        club = await run_in_threadpool(ClubService(get_store(request)).update_settings, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "club-updated", club)
    return club


@router.get("/slider")
def get_slider(request: Request):
    return SliderService(get_store(request)).active_slides()


@router.post("/slider")
async def replace_slider(request: Request, payload: Any = Body(...)):
    try:
        slides = await run_in_threadpool(SliderService(get_store(request)).replace, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "slider-updated", slides)
    return {"success": True, "slides": slides}
