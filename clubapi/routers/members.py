from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from clubapi.routers.deps import error_response, get_store, publish
from clubapi.services.errors import ServiceError
from clubapi.services.member_service import MemberService

router = APIRouter(prefix="/api", tags=["members"])


def _service(request: Request) -> MemberService:
    return MemberService(get_store(request))


@router.get("/members")
def list_members(request: Request):
    return _service(request).list_sorted()


@router.get("/squad")
def list_squad(request: Request):
    return _service(request).list_stored()


@router.post("/members")
async def add_member(request: Request, payload: dict):
    try:
        member = await run_in_threadpool(_service(request).create, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "member-added", member)
    return JSONResponse(member, status_code=201)


@router.put("/members/{member_id}")
async def update_member(member_id: str, request: Request, payload: dict):
    try:
        member = await run_in_threadpool(_service(request).update, member_id, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "member-updated", member)
    return member


@router.delete("/members/{member_id}")
async def delete_member(member_id: str, request: Request):
    try:
        removed = await run_in_threadpool(_service(request).delete, member_id)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "member-deleted", {"id": member_id})
    return {
        "success": True,
        "deletedMember": {
            "id": removed.get("id"),
            "name": removed.get("name"),
            "imageUrl": removed.get("imageUrl"),
        },
    }
