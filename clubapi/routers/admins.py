from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from clubapi.core.rate_limiter import client_address, throttle_request
from clubapi.routers.deps import error_response, get_login_throttle, get_store, publish
from clubapi.services.admin_service import AdminService
from clubapi.services.errors import ServiceError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["admins"])


def _service(request: Request) -> AdminService:
    return AdminService(get_store(request))


@router.post("/login")
def login(request: Request, payload: dict):
    retry_after = throttle_request(get_login_throttle(request), request, "login")
    if retry_after is not None:
        logger.warning("Login throttled for %s", client_address(request))
        return JSONResponse(
            {"error": "Too many login attempts. Please try again shortly."},
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )
    try:
        result = _service(request).authenticate(payload.get("username"), payload.get("password"))
    except ServiceError as exc:
        return error_response(exc)
    return result.to_dict()


@router.get("/admins")
def list_admins(request: Request):
    return _service(request).list_public()


@router.post("/admins")
def add_admin(request: Request, payload: dict):
    try:
        admin = _service(request).create(payload)
    except ServiceError as exc:
        return error_response(exc)
    return JSONResponse(admin, status_code=201)


@router.put("/admins/{admin_id}")
def update_admin(admin_id: str, request: Request, payload: dict):
    try:
        return _service(request).update(admin_id, payload)
    except ServiceError as exc:
        return error_response(exc)


@router.delete("/admins/{admin_id}")
async def delete_admin(admin_id: str, request: Request):
    try:
        await run_in_threadpool(_service(request).delete, admin_id)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "admin-deleted", {"id": admin_id})
    return {"success": True}
