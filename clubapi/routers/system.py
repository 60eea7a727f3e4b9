from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from clubapi.routers.deps import get_settings, get_store
from clubapi.services.sync_service import StorageSyncService

router = APIRouter(tags=["system"])


@router.get("/api/debug")
def debug(request: Request):
    store = get_store(request)
    settings = get_settings(request)
    return {
        "environment": settings.app_env,
        "remoteConfigured": store.remote_configured,
        "remoteAvailable": store.remote_available,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/api/database-status")
def database_status(request: Request):
    return StorageSyncService(get_store(request)).status()


@router.post("/api/sync-database")
def sync_database(request: Request):
    store = get_store(request)
    if not store.remote_available:
        return JSONResponse(
            {"success": False, "error": "Remote store is not available", "remoteAvailable": False},
            status_code=409,
        )
    result = StorageSyncService(store).sync_to_remote()
    return JSONResponse(
        {
            "success": result.ok,
            "message": "Database synchronization completed",
            "results": result.to_dict(),
            "remoteAvailable": True,
        },
        status_code=200 if result.ok else 500,
    )


@router.websocket("/ws")
async def events_socket(websocket: WebSocket):
    events = websocket.app.state.events
    await events.connect(websocket)
    try:
        while True:
            # clients only listen; incoming frames are ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await events.disconnect(websocket)
