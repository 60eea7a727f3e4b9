from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from clubapi.routers.deps import error_response, get_store, publish
from clubapi.services.errors import ServiceError
from clubapi.services.news_service import NewsService

router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("")
def list_news(request: Request):
    return NewsService(get_store(request)).list_newest_first()


@router.post("")
async def post_news(request: Request, payload: dict):
    try:
        item = await run_in_threadpool(NewsService(get_store(request)).create, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "new-news", item)
    return JSONResponse(item, status_code=201)


@router.put("/{news_id}")
async def update_news(news_id: str, request: Request, payload: dict):
    try:
        item = await run_in_threadpool(NewsService(get_store(request)).update, news_id, payload)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "update-news", item)
    return item


@router.delete("/{news_id}")
async def delete_news(news_id: str, request: Request):
    try:
        await run_in_threadpool(NewsService(get_store(request)).delete, news_id)
    except ServiceError as exc:
        return error_response(exc)
    await publish(request, "news-deleted", {"id": news_id})
    return {"success": True}
