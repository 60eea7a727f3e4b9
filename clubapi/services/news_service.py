"""News and notice use cases."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from clubapi.domain.documents import NEWS
from clubapi.domain.records import (
    NEWS_TYPES,
    NewsItem,
    find_index,
    format_news_date,
    new_record_id,
    news_timestamp,
)
from clubapi.repositories.document_store import DocumentStore

from .errors import NotFoundError, ValidationError


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class NewsService:
    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] | None = None) -> None:
        self.store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _load(self) -> list[dict]:
        news = self.store.read(NEWS)
        return news if isinstance(news, list) else []

    def list_newest_first(self) -> list[dict]:
        return sorted(self._load(), key=news_timestamp, reverse=True)

    @staticmethod
    def _news_type(value: Any, fallback: str) -> str:
        kind = _text(value).strip().lower()
        if not kind:
            return fallback
        if kind not in NEWS_TYPES:
            raise ValidationError("Type must be 'news' or 'notice'")
        return kind

    def create(self, payload: Mapping[str, Any]) -> dict:
        headline = _text(payload.get("headline")).strip()
        description = _text(payload.get("description")).strip()
        if not headline or not description:
            raise ValidationError("Headline and Description required")
        now = self._clock()
        item = NewsItem(
            id=new_record_id(),
            headline=headline,
            description=description,
            publisher=_text(payload.get("publisher")) or "Admin",
            image_url=_text(payload.get("imageUrl")),
            type=self._news_type(payload.get("type"), "news"),
            date=now.isoformat().replace("+00:00", "Z"),
            date_formatted=format_news_date(now),
        )
        news = self._load()
        record = item.to_dict()
        news.append(record)
        self.store.write(NEWS, news)
        return record

    def update(self, news_id: str, payload: Mapping[str, Any]) -> dict:
        news = self._load()
        index = find_index(news, news_id)
        if index < 0:
            raise NotFoundError("News item not found")
        item = NewsItem.from_dict(news[index])
        headline = _text(payload.get("headline")).strip()
        if headline:
            item.headline = headline
        description = _text(payload.get("description")).strip()
        if description:
            item.description = description
        item.type = self._news_type(payload.get("type"), item.type)
        if payload.get("imageUrl") is not None:
            item.image_url = _text(payload["imageUrl"])
        news[index] = item.to_dict()
        self.store.write(NEWS, news)
        return news[index]

    def delete(self, news_id: str) -> None:
        news = self._load()
        index = find_index(news, news_id)
        if index < 0:
            raise NotFoundError("News item not found")
        news.pop(index)
        self.store.write(NEWS, news)
