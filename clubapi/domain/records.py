"""
Record shapes stored inside the list documents and the club object.

Documents are plain JSON; these dataclasses give services typed access and
keep unknown keys in ``extra`` so older records survive a rewrite.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from .documents import DEFAULT_CLUB_NAME, DEFAULT_FIELD_TYPE

DEFAULT_MEMBER_IMAGE = "https://ui-avatars.com/api/?name=Player&background=4F46E5&color=FFFFFF&size=150"
NEWS_TYPES = ("news", "notice")
ROLE_SUPER = "super"
ROLE_ADMIN = "admin"


def new_record_id() -> str:
    """Millisecond timestamp, the id format used by every stored record."""
    return str(int(time.time() * 1000))


def _str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def _extra(data: Mapping[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


# -------------------------------------- members --------------------------------------
_MEMBER_KEYS = (
    "id", "name", "memberType", "positions", "position", "jerseyNo", "age", "address",
    "height", "preferredFoot", "imageUrl", "status", "notes",
)


@dataclass
class Member:
    id: str
    name: str
    member_type: str
    positions: list[str] = field(default_factory=list)
    jersey_no: str = ""
    age: str = ""
    address: str = ""
    height: str = ""
    preferred_foot: str = ""
    image_url: str = DEFAULT_MEMBER_IMAGE
    status: str = "Active"
    notes: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Member":
        positions = data.get("positions")
        if not isinstance(positions, list):
            legacy = data.get("position")
            positions = [legacy] if legacy else []
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            member_type=_str(data.get("memberType")),
            positions=[_str(p) for p in positions if p],
            jersey_no=_str(data.get("jerseyNo")),
            age=_str(data.get("age")),
            address=_str(data.get("address")),
            height=_str(data.get("height")),
            preferred_foot=_str(data.get("preferredFoot")),
            image_url=_str(data.get("imageUrl")),
            status=_str(data.get("status"), "Active") or "Active",
            notes=_str(data.get("notes")),
            extra=_extra(data, _MEMBER_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "memberType": self.member_type,
            "positions": list(self.positions),
            "jerseyNo": self.jersey_no,
            "age": self.age,
            "address": self.address,
            "height": self.height,
            "preferredFoot": self.preferred_foot,
            "imageUrl": self.image_url,
            "status": self.status,
            "notes": self.notes,
        }


def normalize_member(data: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite a legacy member (single ``position``) into the current shape."""
    return Member.from_dict(data).to_dict()


def member_sort_key(member: Mapping[str, Any]) -> tuple:
    """Members with a numeric jersey first (by number), then the rest by name."""
    jersey = _str(member.get("jerseyNo")).strip()
    if jersey:
        try:
            return (0, int(jersey), "")
        except ValueError:
            pass
    return (1, 0, _str(member.get("name")).lower())


# -------------------------------------- news --------------------------------------
_NEWS_KEYS = ("id", "headline", "description", "publisher", "imageUrl", "type", "date", "dateFormatted")


def format_news_date(moment: datetime) -> str:
    return f"{moment:%b} {moment.day}, {moment.year}"


@dataclass
class NewsItem:
    id: str
    headline: str
    description: str
    publisher: str = "Admin"
    image_url: str = ""
    type: str = "news"
    date: str = ""
    date_formatted: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NewsItem":
        return cls(
            id=_str(data.get("id")),
            headline=_str(data.get("headline")),
            description=_str(data.get("description")),
            publisher=_str(data.get("publisher"), "Admin") or "Admin",
            image_url=_str(data.get("imageUrl")),
            type=_str(data.get("type"), "news") or "news",
            date=_str(data.get("date")),
            date_formatted=_str(data.get("dateFormatted")),
            extra=_extra(data, _NEWS_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "headline": self.headline,
            "description": self.description,
            "publisher": self.publisher,
            "imageUrl": self.image_url,
            "type": self.type,
            "date": self.date,
            "dateFormatted": self.date_formatted,
        }


def news_timestamp(item: Mapping[str, Any]) -> float:
    """Publication time used for newest-first ordering; unknown dates sort last."""
    for key in ("date", "dateFormatted"):
        raw = _str(item.get(key)).strip()
        if not raw:
            continue
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).timestamp()
        except ValueError:
            pass
        try:
            return datetime.strptime(raw, "%b %d, %Y").timestamp()
        except ValueError:
            continue
    return 0.0


# -------------------------------------- slider --------------------------------------
@dataclass
class Slide:
    id: str
    image_url: str
    active: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Slide":
        return cls(
            id=_str(data.get("id")),
            image_url=_str(data.get("imageUrl")),
            active=data.get("active") is not False,
            extra=_extra(data, ("id", "imageUrl", "active")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "id": self.id, "imageUrl": self.image_url, "active": self.active}


# -------------------------------------- admins --------------------------------------
@dataclass
class AdminAccount:
    id: str
    username: str
    password: str
    role: str = ROLE_ADMIN
    image_url: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AdminAccount":
        return cls(
            id=_str(data.get("id")),
            username=_str(data.get("username")),
            password=_str(data.get("password")),
            role=_str(data.get("role"), ROLE_ADMIN) or ROLE_ADMIN,
            image_url=_str(data.get("imageUrl")),
            extra=_extra(data, ("id", "username", "password", "role", "imageUrl")),
        )

    @property
    def is_super(self) -> bool:
        return self.role == ROLE_SUPER

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "role": self.role,
            "imageUrl": self.image_url,
        }

    def public_dict(self) -> dict[str, Any]:
        data = self.to_dict()
        data.pop("password", None)
        return data


# -------------------------------------- club --------------------------------------
@dataclass
class ClubSettings:
    name: str = DEFAULT_CLUB_NAME
    address: str = ""
    ground_location: str = ""
    ground_size: str = ""
    field_type: str = DEFAULT_FIELD_TYPE
    stadium_capacity: str = ""
    nightlight: str = "No"
    ground_image_url: str = ""

    @classmethod
    def from_input(cls, data: Mapping[str, Any]) -> "ClubSettings":
        """Build from an update payload: strings trimmed, blanks fall back to defaults."""
        def _clean(key: str, default: str = "", *, trim: bool = True) -> str:
            value = _str(data.get(key))
            if trim:
                value = value.strip()
            return value or default

        return cls(
            name=_clean("name", DEFAULT_CLUB_NAME),
            address=_clean("address"),
            ground_location=_clean("groundLocation"),
            ground_size=_clean("groundSize"),
            field_type=_clean("fieldType", DEFAULT_FIELD_TYPE, trim=False),
            stadium_capacity=_clean("stadiumCapacity", trim=False),
            nightlight=_clean("nightlight", "No", trim=False),
            ground_image_url=_clean("groundImageUrl", trim=False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "groundLocation": self.ground_location,
            "groundSize": self.ground_size,
            "fieldType": self.field_type,
            "stadiumCapacity": self.stadium_capacity,
            "nightlight": self.nightlight,
            "groundImageUrl": self.ground_image_url,
        }


def find_index(records: list[Mapping[str, Any]], record_id: Optional[str]) -> int:
    """Position of the record whose id matches ``record_id`` as a string, or -1."""
    wanted = _str(record_id)
    for index, record in enumerate(records):
        if isinstance(record, Mapping) and _str(record.get("id")) == wanted:
            return index
    return -1
