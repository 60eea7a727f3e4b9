"""Document names, empty defaults and first-run seed values."""
from __future__ import annotations

import copy
from typing import Any

MEMBERS = "members"
NEWS = "news"
ADMINS = "admins"
CLUB = "club"
SLIDER = "slider"

DOCUMENT_NAMES = (MEMBERS, NEWS, ADMINS, SLIDER, CLUB)
OBJECT_DOCUMENTS = frozenset({CLUB})
SEEDED_DOCUMENTS = (ADMINS, SLIDER, CLUB)

DEFAULT_CLUB_NAME = "AMSAL FC"
DEFAULT_FIELD_TYPE = "Natural Grass"

DEFAULT_SLIDES = [
    {"id": "1", "imageUrl": "https://images.unsplash.com/photo-1574629810360-7efbbe195018?q=80&w=1200", "active": True},
    {"id": "2", "imageUrl": "https://images.unsplash.com/photo-1543351611-58f69d7c1781?q=80&w=1200", "active": True},
]

DEFAULT_CLUB = {
    "name": DEFAULT_CLUB_NAME,
    "address": "",
    "groundLocation": "",
    "groundSize": "",
    "fieldType": DEFAULT_FIELD_TYPE,
    "groundImageUrl": "",
}


def is_known_document(name: str) -> bool:
    return name in DOCUMENT_NAMES


def empty_default(name: str) -> Any:
    """Value a document resolves to when nothing is stored for it."""
    return {} if name in OBJECT_DOCUMENTS else []


def item_count(value: Any) -> int:
    if isinstance(value, (list, dict)):
        return len(value)
    return 0


def seed_values(super_admin_username: str, super_admin_password_hash: str) -> dict[str, Any]:
    """Build the values written for absent documents on first start."""
    return {
        ADMINS: [
            {
                "id": "1",
                "username": super_admin_username,
                "password": super_admin_password_hash,
                "role": "super",
                "imageUrl": "",
            }
        ],
        SLIDER: copy.deepcopy(DEFAULT_SLIDES),
        CLUB: dict(DEFAULT_CLUB),
    }
