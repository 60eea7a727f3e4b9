"""Squad member use cases (list, add, edit, remove)."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from clubapi.domain.documents import MEMBERS
from clubapi.domain.records import (
    DEFAULT_MEMBER_IMAGE,
    Member,
    find_index,
    member_sort_key,
    new_record_id,
)
from clubapi.repositories.document_store import DocumentStore

from .errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_OPTIONAL_FIELDS = {
    "jerseyNo": "jersey_no",
    "age": "age",
    "address": "address",
    "height": "height",
    "preferredFoot": "preferred_foot",
    "imageUrl": "image_url",
    "status": "status",
    "notes": "notes",
    "memberType": "member_type",
}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _clean_positions(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [p for p in (_text(v).strip() for v in value) if p]


class MemberService:
    """Read-modify-write helpers over the ``members`` document."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _load(self) -> list[dict]:
        members = self.store.read(MEMBERS)
        return members if isinstance(members, list) else []

    def list_stored(self) -> list[dict]:
        return self._load()

    def list_sorted(self) -> list[dict]:
        return sorted(self._load(), key=member_sort_key)

    @staticmethod
    def _jersey_owner(members: list[dict], jersey_no: str, *, exclude_id: str | None = None) -> dict | None:
        for member in members:
            if exclude_id is not None and _text(member.get("id")) == exclude_id:
                continue
            if _text(member.get("jerseyNo")) == jersey_no:
                return member
        return None

    def create(self, payload: Mapping[str, Any]) -> dict:
        name = _text(payload.get("name")).strip()
        member_type = _text(payload.get("memberType")).strip()
        if not name or not member_type:
            raise ValidationError("Name and member type are required")
        positions = _clean_positions(payload.get("positions"))
        if not positions:
            raise ValidationError("At least one position is required")

        members = self._load()
        jersey_no = _text(payload.get("jerseyNo")).strip()
        if jersey_no:
            duplicate = self._jersey_owner(members, jersey_no)
            if duplicate:
                raise ConflictError(f"Jersey number {jersey_no} is already taken by {duplicate.get('name')}")

        member = Member(
            id=new_record_id(),
            name=name,
            member_type=member_type,
            positions=positions,
            jersey_no=jersey_no,
            age=_text(payload.get("age")),
            address=_text(payload.get("address")),
            height=_text(payload.get("height")),
            preferred_foot=_text(payload.get("preferredFoot")),
            image_url=_text(payload.get("imageUrl")) or DEFAULT_MEMBER_IMAGE,
            status=_text(payload.get("status")) or "Active",
            notes=_text(payload.get("notes")),
        )
        record = member.to_dict()
        members.append(record)
        self.store.write(MEMBERS, members)
        logger.info("Added member %s (%s)", member.name, member.id)
        return record

    def update(self, member_id: str, payload: Mapping[str, Any]) -> dict:
        members = self._load()
        index = find_index(members, member_id)
        if index < 0:
            raise NotFoundError("Member not found")
        member = Member.from_dict(members[index])

        if "jerseyNo" in payload and payload["jerseyNo"] is not None:
            jersey_no = _text(payload["jerseyNo"]).strip()
            if jersey_no and jersey_no != member.jersey_no:
                duplicate = self._jersey_owner(members, jersey_no, exclude_id=_text(member_id))
                if duplicate:
                    raise ConflictError(f"Jersey number {jersey_no} is already taken by {duplicate.get('name')}")

        name = _text(payload.get("name")).strip()
        if name:
            member.name = name
        positions = _clean_positions(payload.get("positions"))
        if positions:
            member.positions = positions
        for key, attr in _OPTIONAL_FIELDS.items():
            if key in payload and payload[key] is not None:
                value = _text(payload[key])
                setattr(member, attr, value.strip() if key == "jerseyNo" else value)

        members[index] = member.to_dict()
        self.store.write(MEMBERS, members)
        logger.info("Updated member %s (%s)", member.name, member.id)
        return members[index]

    def delete(self, member_id: str) -> dict:
        members = self._load()
        index = find_index(members, member_id)
        if index < 0:
            raise NotFoundError("Member not found")
        removed = members.pop(index)
        self.store.write(MEMBERS, members)
        logger.info("Deleted member %s (%s)", removed.get("name"), removed.get("id"))
        return removed
