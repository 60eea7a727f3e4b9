"""Club settings and slider use cases."""

from __future__ import annotations

from typing import Any, Mapping

from clubapi.domain.documents import CLUB, SLIDER
from clubapi.domain.records import ClubSettings, Slide
from clubapi.repositories.document_store import DocumentStore

from .errors import ValidationError


class ClubService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get_settings(self) -> dict:
        club = self.store.read(CLUB)
        return club if isinstance(club, dict) else {}

    def update_settings(self, payload: Mapping[str, Any]) -> dict:
        """Replace the whole club document; blank fields fall back to defaults."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Club settings must be an object")
        club = ClubSettings.from_input(payload).to_dict()
        self.store.write(CLUB, club)
        return club


class SliderService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def all_slides(self) -> list[dict]:
        slides = self.store.read(SLIDER)
        return slides if isinstance(slides, list) else []

    def active_slides(self) -> list[dict]:
        return [s for s in self.all_slides() if not isinstance(s, dict) or s.get("active") is not False]

    def replace(self, slides: Any) -> list[dict]:
        if not isinstance(slides, list):
            raise ValidationError("Slides must be an array")
        records = []
        for slide in slides:
            if not isinstance(slide, Mapping):
                raise ValidationError("Each slide must be an object")
            records.append(Slide.from_dict(slide).to_dict())
        self.store.write(SLIDER, records)
        return records
