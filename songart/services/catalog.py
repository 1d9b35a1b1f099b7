"""
Catalog loading.

The persistence layer exports songs with every tag already populated, e.g.

    {"number": 12, "title": "Test Song", "date": "2015-05-04",
     "location": {"name": "Kitchen", "image": "location_kitchen.png"},
     "topic": {"name": "Poetic"}, "mood": {"name": "Happy"},
     "mainInstrument": {"name": "guitar"}, "secondaryInstrument": {"name": "uke"},
     "beard": null}

This module validates that export and turns it into CatalogEntry objects.
"""
from __future__ import annotations

import json
import logging
import datetime as dt
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from songart.domain.errors import CatalogError
from songart.domain.models import CatalogEntry, Tag

logger = logging.getLogger(__name__)


class TagRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    image: Optional[str] = None

    def to_tag(self) -> Tag:
        return Tag(name=self.name, image=self.image)


class SongRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    number: int
    title: str
    date: dt.date
    location: Optional[TagRecord] = None
    topic: Optional[TagRecord] = None
    mood: Optional[TagRecord] = None
    main_instrument: Optional[TagRecord] = Field(default=None, alias="mainInstrument")
    secondary_instrument: Optional[TagRecord] = Field(default=None, alias="secondaryInstrument")
    beard: Optional[TagRecord] = None
    key: Optional[TagRecord] = Field(default=None, alias="inkey")
    tempo: Optional[float] = None
    length: Optional[float] = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        # mongoexport writes {"$date": "..."}
        if isinstance(value, dict) and "$date" in value:
            value = value["$date"]
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    @field_validator(
        "location", "topic", "mood", "main_instrument", "secondary_instrument", "beard", "key",
        mode="before",
    )
    @classmethod
    def _tag_from_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"name": value} if value.strip() else None
        return value

    def to_entry(self) -> CatalogEntry:
        def tag(record: Optional[TagRecord]) -> Optional[Tag]:
            return record.to_tag() if record is not None else None

        return CatalogEntry(
            number=self.number,
            title=self.title,
            date=self.date,
            location=tag(self.location),
            topic=tag(self.topic),
            mood=tag(self.mood),
            main_instrument=tag(self.main_instrument),
            secondary_instrument=tag(self.secondary_instrument),
            beard=tag(self.beard),
            key=tag(self.key),
            tempo=self.tempo,
            length=self.length,
        )


def parse_catalog(records: List[dict]) -> List[CatalogEntry]:
    """Validate already-decoded records, keeping their order."""
    if not isinstance(records, list):
        raise CatalogError("catalog must be a JSON array of songs")
    entries: List[CatalogEntry] = []
    for index, record in enumerate(records):
        try:
            entries.append(SongRecord.model_validate(record).to_entry())
        except ValidationError as exc:
            raise CatalogError(f"record {index} is invalid: {exc}") from exc
    return entries


def load_catalog(path: str | Path) -> List[CatalogEntry]:
    """Read a catalog export from disk."""
    path = Path(path)
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"could not read catalog {path}: {exc}") from exc
    entries = parse_catalog(records)
    logger.info("[catalog] loaded %s songs from %s", len(entries), path)
    return entries
