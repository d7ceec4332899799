"""Catalog records stored in Postgres."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CatalogItem:
    name: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    last_updated: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CatalogItem":
        return cls(
            id=record["catalog_item_id"],
            name=record["name"],
            description=record["description"],
            price=float(record["price"]),
            image_url=record["image_url"],
            last_updated=record["last_updated"],
        )


@dataclass(frozen=True)
class ItemComment:
    catalog_item_id: uuid.UUID
    author_name: str
    text: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    creation_date: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ItemComment":
        return cls(
            id=record["comment_id"],
            catalog_item_id=record["catalog_item_id"],
            author_name=record["author_name"],
            text=record["text"],
            creation_date=record["creation_date"],
        )


@dataclass(frozen=True)
class ItemRating:
    catalog_item_id: uuid.UUID
    rating: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    creation_date: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ItemRating":
        return cls(
            id=record["rating_id"],
            catalog_item_id=record["catalog_item_id"],
            rating=int(record["rating"]),
            creation_date=record["creation_date"],
        )


@dataclass(frozen=True)
class RatingSummary:
    """Average rating of one catalog item."""

    average_rating: float
    number_of_votes: int
