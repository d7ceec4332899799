from stamp_health.adapters.postgres.catalog import CatalogDatabase, DELETIONS
from stamp_health.adapters.postgres.models import (
    CatalogItem,
    ItemComment,
    ItemRating,
    RatingSummary,
)

__all__ = [
    "CatalogDatabase",
    "DELETIONS",
    "CatalogItem",
    "ItemComment",
    "ItemRating",
    "RatingSummary",
]
