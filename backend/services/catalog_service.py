"""
Catalog Service

Read-only lookups over the static report catalog. An unknown key is not an
error: lookups return None and callers render nothing.
"""

from enum import Enum
from typing import Optional, Union

import models.schemas as schemas
from models.catalog import (
    REPORT_CATEGORIES,
    REPORT_PRIORITIES,
    REPORT_STATUSES,
    REPORT_TYPES,
    CatalogItem,
)

CatalogKey = Union[str, Enum, None]

_TYPES_BY_KEY = {item.key: item for item in REPORT_TYPES}
_CATEGORIES_BY_KEY = {item.key: item for item in REPORT_CATEGORIES}
_PRIORITIES_BY_KEY = {item.key: item for item in REPORT_PRIORITIES}
_STATUSES_BY_KEY = {item.key: item for item in REPORT_STATUSES}


def _lookup(table: dict[str, CatalogItem], key: CatalogKey) -> Optional[CatalogItem]:
    if key is None:
        return None
    if isinstance(key, Enum):
        key = key.value
    return table.get(str(key))


class CatalogService:
    """Service for report catalog lookups."""

    @staticmethod
    def get_report_type_info(key: CatalogKey) -> Optional[CatalogItem]:
        return _lookup(_TYPES_BY_KEY, key)

    @staticmethod
    def get_category_info(key: CatalogKey) -> Optional[CatalogItem]:
        return _lookup(_CATEGORIES_BY_KEY, key)

    @staticmethod
    def get_priority_info(key: CatalogKey) -> Optional[CatalogItem]:
        return _lookup(_PRIORITIES_BY_KEY, key)

    @staticmethod
    def get_status_info(key: CatalogKey) -> Optional[CatalogItem]:
        return _lookup(_STATUSES_BY_KEY, key)

    @staticmethod
    def is_valid_category(key: CatalogKey) -> bool:
        return CatalogService.get_category_info(key) is not None

    @staticmethod
    def list_report_types() -> list[CatalogItem]:
        return list(REPORT_TYPES)

    @staticmethod
    def list_categories() -> list[CatalogItem]:
        return list(REPORT_CATEGORIES)

    @staticmethod
    def list_priorities() -> list[CatalogItem]:
        return list(REPORT_PRIORITIES)

    @staticmethod
    def list_statuses() -> list[CatalogItem]:
        return list(REPORT_STATUSES)

    @staticmethod
    def get_catalog() -> schemas.Catalog:
        """
        Build the full catalog payload in display order.

        Returns:
            All four lookup tables
        """

        def entries(items: tuple[CatalogItem, ...]) -> list[schemas.CatalogEntry]:
            return [schemas.CatalogEntry(**item._asdict()) for item in items]

        return schemas.Catalog(
            report_types=entries(REPORT_TYPES),
            categories=entries(REPORT_CATEGORIES),
            priorities=entries(REPORT_PRIORITIES),
            statuses=entries(REPORT_STATUSES),
        )
