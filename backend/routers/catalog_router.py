from fastapi import APIRouter

import models.schemas as schemas
from services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=schemas.Catalog)
def get_catalog() -> schemas.Catalog:
    """Report types, categories, priorities and statuses with display metadata."""
    return CatalogService.get_catalog()
