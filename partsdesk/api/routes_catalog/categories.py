"""Category endpoints."""
from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()


@router.get("/categories", response_model=schemas.CategoryListResponse)
def list_categories(
    service: CatalogServiceDep,
    status: str | None = Query(None),
    type: str | None = Query(None),
):
    """List categories by name, with parent and sub categories."""
    return {"categories": service.categories.list(status=status, category_type=type)}


@router.post("/categories", response_model=schemas.CategoryResponse, status_code=201)
def create_category(data: schemas.CategoryCreate, service: CatalogServiceDep):
    return {"category": service.categories.create(data)}


@router.get("/categories/{category_id}", response_model=schemas.CategoryResponse)
def get_category(category_id: str, service: CatalogServiceDep):
    return {"category": service.categories.get(category_id)}
