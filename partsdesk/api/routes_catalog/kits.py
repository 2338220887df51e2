"""Kit endpoints."""
from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()


@router.get("/kits", response_model=schemas.KitListResponse)
def list_kits(service: CatalogServiceDep, status: str | None = Query(None)):
    return {"kits": service.kits.list(status=status)}


@router.post("/kits", response_model=schemas.KitResponse, status_code=201)
def create_kit(data: schemas.KitCreate, service: CatalogServiceDep):
    return {"kit": service.kits.create(data)}


@router.get("/kits/{kit_id}", response_model=schemas.KitResponse)
def get_kit(kit_id: str, service: CatalogServiceDep):
    return {"kit": service.kits.get(kit_id)}
