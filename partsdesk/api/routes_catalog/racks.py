"""Rack endpoints."""
from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter()


@router.get("/racks", response_model=schemas.RackListResponse)
def list_racks(
    service: CatalogServiceDep,
    search: str | None = Query(None),
    status: str | None = Query(None),
    store_id: str | None = Query(None, alias="storeId"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
):
    racks, pagination = service.racks.list(
        search=search,
        status=status,
        store_id=store_id,
        page=page,
        limit=limit,
    )
    return {"racks": racks, "pagination": pagination}


@router.post("/racks", response_model=schemas.RackResponse, status_code=201)
def create_rack(data: schemas.RackCreate, service: CatalogServiceDep):
    return {"rack": service.racks.create(data)}


@router.get("/racks/{rack_id}", response_model=schemas.RackResponse)
def get_rack(rack_id: str, service: CatalogServiceDep):
    return {"rack": service.racks.get(rack_id)}
