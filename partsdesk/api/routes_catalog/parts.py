"""Part endpoints."""
import logging

from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CatalogServiceDep
from partsdesk.models import catalog_schemas as schemas
from partsdesk.services.catalog import PartFilters

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/parts", response_model=schemas.PartListResponse)
def list_parts(
    service: CatalogServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=1000),
    status: str | None = Query(None),
    search: str | None = Query(None),
    master_part_no: str | None = Query(None, alias="masterPartNo"),
    part_no: str | None = Query(None, alias="partNo"),
    brand: str | None = Query(None),
    description: str | None = Query(None),
    main_category: str | None = Query(None, alias="mainCategory"),
    sub_category: str | None = Query(None, alias="subCategory"),
    application: str | None = Query(None),
    origin: str | None = Query(None),
    grade: str | None = Query(None),
):
    """
    List parts, newest first.

    ``search`` matches part number, master part number, description or brand,
    and is ignored when ``masterPartNo``, ``partNo`` or ``description`` is given.
    """
    filters = PartFilters(
        status=status,
        search=search,
        master_part_no=master_part_no,
        part_no=part_no,
        brand=brand,
        description=description,
        main_category=main_category,
        sub_category=sub_category,
        application=application,
        origin=origin,
        grade=grade,
    )
    parts, pagination = service.parts.list(filters, page=page, limit=limit)
    return {"parts": parts, "pagination": pagination}


@router.post("/parts", response_model=schemas.PartResponse, status_code=201)
def create_part(data: schemas.PartCreate, service: CatalogServiceDep):
    """Create a part together with its models."""
    return {"part": service.parts.create(data)}


@router.get("/parts/{part_id}", response_model=schemas.PartResponse)
def get_part(part_id: str, service: CatalogServiceDep):
    return {"part": service.parts.get(part_id)}
