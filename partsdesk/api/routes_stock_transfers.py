"""Stock transfer endpoints backed by a JSON file."""
import logging

from fastapi import APIRouter, Query

from partsdesk.api.dependencies import CurrentIdentityDep, TransferStoreDep
from partsdesk.core.exceptions import RequestValidationFailed
from partsdesk.models import catalog_schemas as schemas
from partsdesk.services.catalog import page_info

router = APIRouter(tags=["stock-transfers"])
logger = logging.getLogger(__name__)


@router.get("/stock-transfers", response_model=schemas.StockTransferListResponse)
def list_stock_transfers(
    identity: CurrentIdentityDep,
    store: TransferStoreDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
):
    transfers, total = store.list(page=page, limit=limit)
    return {"transfers": transfers, "pagination": page_info(page, limit, total)}


@router.post("/stock-transfers", response_model=schemas.StockTransferResponse, status_code=201)
def create_stock_transfer(
    identity: CurrentIdentityDep,
    store: TransferStoreDep,
    data: schemas.StockTransferCreate,
):
    if not data.transfer_no or not data.transfer_date or not data.items:
        raise RequestValidationFailed(
            "Missing required fields",
            message="transferNo, transferDate and at least one item are required",
        )
    transfer = store.create(data.model_dump(by_alias=True))
    return {"transfer": transfer}
