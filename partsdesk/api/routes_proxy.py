"""
Resources owned by the upstream accounting backend.

Each handler authenticates locally, then hands the request to the upstream
gateway. Unauthenticated calls never reach the backend.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Query, Request

from partsdesk.api.dependencies import CurrentIdentityDep, UpstreamGatewayDep
from partsdesk.core.exceptions import NotFoundError

router = APIRouter(tags=["proxy"])
logger = logging.getLogger(__name__)

COLLECTIONS = ("customers", "vouchers", "sales-invoices", "models")
REPORTS = ("daily-closing", "balance-sheet", "trial-balance", "general-journal")


def _collection_routes(resource: str) -> None:
    async def list_items(request: Request, identity: CurrentIdentityDep, gateway: UpstreamGatewayDep):
        return await gateway.forward(request, resource)

    async def create_item(
        request: Request,
        identity: CurrentIdentityDep,
        gateway: UpstreamGatewayDep,
        body: Any = Body(None),
    ):
        return await gateway.forward(request, resource, body=body)

    name = resource.replace("-", "_")
    router.add_api_route(f"/{resource}", list_items, methods=["GET"], name=f"list_{name}")
    router.add_api_route(f"/{resource}", create_item, methods=["POST"], name=f"create_{name}")


for _resource in COLLECTIONS:
    _collection_routes(_resource)


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: str, request: Request, identity: CurrentIdentityDep, gateway: UpstreamGatewayDep):
    return await gateway.forward(request, f"customers/{customer_id}")


@router.put("/customers/{customer_id}")
async def update_customer(
    customer_id: str,
    request: Request,
    identity: CurrentIdentityDep,
    gateway: UpstreamGatewayDep,
    body: Any = Body(None),
):
    return await gateway.forward(request, f"customers/{customer_id}", body=body)


@router.delete("/customers/{customer_id}")
async def delete_customer(
    customer_id: str,
    request: Request,
    identity: CurrentIdentityDep,
    gateway: UpstreamGatewayDep,
):
    return await gateway.forward(request, f"customers/{customer_id}")


def _account_params(request: Request) -> dict[str, str]:
    return {key: value for key, value in request.query_params.items() if key != "type"}


@router.get("/accounts")
async def list_accounts(
    request: Request,
    identity: CurrentIdentityDep,
    gateway: UpstreamGatewayDep,
    type: str = Query("main-groups"),
):
    """Chart of accounts; ``type`` picks the upstream collection (main-groups, sub-groups, ...)."""
    return await gateway.forward(request, f"accounts/{type}", params=_account_params(request))


@router.post("/accounts")
async def create_account(
    request: Request,
    identity: CurrentIdentityDep,
    gateway: UpstreamGatewayDep,
    type: str = Query("main-groups"),
    body: Any = Body(None),
):
    return await gateway.forward(request, f"accounts/{type}", body=body, params=_account_params(request))


@router.get("/reports/{report}")
async def get_report(report: str, request: Request, identity: CurrentIdentityDep, gateway: UpstreamGatewayDep):
    """Financial reports are computed upstream; only known report names are forwarded."""
    if report not in REPORTS:
        raise NotFoundError("Report")
    return await gateway.forward(request, f"reports/{report}")
