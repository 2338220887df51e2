"""Common dependencies for API routes."""
from functools import lru_cache
from typing import Annotated, TypeAlias

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from partsdesk.core.config import settings
from partsdesk.core.security import AuthIdentity, require_auth
from partsdesk.db.session import get_db
from partsdesk.services.catalog import CatalogService, build_catalog_service
from partsdesk.services.stats_service import StatsService
from partsdesk.services.transfer_store import JsonTransferStore
from partsdesk.services.upstream_gateway import UpstreamGateway, build_upstream_gateway


def get_current_identity(authorization: str | None = Header(None)) -> AuthIdentity:
    """Resolve the bearer token or fail with a uniform 401."""
    return require_auth(authorization)


CurrentIdentityDep: TypeAlias = Annotated[AuthIdentity, Depends(get_current_identity)]
DbDep: TypeAlias = Annotated[Session, Depends(get_db)]


def get_catalog_service(identity: CurrentIdentityDep, db: DbDep) -> CatalogService:
    return build_catalog_service(db, identity)


def get_stats_service(identity: CurrentIdentityDep, db: DbDep) -> StatsService:
    return StatsService(db)


@lru_cache
def get_upstream_gateway() -> UpstreamGateway:
    """One gateway per process so its failure-log throttle spans requests."""
    return build_upstream_gateway()


def get_transfer_store() -> JsonTransferStore:
    return JsonTransferStore(settings.TRANSFER_STORE_PATH)


CatalogServiceDep: TypeAlias = Annotated[CatalogService, Depends(get_catalog_service)]
StatsServiceDep: TypeAlias = Annotated[StatsService, Depends(get_stats_service)]
UpstreamGatewayDep: TypeAlias = Annotated[UpstreamGateway, Depends(get_upstream_gateway)]
TransferStoreDep: TypeAlias = Annotated[JsonTransferStore, Depends(get_transfer_store)]
