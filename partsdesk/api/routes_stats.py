from fastapi import APIRouter

from partsdesk.api.dependencies import StatsServiceDep
from partsdesk.models import catalog_schemas as schemas

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=schemas.StatsResponse)
def get_stats(service: StatsServiceDep):
    """Dashboard counters, 30-day change and 14-day sparklines."""
    return service.snapshot().as_response()
