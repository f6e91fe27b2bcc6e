"""Read-only asset catalogue routes."""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from apps.api.dependencies import get_store
from domain.siting.services import list_demand_centers
from domain.siting.store import SitingDataStore

router = APIRouter(prefix="/api/assets", tags=["assets"])


@router.get("/demand-centers")
async def get_demand_centers(store: SitingDataStore = Depends(get_store)) -> Dict[str, Any]:
    return list_demand_centers(store)
