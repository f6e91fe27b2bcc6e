"""Regulatory zone API routes."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from apps.api.dependencies import get_store
from domain.siting.models import SitingValidationError
from domain.siting.services import (
    LocationRequest,
    list_zones,
    run_zone_lookup,
    zone_statistics,
)
from domain.siting.store import SitingDataStore

router = APIRouter(prefix="/api/regulatory", tags=["regulatory"])


@router.get("/zones")
async def get_regulatory_zones(
    type: Optional[str] = Query(default=None),
    jurisdiction: Optional[str] = Query(default=None),
    status: str = Query(default="active"),
    store: SitingDataStore = Depends(get_store),
) -> Dict[str, Any]:
    return list_zones(store, zone_type=type, jurisdiction=jurisdiction, status=status)


@router.post("/zones/containing-point")
async def get_zones_containing_point(
    request: LocationRequest,
    store: SitingDataStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        return run_zone_lookup(request, store)
    except SitingValidationError as exc:
        raise HTTPException(
            status_code=400, detail={"error": "Invalid coordinates", "message": str(exc)}
        ) from exc


@router.get("/stats")
async def get_regulatory_stats(store: SitingDataStore = Depends(get_store)) -> Dict[str, Any]:
    return zone_statistics(store)
