"""Site suitability API routes."""
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from apps.api.dependencies import get_app_settings, get_store
from core.config import Settings
from domain.siting.models import ScoringDefectError, SitingValidationError
from domain.siting.services import (
    AreaAnalysisRequest,
    LocationRequest,
    run_area_analysis,
    run_suitability,
)
from domain.siting.store import SitingDataStore

router = APIRouter(prefix="/api/suitability", tags=["suitability"])


@router.post("")
async def calculate_suitability(
    request: LocationRequest,
    store: SitingDataStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    try:
        return run_suitability(request, store, settings)
    except SitingValidationError as exc:
        raise HTTPException(
            status_code=400, detail={"error": "Invalid coordinates", "message": str(exc)}
        ) from exc
    except ScoringDefectError as exc:
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to calculate suitability score", "message": str(exc)},
        ) from exc


@router.post("/area")
async def analyze_area(
    request: AreaAnalysisRequest,
    store: SitingDataStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    try:
        return run_area_analysis(request, store, settings)
    except SitingValidationError as exc:
        raise HTTPException(
            status_code=400, detail={"error": "Invalid area", "message": str(exc)}
        ) from exc
    except ScoringDefectError as exc:
        raise HTTPException(
            status_code=500, detail={"error": "Failed to analyze area", "message": str(exc)}
        ) from exc
