"""FastAPI application factory."""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.routes.assets import router as assets_router
from apps.api.routes.regulatory import router as regulatory_router
from apps.api.routes.suitability import router as suitability_router
from core.config import Settings, get_settings
from domain.siting.store import SitingDataStore

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[SitingDataStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if store is None:
        store = SitingDataStore.from_file(settings.data_file) if settings.data_file else SitingDataStore()
    if not store.demand_centers:
        logger.warning("Siting store has no demand centres; scores use the fallback distance")

    app = FastAPI(title="H2 Siting API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.store = store
    app.state.settings = settings
    app.include_router(suitability_router)
    app.include_router(regulatory_router)
    app.include_router(assets_router)

    @app.get("/health")
    async def health() -> dict:
        return {
            "status": "OK",
            "scoringMode": settings.scoring_mode,
            "demandCenters": len(store.demand_centers),
            "regulatoryZones": len(store.zones),
        }

    logger.info("H2 siting API ready in %s mode", settings.scoring_mode)
    return app


__all__ = ["create_app"]
