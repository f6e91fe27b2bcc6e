"""Request-scoped accessors for shared application state."""
from fastapi import Request

from core.config import Settings, get_settings
from domain.siting.store import SitingDataStore


def get_store(request: Request) -> SitingDataStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()
