# backend/app/api/v1/site_settings.py
"""Site settings and company info: flat string key/value documents."""
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, Optional
import logging

from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/settings", response_model=Dict[str, str])
def read_settings(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    return read_with_fallback(store, lambda s: s.settings.as_dict(), fallback=fallback, default=dict).data


@router.get("/company-info", response_model=Dict[str, str])
def read_company_info(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    return read_with_fallback(store, lambda s: s.company_info.as_dict(), fallback=fallback, default=dict).data


@admin_router.put("/settings", response_model=Dict[str, str])
def update_settings(values: Dict[str, Any] = Body(...), store: DataStore = Depends(get_store)):
    """Merge the given keys into the site settings"""
    logging.info(f"Updating settings: {sorted(values)}")
    return store.settings.merge(values)


@admin_router.put("/company-info", response_model=Dict[str, str])
def update_company_info(values: Dict[str, Any] = Body(...), store: DataStore = Depends(get_store)):
    logging.info(f"Updating company info: {sorted(values)}")
    return store.company_info.merge(values)
