# backend/app/api/v1/banners.py
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
import logging

from ...schemas.admin_schema import MoveRequest
from ...schemas.banner_schema import Banner, BannerCreate, BannerUpdate
from ...services.catalog_service import move
from ...services.content_service import active_banners, parse_date
from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])

# ===== PUBLIC =====

@router.get("/", response_model=List[Banner])
def read_banners(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    """Active banners whose date window contains the current time"""
    return read_with_fallback(store, active_banners, fallback=fallback).data

# ===== ADMIN =====

@admin_router.get("/", response_model=List[Banner])
def admin_read_banners(store: DataStore = Depends(get_store)):
    return store.banners.find_many(order_by={"sort_order": "asc"})


@admin_router.get("/{banner_id}", response_model=Banner)
def admin_read_banner(banner_id: str, store: DataStore = Depends(get_store)):
    banner = store.banners.find_unique(where={"id": banner_id})
    if banner is None:
        raise HTTPException(status_code=404, detail="Banner not found")
    return banner


@admin_router.post("/", response_model=Banner, status_code=201)
def create_banner(banner: BannerCreate, store: DataStore = Depends(get_store)):
    created = store.banners.create(banner)
    logging.info(f"Banner created: {created['id']}")
    return created


@admin_router.put("/{banner_id}", response_model=Banner)
def update_banner(banner_id: str, banner_update: BannerUpdate, store: DataStore = Depends(get_store)):
    current = store.banners.find_unique(where={"id": banner_id})
    if current is None:
        raise HTTPException(status_code=404, detail="Banner not found")

    # The window is checked against the stored bound the request leaves alone
    changes = banner_update.model_dump(exclude_unset=True)
    start = parse_date(changes.get("start_date", current.get("start_date")))
    end = parse_date(changes.get("end_date", current.get("end_date")))
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    return store.banners.update(where={"id": banner_id}, data=banner_update)


@admin_router.delete("/{banner_id}")
def delete_banner(banner_id: str, store: DataStore = Depends(get_store)):
    if not store.banners.delete(where={"id": banner_id}):
        raise HTTPException(status_code=404, detail="Banner not found")
    return {"message": "Banner deleted successfully", "banner_id": banner_id}


@admin_router.post("/{banner_id}/move", response_model=List[Banner])
def move_banner(banner_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
    banners = move(store.banners, banner_id, payload.direction)
    if banners is None:
        raise HTTPException(status_code=404, detail="Banner not found")
    return banners
