# backend/app/api/v1/brands.py
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
import logging

from ...schemas.admin_schema import MoveRequest
from ...schemas.brand_schema import Brand, BrandCreate, BrandUpdate
from ...services.catalog_service import BrandInUseError, delete_brand, move
from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])

# ===== PUBLIC =====

@router.get("/", response_model=List[Brand])
def read_brands(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    """Active brands in display order"""
    result = read_with_fallback(
        store,
        lambda s: s.brands.find_many(where={"is_active": True}, order_by={"sort_order": "asc"}),
        fallback=fallback,
    )
    if result.warning:
        logging.warning(f"Brands served from {result.source}: {result.warning}")
    return result.data


@router.get("/{brand_id}", response_model=Brand)
def read_brand(brand_id: str, store: DataStore = Depends(get_store)):
    brand = store.brands.find_unique(where={"id": brand_id})
    if brand is None:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand

# ===== ADMIN =====

@admin_router.get("/", response_model=List[Brand])
def admin_read_brands(store: DataStore = Depends(get_store)):
    return store.brands.find_many(order_by=[{"is_active": "desc"}, {"sort_order": "asc"}])


@admin_router.post("/", response_model=Brand, status_code=201)
def create_brand(brand: BrandCreate, store: DataStore = Depends(get_store)):
    created = store.brands.create(brand)
    logging.info(f"Brand created: {created['id']}")
    return created


@admin_router.put("/{brand_id}", response_model=Brand)
def update_brand(brand_id: str, brand_update: BrandUpdate, store: DataStore = Depends(get_store)):
    updated = store.brands.update(where={"id": brand_id}, data=brand_update)
    if updated is None:
        raise HTTPException(status_code=404, detail="Brand not found")
    return updated


@admin_router.delete("/{brand_id}")
def remove_brand(brand_id: str, store: DataStore = Depends(get_store)):
    try:
        deleted = delete_brand(store, brand_id)
    except BrandInUseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Brand not found")

    logging.info(f"Brand deleted: {brand_id}")
    return {"message": "Brand deleted successfully", "brand_id": brand_id}


@admin_router.post("/{brand_id}/move", response_model=List[Brand])
def move_brand(brand_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
    brands = move(store.brands, brand_id, payload.direction)
    if brands is None:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brands
