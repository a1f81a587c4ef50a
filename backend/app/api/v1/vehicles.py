# backend/app/api/v1/vehicles.py
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
import logging

from ...schemas.admin_schema import MoveRequest
from ...schemas.vehicle_schema import (
    Vehicle,
    VehicleCategory,
    VehicleCreate,
    VehicleDetail,
    VehicleUpdate,
    VehicleWithBrand,
)
from ...services import catalog_service
from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])

# ===== PUBLIC =====

@router.get("/", response_model=List[VehicleWithBrand])
def read_vehicles(
    brand_id: Optional[str] = Query(None, description="Filter by brand"),
    category: Optional[VehicleCategory] = Query(None, description="Filter by body type"),
    is_popular: Optional[bool] = Query(None, description="Only popular vehicles"),
    sort: Optional[str] = Query(None, description="sort_order, price-asc, price-desc or name"),
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    """Active vehicles with their brand"""
    if sort and sort not in catalog_service.SORT_OPTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown sort: {sort}")

    result = read_with_fallback(
        store,
        lambda s: catalog_service.list_vehicles(
            s, sort=sort, brand_id=brand_id, category=category, is_popular=is_popular
        ),
        fallback=fallback,
    )
    if result.warning:
        logging.warning(f"Vehicles served from {result.source}: {result.warning}")
    return result.data


@router.get("/popular", response_model=List[VehicleWithBrand])
def read_popular_vehicles(
    limit: int = Query(catalog_service.POPULAR_LIMIT, ge=1, le=50),
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    result = read_with_fallback(
        store, lambda s: catalog_service.popular_vehicles(s, limit), fallback=fallback
    )
    return result.data


@router.get("/{vehicle_id}", response_model=VehicleDetail)
def read_vehicle(vehicle_id: str, store: DataStore = Depends(get_store)):
    vehicle = catalog_service.vehicle_detail(store, vehicle_id)
    if vehicle is None or not vehicle.get("is_active"):
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.get("/{vehicle_id}/rent-price")
def read_rent_price(
    vehicle_id: str,
    months: int = Query(60, description="Contract term in months"),
    down_payment: int = Query(0, description="Down payment rate in percent"),
    store: DataStore = Depends(get_store),
):
    vehicle = store.vehicles.find_unique(where={"id": vehicle_id})
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    try:
        price = catalog_service.rent_price(vehicle, months, down_payment)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"vehicle_id": vehicle_id, "months": months, "down_payment": down_payment, "monthly_price": price}

# ===== ADMIN =====

@admin_router.get("/", response_model=List[VehicleWithBrand])
def admin_read_vehicles(store: DataStore = Depends(get_store)):
    """Every vehicle, active ones first"""
    return catalog_service.admin_vehicles(store)


@admin_router.get("/{vehicle_id}", response_model=VehicleDetail)
def admin_read_vehicle(vehicle_id: str, store: DataStore = Depends(get_store)):
    vehicle = catalog_service.vehicle_detail(store, vehicle_id)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@admin_router.post("/", response_model=Vehicle, status_code=201)
def create_vehicle(vehicle: VehicleCreate, store: DataStore = Depends(get_store)):
    if store.brands.find_unique(where={"id": vehicle.brand_id}) is None:
        raise HTTPException(status_code=400, detail=f"Brand {vehicle.brand_id} does not exist")

    created = store.vehicles.create(vehicle)
    logging.info(f"Vehicle created: {created['id']}")
    return created


@admin_router.put("/{vehicle_id}", response_model=Vehicle)
def update_vehicle(vehicle_id: str, vehicle_update: VehicleUpdate, store: DataStore = Depends(get_store)):
    if vehicle_update.brand_id and store.brands.find_unique(where={"id": vehicle_update.brand_id}) is None:
        raise HTTPException(status_code=400, detail=f"Brand {vehicle_update.brand_id} does not exist")

    updated = store.vehicles.update(where={"id": vehicle_id}, data=vehicle_update)
    if updated is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return updated


@admin_router.delete("/{vehicle_id}")
def delete_vehicle(vehicle_id: str, store: DataStore = Depends(get_store)):
    """Delete a vehicle together with its trims, colors and options"""
    if not catalog_service.delete_vehicle(store, vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")

    logging.info(f"Vehicle deleted: {vehicle_id}")
    return {"message": "Vehicle deleted successfully", "vehicle_id": vehicle_id}


@admin_router.post("/{vehicle_id}/move", response_model=List[Vehicle])
def move_vehicle(vehicle_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
    vehicles = catalog_service.move(store.vehicles, vehicle_id, payload.direction)
    if vehicles is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicles
