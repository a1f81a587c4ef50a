# backend/app/api/v1/vehicle_items.py
"""Admin CRUD for the per-vehicle lists (trims, colors, options).

The three tables share one shape, so a single factory builds their routers.
Colors and options can also be imported from other vehicles.
"""
from fastapi import APIRouter, Body, Depends, HTTPException
from typing import List, Type
import logging

from pydantic import BaseModel

from ...schemas.admin_schema import MoveRequest
from ...schemas.color_schema import Color, ColorCreate, ColorUpdate
from ...schemas.option_schema import OptionCreate, OptionUpdate, VehicleOption
from ...schemas.trim_schema import Trim, TrimCreate, TrimUpdate
from ...schemas.vehicle_schema import ImportRequest
from ...services.catalog_service import import_items, move
from ...storage.store import DataStore
from ..deps import get_current_admin, get_store


def build_item_router(
    table: str,
    label: str,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(dependencies=[Depends(get_current_admin)])

    def require_vehicle(store: DataStore, vehicle_id: str) -> None:
        if store.vehicles.find_unique(where={"id": vehicle_id}) is None:
            raise HTTPException(status_code=404, detail="Vehicle not found")

    def require_item(store: DataStore, vehicle_id: str, item_id: str) -> dict:
        item = store.tables[table].find_unique(where={"id": item_id})
        if item is None or item.get("vehicle_id") != vehicle_id:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    @router.get("/{vehicle_id}/" + table, response_model=List[read_schema])
    def list_items(vehicle_id: str, store: DataStore = Depends(get_store)):
        require_vehicle(store, vehicle_id)
        return store.tables[table].find_many(where={"vehicle_id": vehicle_id}, order_by={"sort_order": "asc"})

    @router.post("/{vehicle_id}/" + table, response_model=read_schema, status_code=201)
    def create_item(vehicle_id: str, payload: create_schema = Body(...), store: DataStore = Depends(get_store)):
        require_vehicle(store, vehicle_id)
        data = payload.model_dump(exclude_unset=True)
        data["vehicle_id"] = vehicle_id
        created = store.tables[table].create(data)
        logging.info(f"{label} created for vehicle {vehicle_id}: {created['id']}")
        return created

    @router.put("/{vehicle_id}/" + table + "/{item_id}", response_model=read_schema)
    def update_item(
        vehicle_id: str,
        item_id: str,
        payload: update_schema = Body(...),
        store: DataStore = Depends(get_store),
    ):
        require_item(store, vehicle_id, item_id)
        return store.tables[table].update(where={"id": item_id}, data=payload)

    @router.delete("/{vehicle_id}/" + table + "/{item_id}")
    def delete_item(vehicle_id: str, item_id: str, store: DataStore = Depends(get_store)):
        require_item(store, vehicle_id, item_id)
        store.tables[table].delete(where={"id": item_id})
        return {"message": f"{label} deleted successfully", "id": item_id}

    @router.post("/{vehicle_id}/" + table + "/{item_id}/move", response_model=List[read_schema])
    def move_item(vehicle_id: str, item_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
        require_item(store, vehicle_id, item_id)
        return move(store.tables[table], item_id, payload.direction, scope={"vehicle_id": vehicle_id})

    return router


trims_router = build_item_router("trims", "Trim", TrimCreate, TrimUpdate, Trim)
colors_router = build_item_router("colors", "Color", ColorCreate, ColorUpdate, Color)
options_router = build_item_router("options", "Option", OptionCreate, OptionUpdate, VehicleOption)

import_router = APIRouter(dependencies=[Depends(get_current_admin)])


@import_router.post("/{vehicle_id}/import")
def import_vehicle_items(vehicle_id: str, payload: ImportRequest, store: DataStore = Depends(get_store)):
    result = import_items(
        store,
        vehicle_id,
        payload.source_vehicle_ids,
        import_colors=payload.import_colors,
        import_options=payload.import_options,
    )
    if result is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    added = result["colors"]["added"] + result["options"]["added"]
    skipped = result["colors"]["skipped"] + result["options"]["skipped"]
    return {"message": f"Imported {added} item(s), skipped {skipped} duplicate(s)", "result": result}
