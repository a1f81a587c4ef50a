# backend/app/api/v1/partners.py
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from ...schemas.admin_schema import MoveRequest
from ...schemas.partner_schema import Partner, PartnerCreate, PartnerUpdate
from ...services.catalog_service import move
from ...services.content_service import active_partners
from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/", response_model=List[Partner])
def read_partners(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    return read_with_fallback(store, active_partners, fallback=fallback).data


@admin_router.get("/", response_model=List[Partner])
def admin_read_partners(store: DataStore = Depends(get_store)):
    return store.partners.find_many(order_by={"sort_order": "asc"})


@admin_router.post("/", response_model=Partner, status_code=201)
def create_partner(partner: PartnerCreate, store: DataStore = Depends(get_store)):
    return store.partners.create(partner)


@admin_router.put("/{partner_id}", response_model=Partner)
def update_partner(partner_id: str, partner_update: PartnerUpdate, store: DataStore = Depends(get_store)):
    updated = store.partners.update(where={"id": partner_id}, data=partner_update)
    if updated is None:
        raise HTTPException(status_code=404, detail="Partner not found")
    return updated


@admin_router.delete("/{partner_id}")
def delete_partner(partner_id: str, store: DataStore = Depends(get_store)):
    if not store.partners.delete(where={"id": partner_id}):
        raise HTTPException(status_code=404, detail="Partner not found")
    return {"message": "Partner deleted successfully", "partner_id": partner_id}


@admin_router.post("/{partner_id}/move", response_model=List[Partner])
def move_partner(partner_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
    partners = move(store.partners, partner_id, payload.direction)
    if partners is None:
        raise HTTPException(status_code=404, detail="Partner not found")
    return partners
