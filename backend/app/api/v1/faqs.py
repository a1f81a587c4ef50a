# backend/app/api/v1/faqs.py
from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from ...schemas.admin_schema import MoveRequest
from ...schemas.faq_schema import FAQ, FAQCreate, FAQUpdate
from ...services.catalog_service import move
from ...services.fallback import read_with_fallback
from ...storage.store import DataStore
from ..deps import get_current_admin, get_fallback_store, get_store

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/", response_model=List[FAQ])
def read_faqs(
    store: DataStore = Depends(get_store),
    fallback: Optional[DataStore] = Depends(get_fallback_store),
):
    return read_with_fallback(
        store,
        lambda s: s.faqs.find_many(where={"is_active": True}, order_by={"sort_order": "asc"}),
        fallback=fallback,
    ).data


@admin_router.get("/", response_model=List[FAQ])
def admin_read_faqs(store: DataStore = Depends(get_store)):
    return store.faqs.find_many(order_by={"sort_order": "asc"})


@admin_router.post("/", response_model=FAQ, status_code=201)
def create_faq(faq: FAQCreate, store: DataStore = Depends(get_store)):
    return store.faqs.create(faq)


@admin_router.put("/{faq_id}", response_model=FAQ)
def update_faq(faq_id: str, faq_update: FAQUpdate, store: DataStore = Depends(get_store)):
    updated = store.faqs.update(where={"id": faq_id}, data=faq_update)
    if updated is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return updated


@admin_router.delete("/{faq_id}")
def delete_faq(faq_id: str, store: DataStore = Depends(get_store)):
    if not store.faqs.delete(where={"id": faq_id}):
        raise HTTPException(status_code=404, detail="FAQ not found")
    return {"message": "FAQ deleted successfully", "faq_id": faq_id}


@admin_router.post("/{faq_id}/move", response_model=List[FAQ])
def move_faq(faq_id: str, payload: MoveRequest, store: DataStore = Depends(get_store)):
    faqs = move(store.faqs, faq_id, payload.direction)
    if faqs is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return faqs
